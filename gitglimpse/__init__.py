"""git-glimpse - compact commit graphs for the branches you care about."""

__version__ = "0.1.0"
