"""completionist-archiver — achievement and book export from decoded game traffic."""

__version__ = "0.1.0"
