"""checkd: find git working copies and report which ones need attention."""

__version__ = "0.1.0"
