"""devlog - professional daily change logs for development teams."""

__version__ = "1.0.0"
