"""Turn-based chess rules engine for two local players."""

__version__ = "0.1.0"
