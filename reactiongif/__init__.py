"""Pay-per-request reaction GIF generator."""

__version__ = "0.1.0"
