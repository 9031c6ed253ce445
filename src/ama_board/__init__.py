"""AMA Board: live Q&A board with anonymous voting."""

__version__ = "0.1.0"
