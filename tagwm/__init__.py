"""Tag-based tiling window manager model and status line generator."""

__version__ = "6.2.0"