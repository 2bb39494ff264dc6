"""Status line components and the program that renders and publishes them."""

__version__ = "6.2.0"