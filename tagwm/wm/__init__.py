"""Window manager model: configuration, clients, monitors, layouts and bindings."""

__version__ = "6.2.0"