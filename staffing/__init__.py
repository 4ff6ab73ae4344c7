"""Staff shift scheduling core: record stores, services and schedule views."""

__version__ = "0.1.0"
