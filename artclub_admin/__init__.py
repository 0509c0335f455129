"""Terminal admin console for the Art Club REST API."""

__version__ = "0.1.0"
