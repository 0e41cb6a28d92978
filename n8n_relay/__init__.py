"""Authentication relay and front-end host for an n8n server."""

__version__ = "1.0.0"
