"""User account service: register, login, and bearer-protected profile endpoints."""

__version__ = "0.1.0"
