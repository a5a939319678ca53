"""Trie-based URL routing for WSGI applications, with distinct 404 and 405 handling."""

__version__ = "2.0.0"
__all__ = ["endpoints", "router", "trie"]