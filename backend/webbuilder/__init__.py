"""
WebBuilder AI generator backend.

Turns a natural-language website description into HTML, CSS and
JavaScript via a chat-completion API, under a per-user daily quota.
"""

__version__ = "0.1.0"
