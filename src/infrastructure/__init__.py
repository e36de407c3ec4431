"""
infrastructure - Concrete implementations of domain ports.

Contains all vendor-specific code: the chat-completion HTTP client and the
SQLite repositories. Depends on domain/ only (implements ports). Never
imported by application/.
"""
