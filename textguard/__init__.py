"""textguard: moderation engine for user-generated profile and chat text."""

__version__ = "0.1.0"
