"""
Service Layer Exceptions

Raised only at the edges (configuration and session lookup). Conditions
caused by user input are reported through result models, not exceptions.
"""


class KnowledgeBaseLoadError(Exception):
    """Raised when a knowledge-base export cannot be parsed into Articles."""
    pass


class SessionNotFoundError(Exception):
    """Raised when a session id does not belong to a live session."""
    pass
