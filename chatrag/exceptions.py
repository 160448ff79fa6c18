class ChatRagError(Exception):
    """Base class for errors raised by chatrag."""


class UnknownMessageTypeError(ChatRagError, ValueError):
    """A chat message carries a tag other than "human" or "ai"."""

    def __init__(self, message_type, position: int):
        self.message_type = message_type
        self.position = position
        super().__init__(
            f"Unknown message type {message_type!r} at position {position}"
        )


class RetrieverConfigurationError(ChatRagError):
    """The default retriever cannot be built from the current settings."""
