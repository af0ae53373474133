class BaseCustomError(Exception):
    """Base class for the toolkit's exceptions, carrying debugging metadata."""

    def __init__(self, message: str, **metadata):
        """Initializes the exception with a message and optional metadata.

        :param message: Error message.
        :param metadata: Additional context (file paths, issue keys, original errors).
        """
        super().__init__(message)
        self.message = message
        self.metadata = metadata

    def __str__(self):
        if not self.metadata:
            return self.message
        metadata_info = ", ".join(f"{k}={v}" for k, v in self.metadata.items())
        return f"{self.message} | Metadata: {metadata_info}"
