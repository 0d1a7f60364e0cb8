"""Error types raised while rendering charts and extracting images."""


class AirgapError(Exception):
    """Base class for all helm-airgap errors."""


class RenderError(AirgapError):
    """Raised when a chart cannot be rendered into manifests."""


class DecodeError(AirgapError):
    """Raised when a YAML document is not a Kubernetes object."""

    def __init__(self, message: str, document: int | None = None):
        self.document = document
        if document is not None:
            message = f"document {document}: {message}"
        super().__init__(message)


class InvalidImageFormat(AirgapError):
    """Raised when an image string has no extractable tag or repository."""

    def __init__(self, image: str, reason: str = "missing tag"):
        self.image = image
        self.reason = reason
        super().__init__(f"invalid image reference '{image}': {reason}")
