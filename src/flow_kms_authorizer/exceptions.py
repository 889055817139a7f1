class KMSError(Exception):
    """Base exception for KMS signing operations."""

    pass


class MalformedEncodingError(KMSError):
    """Input bytes are not valid DER (or PEM) where DER is expected."""

    pass


class UnexpectedStructureError(KMSError):
    """DER parsed, but the structure is not the one expected."""

    pass


class IntegrityError(KMSError):
    """Request or response was corrupted in transit."""

    pass


class InvalidEncodingError(KMSError):
    """Message or key is not valid hex, or has the wrong length."""

    pass


class KeyNotFoundError(KMSError):
    """Key material missing from a KMS response."""

    pass
