from flow_kms_authorizer.accounts.gcp_kms_authorizer import GcpKmsAuthorizer
from flow_kms_authorizer.exceptions import (
    IntegrityError,
    InvalidEncodingError,
    KeyNotFoundError,
    KMSError,
    MalformedEncodingError,
    UnexpectedStructureError,
)
from flow_kms_authorizer.signer import KmsSigner

__all__ = [
    "GcpKmsAuthorizer",
    "IntegrityError",
    "InvalidEncodingError",
    "KMSError",
    "KeyNotFoundError",
    "KmsSigner",
    "MalformedEncodingError",
    "UnexpectedStructureError",
]
