from flow_kms_authorizer.types.kms_types import (
    CompositeSignature,
    PublicKeyResponse,
    RawPublicKey,
    SignatureComponents,
    SignResponse,
)

__all__ = ["CompositeSignature", "PublicKeyResponse", "RawPublicKey", "SignResponse", "SignatureComponents"]
