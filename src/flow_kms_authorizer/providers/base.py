from abc import ABC, abstractmethod

from flow_kms_authorizer.types.kms_types import PublicKeyResponse, SignResponse


class KMSProvider(ABC):
    """Remote key-management service holding the signing key."""

    @abstractmethod
    async def fetch_public_key(self, resource_id: str) -> PublicKeyResponse:
        """Get the public key of a key version."""
        pass

    @abstractmethod
    async def sign_digest(self, resource_id: str, digest: bytes, digest_crc32c: int) -> SignResponse:
        """Sign a SHA2-256 digest with a key version."""
        pass
