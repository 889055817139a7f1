import logging

from google.api_core.client_options import ClientOptions
from google.cloud import kms

from flow_kms_authorizer.providers.base import KMSProvider
from flow_kms_authorizer.types.kms_types import PublicKeyResponse, SignResponse

logger = logging.getLogger(__name__)


class GoogleKMSProvider(KMSProvider):
    """Google Cloud KMS implementation."""

    def __init__(self, client_options: ClientOptions | dict | None = None):
        self.client_options = client_options
        self._client: kms.KeyManagementServiceAsyncClient | None = None

    @property
    def client(self) -> kms.KeyManagementServiceAsyncClient:
        """Create the Cloud KMS client on first use, inside the running event loop."""
        if self._client is None:
            self._client = kms.KeyManagementServiceAsyncClient(client_options=self.client_options)
        return self._client

    async def fetch_public_key(self, resource_id: str) -> PublicKeyResponse:
        """Get the PEM public key of a key version."""
        logger.debug("GetPublicKey %s", resource_id)
        response = await self.client.get_public_key(request={"name": resource_id})
        return PublicKeyResponse(
            name=response.name,
            pem=response.pem or None,
            pem_crc32c=response.pem_crc32c,
        )

    async def sign_digest(self, resource_id: str, digest: bytes, digest_crc32c: int) -> SignResponse:
        """Sign a SHA2-256 digest with a key version."""
        logger.debug("AsymmetricSign %s", resource_id)
        response = await self.client.asymmetric_sign(
            request={
                "name": resource_id,
                "digest": {"sha256": digest},
                "digest_crc32c": digest_crc32c,
            }
        )
        return SignResponse(
            name=response.name,
            signature=response.signature,
            signature_crc32c=response.signature_crc32c,
            verified_digest_crc32c=response.verified_digest_crc32c,
        )
