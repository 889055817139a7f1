import logging
from enum import Enum

from flow_kms_authorizer.exceptions import KeyNotFoundError
from flow_kms_authorizer.flow_key import encode_account_key
from flow_kms_authorizer.integrity import crc32c, verify_response
from flow_kms_authorizer.providers.base import KMSProvider
from flow_kms_authorizer.types.kms_types import RawPublicKey
from flow_kms_authorizer.utils import decode_hex_message, hash_message, parse_public_key_pem, parse_signature

logger = logging.getLogger(__name__)


class SigningState(str, Enum):
    """Steps of a signing or key-fetch call."""

    HASHING = "hashing"
    REQUESTING = "requesting"
    VERIFYING = "verifying"
    DECODING = "decoding"
    EXTRACTING = "extracting"
    NORMALIZING = "normalizing"
    DONE = "done"
    FAILED = "failed"


class _Progress:
    """Tracks the current step of one call for logging."""

    def __init__(self, operation: str, start: SigningState):
        self.operation = operation
        self.state = start

    def advance(self, state: SigningState) -> None:
        logger.debug("%s: %s -> %s", self.operation, self.state.value, state.value)
        self.state = state

    def fail(self, error: Exception) -> None:
        logger.debug("%s: failed while %s: %s", self.operation, self.state.value, error)
        self.state = SigningState.FAILED


class KmsSigner:
    """Signs Flow messages with a Cloud KMS key and fetches its public key."""

    def __init__(self, provider: KMSProvider, resource_id: str):
        """
        Args:
            provider: Remote KMS client, reused across calls
            resource_id: Full crypto key version resource id
        """
        self.provider = provider
        self.resource_id = resource_id

    async def get_public_key(self) -> str:
        """
        Fetch the public key from KMS.

        Returns:
            str: Raw public key hex, 128 characters, no prefix
        """
        public_key = await self._fetch_public_key()
        return public_key.to_hex()

    async def get_flow_public_key(self) -> str:
        """
        Fetch the public key from KMS as an RLP encoded Flow account key.

        Returns:
            str: Hex of RLP([public_key, ECDSA_P256, SHA2_256, 1000])
        """
        public_key = await self._fetch_public_key()
        return encode_account_key(public_key).hex()

    async def sign(self, message: str) -> str:
        """
        Sign a hex encoded message.

        The message is hashed with SHA2-256 and the digest is signed in KMS.

        Args:
            message: Hex encoded message, as supplied by the transaction builder

        Returns:
            str: r || s hex, 128 characters

        Raises:
            InvalidEncodingError: If the message is not valid hex
            IntegrityError: If the request or response was corrupted in transit
            MalformedEncodingError: If the returned signature is not DER
            UnexpectedStructureError: If the returned signature is not SEQUENCE(INTEGER, INTEGER)
        """
        progress = _Progress("AsymmetricSign", SigningState.HASHING)
        try:
            digest = hash_message(decode_hex_message(message))

            progress.advance(SigningState.REQUESTING)
            response = await self.provider.sign_digest(self.resource_id, digest, crc32c(digest))

            progress.advance(SigningState.VERIFYING)
            verify_response(
                "AsymmetricSign",
                claimed_name=response.name,
                expected_name=self.resource_id,
                payload=response.signature,
                claimed_checksum=response.signature_crc32c,
                verified_digest=response.verified_digest_crc32c,
            )

            progress.advance(SigningState.DECODING)
            components = parse_signature(response.signature)

            progress.advance(SigningState.NORMALIZING)
            signature = components.to_hex()
        except Exception as error:
            progress.fail(error)
            raise

        progress.advance(SigningState.DONE)
        return signature

    async def _fetch_public_key(self) -> RawPublicKey:
        progress = _Progress("GetPublicKey", SigningState.REQUESTING)
        try:
            response = await self.provider.fetch_public_key(self.resource_id)

            progress.advance(SigningState.VERIFYING)
            if not response.pem:
                msg = f"No PEM data in public key response for {self.resource_id}"
                raise KeyNotFoundError(msg)
            verify_response(
                "GetPublicKey",
                claimed_name=response.name,
                expected_name=self.resource_id,
                payload=response.pem,
                claimed_checksum=response.pem_crc32c,
            )

            progress.advance(SigningState.EXTRACTING)
            public_key = parse_public_key_pem(response.pem)
        except Exception as error:
            progress.fail(error)
            raise

        progress.advance(SigningState.DONE)
        return public_key
