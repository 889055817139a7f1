import base64
import hashlib
import textwrap
from unittest.mock import AsyncMock

import pytest
from ecdsa import NIST256p, SigningKey
from ecdsa.util import sigencode_der

from flow_kms_authorizer.integrity import crc32c
from flow_kms_authorizer.providers.base import KMSProvider
from flow_kms_authorizer.signer import KmsSigner
from flow_kms_authorizer.types.kms_types import PublicKeyResponse, SignResponse

# Test Constants
TEST_RESOURCE_ID = (
    "projects/your-project-id/locations/global/keyRings/flow/cryptoKeys/flow-minter-key/cryptoKeyVersions/1"
)
TEST_ADDRESS = "0x01cf0e2f2f715450"
TEST_PUBLIC_KEY = (
    "8adf5d29ec027b64c1737e2cb1206143328c7792b98eb5a25203da20d34f5fa6"
    "7848ccad9be5e2bc57ea5df3801a9ced02dd2faaa7a6ae902f18fde0d8aaef8a"
)
TEST_FLOW_PUBLIC_KEY = "f847b840" + TEST_PUBLIC_KEY + "02018203e8"
TEST_PRIVATE_KEY = "e912bb5b687eba739da2a36dc8d121746c5809ae0fcab7e42f2562045fdad181"

# SubjectPublicKeyInfo: SEQUENCE(SEQUENCE(id-ecPublicKey, prime256v1), BIT STRING(00 04 || point))
SPKI_PREFIX = "3059301306072a8648ce3d020106082a8648ce3d030107034200"
TEST_PUBLIC_KEY_DER = bytes.fromhex(SPKI_PREFIX + "04" + TEST_PUBLIC_KEY)


def to_pem(der: bytes) -> str:
    """Wrap DER bytes in PEM public key armor."""
    body = "\n".join(textwrap.wrap(base64.b64encode(der).decode(), 64))
    return f"-----BEGIN PUBLIC KEY-----\n{body}\n-----END PUBLIC KEY-----\n"


TEST_PUBLIC_KEY_PEM = to_pem(TEST_PUBLIC_KEY_DER)


def public_key_response(pem: str | None = TEST_PUBLIC_KEY_PEM, name: str = TEST_RESOURCE_ID) -> PublicKeyResponse:
    return PublicKeyResponse(name=name, pem=pem, pem_crc32c=crc32c(pem) if pem else None)


def sign_response(signature: bytes, name: str = TEST_RESOURCE_ID, verified: bool = True) -> SignResponse:
    return SignResponse(
        name=name,
        signature=signature,
        signature_crc32c=crc32c(signature),
        verified_digest_crc32c=verified,
    )


@pytest.fixture
def signing_key() -> SigningKey:
    """P-256 key standing in for the KMS key."""
    return SigningKey.from_string(bytes.fromhex(TEST_PRIVATE_KEY), curve=NIST256p)


@pytest.fixture
def mock_kms_provider(signing_key: SigningKey) -> AsyncMock:
    """Create a mock KMS provider that signs with a local P-256 key."""
    provider = AsyncMock(spec=KMSProvider)
    provider.fetch_public_key.return_value = public_key_response()

    async def sign_digest(resource_id: str, digest: bytes, digest_crc32c: int) -> SignResponse:
        assert digest_crc32c == crc32c(digest)
        der_signature = signing_key.sign_digest_deterministic(digest, hashfunc=hashlib.sha256, sigencode=sigencode_der)
        return sign_response(der_signature, name=resource_id)

    provider.sign_digest.side_effect = sign_digest
    return provider


@pytest.fixture
def kms_signer(mock_kms_provider: AsyncMock) -> KmsSigner:
    """Create a signer bound to the mocked provider."""
    return KmsSigner(mock_kms_provider, TEST_RESOURCE_ID)
