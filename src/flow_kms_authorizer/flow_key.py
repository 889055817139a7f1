"""Flow account key encoding.

ref. https://github.com/onflow/flow/blob/master/docs/content/concepts/accounts-and-keys.md
"""

import rlp

from flow_kms_authorizer.exceptions import InvalidEncodingError
from flow_kms_authorizer.types.kms_types import PUBLIC_KEY_LENGTH, RawPublicKey

SIGNATURE_ALGORITHM_ECDSA_P256: int = 2
HASH_ALGORITHM_SHA2_256: int = 1
DEFAULT_KEY_WEIGHT: int = 1000


def encode_account_key(
    public_key: RawPublicKey | bytes,
    signature_algorithm: int = SIGNATURE_ALGORITHM_ECDSA_P256,
    hash_algorithm: int = HASH_ALGORITHM_SHA2_256,
    weight: int = DEFAULT_KEY_WEIGHT,
) -> bytes:
    """
    RLP encode [public_key, signature_algorithm, hash_algorithm, weight].

    Raises:
        InvalidEncodingError: If the public key is not 64 bytes
    """
    key = public_key.key if isinstance(public_key, RawPublicKey) else bytes(public_key)
    if len(key) != PUBLIC_KEY_LENGTH:
        msg = f"Public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(key)} bytes"
        raise InvalidEncodingError(msg)
    return rlp.encode([key, signature_algorithm, hash_algorithm, weight])
