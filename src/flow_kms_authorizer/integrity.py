"""In-transit integrity checks for Cloud KMS requests and responses.

See https://cloud.google.com/kms/docs/data-integrity-guidelines
"""

import logging
from typing import NoReturn

import google_crc32c

from flow_kms_authorizer.exceptions import IntegrityError

logger = logging.getLogger(__name__)


def crc32c(data: bytes | str) -> int:
    """CRC32C checksum of the data; text is checksummed as UTF-8."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return google_crc32c.value(data)


def verify_response(
    operation: str,
    claimed_name: str,
    expected_name: str,
    payload: bytes | str,
    claimed_checksum: int | None,
    verified_digest: bool | None = None,
) -> None:
    """
    Cross-check a KMS response against the request that produced it.

    Args:
        operation: Name of the KMS call, used in error messages
        claimed_name: Resource name echoed back by the service
        expected_name: Resource name that was requested
        payload: Response payload the checksum was computed over
        claimed_checksum: Checksum returned alongside the payload
        verified_digest: For signing, whether the service verified the digest checksum

    Raises:
        IntegrityError: If the name differs, the digest was not verified, or the checksum mismatches
    """
    if claimed_name != expected_name:
        _fail(operation, "request", "resource name mismatch")
    if verified_digest is not None and not verified_digest:
        _fail(operation, "request", "digest checksum not verified")
    if claimed_checksum is None or crc32c(payload) != int(claimed_checksum):
        _fail(operation, "response", "checksum mismatch")


def _fail(operation: str, stage: str, reason: str) -> NoReturn:
    logger.warning("%s integrity check failed: %s", operation, reason)
    msg = f"{operation}: {stage} corrupted in-transit ({reason})"
    raise IntegrityError(msg)
