"""Cryptographic utilities."""

import binascii
import hashlib

from ecdsa.der import unpem
from eth_typing import HexStr
from eth_utils import decode_hex, is_0x_prefixed, is_hexstr, remove_0x_prefix

from flow_kms_authorizer.asn1 import DerNode, Tag, decode_der
from flow_kms_authorizer.exceptions import InvalidEncodingError, MalformedEncodingError, UnexpectedStructureError
from flow_kms_authorizer.types.kms_types import (
    PUBLIC_KEY_LENGTH,
    SIGNATURE_COMPONENT_LENGTH,
    RawPublicKey,
    SignatureComponents,
)

# id-ecPublicKey, RFC 5480
ID_EC_PUBLIC_KEY = "1.2.840.10045.2.1"
UNCOMPRESSED_POINT_MARKER = 0x04


def extract_public_key(node: DerNode) -> RawPublicKey:
    """
    Pull the raw point out of a decoded SubjectPublicKeyInfo.

    The record is SEQUENCE(AlgorithmIdentifier, BIT STRING). The BIT STRING
    payload is the uncompressed point 0x04 || x || y; the marker byte is dropped.

    Raises:
        UnexpectedStructureError: If the tree is not an EC public key record
    """
    if node.tag != Tag.SEQUENCE or len(node.children) != 2:
        msg = "Public key must be a SEQUENCE of AlgorithmIdentifier and BIT STRING"
        raise UnexpectedStructureError(msg)

    algorithm, bit_string = node.children
    if (
        algorithm.tag != Tag.SEQUENCE
        or not algorithm.children
        or algorithm.children[0].tag != Tag.OBJECT_IDENTIFIER
        or algorithm.children[0].oid() != ID_EC_PUBLIC_KEY
    ):
        msg = "Public key algorithm is not id-ecPublicKey"
        raise UnexpectedStructureError(msg)

    if bit_string.tag != Tag.BIT_STRING or bit_string.unused_bits != 0:
        msg = "Public key value must be a BIT STRING with no unused bits"
        raise UnexpectedStructureError(msg)

    point = bit_string.value
    if len(point) != PUBLIC_KEY_LENGTH + 1 or point[0] != UNCOMPRESSED_POINT_MARKER:
        msg = f"Expected a {PUBLIC_KEY_LENGTH + 1}-byte uncompressed point, got {len(point)} bytes"
        raise UnexpectedStructureError(msg)

    return RawPublicKey(key=point[1:])


def extract_signature(node: DerNode) -> SignatureComponents:
    """
    Pull fixed-width r and s out of a decoded ECDSA-Sig-Value.

    Raises:
        UnexpectedStructureError: If the tree is not SEQUENCE(INTEGER, INTEGER)
    """
    if (
        node.tag != Tag.SEQUENCE
        or len(node.children) != 2
        or any(child.tag != Tag.INTEGER for child in node.children)
    ):
        msg = "Signature must be a SEQUENCE of two INTEGERs"
        raise UnexpectedStructureError(msg)

    r, s = (fit_component(child.value) for child in node.children)
    return SignatureComponents(r=r, s=s)


def fit_component(value: bytes) -> bytes:
    """Keep the low-order 32 bytes, then left-pad with zeros to 32 bytes."""
    return value[-SIGNATURE_COMPONENT_LENGTH:].rjust(SIGNATURE_COMPONENT_LENGTH, b"\x00")


def parse_public_key_pem(pem: str | bytes) -> RawPublicKey:
    """Decode a PEM public key into its raw 64-byte point."""
    try:
        der = unpem(pem)
    except (binascii.Error, ValueError) as error:
        msg = f"Public key PEM is not valid base64: {error}"
        raise MalformedEncodingError(msg) from error
    return extract_public_key(decode_der(der))


def parse_signature(der_signature: bytes) -> SignatureComponents:
    """Decode a DER signature into fixed-width r and s."""
    return extract_signature(decode_der(der_signature))


def decode_hex_message(message: str) -> bytes:
    """
    Decode a hex message, with or without 0x prefix.

    Raises:
        InvalidEncodingError: If the message is not a string of hex byte pairs
    """
    if not isinstance(message, str):
        msg = f"Unsupported message type: {type(message)}"
        raise InvalidEncodingError(msg)

    body = remove_0x_prefix(HexStr(message))
    if body and (len(body) % 2 or is_0x_prefixed(body) or not is_hexstr(body)):
        msg = "Message is not valid hex"
        raise InvalidEncodingError(msg)
    return decode_hex(body)


def hash_message(message: bytes) -> bytes:
    """SHA2-256 digest of the message bytes."""
    return hashlib.sha256(message).digest()
