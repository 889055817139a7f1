"""DER decoding for the ASN.1 structures returned by Cloud KMS.

Each element is read with the ``ecdsa.der`` primitives, which enforce DER's
minimal length and INTEGER encodings.
"""

from dataclasses import dataclass
from enum import IntEnum

from ecdsa import der

from flow_kms_authorizer.exceptions import MalformedEncodingError

# Nesting deeper than this never occurs in a key or signature record
MAX_DEPTH = 16


class Tag(IntEnum):
    """Universal tags understood by the decoder."""

    INTEGER = 0x02
    BIT_STRING = 0x03
    OCTET_STRING = 0x04
    NULL = 0x05
    OBJECT_IDENTIFIER = 0x06
    SEQUENCE = 0x30


@dataclass(frozen=True)
class DerNode:
    """A decoded DER element.

    Primitive elements keep their content octets in ``value``. A SEQUENCE keeps
    its decoded elements in ``children``. For a BIT STRING, ``value`` is the
    payload following the unused-bits octet, which is kept in ``unused_bits``.
    An OBJECT IDENTIFIER also keeps its decoded arcs in ``arcs``.
    """

    tag: Tag
    value: bytes = b""
    children: tuple["DerNode", ...] = ()
    unused_bits: int = 0
    arcs: tuple[int, ...] = ()

    def oid(self) -> str:
        """Render an OBJECT IDENTIFIER node in dotted notation."""
        if self.tag != Tag.OBJECT_IDENTIFIER:
            msg = f"Not an OBJECT IDENTIFIER: {self.tag.name}"
            raise MalformedEncodingError(msg)
        return ".".join(str(arc) for arc in self.arcs)


def decode_der(data: bytes) -> DerNode:
    """
    Decode a single DER element, including everything nested inside it.

    Args:
        data: DER bytes holding exactly one top-level element

    Returns:
        DerNode: The decoded tree

    Raises:
        MalformedEncodingError: On an unknown tag, a non-minimal, indefinite or
            truncated length, invalid element content, or bytes left over after
            the element
    """
    data = bytes(data)
    node, rest = _decode_element(data, depth=0)
    if rest:
        msg = f"Unexpected trailing data: {len(rest)} bytes after offset {len(data) - len(rest)}"
        raise MalformedEncodingError(msg)
    return node


def _decode_element(data: bytes, depth: int) -> tuple[DerNode, bytes]:
    """Decode the element at the start of ``data`` and return it with the bytes after it."""
    if depth > MAX_DEPTH:
        msg = f"Nesting deeper than {MAX_DEPTH} levels"
        raise MalformedEncodingError(msg)
    if not data:
        msg = "Truncated element: expected a tag"
        raise MalformedEncodingError(msg)

    try:
        tag = Tag(data[0])
    except ValueError:
        msg = f"Unexpected tag 0x{data[0]:02x}"
        raise MalformedEncodingError(msg) from None

    try:
        length, length_size = der.read_length(data[1:])
    except der.UnexpectedDER as error:
        msg = f"Invalid length for {tag.name}: {error}"
        raise MalformedEncodingError(msg) from error

    end = 1 + length_size + length
    if end > len(data):
        msg = f"Truncated {tag.name} value: need {length} bytes, have {len(data) - 1 - length_size}"
        raise MalformedEncodingError(msg)
    element, rest = data[:end], data[end:]
    content = element[1 + length_size :]

    try:
        node = _decode_content(tag, element, content, depth)
    except der.UnexpectedDER as error:
        msg = f"Invalid {tag.name}: {error}"
        raise MalformedEncodingError(msg) from error
    return node, rest


def _decode_content(tag: Tag, element: bytes, content: bytes, depth: int) -> DerNode:
    if tag == Tag.SEQUENCE:
        body, _ = der.remove_sequence(element)
        children = []
        while body:
            child, body = _decode_element(body, depth + 1)
            children.append(child)
        return DerNode(tag=tag, children=tuple(children))

    if tag == Tag.INTEGER:
        # Validates the encoding; the raw octets are kept for fixed-width fitting
        der.remove_integer(element)
        return DerNode(tag=tag, value=content)

    if tag == Tag.BIT_STRING:
        (payload, unused_bits), _ = der.remove_bitstring(element, None)
        return DerNode(tag=tag, value=payload, unused_bits=unused_bits)

    if tag == Tag.OBJECT_IDENTIFIER:
        arcs, _ = der.remove_object(element)
        return DerNode(tag=tag, value=content, arcs=tuple(arcs))

    if tag == Tag.OCTET_STRING:
        body, _ = der.remove_octet_string(element)
        return DerNode(tag=tag, value=body)

    if content:
        msg = "NULL with non-empty content"
        raise MalformedEncodingError(msg)
    return DerNode(tag=tag)
