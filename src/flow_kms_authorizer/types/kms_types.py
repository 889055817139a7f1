from pydantic import BaseModel, ConfigDict, Field, field_validator

PUBLIC_KEY_LENGTH: int = 64
SIGNATURE_COMPONENT_LENGTH: int = 32
SIGNATURE_HEX_LENGTH: int = 4 * SIGNATURE_COMPONENT_LENGTH


class RawPublicKey(BaseModel):
    """Uncompressed P-256 point (x || y) without the 0x04 format marker."""

    model_config = ConfigDict(frozen=True)

    key: bytes = Field(..., description="64-byte raw public key")

    @field_validator("key")
    @classmethod
    def validate_length(cls, v: bytes) -> bytes:
        if len(v) != PUBLIC_KEY_LENGTH:
            msg = f"Public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(v)} bytes"
            raise ValueError(msg)
        return v

    def to_hex(self) -> str:
        """Convert public key to hex string, no prefix."""
        return self.key.hex()


class SignatureComponents(BaseModel):
    """ECDSA signature as fixed-width r and s values."""

    model_config = ConfigDict(frozen=True)

    r: bytes = Field(..., description="R component of signature")
    s: bytes = Field(..., description="S component of signature")

    @field_validator("r", "s")
    @classmethod
    def validate_length(cls, v: bytes) -> bytes:
        if len(v) != SIGNATURE_COMPONENT_LENGTH:
            msg = f"Length must be {SIGNATURE_COMPONENT_LENGTH} bytes, got {len(v)} bytes"
            raise ValueError(msg)
        return v

    def to_bytes(self) -> bytes:
        return self.r + self.s

    def to_hex(self) -> str:
        """Convert signature to the 128 character r || s hex string."""
        return self.to_bytes().hex()


class PublicKeyResponse(BaseModel):
    """Fields of a KMS GetPublicKey response used for key extraction."""

    name: str
    pem: str | None = None
    pem_crc32c: int | None = None


class SignResponse(BaseModel):
    """Fields of a KMS AsymmetricSign response used for signature extraction."""

    name: str
    signature: bytes = b""
    signature_crc32c: int | None = None
    verified_digest_crc32c: bool = False


class CompositeSignature(BaseModel):
    """Signature bundle handed back to the transaction builder."""

    model_config = ConfigDict(populate_by_name=True)

    addr: str = Field(..., description="Signer address, 0x-prefixed")
    key_id: int = Field(..., alias="keyId", ge=0, description="Account key index")
    signature: str = Field(..., description="r || s hex")

    @field_validator("signature")
    @classmethod
    def validate_signature(cls, v: str) -> str:
        if len(v) != SIGNATURE_HEX_LENGTH:
            msg = f"Signature must be {SIGNATURE_HEX_LENGTH} hex characters, got {len(v)}"
            raise ValueError(msg)
        try:
            bytes.fromhex(v)
        except ValueError as error:
            msg = "Invalid hex string"
            raise ValueError(msg) from error
        return v
