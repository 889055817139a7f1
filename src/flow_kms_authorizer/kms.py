"""KMS resource naming."""

from dataclasses import dataclass


@dataclass(frozen=True)
class KmsKeyRef:
    """Reference to a KMS key ring."""

    project_id: str
    location: str
    key_ring: str

    def to_key_ring_path(self) -> str:
        """Get the full key ring path."""
        return f"projects/{self.project_id}/locations/{self.location}/keyRings/{self.key_ring}"

    def to_key_version_ref(self, key_id: str, key_version: int = 1) -> str:
        """Get the full path to a specific key version, the resource id used for signing."""
        return f"{self.to_key_ring_path()}/cryptoKeys/{key_id}/cryptoKeyVersions/{key_version}"
