"""Configuration settings for the authorizer."""

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

from flow_kms_authorizer.kms import KmsKeyRef

# Configuration Constants
ENV_PROJECT_ID = "GOOGLE_CLOUD_PROJECT"
ENV_LOCATION_ID = "GOOGLE_CLOUD_REGION"
ENV_KEY_RING_ID = "KEY_RING"
ENV_KEY_ID = "KEY_NAME"
ENV_KEY_VERSION = "KEY_VERSION"
ENV_API_ENDPOINT = "KMS_API_ENDPOINT"
DEFAULT_KEY_VERSION = 1


class BaseConfig(BaseModel):
    """Application settings for Google Cloud KMS."""

    model_config = ConfigDict(validate_assignment=True)

    # Google Cloud settings
    project_id: str
    location_id: str
    key_ring_id: str
    key_id: str
    key_version: int = Field(DEFAULT_KEY_VERSION, ge=1)

    # Client settings
    api_endpoint: str | None = None

    @field_validator("project_id", "location_id", "key_ring_id", "key_id")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        """Validate that fields are not empty or whitespace."""
        if not v or not v.strip():
            msg = "Field cannot be empty or whitespace"
            raise ValueError(msg)
        return v.strip()

    @field_validator("api_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str | None) -> str | None:
        """Treat a blank endpoint as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def resource_id(self) -> str:
        """Full resource id of the configured crypto key version."""
        key_ref = KmsKeyRef(project_id=self.project_id, location=self.location_id, key_ring=self.key_ring_id)
        return key_ref.to_key_version_ref(self.key_id, self.key_version)

    @property
    def client_options(self) -> dict | None:
        """Client options for the KMS client, if any are configured."""
        if self.api_endpoint is None:
            return None
        return {"api_endpoint": self.api_endpoint}

    @classmethod
    def from_env(cls) -> "BaseConfig":
        """
        Create configuration from environment variables.

        Returns:
            BaseConfig: Configuration instance with values from environment variables.

        Example:
            ```python
            config = BaseConfig.from_env()
            authorizer = GcpKmsAuthorizer.from_config(config)
            ```
        """
        return cls(
            project_id=os.getenv(ENV_PROJECT_ID, ""),
            location_id=os.getenv(ENV_LOCATION_ID, ""),
            key_ring_id=os.getenv(ENV_KEY_RING_ID, ""),
            key_id=os.getenv(ENV_KEY_ID, ""),
            key_version=os.getenv(ENV_KEY_VERSION, str(DEFAULT_KEY_VERSION)),
            api_endpoint=os.getenv(ENV_API_ENDPOINT),
        )
