from collections.abc import Awaitable, Callable
from typing import Any

from eth_typing import HexStr
from eth_utils import add_0x_prefix, remove_0x_prefix
from google.api_core.client_options import ClientOptions

from flow_kms_authorizer.base import BaseAuthorizer
from flow_kms_authorizer.config import BaseConfig
from flow_kms_authorizer.providers.base import KMSProvider
from flow_kms_authorizer.providers.google import GoogleKMSProvider
from flow_kms_authorizer.signer import KmsSigner
from flow_kms_authorizer.types.kms_types import CompositeSignature


class GcpKmsAuthorizer(BaseAuthorizer):
    """Flow authorizer signing with a Google Cloud KMS key."""

    def __init__(
        self,
        resource_id: str,
        provider: KMSProvider | None = None,
        client_options: ClientOptions | dict | None = None,
    ):
        """
        Args:
            resource_id: Full crypto key version resource id
            provider: KMS client; a Google Cloud KMS client is created when omitted
            client_options: Options for the Google Cloud KMS client
        """
        if provider is None:
            provider = GoogleKMSProvider(client_options=client_options)
        self.resource_id = resource_id
        self.signer = KmsSigner(provider, resource_id)

    @classmethod
    def from_config(cls, config: BaseConfig | None = None) -> "GcpKmsAuthorizer":
        """Create an authorizer from settings, read from the environment when omitted."""
        if config is None:
            config = BaseConfig.from_env()
        return cls(config.resource_id, client_options=config.client_options)

    async def get_public_key(self) -> str:
        """Fetch the public key in raw hex format."""
        return await self.signer.get_public_key()

    async def get_flow_public_key(self) -> str:
        """Fetch the RLP encoded Flow public key as hex."""
        return await self.signer.get_flow_public_key()

    def authorize(self, address: str, key_index: int) -> Callable[..., Awaitable[dict]]:
        """
        Create an authorization function for the transaction builder.

        Args:
            address: Flow account address that signs the transaction
            key_index: Index of the account key held in KMS

        Returns:
            An async function that resolves an account dict into a signing authorization

        Example:
            >>> authorizer = GcpKmsAuthorizer(resource_id)
            >>> authorization = authorizer.authorize("0x01cf0e2f2f715450", 0)
            >>> account = await authorization({})
            >>> composite = await account["signingFunction"]({"message": "..."})
        """
        key_id = int(key_index)

        async def signing_function(signable: dict[str, Any]) -> dict[str, Any]:
            signature = await self.signer.sign(signable.get("message"))
            composite = CompositeSignature(addr=add_0x_prefix(HexStr(address)), key_id=key_id, signature=signature)
            return composite.model_dump(by_alias=True)

        async def authorization(account: dict[str, Any] | None = None) -> dict[str, Any]:
            return {
                **(account or {}),
                "tempId": f"{address}-{key_id}",
                "addr": remove_0x_prefix(HexStr(address)),
                "keyId": key_id,
                "resolve": None,
                "signingFunction": signing_function,
            }

        return authorization

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(resource_id={self.resource_id})"
