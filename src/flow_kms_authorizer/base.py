from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable


class BaseAuthorizer(ABC):
    """Base class for cloud KMS-backed Flow authorizers."""

    @abstractmethod
    async def get_public_key(self) -> str:
        """Get the raw hex public key of the signing key."""
        pass

    @abstractmethod
    async def get_flow_public_key(self) -> str:
        """Get the RLP encoded Flow account key of the signing key."""
        pass

    @abstractmethod
    def authorize(self, address: str, key_index: int) -> Callable[..., Awaitable[dict]]:
        """Create an authorization function for a Flow account key."""
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__}()"
