"""Room provider interface."""
from abc import ABC, abstractmethod
from typing import Optional


class RoomProvider(ABC):
    """Abstract base class for real-time room providers."""

    @abstractmethod
    async def ensure_room(self, room_id: str) -> str:
        """Create the room if it does not exist and return its name."""
        pass

    @abstractmethod
    def mint_token(
        self,
        room_id: str,
        identity: str,
        is_moderator: bool = False,
        ttl_seconds: Optional[int] = None,
    ) -> str:
        """Mint a signed join token for a participant."""
        pass

    async def aclose(self) -> None:
        """Release provider resources."""
        pass
