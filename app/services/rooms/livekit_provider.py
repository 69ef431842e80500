"""LiveKit room provider."""
import logging
from datetime import timedelta
from typing import Optional
from livekit import api
from livekit.api.twirp_client import TwirpError, TwirpErrorCode

from app.core.errors import InvalidArgument, ProviderUnavailable
from app.services.rooms.base import RoomProvider

logger = logging.getLogger(__name__)


class LiveKitRoomProvider(RoomProvider):
    """Creates LiveKit rooms and mints join tokens for them."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        api_secret: str,
        default_ttl_seconds: int = 3600,
        lkapi: Optional[api.LiveKitAPI] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.api_secret = api_secret
        self.default_ttl_seconds = default_ttl_seconds
        self._lkapi = lkapi

    @property
    def lkapi(self) -> api.LiveKitAPI:
        # Built on first use so its HTTP session binds to the running loop
        if self._lkapi is None:
            self._lkapi = api.LiveKitAPI(
                url=self.api_url,
                api_key=self.api_key,
                api_secret=self.api_secret,
            )
        return self._lkapi

    async def ensure_room(self, room_id: str) -> str:
        """
        Create the room unless it already exists.

        Returns:
            The room name, unchanged if the room was already there.
        """
        if not room_id:
            raise InvalidArgument("room_id is required")

        try:
            response = await self.lkapi.room.list_rooms(api.ListRoomsRequest(names=[room_id]))
            rooms = list(response.rooms)
        except TwirpError as e:
            if e.code != TwirpErrorCode.NOT_FOUND and getattr(e, "status", None) != 404:
                raise ProviderUnavailable("livekit", f"room lookup failed: {e}") from e
            rooms = []
        except Exception as e:
            raise ProviderUnavailable("livekit", f"room lookup failed: {e}") from e

        if rooms:
            logger.debug(f"[ROOMS] Room {room_id} already exists")
            return rooms[0].name

        try:
            room = await self.lkapi.room.create_room(api.CreateRoomRequest(name=room_id))
        except Exception as e:
            raise ProviderUnavailable("livekit", f"room creation failed: {e}") from e

        logger.info(f"[ROOMS] Created room {room.name}")
        return room.name

    def mint_token(
        self,
        room_id: str,
        identity: str,
        is_moderator: bool = False,
        ttl_seconds: Optional[int] = None,
    ) -> str:
        """
        Mint a signed join token for a participant.

        Signed locally with the API secret; LiveKit is not contacted.

        Args:
            room_id: Room the token grants access to
            identity: Participant identity, unique per participant
            is_moderator: Also grant room admin
            ttl_seconds: Token lifetime (defaults to the configured TTL)

        Returns:
            JWT string
        """
        if not room_id:
            raise InvalidArgument("room_id is required")
        if not identity:
            raise InvalidArgument("identity is required")

        grants = api.VideoGrants(
            room_join=True,
            room=room_id,
            can_publish=True,
            can_subscribe=True,
            can_publish_data=True,
            room_admin=is_moderator,
        )
        ttl = timedelta(seconds=ttl_seconds or self.default_ttl_seconds)
        return (
            api.AccessToken(self.api_key, self.api_secret)
            .with_identity(identity)
            .with_ttl(ttl)
            .with_grants(grants)
            .to_jwt()
        )

    async def aclose(self) -> None:
        """Close the LiveKit HTTP session if one was opened."""
        if self._lkapi is not None:
            await self._lkapi.aclose()
            self._lkapi = None
