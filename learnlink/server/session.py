import enum
from typing import Callable, Optional
from ..proto import chat_pb2
from ..utils.logger import setup_logger
from . import envelopes
from .errors import InvalidStateError, NotFoundError, ValidationError
from .hub import RoomBroadcaster

logger = setup_logger('learnlink.session')


class SessionState(enum.Enum):
    UNBOUND = "unbound"
    JOINING = "joining"
    JOINED = "joined"
    LEAVING = "leaving"


class ChatSession:
    """Subscription state of one chat stream.

    A session is bound to at most one group room at a time:

        UNBOUND -> JOINING -> JOINED -> LEAVING -> UNBOUND

    Binding to a new room while joined to another one leaves the old room
    first, so a client never keeps receiving a room it no longer shows.
    Incoming protocol events are dispatched through ``handle``.
    """

    def __init__(self, connection_id: str, broadcaster: RoomBroadcaster,
                 room_exists: Optional[Callable[[str], bool]] = None):
        """Create an unbound session.

        Args:
            connection_id (str): Transport-level session identifier
            broadcaster (RoomBroadcaster): Hub owning the room subscriptions
            room_exists (Callable, optional): Check run before binding to a room
        """
        self.connection_id = connection_id
        self.broadcaster = broadcaster
        self.room_exists = room_exists
        self.state = SessionState.UNBOUND
        self.group_id: Optional[str] = None

    async def handle(self, envelope):
        """Dispatch one client event.

        Raises:
            ValidationError: Malformed or unsupported event
            NotFoundError: JOIN_GROUP for a group that doesn't exist
            InvalidStateError: SEND_MESSAGE outside the joined room
        """
        if envelope.type == chat_pb2.JOIN_GROUP:
            await self.bind(envelope.group_id)
        elif envelope.type == chat_pb2.LEAVE_GROUP:
            if envelope.group_id and envelope.group_id != self.group_id:
                logger.debug(f"Connection {self.connection_id} left {envelope.group_id} without being bound to it")
                return
            await self.unbind()
        elif envelope.type == chat_pb2.SEND_MESSAGE:
            await self.submit(envelope.group_id, envelope.message, envelope.user)
        elif envelope.type == chat_pb2.PING:
            return
        else:
            raise ValidationError(f"Unsupported event {envelopes.event_name(envelope)}")

    async def bind(self, group_id: str):
        group_id = (group_id or "").strip()
        if not group_id:
            raise ValidationError("group_id is required")
        if self.state in (SessionState.JOINING, SessionState.LEAVING):
            raise InvalidStateError(f"Cannot join while {self.state.value}")
        if self.state is SessionState.JOINED and self.group_id == group_id:
            return
        if self.room_exists is not None and not self.room_exists(group_id):
            raise NotFoundError("Group not found")

        if self.state is SessionState.JOINED:
            await self.unbind()

        self.state = SessionState.JOINING
        self.group_id = group_id
        try:
            await self.broadcaster.subscribe(self.connection_id, group_id)
        except BaseException:
            self._reset()
            raise
        self.state = SessionState.JOINED
        logger.debug(f"Session {self.connection_id} bound to {group_id}")

    async def unbind(self):
        if self.state is not SessionState.JOINED:
            return
        self.state = SessionState.LEAVING
        try:
            await self.broadcaster.unsubscribe(self.connection_id, self.group_id)
        finally:
            self._reset()
        logger.debug(f"Session {self.connection_id} unbound")

    async def submit(self, group_id: str, message: str, user: str):
        """Publish a chat message to the joined room.

        Returns:
            ChatEnvelope: The RECEIVE_MESSAGE envelope that was published
        """
        if self.state is not SessionState.JOINED:
            raise InvalidStateError("Join a group before sending messages")
        group_id = (group_id or "").strip()
        if group_id and group_id != self.group_id:
            raise InvalidStateError(f"Not joined to group {group_id}")
        text = (message or "").strip()
        if not text:
            raise ValidationError("Message must not be empty")

        envelope = envelopes.receive_message(self.group_id, text, user)
        delivered = await self.broadcaster.publish(self.group_id, envelope)
        logger.debug(f"Message from {user!r} in {self.group_id} reached {delivered} connections")
        return envelope

    def accepts(self, envelope) -> bool:
        """Decide whether an outbound envelope should still reach the client.

        Messages for a room this session has left are dropped. A
        GROUP_DELETED for the bound room resets the session, the
        broadcaster has already forgotten the room.
        """
        if envelope.type == chat_pb2.RECEIVE_MESSAGE:
            return self.state is SessionState.JOINED and envelope.group_id == self.group_id
        if envelope.type == chat_pb2.GROUP_DELETED and envelope.group_id == self.group_id:
            self._reset()
        return True

    async def close(self):
        self._reset()
        await self.broadcaster.on_disconnect(self.connection_id)

    def _reset(self):
        self.state = SessionState.UNBOUND
        self.group_id = None
