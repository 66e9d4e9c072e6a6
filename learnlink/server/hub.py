import asyncio
from typing import Dict, List, Set
from ..utils.logger import setup_logger

logger = setup_logger('learnlink.hub')

class RoomBroadcaster:
    """Room-based fan-out hub for real-time chat delivery.

    Maps room names (group ids) to the connections currently subscribed to
    them. Each connected stream owns an asyncio Queue used as its mailbox;
    publishing to a room places the envelope in the mailbox of every
    subscriber present at that moment.

    Nothing is persisted and nothing is acknowledged: a connection that is
    gone, or whose mailbox is full, simply misses the envelope.
    """

    def __init__(self, max_pending: int = 0):
        """Initialize the broadcaster.

        Args:
            max_pending (int): Mailbox capacity per connection, 0 for unbounded

        Attributes:
            rooms (Dict[str, Set[str]]): Maps room names to subscribed connection IDs
            queues (Dict[str, asyncio.Queue]): Maps connection IDs to their mailboxes
            _lock (asyncio.Lock): Serializes subscription changes and publish snapshots
        """
        self.max_pending = max_pending
        self.rooms: Dict[str, Set[str]] = {}
        self.queues: Dict[str, asyncio.Queue] = {}
        self._rooms_by_connection: Dict[str, Set[str]] = {}
        self._lock = asyncio.Lock()
        logger.info("Room broadcaster initialized")

    async def register(self, connection_id: str) -> asyncio.Queue:
        """Create the mailbox for a newly opened connection.

        Args:
            connection_id (str): Transport-level session identifier

        Returns:
            asyncio.Queue: Queue the connection's writer drains
        """
        async with self._lock:
            q = asyncio.Queue(maxsize=self.max_pending)
            self.queues[connection_id] = q
            self._rooms_by_connection.setdefault(connection_id, set())
            logger.info(f"Registered connection {connection_id}")
            logger.debug(f"Active connections: {len(self.queues)}")
            return q

    async def subscribe(self, connection_id: str, group_id: str) -> bool:
        """Add a connection to a room. Idempotent.

        Returns:
            bool: True if the subscription was added, False if it already
            existed or the connection is not registered
        """
        async with self._lock:
            if connection_id not in self.queues:
                logger.warning(f"Subscribe from unregistered connection {connection_id} to room {group_id}")
                return False
            members = self.rooms.setdefault(group_id, set())
            if connection_id in members:
                return False
            members.add(connection_id)
            self._rooms_by_connection[connection_id].add(group_id)
            logger.info(f"Connection {connection_id} joined room {group_id}")
            logger.debug(f"Room {group_id} subscribers: {len(members)}")
            return True

    async def unsubscribe(self, connection_id: str, group_id: str) -> bool:
        """Remove a connection from a room. Idempotent, no error if absent.

        Returns:
            bool: True if a subscription was removed
        """
        async with self._lock:
            removed = self._detach(connection_id, group_id)
        if removed:
            logger.info(f"Connection {connection_id} left room {group_id}")
        return removed

    async def on_disconnect(self, connection_id: str) -> List[str]:
        """Drop a connection from every room and discard its mailbox.

        Must run for every way a stream can end.

        Returns:
            List[str]: Rooms the connection was still subscribed to
        """
        async with self._lock:
            rooms = sorted(self._rooms_by_connection.get(connection_id, ()))
            for group_id in rooms:
                self._detach(connection_id, group_id)
            self._rooms_by_connection.pop(connection_id, None)
            self.queues.pop(connection_id, None)
        logger.info(f"Connection {connection_id} disconnected, left rooms {rooms}")
        logger.debug(f"Remaining connections: {len(self.queues)}")
        return rooms

    async def publish(self, group_id: str, envelope) -> int:
        """Deliver an envelope to every current subscriber of a room.

        The subscriber set is read and every mailbox is filled while holding
        the lock, so publishes to one room are delivered in call order and a
        connection unsubscribed before the call never receives the envelope.

        Args:
            group_id (str): Room to publish to
            envelope: ChatEnvelope protobuf message

        Returns:
            int: Number of connections the envelope was queued for
        """
        async with self._lock:
            delivered = 0
            for connection_id in self.rooms.get(group_id, ()):
                q = self.queues.get(connection_id)
                if q is None:
                    continue
                try:
                    q.put_nowait(envelope)
                except asyncio.QueueFull:
                    logger.warning(f"Mailbox full for connection {connection_id}, dropped message for room {group_id}")
                    continue
                delivered += 1
        logger.debug(f"Published to room {group_id}: delivered to {delivered} connections")
        return delivered

    async def close_room(self, group_id: str, envelope=None) -> int:
        """Forget a room, optionally sending a final envelope to its subscribers.

        Returns:
            int: Number of subscriptions that were dropped
        """
        if envelope is not None:
            await self.publish(group_id, envelope)
        async with self._lock:
            members = list(self.rooms.get(group_id, ()))
            for connection_id in members:
                self._detach(connection_id, group_id)
        logger.info(f"Closed room {group_id}, dropped {len(members)} subscriptions")
        return len(members)

    def subscribers(self, group_id: str) -> Set[str]:
        """Snapshot of the connections subscribed to a room."""
        return set(self.rooms.get(group_id, ()))

    def rooms_of(self, connection_id: str) -> Set[str]:
        """Snapshot of the rooms a connection is subscribed to."""
        return set(self._rooms_by_connection.get(connection_id, ()))

    def _detach(self, connection_id: str, group_id: str) -> bool:
        # Caller holds self._lock
        members = self.rooms.get(group_id)
        if not members or connection_id not in members:
            return False
        members.discard(connection_id)
        if not members:
            self.rooms.pop(group_id, None)
        rooms = self._rooms_by_connection.get(connection_id)
        if rooms is not None:
            rooms.discard(group_id)
        return True
