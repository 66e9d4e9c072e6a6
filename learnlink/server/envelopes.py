"""Builders for the envelopes the server emits on chat streams.

Client events (JOIN_GROUP, LEAVE_GROUP, SEND_MESSAGE, PING) arrive as
ChatEnvelope messages; the server answers only with the events built here.
"""
from datetime import datetime, timezone
from ..proto import chat_pb2


def utc_timestamp() -> str:
    """ISO-8601 UTC time with millisecond precision, e.g. 2024-05-01T10:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def receive_message(group_id: str, message: str, user: str):
    return chat_pb2.ChatEnvelope(
        type=chat_pb2.RECEIVE_MESSAGE,
        group_id=group_id,
        message=message,
        user=user,
        created_at=utc_timestamp(),
    )


def error(reason: str, group_id: str = ""):
    return chat_pb2.ChatEnvelope(
        type=chat_pb2.ERROR,
        group_id=group_id,
        message=reason,
        created_at=utc_timestamp(),
    )


def group_deleted(group_id: str):
    return chat_pb2.ChatEnvelope(
        type=chat_pb2.GROUP_DELETED,
        group_id=group_id,
        created_at=utc_timestamp(),
    )


def event_name(envelope) -> str:
    return chat_pb2.EventType.Name(envelope.type)
