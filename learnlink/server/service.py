import asyncio, contextlib, uuid
import grpc
from grpc import aio
from typing import AsyncIterable, Awaitable, Optional
from ..config import Settings
from ..proto import chat_pb2, chat_pb2_grpc
from ..utils.logger import setup_logger
from . import envelopes
from .errors import LearnLinkError
from .groups import GroupService
from .hub import RoomBroadcaster
from .models import Group, Resource
from .session import ChatSession

logger = setup_logger('learnlink.service')


def group_to_proto(g: Group) -> chat_pb2.Group:
    return chat_pb2.Group(
        id=g.id,
        name=g.name,
        description=g.description,
        tags=list(g.tags),
        created_by=g.created_by,
        joined_users=list(g.joined_users),
        created_ts=g.created_ts,
        updated_ts=g.updated_ts,
    )


def resource_to_proto(r: Resource) -> chat_pb2.Resource:
    return chat_pb2.Resource(
        id=r.id,
        title=r.title,
        link=r.link,
        description=r.description,
        tags=list(r.tags),
        likes=r.likes,
        user_id=r.user_id,
        created_ts=r.created_ts,
    )


async def _guarded(context: aio.ServicerContext, action: str, call: Awaitable):
    """Await a service call, turning failures into gRPC status codes.

    LearnLinkError subclasses abort with their own status code and message;
    datastore failures (OSError) abort with INTERNAL. Nothing is retried.
    """
    try:
        return await call
    except LearnLinkError as e:
        logger.error(f"{action}: {e.message}")
        await context.abort(e.status_code, e.message)
    except OSError:
        logger.exception(f"{action}: datastore failure")
        await context.abort(grpc.StatusCode.INTERNAL, "Server error")


class ChatService(chat_pb2_grpc.ChatServiceServicer):
    """gRPC service for group membership and real-time group chat.

    Unary RPCs manage durable membership through the GroupService; each
    OpenStream call is one chat connection whose room subscriptions live in
    the RoomBroadcaster for as long as the stream does.
    """

    def __init__(self, group_service: GroupService, hub: RoomBroadcaster, settings: Optional[Settings] = None):
        """Initialize chat service.

        Args:
            group_service (GroupService): Group lifecycle and membership rules
            hub (RoomBroadcaster): Room subscriptions and fan-out
            settings (Settings, optional): Admission and idle-timeout settings
        """
        self.groups = group_service
        self.hub = hub
        self.settings = settings or Settings()

    async def CreateGroup(self, request: chat_pb2.CreateGroupRequest, context: aio.ServicerContext):
        group = await _guarded(context, f"CreateGroup by '{request.creator_user_id}'", self.groups.create_group(
            name=request.name,
            description=request.description,
            tags=list(request.tags),
            creator_id=request.creator_user_id,
        ))
        logger.info(f"CreateGroup: User '{request.creator_user_id}' created group '{group.name}' ({group.id})")
        return group_to_proto(group)

    async def JoinGroup(self, request: chat_pb2.JoinGroupRequest, context: aio.ServicerContext):
        group = await _guarded(context, f"JoinGroup '{request.group_id}'",
                               self.groups.join_group(request.group_id, request.user_id))
        return group_to_proto(group)

    async def LeaveGroup(self, request: chat_pb2.LeaveGroupRequest, context: aio.ServicerContext):
        group = await _guarded(context, f"LeaveGroup '{request.group_id}'",
                               self.groups.leave_group(request.group_id, request.user_id))
        return group_to_proto(group)

    async def DeleteGroup(self, request: chat_pb2.DeleteGroupRequest, context: aio.ServicerContext):
        await _guarded(context, f"DeleteGroup '{request.group_id}' by '{request.requester_id}'",
                       self.groups.delete_group(request.group_id, request.requester_id))
        logger.info(f"DeleteGroup: User '{request.requester_id}' deleted group '{request.group_id}'")
        return chat_pb2.DeleteGroupResponse(success=True)

    async def ListGroups(self, request: chat_pb2.ListGroupsRequest, context: aio.ServicerContext):
        groups = await self.groups.list_groups()
        return chat_pb2.ListGroupsResponse(groups=[group_to_proto(g) for g in groups])

    async def ListUserGroups(self, request: chat_pb2.ListUserGroupsRequest, context: aio.ServicerContext):
        groups = await self.groups.list_user_groups(request.user_id)
        return chat_pb2.ListGroupsResponse(groups=[group_to_proto(g) for g in groups])

    async def OpenStream(self, request_iterator: AsyncIterable[chat_pb2.ChatEnvelope], context: aio.ServicerContext):
        """Open a bidirectional chat connection.

        Protocol Flow:
        1. Connection is admitted if its ``origin`` metadata (when present)
           is in the allowed origins
        2. Server registers a mailbox and an unbound ChatSession
        3. A reader task dispatches JOIN_GROUP / LEAVE_GROUP / SEND_MESSAGE /
           PING events to the session; rejected events come back as ERROR
        4. This generator yields mailbox envelopes the session still accepts

        The stream ends when the client half-closes, goes idle for longer
        than ``idle_timeout`` or the call is cancelled. Every path runs the
        broadcaster's disconnect cleanup.
        """
        metadata = dict(context.invocation_metadata() or ())
        origin = metadata.get("origin")
        if origin and not self.settings.origin_allowed(origin):
            logger.error(f"ChatStream: Rejected connection from origin '{origin}'")
            await context.abort(grpc.StatusCode.PERMISSION_DENIED, f"Origin {origin} is not allowed")

        connection_id = uuid.uuid4().hex[:12]
        q = await self.hub.register(connection_id)
        session = ChatSession(connection_id, self.hub, room_exists=self.groups.groups.exists)
        logger.info(f"ChatStream: Connection '{connection_id}' opened from {context.peer()}")

        def notify(envelope):
            try:
                q.put_nowait(envelope)
            except asyncio.QueueFull:
                logger.warning(f"ChatStream: Mailbox full for '{connection_id}', dropped {envelopes.event_name(envelope)}")

        async def reader():
            """Dispatch incoming events until the client stops sending.

            Transport failures only end the stream; they are never reported
            to other subscribers.
            """
            timeout = self.settings.idle_timeout or None
            try:
                while True:
                    try:
                        incoming = await asyncio.wait_for(anext(request_iterator), timeout=timeout)
                    except StopAsyncIteration:
                        logger.info(f"ChatStream: Connection '{connection_id}' closed by client")
                        break
                    except asyncio.TimeoutError:
                        logger.warning(f"ChatStream: Connection '{connection_id}' idle for {timeout}s, closing")
                        break

                    logger.debug(f"ChatStream: {envelopes.event_name(incoming)} from '{connection_id}' group='{incoming.group_id}'")
                    try:
                        await session.handle(incoming)
                    except LearnLinkError as e:
                        logger.warning(f"ChatStream: Rejected {envelopes.event_name(incoming)} from '{connection_id}': {e.message}")
                        notify(envelopes.error(e.message, incoming.group_id))
            except Exception as e:
                logger.warning(f"ChatStream: Connection '{connection_id}' transport error: {e!r}")
            finally:
                with contextlib.suppress(asyncio.QueueFull):
                    q.put_nowait(None)

        reader_task = asyncio.create_task(reader())
        try:
            while True:
                out_msg = await q.get()
                if out_msg is None:
                    break
                if session.accepts(out_msg):
                    yield out_msg
                if reader_task.done() and q.empty():
                    break
        finally:
            reader_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reader_task
            await session.close()
            logger.info(f"ChatStream: Connection '{connection_id}' disconnected")


class ResourceServicer(chat_pb2_grpc.ResourceServiceServicer):
    """gRPC service for shared study resources."""

    def __init__(self, resource_service):
        self.resources = resource_service

    async def ListResources(self, request, context):
        resources = await self.resources.list_resources()
        return chat_pb2.ListResourcesResponse(resources=[resource_to_proto(r) for r in resources])

    async def CreateResource(self, request, context):
        resource = await _guarded(context, f"CreateResource by '{request.user_id}'", self.resources.create_resource(
            title=request.title,
            link=request.link,
            description=request.description,
            tags=list(request.tags),
            user_id=request.user_id,
        ))
        return resource_to_proto(resource)

    async def DeleteResource(self, request, context):
        await _guarded(context, f"DeleteResource '{request.resource_id}'",
                       self.resources.delete_resource(request.resource_id, request.requester_id))
        return chat_pb2.DeleteResourceResponse(success=True)

    async def LikeResource(self, request, context):
        resource = await _guarded(context, f"LikeResource '{request.resource_id}'",
                                  self.resources.like_resource(request.resource_id))
        return resource_to_proto(resource)
