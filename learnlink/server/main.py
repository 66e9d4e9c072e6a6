import asyncio
import dataclasses
from typing import Optional
import typer
from grpc import aio
from ..config import Settings
from ..proto import chat_pb2_grpc
from ..utils.logger import setup_logger
from .groups import GroupService
from .hub import RoomBroadcaster
from .repo import GroupsRepo, ResourcesRepo
from .resources import ResourceService
from .service import ChatService, ResourceServicer

logger = setup_logger('learnlink.server')

app = typer.Typer(help="LearnLink study groups and chat server")

# Dead peers are noticed by the transport even when the idle timeout is long
_SERVER_OPTIONS = [
    ("grpc.keepalive_time_ms", 30_000),
    ("grpc.keepalive_timeout_ms", 10_000),
    ("grpc.keepalive_permit_without_calls", 1),
    ("grpc.http2.min_ping_interval_without_data_ms", 10_000),
]


def build_server(settings: Settings) -> aio.Server:
    """Wire stores, services and servicers into a gRPC server.

    Args:
        settings (Settings): Resolved server settings

    Returns:
        aio.Server: Server bound to settings.host:settings.port, not started
    """
    server = aio.server(options=_SERVER_OPTIONS)
    groups_repo = GroupsRepo(settings.groups_path)
    resources_repo = ResourcesRepo(settings.resources_path)
    hub = RoomBroadcaster(max_pending=settings.max_pending)
    group_service = GroupService(groups_repo, hub, auto_join_creator=settings.auto_join_creator)

    chat_pb2_grpc.add_ChatServiceServicer_to_server(ChatService(group_service, hub, settings), server)
    chat_pb2_grpc.add_ResourceServiceServicer_to_server(
        ResourceServicer(ResourceService(resources_repo)), server)

    listen_addr = f"{settings.host}:{settings.port}"
    server.add_insecure_port(listen_addr)
    return server


async def serve(settings: Settings):
    """Start the server and block until it terminates."""
    server = build_server(settings)
    listen_addr = f"{settings.host}:{settings.port}"
    logger.info(f"Server starting, listening on {listen_addr} (data dir: {settings.data_dir})")
    await server.start()
    logger.info(f"LearnLink backend is running on {listen_addr}")
    try:
        await server.wait_for_termination()
    finally:
        await server.stop(grace=5)


@app.command("serve")
def serve_cmd(
    host: Optional[str] = typer.Option(None, help="Interface to bind (LEARNLINK_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port to listen on (LEARNLINK_PORT)"),
    data_dir: Optional[str] = typer.Option(None, help="Datastore directory (LEARNLINK_DATA_DIR)"),
):
    """Run the chat server."""
    settings = Settings.from_env()
    overrides = {k: v for k, v in {"host": host, "port": port, "data_dir": data_dir}.items() if v is not None}
    settings = dataclasses.replace(settings, **overrides)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    app()
