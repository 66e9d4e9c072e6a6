import asyncio, shlex, typer
import grpc
from grpc import aio
from ..proto import chat_pb2, chat_pb2_grpc

app = typer.Typer(help="LearnLink client: study groups, resources and group chat")

# Keeps the stream under the server's idle timeout while the user is typing
PING_INTERVAL = 60.0

HELP_TEXT = (
    "Commands:\n"
    "  /groups                         list all groups\n"
    "  /my-groups                      list groups you joined\n"
    "  /create <name> [#tag ...]       create a group\n"
    "  /join-group <id>                become a member of a group\n"
    "  /leave-group <id>               stop being a member of a group\n"
    "  /delete-group <id>              delete a group you created\n"
    "  /chat <id>                      open the chat room of a group\n"
    "  /leave-chat                     close the current chat room\n"
    "  /resources                      list shared resources\n"
    "  /add-resource <title> <link> [description]\n"
    "  /like <id>                      like a resource\n"
    "  /delete-resource <id>           delete a resource you shared\n"
    "  /help\n"
    "Any other line is sent to the current chat room."
)


def _format_group(g, user_id: str) -> str:
    joined = " [joined]" if user_id in g.joined_users else ""
    tags = " ".join(f"#{t}" for t in g.tags)
    return f" - {g.id} {g.name} ({len(g.joined_users)} members){joined} {tags}".rstrip()


def _format_resource(r) -> str:
    return f" - {r.id} {r.title} <{r.link}> likes={r.likes}"


async def _run(user_id: str, display_name: str, host: str, port: int, origin: str):
    """Main client loop.

    Unary commands go through the ChatService and ResourceService stubs;
    chat traffic goes through a single OpenStream call kept open for the
    whole session.

    Args:
        user_id (str): Opaque user id attached to every request
        display_name (str): Name shown next to chat messages (will prompt if empty)
        host (str): Server hostname
        port (int): Server port
        origin (str): Value sent as ``origin`` metadata, empty to omit
    """
    chan = aio.insecure_channel(f"{host}:{port}")
    chat = chat_pb2_grpc.ChatServiceStub(chan)
    resources = chat_pb2_grpc.ResourceServiceStub(chan)

    if not display_name:
        display_name = input("Enter your display name: ").strip() or user_id

    # Room the chat view is currently bound to
    current = {"group": None}

    async def unary(label: str, rpc, request):
        try:
            return await rpc(request)
        except grpc.aio.AioRpcError as e:
            print(f"[{label}] error: {e.details()}")
            return None

    async def handle_command(line: str):
        """Run a non-chat command. Returns a ChatEnvelope to send, or None."""
        if line == "/groups":
            resp = await unary("groups", chat.ListGroups, chat_pb2.ListGroupsRequest())
            if resp is not None:
                print("[groups] No groups yet" if not resp.groups else "[groups]")
                for g in resp.groups:
                    print(_format_group(g, user_id))
            return None

        if line == "/my-groups":
            resp = await unary("my-groups", chat.ListUserGroups, chat_pb2.ListUserGroupsRequest(user_id=user_id))
            if resp is not None:
                print("[my-groups] You have not joined any group" if not resp.groups else "[my-groups]")
                for g in resp.groups:
                    print(_format_group(g, user_id))
            return None

        if line.startswith("/create "):
            words = line[len("/create "):].split()
            tags = [w[1:] for w in words if w.startswith("#")]
            name = " ".join(w for w in words if not w.startswith("#"))
            g = await unary("create", chat.CreateGroup, chat_pb2.CreateGroupRequest(
                name=name, tags=tags, creator_user_id=user_id))
            if g is not None:
                print(f"[group] Created {g.name} ({g.id})")
            return None

        if line.startswith("/join-group "):
            group_id = line[len("/join-group "):].strip()
            g = await unary("join", chat.JoinGroup, chat_pb2.JoinGroupRequest(group_id=group_id, user_id=user_id))
            if g is not None:
                print(f"[group] Member of {g.name} ({len(g.joined_users)} members)")
            return None

        if line.startswith("/leave-group "):
            group_id = line[len("/leave-group "):].strip()
            g = await unary("leave", chat.LeaveGroup, chat_pb2.LeaveGroupRequest(group_id=group_id, user_id=user_id))
            if g is not None:
                print(f"[group] Left {g.name}")
            return None

        if line.startswith("/delete-group "):
            group_id = line[len("/delete-group "):].strip()
            resp = await unary("delete", chat.DeleteGroup, chat_pb2.DeleteGroupRequest(
                group_id=group_id, requester_id=user_id))
            if resp is not None and resp.success:
                print(f"[group] Deleted {group_id}")
            return None

        if line.startswith("/chat "):
            group_id = line[len("/chat "):].strip()
            current["group"] = group_id
            print(f"[chat] Now chatting in {group_id}")
            return chat_pb2.ChatEnvelope(type=chat_pb2.JOIN_GROUP, group_id=group_id)

        if line == "/leave-chat":
            group_id, current["group"] = current["group"], None
            if not group_id:
                print("[chat] Not in a chat room")
                return None
            print(f"[chat] Left {group_id}")
            return chat_pb2.ChatEnvelope(type=chat_pb2.LEAVE_GROUP, group_id=group_id)

        if line == "/resources":
            resp = await unary("resources", resources.ListResources, chat_pb2.ListResourcesRequest())
            if resp is not None:
                print("[resources] Nothing shared yet" if not resp.resources else "[resources]")
                for r in resp.resources:
                    print(_format_resource(r))
            return None

        if line.startswith("/add-resource "):
            try:
                args = shlex.split(line[len("/add-resource "):])
            except ValueError as e:
                print(f"[add-resource] error: {e}")
                return None
            if len(args) < 2:
                print("[add-resource] usage: /add-resource <title> <link> [description]")
                return None
            r = await unary("add-resource", resources.CreateResource, chat_pb2.CreateResourceRequest(
                title=args[0], link=args[1], description=" ".join(args[2:]), user_id=user_id))
            if r is not None:
                print(f"[resources] Shared {r.title} ({r.id})")
            return None

        if line.startswith("/like "):
            r = await unary("like", resources.LikeResource,
                            chat_pb2.LikeResourceRequest(resource_id=line[len("/like "):].strip()))
            if r is not None:
                print(f"[resources] {r.title} now has {r.likes} likes")
            return None

        if line.startswith("/delete-resource "):
            resource_id = line[len("/delete-resource "):].strip()
            resp = await unary("delete-resource", resources.DeleteResource, chat_pb2.DeleteResourceRequest(
                resource_id=resource_id, requester_id=user_id))
            if resp is not None and resp.success:
                print(f"[resources] Deleted {resource_id}")
            return None

        if line in {"/help", "help"}:
            print(HELP_TEXT)
            return None

        print('Type "/help" for commands.')
        return None

    async def outgoing():
        """Turn user input into chat events.

        Yields:
            ChatEnvelope: JOIN_GROUP / LEAVE_GROUP / SEND_MESSAGE / PING events
        """
        loop = asyncio.get_running_loop()
        pending = loop.run_in_executor(None, input, "")
        while True:
            try:
                line = await asyncio.wait_for(asyncio.shield(pending), timeout=PING_INTERVAL)
            except asyncio.TimeoutError:
                yield chat_pb2.ChatEnvelope(type=chat_pb2.PING)
                continue
            except EOFError:
                return
            pending = loop.run_in_executor(None, input, "")

            line = line.strip()
            if not line:
                continue
            if line.startswith("/") or line == "help":
                envelope = await handle_command(line)
                if envelope is not None:
                    yield envelope
                continue

            if not current["group"]:
                print("[hint] Use /chat <group id> to pick a chat room first")
                continue
            yield chat_pb2.ChatEnvelope(
                type=chat_pb2.SEND_MESSAGE,
                group_id=current["group"],
                message=line,
                user=display_name,
            )

    async def reader(call):
        """Print events pushed by the server."""
        async for env in call:
            if env.type == chat_pb2.RECEIVE_MESSAGE:
                print(f"[{env.group_id} {env.created_at}] {env.user}: {env.message}")
            elif env.type == chat_pb2.ERROR:
                print(f"[error] {env.message}")
            elif env.type == chat_pb2.GROUP_DELETED:
                if current["group"] == env.group_id:
                    current["group"] = None
                print(f"[group] {env.group_id} was deleted")
            else:
                print(f"[IN] type={chat_pb2.EventType.Name(env.type)} group={env.group_id} {env.message}")

    print(f"Connected to {host}:{port} as {display_name} ({user_id}). Type /help for commands.")
    metadata = (("origin", origin),) if origin else None
    call = chat.OpenStream(outgoing(), metadata=metadata)
    try:
        await reader(call)
    except grpc.aio.AioRpcError as e:
        print(f"[stream] closed: {e.details()}")
    finally:
        await chan.close()

@app.command("run")
def run_cmd(
    user_id: str = typer.Option(..., "--user-id", help="Your user id"),
    name: str = typer.Option("", help="Display name shown in chat"),
    host: str = "127.0.0.1",
    port: int = 50051,
    origin: str = typer.Option("", help="Origin metadata sent when opening the chat stream"),
):
    """
    Run the LearnLink client.
    """
    asyncio.run(_run(user_id, name, host, port, origin))

if __name__ == "__main__":
    app()
