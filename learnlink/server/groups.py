import asyncio, uuid
from typing import Iterable, List, Optional
from ..utils.logger import setup_logger
from . import envelopes
from .errors import NotFoundError, PermissionDeniedError, ValidationError
from .hub import RoomBroadcaster
from .models import Group, normalize_tags
from .repo import GroupsRepo

logger = setup_logger('learnlink.groups')

class GroupService:
    """Group lifecycle and membership rules.

    Durable membership (``joined_users``) and ephemeral room subscriptions
    are deliberately independent: joining a group does not subscribe any
    stream, and subscribing to a room does not make anyone a member. The
    only link is deletion, which closes the group's room.
    """

    def __init__(self, groups_repo: GroupsRepo, broadcaster: Optional[RoomBroadcaster] = None,
                 auto_join_creator: bool = False):
        """Initialize the group service.

        Args:
            groups_repo (GroupsRepo): Membership store
            broadcaster (RoomBroadcaster, optional): Hub whose rooms are closed on delete
            auto_join_creator (bool): Add the creator to joined_users on creation
        """
        self.groups = groups_repo
        self.broadcaster = broadcaster
        self.auto_join_creator = auto_join_creator
        self._lock = asyncio.Lock()

    async def create_group(self, name: str, description: str, tags: Iterable[str], creator_id: str) -> Group:
        """Create a group owned by ``creator_id``.

        Raises:
            ValidationError: If the name is blank or the creator is missing
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Group name is required")
        if not creator_id:
            raise ValidationError("Creator user id is required")

        group = Group(
            id=uuid.uuid4().hex[:12],
            name=name,
            created_by=creator_id,
            description=(description or "").strip(),
            tags=normalize_tags(tags),
            joined_users=[creator_id] if self.auto_join_creator else [],
        )
        async with self._lock:
            return self.groups.create_group(group)

    async def join_group(self, group_id: str, user_id: str) -> Group:
        """Add a user to a group; joining twice changes nothing.

        Raises:
            ValidationError: If the user id is missing
            NotFoundError: If the group does not exist
        """
        if not user_id:
            raise ValidationError("User id is required")
        async with self._lock:
            self.groups.add_member(group_id, user_id)
            return self.groups.get_group(group_id)

    async def leave_group(self, group_id: str, user_id: str) -> Group:
        """Remove a user from a group; leaving as a non-member changes nothing.

        Raises:
            ValidationError: If the user id is missing
            NotFoundError: If the group does not exist
        """
        if not user_id:
            raise ValidationError("User id is required")
        async with self._lock:
            self.groups.remove_member(group_id, user_id)
            return self.groups.get_group(group_id)

    async def delete_group(self, group_id: str, requester_id: str) -> None:
        """Delete a group. Only its creator may do so.

        Raises:
            NotFoundError: If the group does not exist
            PermissionDeniedError: If the requester is not the creator
        """
        async with self._lock:
            group = self.groups.get_group(group_id)
            if group is None:
                raise NotFoundError("Group not found")
            if requester_id != group.created_by:
                logger.warning(f"User {requester_id!r} tried to delete group {group_id} owned by {group.created_by}")
                raise PermissionDeniedError("Only the group creator can delete this group")
            self.groups.delete_group(group_id)

        if self.broadcaster is not None:
            await self.broadcaster.close_room(group_id, envelopes.group_deleted(group_id))

    async def list_groups(self) -> List[Group]:
        return self.groups.all()

    async def list_user_groups(self, user_id: str) -> List[Group]:
        return self.groups.get_user_groups(user_id)
