import json, os, time
from dataclasses import asdict
from typing import Dict, Iterable, List, Optional
from .errors import NotFoundError
from .models import Group, Resource
from ..utils.logger import setup_logger

logger = setup_logger('learnlink.repo')


def _now_ms() -> int:
    return int(time.time() * 1000)


class _JsonlRepo:
    """Shared JSONL plumbing: load every record at start, rewrite on change."""

    def __init__(self, path: str):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.path = path

    def _records(self) -> Iterable[dict]:
        if not os.path.exists(self.path):
            return
        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                yield json.loads(line)

    def _append(self, rec: dict):
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")
            f.flush()
            os.fsync(f.fileno())

    def _rewrite(self, recs: Iterable[dict]):
        # Not efficient for large files, every mutation rewrites the store
        with open(self.path, "w", encoding="utf-8") as f:
            for rec in recs:
                f.write(json.dumps(rec, ensure_ascii=False) + "\n")
            f.flush()
            os.fsync(f.fileno())


class GroupsRepo(_JsonlRepo):
    """Membership store: groups and their joined users, persisted as JSONL."""

    def __init__(self, path: str):
        """Initialize groups repository.

        Args:
            path (str): Path to JSONL file storing group data

        Side Effects:
            - Creates directory structure if not exists
            - Loads existing groups from file
        """
        super().__init__(path)
        self.groups_by_id: Dict[str, Group] = {}
        self._load()

    def _load(self):
        for rec in self._records():
            # Collapse duplicates left by hand-edited files
            rec["joined_users"] = list(dict.fromkeys(rec.get("joined_users", [])))
            self.groups_by_id[rec["id"]] = Group(**rec)
        logger.debug(f"Loaded {len(self.groups_by_id)} groups from {self.path}")

    def _save_all(self):
        self._rewrite(asdict(g) for g in self.groups_by_id.values())

    def _commit(self, group: Group, joined_users: List[str]):
        # Put the previous membership back if the write fails
        previous = (group.joined_users, group.updated_ts)
        group.joined_users, group.updated_ts = joined_users, _now_ms()
        try:
            self._save_all()
        except OSError:
            group.joined_users, group.updated_ts = previous
            raise

    def require(self, group_id: str) -> Group:
        group = self.groups_by_id.get(group_id)
        if group is None:
            logger.warning(f"Group not found: {group_id}")
            raise NotFoundError("Group not found")
        return group

    def create_group(self, group: Group) -> Group:
        """Store a new group.

        Args:
            group (Group): Fully built group with a fresh id

        Returns:
            Group: The stored group

        Raises:
            ValueError: If a group with the same id already exists
        """
        if group.id in self.groups_by_id:
            raise ValueError(f"Group {group.id} already exists")
        if not group.created_ts:
            group.created_ts = _now_ms()
        group.updated_ts = group.created_ts
        self._append(asdict(group))
        self.groups_by_id[group.id] = group
        logger.info(f"New group created: {group.name} ({group.id}) by user {group.created_by}")
        return group

    def add_member(self, group_id: str, user_id: str) -> bool:
        """Add a user to a group's membership list.

        Returns:
            bool: True if the user was added, False if already a member

        Raises:
            NotFoundError: If group does not exist
        """
        group = self.require(group_id)
        if group.is_member(user_id):
            logger.debug(f"User {user_id} already in group {group_id}")
            return False
        self._commit(group, group.joined_users + [user_id])
        logger.info(f"Added user {user_id} to group {group_id}")
        return True

    def remove_member(self, group_id: str, user_id: str) -> bool:
        """Remove a user from a group's membership list.

        Returns:
            bool: True if the user was removed, False if not a member

        Raises:
            NotFoundError: If group does not exist
        """
        group = self.require(group_id)
        if not group.is_member(user_id):
            logger.debug(f"User {user_id} not in group {group_id}, nothing to remove")
            return False
        self._commit(group, [u for u in group.joined_users if u != user_id])
        logger.info(f"Removed user {user_id} from group {group_id}")
        return True

    def delete_group(self, group_id: str) -> Group:
        """Delete a group and return the removed record.

        Raises:
            NotFoundError: If group does not exist
        """
        group = self.require(group_id)
        del self.groups_by_id[group_id]
        try:
            self._save_all()
        except OSError:
            self.groups_by_id[group_id] = group
            raise
        logger.info(f"Deleted group {group_id}")
        return group

    def get_group(self, group_id: str) -> Optional[Group]:
        return self.groups_by_id.get(group_id)

    def all(self) -> List[Group]:
        """Get all groups, oldest first."""
        return sorted(self.groups_by_id.values(), key=lambda g: g.created_ts)

    def get_user_groups(self, user_id: str) -> List[Group]:
        """Get all groups that a user is a member of, oldest first."""
        return [g for g in self.all() if g.is_member(user_id)]

    def exists(self, group_id: str) -> bool:
        return group_id in self.groups_by_id

    def is_member(self, group_id: str, user_id: str) -> bool:
        """Check membership; False when the group doesn't exist."""
        group = self.groups_by_id.get(group_id)
        return group is not None and group.is_member(user_id)


class ResourcesRepo(_JsonlRepo):
    """Repository for shared study resources in JSONL format."""

    def __init__(self, path: str):
        super().__init__(path)
        self.resources_by_id: Dict[str, Resource] = {}
        self._load()

    def _load(self):
        for rec in self._records():
            self.resources_by_id[rec["id"]] = Resource(**rec)

    def _save_all(self):
        self._rewrite(asdict(r) for r in self.resources_by_id.values())

    def require(self, resource_id: str) -> Resource:
        resource = self.resources_by_id.get(resource_id)
        if resource is None:
            logger.warning(f"Resource not found: {resource_id}")
            raise NotFoundError("Resource not found")
        return resource

    def create(self, resource: Resource) -> Resource:
        if resource.id in self.resources_by_id:
            raise ValueError(f"Resource {resource.id} already exists")
        if not resource.created_ts:
            resource.created_ts = _now_ms()
        self._append(asdict(resource))
        self.resources_by_id[resource.id] = resource
        logger.info(f"New resource shared: {resource.title} ({resource.id})")
        return resource

    def get(self, resource_id: str) -> Optional[Resource]:
        return self.resources_by_id.get(resource_id)

    def all(self) -> List[Resource]:
        """Get all resources, newest first."""
        return list(reversed(sorted(self.resources_by_id.values(), key=lambda r: r.created_ts)))

    def delete(self, resource_id: str) -> Resource:
        resource = self.require(resource_id)
        del self.resources_by_id[resource_id]
        try:
            self._save_all()
        except OSError:
            self.resources_by_id[resource_id] = resource
            raise
        logger.info(f"Deleted resource {resource_id}")
        return resource

    def like(self, resource_id: str) -> Resource:
        resource = self.require(resource_id)
        resource.likes += 1
        try:
            self._save_all()
        except OSError:
            resource.likes -= 1
            raise
        logger.debug(f"Resource {resource_id} now has {resource.likes} likes")
        return resource
