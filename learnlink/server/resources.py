import asyncio, uuid
from typing import Iterable, List
from ..utils.logger import setup_logger
from .errors import PermissionDeniedError, ValidationError
from .models import Resource, normalize_tags
from .repo import ResourcesRepo

logger = setup_logger('learnlink.resources')

class ResourceService:
    """Shared study resources: list, share, like and delete."""

    def __init__(self, resources_repo: ResourcesRepo):
        self.resources = resources_repo
        self._lock = asyncio.Lock()

    async def list_resources(self) -> List[Resource]:
        return self.resources.all()

    async def create_resource(self, title: str, link: str, description: str,
                              tags: Iterable[str], user_id: str) -> Resource:
        title = (title or "").strip()
        link = (link or "").strip()
        if not title or not link:
            raise ValidationError("Title and link required")

        resource = Resource(
            id=uuid.uuid4().hex[:12],
            title=title,
            link=link,
            description=(description or "").strip(),
            tags=normalize_tags(tags),
            user_id=user_id or "",
        )
        async with self._lock:
            return self.resources.create(resource)

    async def delete_resource(self, resource_id: str, requester_id: str) -> None:
        """Delete a resource; owned resources can only be deleted by their owner.

        Raises:
            NotFoundError: If the resource does not exist
            PermissionDeniedError: If the requester is not the owner
        """
        async with self._lock:
            resource = self.resources.require(resource_id)
            if resource.user_id and resource.user_id != requester_id:
                logger.warning(f"User {requester_id!r} tried to delete resource {resource_id} owned by {resource.user_id}")
                raise PermissionDeniedError("Only the owner can delete this resource")
            self.resources.delete(resource_id)

    async def like_resource(self, resource_id: str) -> Resource:
        async with self._lock:
            return self.resources.like(resource_id)
