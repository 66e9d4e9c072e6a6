from dataclasses import dataclass, field
from typing import List

@dataclass
class Group:
    """Represents a study group.

    Attributes:
        id (str): Unique identifier, immutable once created
        name (str): Display name, never blank
        created_by (str): User ID of the group creator, immutable
        description (str): Free text description
        tags (List[str]): Short labels without duplicates
        joined_users (List[str]): Member user IDs in join order, no duplicates
        created_ts (int): Unix timestamp in milliseconds when group was created
        updated_ts (int): Unix timestamp in milliseconds of the last change
    """
    id: str
    name: str
    created_by: str
    description: str = ""
    tags: List[str] = field(default_factory=list)
    joined_users: List[str] = field(default_factory=list)
    created_ts: int = 0
    updated_ts: int = 0

    def is_member(self, user_id: str) -> bool:
        """Check whether a user is in the persisted membership list."""
        return user_id in self.joined_users

@dataclass
class Resource:
    """Represents a shared study resource.

    Attributes:
        id (str): Unique identifier
        title (str): Resource title, never blank
        link (str): URL of the resource, never blank
        description (str): Free text description
        tags (List[str]): Short labels without duplicates
        likes (int): Number of likes received
        user_id (str): ID of the user who shared it, empty if unknown
        created_ts (int): Unix timestamp in milliseconds when it was shared
    """
    id: str
    title: str
    link: str
    description: str = ""
    tags: List[str] = field(default_factory=list)
    likes: int = 0
    user_id: str = ""
    created_ts: int = 0


def normalize_tags(tags) -> List[str]:
    """Strip labels, drop blanks and duplicates, keep first-seen order."""
    seen = []
    for tag in tags or ():
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen
