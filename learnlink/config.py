import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv


def _flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _origins(value: str) -> Tuple[str, ...]:
    origins = tuple(o.strip() for o in value.split(",") if o.strip())
    return origins or ("*",)


@dataclass(frozen=True)
class Settings:
    """Server settings.

    Attributes:
        host (str): Interface the gRPC server binds to
        port (int): Port the gRPC server listens on
        data_dir (str): Directory holding the JSONL datastore files
        allowed_origins (Tuple[str, ...]): Origins admitted on chat streams, "*" admits all
        idle_timeout (float): Seconds without inbound events before a stream is closed
        max_pending (int): Per-connection mailbox size before envelopes are dropped
        auto_join_creator (bool): Add the creator to joined_users on group creation
    """
    host: str = "127.0.0.1"
    port: int = 50051
    data_dir: str = "learnlink/data"
    allowed_origins: Tuple[str, ...] = ("*",)
    idle_timeout: float = 300.0
    max_pending: int = 256
    auto_join_creator: bool = False

    @property
    def groups_path(self) -> str:
        return os.path.join(self.data_dir, "groups.jsonl")

    @property
    def resources_path(self) -> str:
        return os.path.join(self.data_dir, "resources.jsonl")

    def origin_allowed(self, origin: str) -> bool:
        return "*" in self.allowed_origins or origin in self.allowed_origins

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment, reading a local .env first."""
        load_dotenv()
        env = os.environ
        return cls(
            host=env.get("LEARNLINK_HOST", cls.host),
            port=int(env.get("LEARNLINK_PORT", cls.port)),
            data_dir=env.get("LEARNLINK_DATA_DIR", cls.data_dir),
            allowed_origins=_origins(env.get("LEARNLINK_ALLOWED_ORIGINS", "*")),
            idle_timeout=float(env.get("LEARNLINK_IDLE_TIMEOUT", cls.idle_timeout)),
            max_pending=int(env.get("LEARNLINK_MAX_PENDING", cls.max_pending)),
            auto_join_creator=_flag(env.get("LEARNLINK_AUTO_JOIN_CREATOR", "false")),
        )
