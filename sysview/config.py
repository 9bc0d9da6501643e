"""Project-level configuration, path helpers and view constants."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent
LOGS_DIR = PROJECT_ROOT / "logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

# Grouping: a group is promoted once its population strictly exceeds these
ACTIVITY_GROUP_THRESHOLD = 4
PASSIVE_ENTITY_GROUP_THRESHOLD = 3

# Layout seed for newly created nodes
HORIZONTAL_DISTANCE = 100
VERTICAL_DISTANCE = 100

# Node coordinates are clamped to [-COORDINATE_LIMIT, COORDINATE_LIMIT]
COORDINATE_LIMIT = 5000


PathLike = Union[str, Path]


def resolve_capabilities_path(env_value: PathLike | None = None) -> Path | None:
    """Resolve SYSVIEW_CAPABILITIES to an absolute path, if configured."""
    if env_value is None:
        env_value = os.getenv("SYSVIEW_CAPABILITIES")
    if not env_value:
        return None

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


@dataclass(frozen=True)
class ServiceSettings:
    """Settings of the HTTP service, read from the environment."""

    api_host: str = "localhost"
    api_port: int = 8000
    log_level: str = "INFO"
    log_format: str = "json"  # console format: "json" or "text"
    engine_log_level: str | None = None  # level for sysview.view, e.g. DEBUG
    sim_rounds: int = 10
    sim_interval: float = 1.0

    @property
    def api_url(self) -> str:
        return f"http://{self.api_host}:{self.api_port}"

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        return cls(
            api_host=os.getenv("API_HOST", cls.api_host),
            api_port=int(os.getenv("API_PORT", str(cls.api_port))),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            log_format=os.getenv("LOG_FORMAT", cls.log_format).lower(),
            engine_log_level=os.getenv("SYSVIEW_ENGINE_LOG_LEVEL") or None,
            sim_rounds=int(os.getenv("SIM_ROUNDS", str(cls.sim_rounds))),
            sim_interval=float(os.getenv("SIM_INTERVAL", str(cls.sim_interval))),
        )
