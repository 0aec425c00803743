"""Configuration and shared state."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field

from dotenv import load_dotenv

from shower_tracker.domain.notification import DEFAULT_ICON

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

SUPPORTED_NOTIFY_BACKENDS = ("log", "desktop", "webhook")


def _env_number(name: str, default, cast=int):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default!r}")
        return default
    if value <= 0:
        _stderr_print(f"{name} must be positive, falling back to {default!r}")
        return default
    return value


NOTIFY_BACKEND = os.getenv("SHOWER_NOTIFY_BACKEND", "log").strip().lower()
if NOTIFY_BACKEND not in SUPPORTED_NOTIFY_BACKENDS:
    _stderr_print(f"Unsupported SHOWER_NOTIFY_BACKEND={NOTIFY_BACKEND!r}, falling back to 'log'")
    NOTIFY_BACKEND = "log"

CONFIG = {
    "host": os.getenv("HOST", "127.0.0.1"),
    "port": _env_number("PORT", 3000),
    "data_dir": os.getenv("SHOWER_DATA_DIR", "data"),
    "tick_seconds": _env_number("SHOWER_TICK_SECONDS", 1.0, cast=float),
    # Notifications
    "notify_backend": NOTIFY_BACKEND,
    "webhook_url": os.getenv("SHOWER_WEBHOOK_URL", ""),
    "notify_icon": os.getenv("SHOWER_NOTIFY_ICON", DEFAULT_ICON),
}


# ── Typed config ────────────────────────────────────────────


@dataclass
class NotifyConfig:
    backend: str = "log"
    webhook_url: str = ""
    icon: str = DEFAULT_ICON


@dataclass
class AppConfig:
    host: str = "127.0.0.1"
    port: int = 3000
    data_dir: str = "data"
    tick_seconds: float = 1.0
    notify: NotifyConfig = field(default_factory=NotifyConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            host=CONFIG["host"],
            port=CONFIG["port"],
            data_dir=CONFIG["data_dir"],
            tick_seconds=CONFIG["tick_seconds"],
            notify=NotifyConfig(
                backend=CONFIG["notify_backend"],
                webhook_url=CONFIG["webhook_url"],
                icon=CONFIG["notify_icon"],
            ),
        )
