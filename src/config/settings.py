import logging.config
import re
from dataclasses import dataclass, replace
from pathlib import Path

import structlog
from decouple import config

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_NOTIFICATIONS_PATH = "~/.orderdesk/notifications.json"


@dataclass(frozen=True)
class Settings:
    """Snapshot of the environment-driven configuration for one session."""

    api_url: str = DEFAULT_API_URL
    api_timeout: float = 10.0
    api_token: str = ""
    notifications_path: Path = Path(DEFAULT_NOTIFICATIONS_PATH).expanduser()
    notifications_capacity: int = 50
    desktop_alerts: bool = True
    log_level: str = "INFO"
    log_json: bool = True


def load_settings(**overrides) -> Settings:
    """Read settings from the environment (or ``.env``).

    Keyword arguments override individual values, which is how tests
    build a session without touching the environment.
    """
    settings = Settings(
        api_url=config("API_URL", default=DEFAULT_API_URL).rstrip("/"),
        api_timeout=config("API_TIMEOUT", default=10.0, cast=float),
        api_token=config("API_TOKEN", default=""),
        notifications_path=config(
            "NOTIFICATIONS_PATH",
            default=DEFAULT_NOTIFICATIONS_PATH,
            cast=lambda value: Path(value).expanduser(),
        ),
        notifications_capacity=config("NOTIFICATIONS_CAPACITY", default=50, cast=int),
        desktop_alerts=config("DESKTOP_ALERTS", default=True, cast=bool),
        log_level=config("LOG_LEVEL", default="INFO").upper(),
        log_json=config("LOG_JSON", default=True, cast=bool),
    )
    if overrides:
        settings = replace(settings, **overrides)
    if settings.notifications_capacity < 1:
        raise ValueError("NOTIFICATIONS_CAPACITY must be at least 1")
    return settings


# ---------------------------------------------------------------------------
# Structured Logging (structlog + stdlib logging)
# ---------------------------------------------------------------------------
SENSITIVE_PATTERN = re.compile(
    r"([\w.+-]+@[\w-]+\.[\w.-]+)"  # e-mail
    r"|(\+\d[\d\s().-]{6,}\d)"  # international phone
    r"|(\b\d{10,15}\b)"  # bare phone number
    r"|(bearer\s+[\w\-.~+/]+=*)"
    r"|(password|passwd|secret|token|authorization)"
    r"""([=:]\s*["']?)([^\s,}"']+)""",
    re.IGNORECASE,
)

SENSITIVE_KEYS = frozenset({"password", "token", "api_token", "authorization", "secret"})

MASK = "***MASKED***"


def mask_sensitive_data(_, __, event_dict):
    """Processor that masks e-mails, phone numbers, passwords and tokens in log values."""
    for key, value in list(event_dict.items()):
        if key in SENSITIVE_KEYS and value:
            event_dict[key] = MASK
        elif isinstance(value, str):
            event_dict[key] = SENSITIVE_PATTERN.sub(MASK, value)
    return event_dict


# Shared processors used by both structlog and stdlib logging
_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    mask_sensitive_data,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def build_logging_config(level: str = "INFO", json: bool = True) -> dict:
    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    renderer,
                ],
                "foreign_pre_chain": _shared_processors,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
        "loggers": {
            "urllib3": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }


def configure_logging(settings: Settings) -> None:
    """Route structlog through stdlib logging with the shared processors."""
    structlog.configure(
        processors=[
            *_shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.config.dictConfig(build_logging_config(settings.log_level, settings.log_json))
