"""
load settings from the environment (and a local .env file)
"""

import math
import os
from typing import NamedTuple, Optional, Union

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SOURCE_URL = "https://en.wikipedia.org/wiki/Python_(programming_language)"
DEFAULT_TARGET_CLASSES = "mw-content-ltr mw-parser-output"

SOURCE_URL = os.getenv("SOURCE_URL", DEFAULT_SOURCE_URL)
FETCH_TIMEOUT = os.getenv("FETCH_TIMEOUT", "10")
TARGET_CLASSES = os.getenv("TARGET_CLASSES", DEFAULT_TARGET_CLASSES)
USER_AGENT = os.getenv("USER_AGENT", "Mozilla/5.0 (compatible; divextract/1.0)")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "console")


class ConfigError(ValueError):
    pass


class Settings(NamedTuple):
    url: str
    timeout: float
    target_classes: str
    user_agent: str


def parse_timeout(value: Union[str, int, float]) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid timeout: {value!r}")
    if not math.isfinite(timeout):
        raise ConfigError(f"Timeout must be finite, got {value!r}")
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {value!r}")
    return timeout


def resolve_settings(
    url: Optional[str] = None,
    timeout: Optional[Union[str, float]] = None,
    target_classes: Optional[str] = None,
) -> Settings:
    """Explicit arguments win over environment values."""
    url = url or os.getenv("SOURCE_URL", SOURCE_URL)
    if timeout is None:
        timeout = os.getenv("FETCH_TIMEOUT", FETCH_TIMEOUT)
    if target_classes is None:
        target_classes = os.getenv("TARGET_CLASSES", TARGET_CLASSES)

    if not url or not url.strip():
        raise ConfigError("Source URL is not set")

    return Settings(
        url=url.strip(),
        timeout=parse_timeout(timeout),
        target_classes=target_classes,
        user_agent=os.getenv("USER_AGENT", USER_AGENT),
    )
