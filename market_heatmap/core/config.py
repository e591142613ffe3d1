import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from market_heatmap.core.errors import ConfigurationError

DEFAULT_WIDTH = 960.0


class AspectRatio(Enum):
    """Shape of the heatmap canvas."""

    SQUARE = "1:1"
    WIDE = "16:9"

    @property
    def height_factor(self) -> float:
        return 1.0 if self is AspectRatio.SQUARE else 9 / 16


def parse_aspect_ratio(value: Union[str, AspectRatio]) -> AspectRatio:
    if isinstance(value, AspectRatio):
        return value
    try:
        return AspectRatio(value.strip())
    except ValueError:
        raise ConfigurationError(
            f"Unknown aspect ratio {value!r} (expected '1:1' or '16:9')"
        ) from None


def resolve_dimensions(
    width: float, aspect_ratio: Union[str, AspectRatio] = AspectRatio.WIDE
) -> Tuple[float, float]:
    """Turn a canvas width and aspect ratio into the ``(width, height)`` to lay out."""
    ratio = parse_aspect_ratio(aspect_ratio)
    return width, width * ratio.height_factor


@dataclass
class Settings:
    width: float = DEFAULT_WIDTH
    aspect_ratio: AspectRatio = AspectRatio.WIDE
    dark_mode: bool = True


def _read_env_file(path: Optional[Path] = None) -> Dict[str, str]:
    """Load a minimal .env file holding MH_* keys.

    Existing os.environ values always take precedence over the file.
    """
    env_path = path or Path.cwd() / ".env"
    env: Dict[str, str] = {}
    if not env_path.exists():
        return env
    for line in env_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        env[k.strip()] = v.strip().strip('"').strip("'")
    return env


def _get_env(name: str, env_file: Dict[str, str]) -> Optional[str]:
    val = os.getenv(name)
    if val:
        return val
    return env_file.get(name) or None


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on", "dark"):
        return True
    if lowered in ("0", "false", "no", "off", "light"):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def get_settings(env_path: Optional[Path] = None) -> Settings:
    env_file = _read_env_file(env_path)
    settings = Settings()

    width = _get_env("MH_WIDTH", env_file)
    if width is not None:
        try:
            settings.width = float(width)
        except ValueError:
            raise ConfigurationError(f"MH_WIDTH must be a number, got {width!r}") from None
        if settings.width <= 0:
            raise ConfigurationError(f"MH_WIDTH must be positive, got {width!r}")

    ratio = _get_env("MH_ASPECT_RATIO", env_file)
    if ratio is not None:
        settings.aspect_ratio = parse_aspect_ratio(ratio)

    dark = _get_env("MH_DARK_MODE", env_file)
    if dark is not None:
        settings.dark_mode = _parse_bool("MH_DARK_MODE", dark)

    return settings
