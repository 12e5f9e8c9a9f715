"""Explicit state passed to catalog construction, probing and launching."""

import os
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from browser_launcher.config import LaunchConfig

ASSETS_DIR = Path(__file__).resolve().parent / "assets"

WIN32 = "win32"
DARWIN = "darwin"
LINUX = "linux"
SUNOS = "sunos"
FREEBSD = "freebsd"

PLATFORMS = (WIN32, DARWIN, LINUX, SUNOS, FREEBSD)


def normalize_platform(value: str | None = None) -> str:
    """Map a ``sys.platform`` style string onto one of PLATFORMS.

    Unknown values are returned unchanged so callers get an empty catalog.
    """
    value = (value if value is not None else sys.platform).lower()
    if value in PLATFORMS:
        return value
    if value == "cygwin":
        return WIN32
    for prefix in (LINUX, SUNOS, FREEBSD, DARWIN):
        if value.startswith(prefix):
            return prefix
    return value


def _home_dir() -> str:
    return os.environ.get("HOME") or os.environ.get("USERPROFILE") or str(Path.home())


@dataclass(frozen=True)
class ResolutionContext:
    """Where a resolution looks for things: platform, temp dir, home dir."""

    platform: str
    temp_dir: str
    home_dir: str

    @classmethod
    def from_environment(cls, platform: str | None = None) -> "ResolutionContext":
        return cls(
            platform=normalize_platform(platform),
            temp_dir=tempfile.gettempdir(),
            home_dir=_home_dir(),
        )


@dataclass
class LaunchContext:
    """The per-run values a browser launch is built against."""

    url: str
    config: LaunchConfig = field(default_factory=LaunchConfig)

    def get_url(self) -> str:
        return self.url

    def get(self, key: str, default=None):
        return self.config.get(key, default)
