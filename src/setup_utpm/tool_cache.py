"""Tool cache management.

Entries use the GitHub Actions runner layout so they are shared with other
setup steps: ``<root>/<tool>/<version>/<arch>`` plus an ``<arch>.complete``
marker written once the copy has finished.
"""
import platform
import shutil
from pathlib import Path
from typing import Optional

import appdirs

from setup_utpm.errors import UnsupportedPlatformError
from setup_utpm.logging import get_logger
from setup_utpm.platforms import get_platform_key
from setup_utpm.versions import parse_release_version

logger = get_logger(__name__)

LOCAL_CACHE_DIR = Path(appdirs.user_cache_dir("setup-utpm")) / "tool-cache"
COMPLETE_SUFFIX = ".complete"


def get_cache_root(tool_cache: Optional[Path] = None) -> Path:
    """Runner tool cache when available, else a per-user cache directory."""
    return Path(tool_cache) if tool_cache else LOCAL_CACHE_DIR


def default_arch() -> str:
    try:
        return get_platform_key().arch.value
    except UnsupportedPlatformError:
        return platform.machine().lower()


def clean_version(version: str) -> str:
    parsed = parse_release_version(version)
    return str(parsed) if parsed is not None else version


def _get_tool_path(tool: str, version: str, arch: Optional[str], root: Optional[Path]) -> Path:
    return get_cache_root(root) / tool / clean_version(version) / (arch or default_arch())


def _marker_path(tool_path: Path) -> Path:
    return tool_path.with_name(tool_path.name + COMPLETE_SUFFIX)


def find(
    tool: str,
    version: str,
    arch: Optional[str] = None,
    root: Optional[Path] = None,
) -> Optional[Path]:
    """Get cached tool directory if a complete entry exists."""
    tool_path = _get_tool_path(tool, version, arch, root)
    marker = _marker_path(tool_path)

    logger.debug({"event": "checking_cache", "cache_path": str(tool_path), "marker": str(marker)})

    if not tool_path.is_dir() or not marker.exists():
        return None
    return tool_path


def cache_dir(
    source: Path,
    tool: str,
    version: str,
    arch: Optional[str] = None,
    root: Optional[Path] = None,
) -> Path:
    """Copy an extracted directory into the cache and mark it complete."""
    if not source.is_dir():
        raise ValueError(f"Source directory {source} does not exist")

    tool_path = _get_tool_path(tool, version, arch, root)
    marker = _marker_path(tool_path)

    logger.debug({"event": "caching_directory", "source": str(source), "cache_path": str(tool_path)})

    # Drop any partial entry left by an interrupted run
    marker.unlink(missing_ok=True)
    if tool_path.exists():
        shutil.rmtree(tool_path)

    shutil.copytree(source, tool_path)
    marker.touch()

    logger.debug({"event": "directory_cached", "tool": tool, "version": version, "path": str(tool_path)})
    return tool_path
