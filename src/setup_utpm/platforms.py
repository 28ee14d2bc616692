"""Platform detection and release target mapping."""
import platform
from typing import Dict, Mapping, Optional, Sequence, Tuple

from setup_utpm.errors import UnsupportedPlatformError
from setup_utpm.types import (
    ArchiveFormat,
    ArchiveSpec,
    Architecture,
    OperatingSystem,
    PlatformKey,
)

# platform.system() values, lowercased
OS_ALIASES = {
    "darwin": OperatingSystem.DARWIN,
    "macos": OperatingSystem.DARWIN,
    "linux": OperatingSystem.LINUX,
    "windows": OperatingSystem.WINDOWS,
    "win32": OperatingSystem.WINDOWS,
}

# platform.machine() values, lowercased
ARCH_ALIASES = {
    "x86_64": Architecture.X64,
    "amd64": Architecture.X64,
    "x64": Architecture.X64,
    "arm64": Architecture.ARM64,
    "aarch64": Architecture.ARM64,
}

# Preferred target first; linux prefers the static musl build
PLATFORM_TARGETS: Dict[PlatformKey, Tuple[str, ...]] = {
    PlatformKey(OperatingSystem.DARWIN, Architecture.ARM64): (
        "aarch64-apple-darwin",
    ),
    PlatformKey(OperatingSystem.DARWIN, Architecture.X64): (
        "x86_64-apple-darwin",
    ),
    PlatformKey(OperatingSystem.LINUX, Architecture.X64): (
        "x86_64-unknown-linux-musl",
        "x86_64-unknown-linux-gnu",
    ),
    PlatformKey(OperatingSystem.LINUX, Architecture.ARM64): (
        "aarch64-unknown-linux-musl",
        "aarch64-unknown-linux-gnu",
    ),
    PlatformKey(OperatingSystem.WINDOWS, Architecture.X64): (
        "x86_64-pc-windows-msvc",
    ),
    PlatformKey(OperatingSystem.WINDOWS, Architecture.ARM64): (
        "aarch64-pc-windows-msvc",
    ),
}

ARCHIVE_SPECS = {
    OperatingSystem.WINDOWS: ArchiveSpec(
        extension=".zip",
        binary_name="utpm.exe",
        format=ArchiveFormat.ZIP,
    ),
    OperatingSystem.DARWIN: ArchiveSpec(
        extension=".tar.xz",
        binary_name="utpm",
        format=ArchiveFormat.TAR,
    ),
    OperatingSystem.LINUX: ArchiveSpec(
        extension=".tar.xz",
        binary_name="utpm",
        format=ArchiveFormat.TAR,
    ),
}


def get_platform_key(system: Optional[str] = None, machine: Optional[str] = None) -> PlatformKey:
    """Get the current (or given) platform as a PlatformKey."""
    system = system if system is not None else platform.system()
    machine = machine if machine is not None else platform.machine()

    os_name = OS_ALIASES.get(system.lower())
    arch = ARCH_ALIASES.get(machine.lower())
    if os_name is None or arch is None:
        raise UnsupportedPlatformError(system, machine)

    return PlatformKey(os=os_name, arch=arch)


def platform_targets(
    key: PlatformKey,
    table: Mapping[PlatformKey, Sequence[str]] = PLATFORM_TARGETS,
    override: Optional[Sequence[str]] = None,
) -> Tuple[str, ...]:
    """Ordered release targets to try for a platform.

    ``override`` replaces the table lookup, so a caller can pin or reorder
    the targets without changing the table.
    """
    if override:
        return tuple(override)

    targets = tuple(table.get(key, ()))
    if not targets:
        raise UnsupportedPlatformError(key.os.value, key.arch.value)
    return targets


def get_archive_spec(os_name: OperatingSystem) -> ArchiveSpec:
    """Archive extension and binary name used on an operating system."""
    return ARCHIVE_SPECS[os_name]
