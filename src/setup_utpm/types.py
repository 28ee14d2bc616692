"""Core type definitions"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class OperatingSystem(Enum):
    DARWIN = "darwin"
    LINUX = "linux"
    WINDOWS = "windows"


class Architecture(Enum):
    X64 = "x64"
    ARM64 = "arm64"


ArchiveFormat = Enum("ArchiveFormat", ["ZIP", "TAR"])


@dataclass(frozen=True)
class PlatformKey:
    """Host operating system and CPU architecture"""
    os: OperatingSystem
    arch: Architecture

    def __str__(self) -> str:
        return f"{self.os.value}-{self.arch.value}"


@dataclass(frozen=True)
class ArchiveSpec:
    """Archive naming conventions for a host operating system"""
    extension: str
    binary_name: str
    format: ArchiveFormat


@dataclass(frozen=True)
class DownloadedArtifact:
    """First release archive that downloaded successfully"""
    path: Path
    target: str
    url: str


@dataclass(frozen=True)
class SetupResult:
    """Outcome of a completed setup run"""
    version: str
    path: Path
    cache_hit: bool
