"""Install a released utpm binary into a GitHub Actions job."""

from setup_utpm.config import ActionInputs, RunnerEnvironment
from setup_utpm.errors import (
    SetupError,
    ListingError,
    ResolutionError,
    UnsupportedPlatformError,
    AcquisitionError,
    ArchiveIntegrityError,
)
from setup_utpm.main import run, setup
from setup_utpm.types import SetupResult

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "ActionInputs",
    "RunnerEnvironment",

    # Entry points
    "run",
    "setup",
    "SetupResult",

    # Error types
    "SetupError",
    "ListingError",
    "ResolutionError",
    "UnsupportedPlatformError",
    "AcquisitionError",
    "ArchiveIntegrityError",
]
