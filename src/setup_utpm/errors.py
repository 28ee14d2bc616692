"""Error handling for setup-utpm."""
import logging
from typing import Any, Dict, List, Optional

from setup_utpm.logging import get_logger


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[Any] = None,
    level: int = logging.ERROR
) -> None:
    """Log an error with context."""
    logger = logger or get_logger(__name__)

    error_info = {
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, SetupError) and error.details:
        error_info["details"] = error.details

    logger.log(level, {"event": "setup_failed", **error_info})


class SetupError(Exception):
    """Base error class for setup-utpm."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ListingError(SetupError):
    """Release metadata could not be fetched or parsed."""
    def __init__(self, url: str, reason: str, rate_limit_hint: bool = True):
        if rate_limit_hint:
            message = (
                f"Failed to parse releases from {url}: {reason}. "
                "This may be caused by API rate limit exceeded."
            )
        else:
            message = f"Failed to fetch releases from {url}: {reason}"
        super().__init__(
            message,
            details={"url": url, "reason": reason}
        )


class ResolutionError(SetupError):
    """No published release satisfies the requested constraint."""
    def __init__(self, constraint: str, reason: Optional[str] = None):
        message = f"UTPM {constraint} could not be resolved"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            details={"constraint": constraint}
        )


class UnsupportedPlatformError(SetupError):
    """Host OS/architecture has no artifact mapping."""
    def __init__(self, system: str, machine: str):
        super().__init__(
            f"Unsupported platform: {system}-{machine}",
            details={"system": system, "machine": machine}
        )


class AcquisitionError(SetupError):
    """Every candidate target failed to download."""
    def __init__(self, version: str, urls: List[str]):
        super().__init__(
            f"Failed to download UTPM {version} for any target",
            details={"version": version, "attempted_urls": urls}
        )


class ArchiveIntegrityError(SetupError):
    """Archive is corrupt or does not contain the expected binary."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)


class DownloadError(SetupError):
    """A single archive download failed or produced an empty file."""
    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Failed to download {url}: {reason}",
            details={"url": url, "reason": reason}
        )
