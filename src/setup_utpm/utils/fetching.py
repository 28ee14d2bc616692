import os
import tarfile
import zipfile
from pathlib import Path
from typing import Dict, Optional

import aiohttp

from setup_utpm.constants import USER_AGENT
from setup_utpm.errors import DownloadError
from setup_utpm.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 8192

ARCHIVE_HANDLERS = {
    ".zip": zipfile.ZipFile,
    ".tar.xz": tarfile.open,
    ".txz": tarfile.open,
    ".tar.gz": tarfile.open,
    ".tgz": tarfile.open,
}


async def download_file(url: str, dest: Path, headers: Optional[Dict[str, str]] = None) -> Path:
    """Stream a URL to ``dest``; the file must come back non-empty."""
    request_headers = {"User-Agent": USER_AGENT, **(headers or {})}
    try:
        async with aiohttp.ClientSession(headers=request_headers) as session:
            async with session.get(url) as response:
                if response.status != 200:
                    raise DownloadError(url, f"HTTP {response.status} {response.reason}")

                with open(dest, "wb") as f:
                    while chunk := await response.content.read(CHUNK_SIZE):
                        f.write(chunk)

    except (aiohttp.ClientError, OSError) as e:
        if dest.exists():
            dest.unlink()
        raise DownloadError(url, str(e)) from e
    except DownloadError:
        if dest.exists():
            dest.unlink()
        raise

    if not dest.exists() or dest.stat().st_size == 0:
        dest.unlink(missing_ok=True)
        raise DownloadError(url, "downloaded file is empty")

    logger.debug({"event": "download_complete", "url": url, "size": dest.stat().st_size})
    return dest


def ensure_archive_suffix(archive_path: Path, extension: str) -> Path:
    """Rename the archive so its name ends with ``extension``."""
    if archive_path.name.endswith(extension):
        return archive_path

    renamed = archive_path.with_name(archive_path.name + extension)
    archive_path.rename(renamed)
    logger.debug({"event": "archive_renamed", "from": str(archive_path), "to": str(renamed)})
    return renamed


def extract_archive(archive_path: Path, dest_dir: Path) -> Path:
    """Extract a zip or tar archive into ``dest_dir``."""

    logger.debug(
        {"event": "extract_archive", "archive": str(archive_path), "dest": str(dest_dir)}
    )
    format = next(
        (suffix for suffix in ARCHIVE_HANDLERS if archive_path.name.endswith(suffix)),
        archive_path.suffix,
    )

    handler = ARCHIVE_HANDLERS.get(format)
    if not handler:
        raise ValueError(f"Unsupported archive format: {format}")

    dest_dir.mkdir(parents=True, exist_ok=True)

    with handler(archive_path) as archive:
        if isinstance(archive, tarfile.TarFile):
            archive.extractall(dest_dir, filter="data")
        else:
            archive.extractall(dest_dir)

    logger.debug(
        {
            "event": "archive_extracted",
            "archive": str(archive_path),
            "extracted_to": str(dest_dir),
            "files": sorted(os.listdir(dest_dir)),
        }
    )

    return dest_dir
