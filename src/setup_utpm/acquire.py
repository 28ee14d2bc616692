"""Release archive download, extraction and caching."""

import lzma
import os
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import List, Optional, Sequence

from setup_utpm import tool_cache
from setup_utpm.constants import DOWNLOAD_URL_TEMPLATE, RELEASE_DOWNLOAD_BASE, TOOL_NAME
from setup_utpm.errors import AcquisitionError, ArchiveIntegrityError, DownloadError
from setup_utpm.logging import get_logger
from setup_utpm.platforms import get_archive_spec
from setup_utpm.types import ArchiveFormat, ArchiveSpec, DownloadedArtifact, PlatformKey
from setup_utpm.utils.fetching import download_file, ensure_archive_suffix, extract_archive

logger = get_logger(__name__)


def download_url_for(
    version: str,
    target: str,
    archive: ArchiveSpec,
    base: str = RELEASE_DOWNLOAD_BASE,
) -> str:
    return DOWNLOAD_URL_TEMPLATE.format(
        base=base.rstrip("/"),
        version=version,
        tool=TOOL_NAME,
        target=target,
        extension=archive.extension,
    )


async def download_first_available(
    version: str,
    targets: Sequence[str],
    archive: ArchiveSpec,
    dest_dir: Path,
    base: str = RELEASE_DOWNLOAD_BASE,
) -> DownloadedArtifact:
    """Try each target in order and keep the first archive that downloads.

    A failed target is logged and skipped; only running out of targets is an
    error.
    """
    attempted: List[str] = []

    for target in targets:
        url = download_url_for(version, target, archive, base)
        attempted.append(url)
        dest = dest_dir / url.rsplit("/", 1)[-1]

        logger.info(f"Downloading from {url}")
        try:
            await download_file(url, dest)
        except DownloadError as e:
            logger.warning({"event": "target_download_failed", "target": target, "error": str(e)})
            continue

        logger.debug({"event": "target_selected", "target": target, "path": str(dest)})
        return DownloadedArtifact(path=dest, target=target, url=url)

    raise AcquisitionError(version, attempted)


def locate_binary(extracted: Path, archive: ArchiveSpec) -> Path:
    """Path of the binary at the top level of the extracted archive."""
    binary_path = extracted / archive.binary_name

    if not binary_path.is_file():
        logger.debug({
            "event": "binary_not_found",
            "binary_name": archive.binary_name,
            "available_files": sorted(os.listdir(extracted)),
        })
        raise ArchiveIntegrityError(
            f"Binary not found at {binary_path}",
            details={"binary_path": str(binary_path)},
        )

    if os.name != "nt":
        binary_path.chmod(0o755)

    return binary_path


async def acquire(
    version: str,
    targets: Sequence[str],
    platform_key: PlatformKey,
    cache_root: Optional[Path] = None,
    temp_root: Optional[Path] = None,
    download_base: str = RELEASE_DOWNLOAD_BASE,
) -> Path:
    """Download, extract and cache ``version``; return the cached directory."""
    logger.info(f"Downloading and caching UTPM {version}.")
    archive = get_archive_spec(platform_key.os)
    logger.debug({
        "event": "archive_spec",
        "targets": list(targets),
        "extension": archive.extension,
        "binary_name": archive.binary_name,
    })

    if temp_root is not None:
        temp_root.mkdir(parents=True, exist_ok=True)

    with tempfile.TemporaryDirectory(prefix="setup-utpm-", dir=temp_root) as tmpdir:
        tmp_path = Path(tmpdir)
        artifact = await download_first_available(version, targets, archive, tmp_path, download_base)

        archive_path = artifact.path
        if archive.format == ArchiveFormat.ZIP:
            archive_path = ensure_archive_suffix(archive_path, archive.extension)

        try:
            extracted = extract_archive(archive_path, tmp_path / "extracted")
        except (tarfile.TarError, zipfile.BadZipFile, lzma.LZMAError, EOFError, ValueError) as e:
            raise ArchiveIntegrityError(
                f"Failed to extract {archive_path.name}: {e}",
                details={"url": artifact.url, "target": artifact.target},
            ) from e

        logger.debug(f"Extracted archive for UTPM version {version}.")
        locate_binary(extracted, archive)

        cached_path = tool_cache.cache_dir(
            extracted, TOOL_NAME, version, platform_key.arch.value, root=cache_root
        )

    logger.info(f"UTPM {version} added to cache at '{cached_path}'.")
    return cached_path
