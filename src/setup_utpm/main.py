"""Action entry point: resolve, restore or install utpm and expose it on PATH."""

import asyncio
import logging
import os
import sys
from typing import MutableMapping, Optional

from setup_utpm import tool_cache
from setup_utpm.acquire import acquire
from setup_utpm.config import ActionInputs, RunnerEnvironment
from setup_utpm.constants import RELEASE_DOWNLOAD_BASE, TOOL_NAME
from setup_utpm.errors import SetupError, log_error
from setup_utpm.logging import configure_logging, get_logger
from setup_utpm.platforms import get_platform_key, platform_targets
from setup_utpm.releases import list_releases
from setup_utpm.types import PlatformKey, SetupResult
from setup_utpm.versions import resolve_version
from setup_utpm.workflow import add_path, set_failed, set_output

logger = get_logger(__name__)


async def setup(
    inputs: ActionInputs,
    runner: RunnerEnvironment,
    platform_key: Optional[PlatformKey] = None,
    download_base: str = RELEASE_DOWNLOAD_BASE,
) -> SetupResult:
    """Resolve the requested version and return a directory holding its binary.

    The tool cache is consulted before any platform lookup or download, so a
    cache hit needs nothing beyond the release listing.
    """
    tags = await list_releases(inputs.token, api_base=runner.api_url)
    version = resolve_version(tags, inputs.version)

    arch = platform_key.arch.value if platform_key else None
    found = tool_cache.find(TOOL_NAME, version, arch, root=runner.tool_cache)
    if found:
        logger.info(f"UTPM v{version} restored from tool cache.")
        return SetupResult(version=version, path=found, cache_hit=True)

    platform_key = platform_key or get_platform_key()
    targets = platform_targets(platform_key, override=inputs.targets)
    path = await acquire(
        version,
        targets,
        platform_key,
        cache_root=runner.tool_cache,
        temp_root=runner.temp,
        download_base=download_base,
    )
    return SetupResult(version=version, path=path, cache_hit=False)


async def run(
    inputs: Optional[ActionInputs] = None,
    runner: Optional[RunnerEnvironment] = None,
    env: Optional[MutableMapping[str, str]] = None,
    **setup_options,
) -> int:
    """Run the action once and return the process exit status.

    This is the only place failures are turned into a failed run; outputs are
    published only after setup has fully succeeded.
    """
    env = os.environ if env is None else env
    try:
        inputs = inputs or ActionInputs.from_env(env)
        runner = runner or RunnerEnvironment.from_env(env)
        logger.debug({"event": "inputs", "version": inputs.version, "authenticated": bool(inputs.token)})

        result = await setup(inputs, runner, **setup_options)

        add_path(result.path, runner.path_file, env)
        set_output("cache-hit", result.cache_hit, runner.output_file)
        set_output("version", result.version, runner.output_file)
        logger.info(f"UTPM v{result.version} installed successfully!")
        return 0

    except SetupError as e:
        log_error(e, logger=logger, level=logging.DEBUG)
        set_failed(str(e))
        return 1
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        set_failed(f"Action failed: {e}")
        return 1


def main() -> None:
    configure_logging()
    sys.exit(asyncio.run(run()))
