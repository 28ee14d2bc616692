"""Release tag parsing and version constraint resolution."""

import re
from typing import Iterable, List, Optional

import semantic_version

from setup_utpm.errors import ResolutionError
from setup_utpm.logging import get_logger

logger = get_logger(__name__)

LATEST = "latest"
ANY_VERSION = "*"

# Leading non-numeric text such as "v" in "v1.2.3"
VERSION_PREFIX = re.compile(r"^[^0-9]+")

# Whitespace between a comparator and its version, as in ">= 1.0.0"
OPERATOR_SPACING = re.compile(r"(<=|>=|[<>=~^])\s+")


def parse_release_version(tag: str) -> Optional[semantic_version.Version]:
    """Parse a release tag as a semantic version, or None if it is not one."""
    candidate = VERSION_PREFIX.sub("", tag.strip())
    try:
        return semantic_version.Version(candidate)
    except ValueError:
        return None


def valid_versions(tags: Iterable[str]) -> List[semantic_version.Version]:
    """Semantic versions of every parseable tag, in tag order."""
    versions = []
    for tag in tags:
        version = parse_release_version(tag)
        if version is None:
            logger.debug({"event": "skipping_tag", "tag": tag})
            continue
        versions.append(version)
    return versions


def parse_constraint(constraint: str) -> semantic_version.NpmSpec:
    """Parse "latest" or an npm-style range expression."""
    expression = constraint.strip()
    if expression in ("", LATEST):
        expression = ANY_VERSION
    expression = OPERATOR_SPACING.sub(r"\1", expression)

    try:
        return semantic_version.NpmSpec(expression)
    except ValueError as e:
        raise ResolutionError(constraint, f"invalid version range {expression!r}") from e


def resolve_version(tags: Iterable[str], constraint: str) -> str:
    """Highest published version satisfying the constraint."""
    spec = parse_constraint(constraint)
    versions = valid_versions(tags)

    if not versions:
        raise ResolutionError(constraint, "no valid semantic versions published")

    resolved = spec.select(versions)
    if resolved is None:
        raise ResolutionError(constraint)

    logger.info(f"Resolved UTPM version: {resolved}.")
    return str(resolved)
