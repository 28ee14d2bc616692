"""GitHub Actions workflow commands and environment files."""

import os
import sys
import uuid
from pathlib import Path
from typing import MutableMapping, Optional, Union

from setup_utpm.logging import escape_data, get_logger

logger = get_logger(__name__)


def issue_command(command: str, message: str, **properties: str) -> None:
    """Write a ``::command key=value::message`` line to stdout."""
    props = ",".join(f"{key}={escape_data(value)}" for key, value in properties.items())
    header = f"{command} {props}" if props else command
    sys.stdout.write(f"::{header}::{escape_data(message)}{os.linesep}")
    sys.stdout.flush()


def append_to_file(path: Path, content: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(content + os.linesep)


def set_output(name: str, value: Union[str, bool], output_file: Optional[Path] = None) -> None:
    """Publish a step output."""
    if isinstance(value, bool):
        value = "true" if value else "false"

    logger.debug({"event": "set_output", "name": name, "value": value})

    if output_file is None:
        issue_command("set-output", value, name=name)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected delimiter in output {name}")
    append_to_file(output_file, f"{name}<<{delimiter}{os.linesep}{value}{os.linesep}{delimiter}")


def add_path(
    path: Union[str, Path],
    path_file: Optional[Path] = None,
    env: Optional[MutableMapping[str, str]] = None,
) -> None:
    """Prepend a directory to PATH for this process and later job steps."""
    env = os.environ if env is None else env

    if path_file is None:
        issue_command("add-path", str(path))
    else:
        append_to_file(path_file, str(path))

    current_path = env.get("PATH", "")
    env["PATH"] = f"{path}{os.pathsep}{current_path}" if current_path else str(path)
    logger.debug({"event": "updated_path", "bin_path": str(path)})


def set_failed(message: str) -> None:
    """Report the run failure reason as an error annotation."""
    issue_command("error", message)
