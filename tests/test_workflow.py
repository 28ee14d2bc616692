"""Tests for workflow commands and environment files."""

import os

import pytest

from helpers import read_outputs
from setup_utpm.workflow import add_path, issue_command, set_failed, set_output


def test_set_output_writes_heredoc(tmp_path):
    output_file = tmp_path / "output"

    set_output("version", "1.2.0", output_file)
    set_output("cache-hit", False, output_file)

    assert read_outputs(output_file) == {"version": "1.2.0", "cache-hit": "false"}


def test_set_output_without_file_uses_command(capsys):
    set_output("cache-hit", True)
    assert "::set-output name=cache-hit::true" in capsys.readouterr().out


def test_add_path_updates_file_and_environment(tmp_path):
    path_file = tmp_path / "path"
    env = {"PATH": "/usr/bin"}

    add_path(tmp_path / "bin", path_file, env)

    assert path_file.read_text() == f"{tmp_path / 'bin'}{os.linesep}"
    assert env["PATH"] == f"{tmp_path / 'bin'}{os.pathsep}/usr/bin"


def test_add_path_to_empty_path(tmp_path, capsys):
    env = {}

    add_path("/opt/utpm", env=env)

    assert env["PATH"] == "/opt/utpm"
    assert "::add-path::/opt/utpm" in capsys.readouterr().out


def test_set_failed(capsys):
    set_failed("Binary not found\nat /tmp/x")
    assert capsys.readouterr().out.strip() == "::error::Binary not found%0Aat /tmp/x"


def test_issue_command_with_properties(capsys):
    issue_command("warning", "careful", file="a.py", line="3")
    assert capsys.readouterr().out.strip() == "::warning file=a.py,line=3::careful"


def test_set_output_rejects_delimiter_collision(tmp_path, monkeypatch):
    monkeypatch.setattr("setup_utpm.workflow.uuid.uuid4", lambda: "fixed")

    with pytest.raises(ValueError, match="Unexpected delimiter"):
        set_output("version", "ghadelimiter_fixed", tmp_path / "output")
