import json
import logging

import pytest

from setup_utpm.logging import (
    WorkflowCommandRenderer,
    configure_logging,
    escape_data,
    get_logger,
    resolve_log_level,
)


def test_info_renders_as_plain_text():
    renderer = WorkflowCommandRenderer()
    output = renderer(None, "info", {"level": "info", "event": "Resolved UTPM version: 1.2.0."})
    assert output == "Resolved UTPM version: 1.2.0."


@pytest.mark.parametrize(
    "level,command",
    [
        ("debug", "::debug::"),
        ("warning", "::warning::"),
        ("error", "::error::"),
        ("critical", "::error::"),
    ],
)
def test_levels_render_as_workflow_commands(level, command):
    renderer = WorkflowCommandRenderer()
    output = renderer(None, level, {"level": level, "event": "Test message"})
    assert output == f"{command}Test message"


def test_dict_events_are_flattened():
    """Test structured events keep their data as compact JSON"""
    renderer = WorkflowCommandRenderer()
    event = {"event": "checking_cache", "cache_path": "/cache/utpm"}

    output = renderer(None, "info", {"level": "info", "event": event, "logger": "x"})

    message, data = output.split(" ", 1)
    assert message == "checking_cache"
    assert json.loads(data) == {"cache_path": "/cache/utpm"}


def test_multiline_command_data_is_escaped():
    renderer = WorkflowCommandRenderer()
    output = renderer(None, "error", {"level": "error", "event": "line one\nline two 100%"})
    assert output == "::error::line one%0Aline two 100%25"


def test_escape_data():
    assert escape_data("a%b\r\nc") == "a%25b%0D%0Ac"


@pytest.mark.parametrize(
    "env,expected",
    [
        ({}, "INFO"),
        ({"RUNNER_DEBUG": "1"}, "DEBUG"),
        ({"ACTIONS_STEP_DEBUG": "true"}, "DEBUG"),
        ({"RUNNER_DEBUG": "1", "SETUP_UTPM_LOG_LEVEL": "warning"}, "WARNING"),
        ({"SETUP_UTPM_LOG_LEVEL": "nonsense"}, "INFO"),
    ],
)
def test_resolve_log_level(env, expected):
    assert resolve_log_level(env) == expected


def test_configure_logging():
    """Test logging configuration"""
    configure_logging("DEBUG")
    assert logging.getLogger("setup_utpm").level == logging.DEBUG
    assert logging.getLogger("aiohttp").level == logging.WARNING


def test_logger_emits_rendered_lines(caplog):
    configure_logging("DEBUG")
    logger = get_logger("setup_utpm.test_module")

    with caplog.at_level(logging.DEBUG, logger="setup_utpm"):
        logger.warning({"event": "target_download_failed", "target": "x86_64-unknown-linux-musl"})

    assert any(
        record.getMessage().startswith("::warning::target_download_failed")
        for record in caplog.records
    )
