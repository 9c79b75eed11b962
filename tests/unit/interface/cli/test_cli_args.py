from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Collection of repeated '-D key=value' definitions.
2. Mapping of the engine and diagnostic flags.
3. Validation of malformed definitions.
"""

import pytest

from sonar_runner.interface.cli.args import build_parser, parse_definitions


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


def test_cli_definitions_are_collected():
    args = parse_args(["-D", "sonar.projectKey=a", "--define", "sonar.sources=src", "-Dflag"])

    assert args.definitions == ["sonar.projectKey=a", "sonar.sources=src", "flag"]
    assert parse_definitions(args.definitions) == {
        "sonar.projectKey": "a",
        "sonar.sources": "src",
        "flag": "true",
    }


def test_cli_defaults():
    args = parse_args([])

    assert args.definitions == []
    assert args.engine is None
    assert args.legacy is False
    assert args.dry_run is False
    assert args.debug is False
    assert args.errors is False
    assert args.json_output is False
    assert args.dump_config is False


def test_cli_engine_and_diagnostic_flags():
    args = parse_args(["--engine", "pkg.mod:create", "--legacy", "-X", "-e", "--json", "--log-file", "run.log"])

    assert args.engine == "pkg.mod:create"
    assert args.legacy is True
    assert args.debug is True
    assert args.errors is True
    assert args.json_output is True
    assert args.log_file == "run.log"


def test_parse_definitions_keeps_separators_in_value_and_last_wins():
    props = parse_definitions(["url = http://host:9000/?a=b", "k=1", "k=2"])
    assert props == {"url": "http://host:9000/?a=b", "k": "2"}


def test_parse_definitions_rejects_empty_key():
    with pytest.raises(ValueError, match="empty key"):
        parse_definitions(["=value"])


def test_cli_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["--version"])

    assert exc_info.value.code == 0
    assert "sonar-runner 2.0.0" in capsys.readouterr().out
