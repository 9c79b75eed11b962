from __future__ import annotations

"""
Unit tests for the Engine Launcher.

Verifies that the legacy entry point issues a single blocking call without
log sink, and that the current entry point drives 'start', 'execute_task'
and 'stop' exactly once each, in that order.
"""

import logging
from typing import Any, List
from unittest.mock import MagicMock, call

import pytest

from sonar_runner.core.launcher.batch import Batch, BatchFactory
from sonar_runner.core.launcher.isolated_launcher import BatchIsolatedLauncher
from sonar_runner.core.launcher.log_output import StdOutLogOutput
from sonar_runner.domain.errors import RunnerError


@pytest.fixture
def batch() -> MagicMock:
    return MagicMock(spec=Batch)


@pytest.fixture
def factory(batch: MagicMock) -> MagicMock:
    f = MagicMock(spec=BatchFactory)
    f.create_batch.return_value = batch
    return f


def test_execute_old_version(factory: MagicMock, batch: MagicMock) -> None:
    props = {"sonar.projectKey": "foo"}
    components: List[Any] = []
    launcher = BatchIsolatedLauncher(factory)

    launcher.execute_old_version(props, components)

    factory.create_batch.assert_called_once_with(props, None, components)
    assert batch.method_calls == [call.execute()]


def test_start_execute_stop(factory: MagicMock, batch: MagicMock) -> None:
    props = {"sonar.projectKey": "foo"}
    launcher = BatchIsolatedLauncher(factory)

    launcher.start(props, None)
    launcher.execute(props)
    launcher.stop()

    factory.create_batch.assert_called_once_with(props, None, [])
    assert batch.method_calls == [call.start(), call.execute_task(props), call.stop()]


def test_execute_task_receives_plain_dict(factory: MagicMock, batch: MagicMock) -> None:
    props = {"sonar.projectKey": "foo"}
    launcher = BatchIsolatedLauncher(factory)

    launcher.start(props, StdOutLogOutput())
    launcher.execute(props)

    passed = batch.execute_task.call_args[0][0]
    assert isinstance(passed, dict)
    assert passed == props
    assert passed is not props


def test_run_stops_engine_when_task_fails(factory: MagicMock, batch: MagicMock) -> None:
    """Engine errors propagate unchanged, after the engine is stopped."""
    batch.execute_task.side_effect = RuntimeError("analysis failed")
    launcher = BatchIsolatedLauncher(factory)

    with pytest.raises(RuntimeError, match="analysis failed"):
        launcher.run({"k": "v"}, None, ["component"])

    factory.create_batch.assert_called_once_with({"k": "v"}, None, ["component"])
    batch.stop.assert_called_once_with()


def test_run_keeps_task_error_when_stop_also_fails(
        factory: MagicMock,
        batch: MagicMock,
        caplog: pytest.LogCaptureFixture,
) -> None:
    batch.execute_task.side_effect = RuntimeError("task failed")
    batch.stop.side_effect = ValueError("stop failed")
    launcher = BatchIsolatedLauncher(factory)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(RuntimeError, match="task failed"):
            launcher.run({}, None)

    batch.stop.assert_called_once_with()
    assert "stop failed" in caplog.text


def test_run_stop_failure_after_successful_task_propagates(factory: MagicMock, batch: MagicMock) -> None:
    batch.stop.side_effect = ValueError("stop failed")
    launcher = BatchIsolatedLauncher(factory)

    with pytest.raises(ValueError, match="stop failed"):
        launcher.run({}, None)

    batch.execute_task.assert_called_once_with({})


def test_start_failure_propagates(factory: MagicMock, batch: MagicMock) -> None:
    batch.start.side_effect = ValueError("cannot start")
    launcher = BatchIsolatedLauncher(factory)

    with pytest.raises(ValueError, match="cannot start"):
        launcher.run({}, None)

    batch.execute_task.assert_not_called()


def test_execute_before_start_fails(factory: MagicMock) -> None:
    launcher = BatchIsolatedLauncher(factory)

    with pytest.raises(RunnerError, match="not started"):
        launcher.execute({})
    with pytest.raises(RunnerError, match="not started"):
        launcher.stop()
