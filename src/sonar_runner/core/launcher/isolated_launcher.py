from __future__ import annotations

"""
Engine Launcher.

Adapts the two engine generations onto explicit entry points:
- legacy engines run a whole analysis through a single blocking 'execute';
- current engines follow 'start', 'execute_task', 'stop'.

Engine failures are never wrapped here.
"""

import logging
from typing import Any, List, Mapping, Optional

from sonar_runner.core.launcher.batch import Batch, BatchFactory
from sonar_runner.core.launcher.log_output import LogOutput
from sonar_runner.domain.errors import RunnerError

logger = logging.getLogger(__name__)


class BatchIsolatedLauncher:

    def __init__(self, factory: BatchFactory) -> None:
        self._factory = factory
        self._batch: Optional[Batch] = None

    def execute_old_version(self, properties: Mapping[str, str], components: List[Any]) -> None:
        """
        Run a legacy engine: no log sink, one blocking call.
        """
        batch = self._factory.create_batch(properties, None, components)
        batch.execute()

    def start(
            self,
            properties: Mapping[str, str],
            log_output: Optional[LogOutput],
            components: Optional[List[Any]] = None,
    ) -> None:
        self._batch = self._factory.create_batch(properties, log_output, list(components or []))
        self._batch.start()

    def execute(self, properties: Mapping[str, str]) -> None:
        self._require_started().execute_task(dict(properties))

    def stop(self) -> None:
        batch = self._require_started()
        self._batch = None
        batch.stop()

    def run(
            self,
            properties: Mapping[str, str],
            log_output: Optional[LogOutput],
            components: Optional[List[Any]] = None,
    ) -> None:
        """
        Start the engine, run one task, then stop it.

        When the task fails the engine is still stopped, but a failure of
        stop is only logged so that the task error reaches the caller.
        """
        self.start(properties, log_output, components)
        try:
            self.execute(properties)
        except BaseException:
            self._stop_after_failure()
            raise
        self.stop()

    def _stop_after_failure(self) -> None:
        try:
            self.stop()
        except Exception as e:
            logger.error(f"Unable to stop the analysis engine after a failed task: {e}")

    def _require_started(self) -> Batch:
        if self._batch is None:
            raise RunnerError("The analysis engine is not started")
        return self._batch
