from __future__ import annotations

"""
Analysis Engine Interface.

Declares the narrow API through which the runner drives the external
analysis engine, and the factory that loads an engine implementation from
an importable 'package.module:attribute' target at run time.
"""

import importlib
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Mapping, Optional

from sonar_runner.core.launcher.log_output import LogOutput
from sonar_runner.domain.errors import RunnerError

logger = logging.getLogger(__name__)


class Batch(ABC):
    """
    Handle on an analysis engine instance.
    """

    @abstractmethod
    def execute(self) -> Any:
        """Run a whole analysis in one blocking call (legacy engines)."""
        pass

    @abstractmethod
    def start(self) -> Any:
        pass

    @abstractmethod
    def execute_task(self, analysis_properties: Mapping[str, str]) -> Any:
        """
        Run one analysis task on a started engine.

        Args:
            analysis_properties: Final project properties.
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        pass


class BatchFactory(ABC):
    """
    Creates engine instances.
    """

    @abstractmethod
    def create_batch(
            self,
            properties: Mapping[str, str],
            log_output: Optional[LogOutput],
            components: List[Any],
    ) -> Batch:
        """
        Args:
            properties: Bootstrap properties of the engine.
            log_output: Sink for engine messages, None to let the engine
                        use its own logging.
            components: Extra objects registered into the engine.
        """
        pass


class ImportedBatchFactory(BatchFactory):
    """
    Factory delegating to a callable located by 'package.module:attribute'.

    The callable receives (properties, log_output, components) and must
    return a Batch-like object. It is imported on first use only.
    """

    def __init__(self, target: str) -> None:
        self.target = target
        self._creator: Optional[Callable[..., Batch]] = None

    def create_batch(
            self,
            properties: Mapping[str, str],
            log_output: Optional[LogOutput],
            components: List[Any],
    ) -> Batch:
        if self._creator is None:
            self._creator = load_engine_target(self.target)
        return self._creator(properties, log_output, components)


def load_engine_target(target: str) -> Callable[..., Batch]:
    """
    Import the engine creator designated by 'package.module:attribute'.

    Raises:
        RunnerError: If the target is malformed, cannot be imported, or is
                     not callable.
    """
    module_name, sep, attr_path = target.strip().partition(":")
    if not sep or not module_name or not attr_path:
        raise RunnerError(
            f"Invalid engine target '{target}': expected 'package.module:attribute'"
        )

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise RunnerError(f"Unable to load the analysis engine '{target}': {e}") from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise RunnerError(
                f"Unable to load the analysis engine '{target}': no attribute '{part}'"
            ) from e

    if not callable(obj):
        raise RunnerError(f"The analysis engine '{target}' is not callable")

    logger.debug(f"Analysis engine loaded from {target}")
    return obj
