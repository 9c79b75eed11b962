from __future__ import annotations

"""
Runner orchestration.

Coordinates one invocation:
1. Builds and validates the project definition.
2. Hands the final properties to the analysis engine through the legacy or
   the current launcher entry point (skipped on dry run).
3. Reports the outcome as a RunnerResult.
"""

import logging
import time
from typing import Any, List, Mapping, Optional

from sonar_runner.core.launcher.batch import BatchFactory
from sonar_runner.core.launcher.isolated_launcher import BatchIsolatedLauncher
from sonar_runner.core.launcher.log_output import LogOutput
from sonar_runner.core.project.builder import generate_project_definition
from sonar_runner.domain.errors import RunnerError
from sonar_runner.domain.runner_models import (
    MODE_CURRENT,
    MODE_DRY_RUN,
    MODE_LEGACY,
    RunnerResult,
    create_error_result,
    create_success_result,
)

logger = logging.getLogger(__name__)


def run_analysis(
        properties: Mapping[str, str],
        *,
        factory: Optional[BatchFactory] = None,
        legacy: bool = False,
        log_output: Optional[LogOutput] = None,
        components: Optional[List[Any]] = None,
        dry_run: bool = False,
) -> RunnerResult:
    """
    Execute a complete runner invocation.

    Errors found while building the project definition are returned as a
    failed result. Errors raised by the engine propagate unchanged.

    Args:
        properties: Resolved property bag.
        factory: Engine factory; required unless dry_run is set.
        legacy: Use the single blocking 'execute' call of old engines.
        log_output: Sink for engine messages (ignored by legacy engines).
        components: Extra objects registered into the engine.
        dry_run: Build and validate only.

    Returns:
        RunnerResult: Status, project tree and summary.
    """
    mode = MODE_DRY_RUN if dry_run else (MODE_LEGACY if legacy else MODE_CURRENT)
    started = time.monotonic()

    try:
        project = generate_project_definition(properties)
    except RunnerError as e:
        logger.error(str(e))
        return create_error_result(str(e), mode, dict(properties))

    # Final bag: root properties after validation and cleaning
    final_props = dict(project.properties)
    summary = {
        "project_key": project.key,
        "modules": [node.key for node in project.walk() if node is not project],
        "work_dir": project.work_dir,
    }

    if dry_run:
        logger.info(f"Dry run: project '{project.key}' is valid")
        summary["elapsed_s"] = round(time.monotonic() - started, 3)
        return create_success_result(project, mode, final_props, summary)

    if factory is None:
        msg = "No analysis engine configured"
        logger.error(msg)
        return create_error_result(msg, mode, final_props, summary)

    launcher = BatchIsolatedLauncher(factory)
    engine_components = list(components or [])
    engine_components.append(project)

    logger.info(f"Analysing project '{project.key}' ({mode} engine)")
    if legacy:
        launcher.execute_old_version(final_props, engine_components)
    else:
        launcher.run(final_props, log_output, engine_components)

    summary["elapsed_s"] = round(time.monotonic() - started, 3)
    logger.info(f"Analysis of '{project.key}' finished in {summary['elapsed_s']}s")
    return create_success_result(project, mode, final_props, summary)
