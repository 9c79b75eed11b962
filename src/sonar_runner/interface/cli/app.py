from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, resolution of the
property layers (runner settings, project settings, environment and
command-line definitions), engine selection, runner execution and result
rendering.
"""

import json
import sys
import traceback
from typing import List, Optional

from sonar_runner.core.launcher.batch import ImportedBatchFactory
from sonar_runner.core.launcher.log_output import LoggerLogOutput
from sonar_runner.core.runner import run_analysis
from sonar_runner.domain.config import load_runner_properties
from sonar_runner.domain.errors import RunnerError
from sonar_runner.domain.runner_models import MODE_DRY_RUN, RunnerResult
from sonar_runner.infra.logging import LoggingConfig, configure_logging, get_logger
from sonar_runner.interface.cli import args as cli_args

logger = get_logger(__name__)

ENGINE_PROPERTY = "sonar.runner.engine"

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments, defaults to sys.argv.

    Returns:
        int: 0 on success, 1 on analysis failure, 2 on invalid usage or
             configuration, 130 when interrupted.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))
    show_trace = bool(args.errors or args.debug)

    # 2. Property layers
    try:
        definitions = cli_args.parse_definitions(args.definitions)
        properties = load_runner_properties(definitions)
    except (ValueError, RunnerError) as e:
        _report_error(str(e), show_trace, exc_info=True)
        return 2

    if args.dump_config:
        print(json.dumps(dict(sorted(properties.items())), ensure_ascii=False, indent=2))
        return 0

    # 3. Engine selection
    engine_target = args.engine or properties.get(ENGINE_PROPERTY)
    factory = ImportedBatchFactory(engine_target) if engine_target else None
    if factory is None and not args.dry_run:
        print(
            f"ERROR: No analysis engine configured: use --engine or define '{ENGINE_PROPERTY}'.",
            file=sys.stderr,
        )
        return 2

    # 4. Execution
    try:
        result = run_analysis(
            properties,
            factory=factory,
            legacy=bool(args.legacy),
            log_output=LoggerLogOutput(),
            dry_run=bool(args.dry_run),
        )
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return 130
    except Exception as e:
        _report_error(f"Analysis engine failure: {e}", show_trace, exc_info=True)
        return 1

    # 5. Rendering
    if args.json_output:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _report_error(msg: str, show_trace: bool, exc_info: bool = False) -> None:
    if show_trace and exc_info:
        traceback.print_exc(file=sys.stderr)
    print(f"ERROR: {msg}", file=sys.stderr)
    if not show_trace:
        print("ERROR: Re-run with -e to see the full stack trace, or -X for debug logging.",
              file=sys.stderr)


def _print_human_summary(result: RunnerResult) -> None:
    """
    Print the outcome of an invocation to standard output.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        print("EXECUTION FAILURE")
        return

    summary = result.summary
    print("EXECUTION SUCCESS" if result.mode != MODE_DRY_RUN else "PROJECT DEFINITION VALID")
    print(f"Project: {summary.get('project_key')}")
    print(f"Work directory: {summary.get('work_dir')}")
    modules = summary.get("modules") or []
    if modules:
        print("Modules:")
        for key in modules:
            print(f"  - {key}")
    if "elapsed_s" in summary:
        print(f"Total time: {summary['elapsed_s']}s")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
