from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
the property definitions and options understood by the runner core.
"""

import argparse
from typing import Dict, List

from sonar_runner.domain.constants import RUNNER_VERSION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser of the sonar-runner CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="sonar-runner",
        description="Build the project definition and launch the code analysis engine.",
    )

    # --- Properties ---
    p.add_argument(
        "-D", "--define",
        dest="definitions",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Define a property, e.g. -D sonar.projectKey=my:project. Repeatable.",
    )

    # --- Engine ---
    p.add_argument(
        "--engine",
        dest="engine",
        default=None,
        metavar="MODULE:ATTR",
        help="Importable factory creating the analysis engine.",
    )
    p.add_argument(
        "--legacy",
        action="store_true",
        help="Drive the engine through its single blocking 'execute' call.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Build and validate the project definition without running the engine.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "-X", "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "-e", "--errors",
        action="store_true",
        help="Print the full stack trace of failures.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write the log to this file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved properties as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result and the project tree as JSON.",
    )
    p.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {RUNNER_VERSION}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def parse_definitions(definitions: List[str]) -> Dict[str, str]:
    """
    Translate '-D key=value' arguments into a property bag.

    A definition without '=' sets the key to 'true'. Later definitions win.

    Raises:
        ValueError: On an empty key.
    """
    props: Dict[str, str] = {}
    for raw in definitions:
        key, sep, value = raw.partition("=")
        key = key.strip()
        if not key:
            raise ValueError(f"Invalid property definition '{raw}': empty key.")
        props[key] = value.strip() if sep else "true"
    return props
