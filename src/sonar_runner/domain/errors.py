from __future__ import annotations

"""
Runner Error Model.

Every failure raised while loading settings, building the project
definition or wiring the analysis engine is reported with a single
exception type carrying a human-readable message.
"""


class RunnerError(RuntimeError):
    """
    Fatal runner failure. The message is meant to be shown to the user as-is.
    """
