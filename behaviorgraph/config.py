"""
Compiler settings.

Values come from the environment so the CLI and the API server share one
configuration surface.  Both entry points call ``load_dotenv()`` before
``CompilerSettings.from_env()``, so a ``.env`` file in the working directory
is honoured.

    BEHAVIORGRAPH_INDENT      indent unit, number of spaces or a literal string ("4")
    BEHAVIORGRAPH_MAX_DEPTH   nesting / dependency depth limit (64)
    BEHAVIORGRAPH_MEMOIZE     "statement" or "none" ("statement")
    BEHAVIORGRAPH_LOG_LEVEL   logging level name ("WARNING")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

MEMOIZE_POLICIES = ("statement", "none")


@dataclass(frozen=True)
class CompilerSettings:
    indent_unit: str = "    "
    max_depth: int = 64
    memoize: str = "statement"
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.memoize not in MEMOIZE_POLICIES:
            raise ValueError(
                f"memoize must be one of {MEMOIZE_POLICIES}, got {self.memoize!r}"
            )
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CompilerSettings":
        env = os.environ if environ is None else environ

        indent = env.get("BEHAVIORGRAPH_INDENT", "4")
        indent_unit = " " * int(indent) if indent.isdigit() else indent

        return cls(
            indent_unit=indent_unit,
            max_depth=int(env.get("BEHAVIORGRAPH_MAX_DEPTH", cls.max_depth)),
            memoize=env.get("BEHAVIORGRAPH_MEMOIZE", cls.memoize).lower(),
            log_level=env.get("BEHAVIORGRAPH_LOG_LEVEL", cls.log_level).upper(),
        )
