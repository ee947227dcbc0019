"""
Environment-driven settings and stderr diagnostics.

PERICOPE_DEBUG=1   print [DEBUG] lines (fuzzy book matches, skipped scan candidates).
PERICOPE_FORMAT    default label style for CLI output: "canonical" or "full_name".

[WARN] lines are never gated: they report inconsistent reference data,
which is a correctness signal rather than a debug detail.
"""
import os
import sys

DEBUG_ENV_VAR: str = "PERICOPE_DEBUG"
FORMAT_ENV_VAR: str = "PERICOPE_FORMAT"
DEFAULT_FORMAT: str = "canonical"


def debug_enabled() -> bool:
    return os.environ.get(DEBUG_ENV_VAR) == "1"


def debug(message: str) -> None:
    if debug_enabled():
        print(f"[DEBUG] {message}", file=sys.stderr)


def warn(message: str) -> None:
    print(f"[WARN] {message}", file=sys.stderr)


def default_format() -> str:
    """Return the configured output format name, falling back to canonical."""
    value = os.environ.get(FORMAT_ENV_VAR, DEFAULT_FORMAT).strip().lower()
    if value not in ("canonical", "full_name"):
        warn(f"Ignoring unknown {FORMAT_ENV_VAR}={value!r}; using {DEFAULT_FORMAT!r}")
        return DEFAULT_FORMAT
    return value
