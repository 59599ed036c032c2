"""
Version constraint resolution (pure).

Turns a declared version constraint into the token passed to
``asdf install``. No I/O, no subprocess.

Range constraints are not resolved against the list of available
versions: any range collapses to ``latest``.
"""

from __future__ import annotations

import re

LATEST = "latest"

# Aliases asdf understands as "newest available"
LATEST_ALIASES = frozenset({"latest", "stable"})

RANGE_PREFIXES = ("^", "~", ">", "<")

# Loose shape of an exact version: 1, 1.2, v1.2.3, 1.2.3-rc.1, 2024.01.15
_EXACT_RE = re.compile(r"^v?\d+(\.\d+)*([-+._][0-9A-Za-z.-]+)?$")


def is_range(constraint: str) -> bool:
    return constraint.startswith(RANGE_PREFIXES)


def is_exact(constraint: str) -> bool:
    """Whether the constraint looks like a concrete version number."""
    return bool(_EXACT_RE.match(constraint))


def resolve_version(constraint: str) -> str:
    """Resolve a version constraint to an installable token.

    Examples::

        resolve_version("latest")  -> "latest"
        resolve_version("stable")  -> "latest"
        resolve_version("^1.2")    -> "latest"
        resolve_version("1.4.2")   -> "1.4.2"
    """
    if constraint in LATEST_ALIASES:
        return LATEST
    if is_range(constraint):
        return LATEST
    return constraint
