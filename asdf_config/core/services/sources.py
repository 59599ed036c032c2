"""
Plugin source resolution (pure).

Maps a plugin name and its declared ``source`` to the git URL handed
to ``asdf plugin add``. Total over all strings: unknown keywords fall
back to the hyperpolymath template.
"""

from __future__ import annotations

GITHUB_HOST = "github.com"

OFFICIAL = "official"
HYPERPOLYMATH = "hyperpolymath"

_OFFICIAL_TEMPLATE = "https://{host}/asdf-vm/asdf-{name}.git"
_HYPERPOLYMATH_TEMPLATE = "https://{host}/hyperpolymath/asdf-{name}-plugin.git"

KNOWN_SOURCES = (OFFICIAL, HYPERPOLYMATH)


def official_url(name: str) -> str:
    return _OFFICIAL_TEMPLATE.format(host=GITHUB_HOST, name=name)


def hyperpolymath_url(name: str) -> str:
    return _HYPERPOLYMATH_TEMPLATE.format(host=GITHUB_HOST, name=name)


def is_explicit_url(source: str) -> bool:
    """Whether the declared source is used verbatim."""
    return source.startswith("http")


def resolve_source(name: str, declared: str) -> str:
    """Resolve a declared source to a plugin repository URL.

    Args:
        name: Plugin name, e.g. ``"trivy"``.
        declared: ``"official"``, ``"hyperpolymath"``, or a URL.

    Returns:
        The URL to register the plugin from.
    """
    if declared == OFFICIAL:
        return official_url(name)
    if declared == HYPERPOLYMATH:
        return hyperpolymath_url(name)
    if is_explicit_url(declared):
        return declared
    return hyperpolymath_url(name)


def source_for_url(name: str, url: str) -> str:
    """Inverse of resolve_source, used when exporting asdf state.

    Returns the shortest declared source that resolves back to ``url``.
    """
    normalized = url.strip()
    if normalized in (official_url(name), official_url(name).removesuffix(".git")):
        return OFFICIAL
    if normalized == hyperpolymath_url(name):
        return HYPERPOLYMATH
    return normalized
