"""
Path matching for the access gate.

Patterns are either exact paths ("/health") or a prefix followed by a
trailing wildcard. The Clerk form "/sign-in(.*)" is a raw prefix match, like
the regex Clerk builds from it. The glob forms "/docs/*" and "/docs*" cover the
prefix itself and the paths below it, never siblings such as "/docs-private".
"""

import re
from typing import Callable, Iterable

from starter.constants import (
    EXCLUDED_PATH_PREFIXES,
    GATED_PATH_PREFIXES,
    STATIC_FILE_EXTENSIONS,
)

REGEX_WILDCARD = "(.*)"
GLOB_WILDCARDS = ("/*", "*")

_STATIC_FILE_RE = re.compile(r"\.(?:%s)$" % "|".join(STATIC_FILE_EXTENSIONS), re.IGNORECASE)


def _normalize(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


def _under_prefix(path: str, prefixes: Iterable[str]) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in prefixes)


class RouteMatcher:
    """Ordered list of exact and prefix matchers evaluated in one pass."""

    def __init__(self, patterns: Iterable[str]):
        self.patterns = list(patterns)
        self._matchers: list[Callable[[str], bool]] = [self._compile(p) for p in self.patterns]

    @staticmethod
    def _compile(pattern: str) -> Callable[[str], bool]:
        if not pattern.startswith("/"):
            raise ValueError(f"Route pattern must start with '/': {pattern!r}")

        if pattern.endswith(REGEX_WILDCARD):
            prefix = pattern[: -len(REGEX_WILDCARD)]
            return lambda path, prefix=prefix: path.startswith(prefix)

        for suffix in GLOB_WILDCARDS:
            if pattern.endswith(suffix):
                prefix = pattern[: -len(suffix)].rstrip("/")
                if not prefix:
                    # "/*" on its own: everything
                    return lambda path: True
                return lambda path, prefix=prefix: _under_prefix(path, (prefix,))

        exact = _normalize(pattern)
        return lambda path: _normalize(path) == exact

    def __call__(self, path: str) -> bool:
        return any(matcher(path) for matcher in self._matchers)

    def __repr__(self):
        return f"RouteMatcher({self.patterns!r})"


def create_route_matcher(patterns: Iterable[str]) -> RouteMatcher:
    return RouteMatcher(patterns)


def is_api_path(path: str) -> bool:
    return _under_prefix(path, GATED_PATH_PREFIXES)


def is_excluded_path(path: str) -> bool:
    """
    True for static assets and build-internal paths, which never reach the gate.

    API paths are always gated, even when they end in something that looks like
    a file extension.
    """
    if is_api_path(path):
        return False

    if _under_prefix(path, EXCLUDED_PATH_PREFIXES):
        return True

    last_segment = path.rsplit("/", 1)[-1]
    return bool(_STATIC_FILE_RE.search(last_segment))
