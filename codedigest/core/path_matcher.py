"""
Restricted glob matching for ignore patterns.

Grammar:
    ``**``   any characters, including ``/``
    ``*``    any characters except ``/``
    other    literal

A leading ``**/`` may match zero directories and a trailing ``/**`` may match
the directory itself, so ``**/node_modules/**`` covers ``node_modules``,
``node_modules/dep.js`` and ``lib/node_modules/x/y.js``. Patterns are anchored
at both ends and are tried against the root-relative path and the bare name.
"""

import re
from typing import Iterable, List, Optional, Sequence

from codedigest.core.models import DiagnosticKind
from codedigest.utils.logger import get_logger


def translate(pattern: str) -> str:
    """Translate a glob pattern into an anchored regular expression source."""
    parts: List[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        if pattern.startswith("**/", i) and (i == 0 or pattern[i - 1] == "/"):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("/**", i) and i + 3 == n:
            parts.append("(?:/.*)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return "".join(parts)


def compile_pattern(pattern: str) -> Optional["re.Pattern[str]"]:
    """Compile ``pattern``; ``None`` if the resulting regex is rejected."""
    try:
        return re.compile(translate(pattern), re.DOTALL)
    except re.error:
        return None


# ============================================================================
# Path Matcher
# ============================================================================


class PathMatcher:
    """Ignore patterns compiled once and reused for every entry of a walk."""

    def __init__(self, patterns: Iterable[str], diagnostics=None):
        """
        Args:
            patterns: Glob patterns; blank entries are dropped
            diagnostics: Optional DiagnosticsCollector for patterns that fail to compile
        """
        self.logger = get_logger()
        self.patterns = [p for p in patterns if p and p.strip()]
        self._compiled: List["re.Pattern[str]"] = []
        for pattern in self.patterns:
            compiled = compile_pattern(pattern)
            if compiled is None:
                message = f"Ignoring invalid pattern: {pattern}"
                if diagnostics is not None:
                    diagnostics.warn(DiagnosticKind.INVALID_PATTERN, pattern, message)
                else:
                    self.logger.warning(message)
                continue
            self._compiled.append(compiled)

    def matches(self, relative_path: str, name: Optional[str] = None) -> bool:
        """True when any pattern matches the relative path or its final name."""
        if not self._compiled:
            return False
        if name is None:
            name = relative_path.rsplit("/", 1)[-1]
        return any(regex.fullmatch(relative_path) or regex.fullmatch(name) for regex in self._compiled)


def matches(candidate_path: str, patterns: Sequence[str]) -> bool:
    """One-shot form of :meth:`PathMatcher.matches`; ``candidate_path`` is already ``/``-separated."""
    return PathMatcher(patterns).matches(candidate_path)
