"""
File Selection
==============

Resolves include/exclude glob patterns into the set of files to compress.

Resolution is best-effort: a malformed pattern contributes no matches instead
of failing the build, and a filesystem error partway through a pattern keeps
the matches found so far. Both are logged and kept on
``Selector.dropped_patterns`` for inspection.

Matches are compared as ``pathlib.Path`` objects, so ``./a.txt`` and
``a.txt`` name the same file for deduplication and exclusion.
"""

import glob
import logging
import os
from pathlib import Path
from typing import FrozenSet, Iterable, List, Set

from pipeline_errors import PatternError

logger = logging.getLogger(__name__)

SelectedFileSet = FrozenSet[Path]

_SEPARATORS = {'/', os.sep}


def validate_pattern(pattern: str) -> None:
    """
    Reject glob patterns that cannot be expanded meaningfully.

    Raises:
        PatternError: if ``**`` is used inside a path component, a ``[``
            character class is never closed, or the pattern holds a NUL byte
    """
    if not isinstance(pattern, str):
        raise PatternError(repr(pattern), "pattern is not a string")
    if '\x00' in pattern:
        raise PatternError(pattern, "contains a NUL byte")

    component = []
    for char in pattern + '/':
        if char in _SEPARATORS:
            text = ''.join(component)
            if '**' in text and text != '**':
                raise PatternError(pattern, "recursive wildcards must form an entire path component")
            component = []
        else:
            component.append(char)

    i = 0
    while i < len(pattern):
        if pattern[i] == '[':
            j = i + 1
            if j < len(pattern) and pattern[j] == '!':
                j += 1
            # a leading ']' is a literal member of the class
            if j < len(pattern) and pattern[j] == ']':
                j += 1
            close = pattern.find(']', j)
            if close == -1:
                raise PatternError(pattern, "unclosed character class")
            i = close + 1
        else:
            i += 1


class Selector:
    """Turns configured glob patterns into a concrete, deduplicated file set"""

    def __init__(self):
        self.dropped_patterns: List[PatternError] = []

    def expand(self, pattern: str) -> Set[Path]:
        """Expand one pattern; malformed patterns yield an empty set"""
        matches: Set[Path] = set()
        try:
            validate_pattern(pattern)
            # glob skips entries it cannot stat or list, so one unreadable
            # directory only removes its own subtree from the result
            for match in glob.iglob(pattern, recursive=True, include_hidden=True):
                matches.add(Path(match))
        except PatternError as e:
            self._drop(e)
            return set()
        except (OSError, ValueError) as e:
            # matches collected before the failing entry are kept
            self._drop(PatternError(str(pattern), f"expansion stopped after {len(matches)} "
                                                  f"matches: {e}", cause=e))

        logger.debug(f"Pattern {pattern!r} matched {len(matches)} paths")
        return matches

    def resolve(self, include: Iterable[str], exclude: Iterable[str]) -> SelectedFileSet:
        """
        Resolve include patterns minus exclude patterns.

        Exclusion compares expanded paths, it does not re-match each included
        path against the exclude patterns. Never raises.

        Args:
            include: Glob patterns for files eligible for compression
            exclude: Glob patterns for files removed from the included set

        Returns:
            Deduplicated set of paths in no particular order
        """
        self.dropped_patterns = []

        excluded: Set[Path] = set()
        for pattern in exclude:
            excluded |= self.expand(pattern)

        included: Set[Path] = set()
        for pattern in include:
            included |= self.expand(pattern)

        selected = frozenset(included - excluded)
        logger.info(f"Selected {len(selected)} files "
                    f"({len(included)} included, {len(included & excluded)} excluded)")
        return selected

    def _drop(self, error: PatternError) -> None:
        logger.warning(f"Ignoring glob pattern: {error}")
        self.dropped_patterns.append(error)


def resolve(include: Iterable[str], exclude: Iterable[str]) -> SelectedFileSet:
    """Convenience wrapper around ``Selector().resolve``"""
    return Selector().resolve(include, exclude)
