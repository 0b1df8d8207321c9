from __future__ import annotations

"""
Include Target Resolver.

Maps an include directive to a file on disk. Quoted includes are looked up
next to the including file first and fall back to the search path; angle
includes consult the search path only. The first existing candidate wins.
"""

import logging
import os
from typing import Iterable, Optional, Sequence, Tuple

from includeflat.domain.models import IncludeToken, Resolution

logger = logging.getLogger(__name__)

SearchPath = Tuple[str, ...]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_search_path(*sources: Optional[Iterable[str]]) -> SearchPath:
    """
    Concatenate directory lists into one immutable, ordered search path.

    Empty entries are dropped; order of appearance is preserved and
    duplicates keep their first position.

    Args:
        *sources: Directory sequences in priority order (None is skipped).

    Returns:
        SearchPath: Frozen tuple of directories.
    """
    out = []
    for source in sources:
        if not source:
            continue
        for entry in source:
            entry = (entry or "").strip()
            if entry and entry not in out:
                out.append(entry)
    return tuple(out)


def resolve(
        token: IncludeToken,
        including_file: str,
        search_path: Sequence[str],
        line: int = 0,
) -> Resolution:
    """
    Locate the file referenced by an include directive.

    Args:
        token: Parsed directive.
        including_file: Path of the file that contains the directive.
        search_path: Ordered directories to fall back on.
        line: 1-based line of the directive, carried into the result.

    Returns:
        Resolution: With ``path`` set on success, or None when not found.
    """
    if token.is_local:
        candidate = os.path.join(os.path.dirname(including_file), token.target)
        if os.path.exists(candidate):
            logger.debug(f"Resolved '{token.target}' next to {including_file}: {candidate}")
            return Resolution(token, including_file, line, candidate)

    found = find_in_search_path(token.target, search_path)
    if found is not None:
        logger.debug(f"Resolved '{token.target}' via search path: {found}")
    return Resolution(token, including_file, line, found)


def find_in_search_path(target: str, search_path: Sequence[str]) -> Optional[str]:
    """Return the first ``entry/target`` that exists, in search path order."""
    for entry in search_path:
        candidate = os.path.join(entry, target)
        if os.path.exists(candidate):
            return candidate
    return None
