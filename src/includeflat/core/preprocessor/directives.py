from __future__ import annotations

"""
Include Directive Classifier.

Line-oriented, pattern-based detection of ``#include "..."`` and
``#include <...>`` directives. There is no awareness of
comments or string literals: a line either is a directive from start to
end (surrounding whitespace aside) or it is plain text.
"""

import re
from typing import Optional

from includeflat.domain.models import IncludeKind, IncludeToken

# -----------------------------------------------------------------------------
# PATTERNS
# -----------------------------------------------------------------------------

_LOCAL_INCLUDE_RE = re.compile(r'\s*#\s*include\s*"([^"]*)"\s*')
_GLOBAL_INCLUDE_RE = re.compile(r'\s*#\s*include\s*<([^>]*)>\s*')

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_directive(line: str) -> Optional[IncludeToken]:
    """
    Classify one line of text.

    Args:
        line: Line content without its terminator.

    Returns:
        Optional[IncludeToken]: The parsed directive, or None for plain text.
    """
    match = _LOCAL_INCLUDE_RE.fullmatch(line)
    if match:
        return IncludeToken(IncludeKind.LOCAL, match.group(1))

    match = _GLOBAL_INCLUDE_RE.fullmatch(line)
    if match:
        return IncludeToken(IncludeKind.GLOBAL, match.group(1))

    return None
