"""Fenced-block bookkeeping shared by the sanitizer, classifier and renderer."""

import re
from typing import Optional

FENCE_RE = re.compile(r'^[ \t]*(`{3,}|~{3,})[ \t]*([^`\n]*?)[ \t]*$')


def fence_marker(line: str) -> Optional[re.Match]:
    """Return the match if ``line`` is a fence delimiter (``` or ~~~)."""
    return FENCE_RE.match(line)


class FenceTracker:
    """Follow open/close state of fenced blocks line by line.

    A block is closed by a bare marker of the same character that is at
    least as long as the opener.  Anything else inside the block is content.
    """

    def __init__(self):
        self.opener = None

    @property
    def inside(self) -> bool:
        return self.opener is not None

    def feed(self, line: str) -> bool:
        """Advance over ``line``; return True if it is an opening or closing marker."""
        m = fence_marker(line)
        if m is None:
            return False
        marker, info = m.group(1), m.group(2)
        if self.opener is None:
            self.opener = marker
            return True
        if marker[0] == self.opener[0] and len(marker) >= len(self.opener) and not info:
            self.opener = None
            return True
        return False

    def closing_marker(self) -> Optional[str]:
        """Marker needed to close the block still open, if any."""
        return self.opener
