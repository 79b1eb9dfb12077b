"""
DialectLibrary - base strategy for the language pattern libraries.

A library owns three static tables:

    rules        PatternRule entries, one line at a time.  They double as the
                 classifier's keyword table and as fragment detection.
    corrections  CorrectionRule entries applied to a claimed fragment.
    opener_pairs OpenerPair entries telling the assembler that a fragment
                 ending one way belongs with a fragment starting another way.

Subclasses normally only fill in the tables:

    class MyLibrary(DialectLibrary):
        name = "mine"
        dialect = Dialect.PYTHON
        priority = 12
        rules = (rule(r'^[ \\t]*frobnicate\\(', Dialect.PYTHON, 12),)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern

from ..models import Dialect, Fragment


@dataclass(frozen=True)
class OpenerPair:
    name: str
    tail: Pattern
    head: Pattern

    def joins(self, current: Fragment, following: Fragment) -> bool:
        return bool(self.tail.search(current.last_line) and self.head.search(following.first_line))


def pair(name: str, tail: str, head: str) -> OpenerPair:
    return OpenerPair(name, re.compile(tail), re.compile(head))


class DialectLibrary:
    name = "generic"
    dialect = Dialect.GENERIC
    priority = 0
    rules = ()
    corrections = ()
    opener_pairs = ()
    min_hits = 1

    def hits(self, content: str) -> int:
        """Number of (line, rule) matches in ``content``."""
        return sum(
            1
            for line in content.split('\n')
            for r in self.rules
            if r.search(line)
        )

    def detect_and_refine(self, fragment: Fragment) -> Optional[Dialect]:
        """Return this library's dialect if it claims ``fragment``."""
        if self.hits(fragment.content) >= self.min_hits:
            return self.dialect
        return None

    def correct(self, fragment_content: str, dialect: Dialect) -> str:
        for correction in self.corrections:
            fragment_content = correction.apply(fragment_content)
        return fragment_content

    def __repr__(self):
        return f"<{type(self).__name__} {self.name} priority={self.priority}>"
