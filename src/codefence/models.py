"""
Data objects passed between the pipeline stages.

All of them are created fresh for one ``transform()`` call and dropped when it
returns.  Lines and classifications are frozen; fragments are refined by the
dialect libraries via ``dataclasses.replace``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Pattern


class Dialect(str, Enum):
    PYTHON = "python"
    QISKIT = "qiskit"
    QSHARP = "qsharp"
    JAVASCRIPT = "javascript"
    GENERIC = "generic"

    @property
    def fence_tag(self) -> str:
        """Language tag written after the opening fence."""
        return _FENCE_TAGS[self]


_FENCE_TAGS = {
    Dialect.PYTHON: "python",
    Dialect.QISKIT: "python",
    Dialect.QSHARP: "qsharp",
    Dialect.JAVASCRIPT: "javascript",
    Dialect.GENERIC: "text",
}


class Tag(str, Enum):
    CODE = "code"
    PROSE = "prose"
    FENCE = "fence"


@dataclass(frozen=True)
class Line:
    index: int
    text: str


@dataclass(frozen=True)
class Classification:
    """Per-line verdict of the classifier.

    ``fenced`` marks prose that sits inside an existing fenced block, and
    ``forced`` marks lines that arrived with a ``CODE:`` marker.
    """
    line: Line
    tag: Tag
    dialect: Optional[Dialect] = None
    forced: bool = False
    fenced: bool = False

    @property
    def is_code(self) -> bool:
        return self.tag is Tag.CODE


@dataclass
class Fragment:
    start_line: int
    end_line: int
    content: str
    dialect: Optional[Dialect] = None
    forced: bool = False

    def __post_init__(self):
        if self.start_line > self.end_line:
            raise ValueError(f"fragment starts after it ends: {self.start_line} > {self.end_line}")

    @property
    def lines(self) -> list:
        return self.content.split('\n')

    @property
    def first_line(self) -> str:
        return self.lines[0]

    @property
    def last_line(self) -> str:
        return self.lines[-1]


@dataclass(frozen=True)
class PatternRule:
    matcher: Pattern
    dialect: Dialect
    priority: int

    def search(self, text: str) -> Optional[re.Match]:
        return self.matcher.search(text)


@dataclass(frozen=True)
class CorrectionRule:
    matcher: Pattern
    rewrite: Callable[[re.Match], str]
    name: str = ""

    def apply(self, text: str) -> str:
        return self.matcher.sub(self.rewrite, text)


def rule(pattern: str, dialect: Dialect, priority: int, flags: int = 0) -> PatternRule:
    """Compile a PatternRule; tables are built once at import time."""
    return PatternRule(re.compile(pattern, flags), dialect, priority)


@dataclass
class SanitizedText:
    """Output of the sanitizer's line pass.

    ``lines`` is the input with ``CODE:`` markers removed (and, when enabled,
    system tags repaired); ``forced`` holds the indices of marked lines.
    """
    lines: list = field(default_factory=list)
    forced: frozenset = frozenset()
