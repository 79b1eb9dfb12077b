"""
Language pattern libraries and their fixed dispatch order.

Libraries are ordered by priority, most specific first:

    qsharp (40) -> qiskit (30) -> scientific (20) -> javascript (15) -> python (10)

Everything here is built once at import and never mutated, so the tables
can be shared freely between concurrent ``transform()`` calls.
"""

import logging
import re
from dataclasses import replace
from typing import Optional

from ..models import Dialect, Fragment
from .base import DialectLibrary, OpenerPair, pair
from .generic import JavaScriptLibrary, PythonLibrary, ScientificLibrary
from .qiskit import QiskitLibrary
from .qsharp import QSharpLibrary

logger = logging.getLogger('codefence')

LIBRARIES = tuple(sorted(
    (QSharpLibrary(), QiskitLibrary(), ScientificLibrary(), JavaScriptLibrary(), PythonLibrary()),
    key=lambda lib: lib.priority,
    reverse=True,
))

KEYWORD_RULES = tuple(sorted(
    (r for lib in LIBRARIES for r in lib.rules),
    key=lambda r: r.priority,
    reverse=True,
))

OPENER_PAIRS = tuple(p for lib in LIBRARIES for p in lib.opener_pairs)

# Anything worth running the pipeline for: a keyword, a fence or a CODE: marker.
SIGNAL_RE = re.compile(
    '|'.join(f'(?:{r.matcher.pattern})' for r in KEYWORD_RULES)
    + r'|^[ \t]*(?:```|~~~)|^[ \t]*CODE:',
    re.MULTILINE,
)

DIALECT_RANK = {}
for _lib in LIBRARIES:
    DIALECT_RANK[_lib.dialect] = max(DIALECT_RANK.get(_lib.dialect, 0), _lib.priority)
DIALECT_RANK[Dialect.GENERIC] = 0


def get_library(name: str) -> DialectLibrary:
    for lib in LIBRARIES:
        if lib.name == name:
            return lib
    raise KeyError(f"unknown dialect library: {name}")


def keyword_hint(text: str) -> Optional[Dialect]:
    """Dialect of the highest-priority keyword rule matching ``text``, if any."""
    for r in KEYWORD_RULES:
        if r.search(text):
            return r.dialect
    return None


def keyword_hits(content: str) -> int:
    """Count keyword matches over all lines of ``content``, every rule counted."""
    return sum(
        1
        for line in content.split('\n')
        for r in KEYWORD_RULES
        if r.search(line)
    )


def strongest(dialects) -> Dialect:
    best = Dialect.GENERIC
    for d in dialects:
        if d is not None and DIALECT_RANK[d] > DIALECT_RANK[best]:
            best = d
    return best


def dispatch(fragment: Fragment, settings, libraries=LIBRARIES) -> Fragment:
    """Hand ``fragment`` to the first enabled library that claims it.

    The claiming library's corrections are applied when ``auto_correct`` is
    set.  Unclaimed fragments come back as ``Dialect.GENERIC``.
    """
    for lib in libraries:
        if not settings.detector_enabled(lib.name):
            continue
        dialect = lib.detect_and_refine(fragment)
        if dialect is None:
            continue
        content = fragment.content
        if settings.auto_correct:
            content = lib.correct(content, dialect)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"lines {fragment.start_line}-{fragment.end_line} claimed by {lib.name}")
        return replace(fragment, content=content, dialect=dialect)
    return replace(fragment, dialect=Dialect.GENERIC)


__all__ = [
    "DialectLibrary",
    "OpenerPair",
    "pair",
    "QSharpLibrary",
    "QiskitLibrary",
    "ScientificLibrary",
    "JavaScriptLibrary",
    "PythonLibrary",
    "LIBRARIES",
    "KEYWORD_RULES",
    "OPENER_PAIRS",
    "SIGNAL_RE",
    "get_library",
    "keyword_hint",
    "keyword_hits",
    "strongest",
    "dispatch",
]
