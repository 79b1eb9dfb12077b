"""
Orchestrator: the single public entry point ``transform()``.

    quick reject -> sanitize -> classify -> assemble -> dialect dispatch -> render

Each stage is a pure function of its input; nothing survives between calls.
Any exception raised while processing is caught here and the input is
returned as it came in.
"""

import logging
import re

from .assemble import assemble
from .classify import classify, split_lines
from .config import get_settings
from .dialects import SIGNAL_RE, dispatch
from .errors import MalformedInput, PatternEngineFailure
from .models import Line, Tag
from .render import render
from .sanitize import escape_line, normalize_newlines, restore_newlines, sanitize_lines

logger = logging.getLogger('codefence')

QUANTUM_RE = re.compile(
    r'\bqiskit\b|\bQuantumCircuit\b|\bAer\b|\bqasm_simulator\b'
    r'|\bnamespace\s+\w+|\bopen\s+Microsoft\.Quantum|\boperation\s+\w+'
    r'|\bqubits?\b|\bhadamard\b|\bentangle(?:d|ment)?\b|\bsuperposition\b'
    r'|\bquantum\s+(?:algorithm|circuit|computation|gate|register)s?\b',
    re.IGNORECASE,
)


def has_code_signal(text: str) -> bool:
    """Cheap single scan: any dialect keyword, fence marker or CODE: marker."""
    return SIGNAL_RE.search(text) is not None


def contains_quantum_code(text: str) -> bool:
    """True if ``text`` probably talks about or contains Qiskit/Q# code."""
    if not text:
        return False
    return QUANTUM_RE.search(text) is not None


def _overlaps_fence(fragment, classifications) -> bool:
    """True if any line of ``fragment`` already belongs to a fenced block."""
    return any(
        c.tag is Tag.FENCE or c.fenced
        for c in classifications[fragment.start_line:fragment.end_line + 1]
    )


def _display_lines(lines, classifications, fragments, settings):
    if not settings.escape_prose:
        return lines
    covered = set()
    for f in fragments:
        covered.update(range(f.start_line, f.end_line + 1))
    return [
        Line(line.index, escape_line(line.text))
        if c.tag is Tag.PROSE and not c.fenced and line.index not in covered
        else line
        for line, c in zip(lines, classifications)
    ]


def _run(text: str, settings) -> str:
    if len(text) > settings.max_input_chars:
        raise PatternEngineFailure(f"input is {len(text)} chars, limit is {settings.max_input_chars}")

    sanitized = sanitize_lines(text, settings)
    lines = split_lines('\n'.join(sanitized.lines))
    classifications = classify(lines, settings=settings, forced=sanitized.forced)
    fragments = assemble(classifications, settings=settings)

    refined = []
    for fragment in fragments:
        try:
            fragment = dispatch(fragment, settings)
        except (re.error, RecursionError) as e:
            raise PatternEngineFailure(f"dialect dispatch failed: {e}") from e
        if _overlaps_fence(fragment, classifications):
            logger.debug(f"lines {fragment.start_line}-{fragment.end_line} already fenced, left as is")
            continue
        refined.append(fragment)

    return render(_display_lines(lines, classifications, refined, settings), refined)


def transform(text: str, settings=None) -> str:
    """Fence unformatted code in a finished model response.

    Returns ``text`` unchanged when it carries no code signal, and also when
    anything goes wrong while processing it.  CRLF input comes back with
    CRLF line breaks throughout.
    """
    if not text:
        return text
    try:
        if not isinstance(text, str):
            raise MalformedInput(f"expected str, got {type(text).__name__}")
        settings = settings or get_settings()
        work, newline = normalize_newlines(text)
        if not has_code_signal(work) and not (settings.fix_system_tags and '<s>' in work):
            return text
        result = _run(work, settings)
        if result == work:
            return text
        return restore_newlines(result, newline)
    except Exception as e:
        logger.warning(f"transform failed, returning input unchanged: {type(e).__name__}: {e}")
        return text
