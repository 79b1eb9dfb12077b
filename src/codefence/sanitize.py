"""
Sanitizer: prepares externally sourced text before analysis.

Two jobs, both restricted to text outside existing fenced blocks:

* ``CODE:`` markers left by the search enrichment layer are stripped and the
  marked lines are queued for forced classification as code.  A marker opens
  a run that continues over the following non-blank lines.
* Characters that break markdown rendering (backticks, ``$``, brackets,
  ``*``, ``_``, ``#``) are escaped.  Escaping is idempotent.

Both entry points are fail-open: any internal error returns the input.
"""

import logging
import re

from .config import get_settings
from .fences import FenceTracker
from .models import SanitizedText

logger = logging.getLogger('codefence')

CODE_MARKER_RE = re.compile(r'^([ \t]*)CODE:[ \t]?')
SYSTEM_TAG_RE = re.compile(r'<s>(.*?)</s>')
MARKDOWN_SPECIAL_RE = re.compile(r'(?<!\\)([`$\[\]*_#])')


def fix_system_tags(text: str) -> str:
    """Rewrite ``<s>...</s>`` pseudo-tags as ``<SYSTEM>...</SYSTEM>``.

    Markdown renderers read ``<s>`` as strikethrough, which is never what a
    model meant by it.
    """
    return SYSTEM_TAG_RE.sub(r'<SYSTEM>\1</SYSTEM>', text)


def normalize_newlines(text: str):
    """Return ``text`` with LF line breaks, plus the break it originally used.

    CRLF wins when present.  A lone CR only counts as a line break when the
    text has no LF at all.
    """
    if "\r\n" in text:
        newline = "\r\n"
    elif "\r" in text and "\n" not in text:
        newline = "\r"
    else:
        return text, "\n"
    return text.replace("\r\n", "\n").replace("\r", "\n"), newline


def restore_newlines(text: str, newline: str) -> str:
    return text if newline == "\n" else text.replace("\n", newline)


def escape_line(line: str) -> str:
    return MARKDOWN_SPECIAL_RE.sub(r'\\\1', line)


def escape_markdown(text: str) -> str:
    """Escape markdown-breaking characters everywhere except inside fences."""
    text, newline = normalize_newlines(text)
    tracker = FenceTracker()
    out = []
    for line in text.split('\n'):
        if tracker.feed(line) or tracker.inside:
            out.append(line)
        else:
            out.append(escape_line(line))
    return restore_newlines('\n'.join(out), newline)


def sanitize_lines(raw: str, settings=None) -> SanitizedText:
    """Strip ``CODE:`` markers and record which lines they forced to code.

    Lines keep their position, so indices line up with the raw input.
    """
    settings = settings or get_settings()
    tracker = FenceTracker()
    lines = []
    forced = set()
    in_marked_run = False

    raw, _ = normalize_newlines(raw)
    for index, line in enumerate(raw.split('\n')):
        if tracker.feed(line) or tracker.inside:
            lines.append(line)
            in_marked_run = False
            continue

        if settings.fix_system_tags:
            line = fix_system_tags(line)

        m = CODE_MARKER_RE.match(line)
        if m:
            line = m.group(1) + line[m.end():]
            in_marked_run = bool(line.strip())
        elif not line.strip():
            in_marked_run = False

        if in_marked_run:
            forced.add(index)
        lines.append(line)

    return SanitizedText(lines=lines, forced=frozenset(forced))


def sanitize(raw: str, settings=None) -> str:
    """Return ``raw`` with markers stripped and prose escaped for markdown.

    Marked code lines are not escaped.
    """
    try:
        sanitized = sanitize_lines(raw, settings)
        tracker = FenceTracker()
        out = []
        for index, line in enumerate(sanitized.lines):
            if tracker.feed(line) or tracker.inside or index in sanitized.forced:
                out.append(line)
            else:
                out.append(escape_line(line))
        _, newline = normalize_newlines(raw)
        return restore_newlines('\n'.join(out), newline)
    except Exception as e:
        logger.warning(f"sanitize failed, returning input unchanged: {type(e).__name__}: {e}")
        return raw
