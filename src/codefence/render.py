"""Output renderer: re-emit the text with one fenced block per fragment."""

import textwrap

from .fences import FenceTracker
from .models import Dialect

FENCE = '```'


def _trim_blank(lines: list) -> list:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def format_block(content: str, tag: str) -> list:
    """Lines of one fenced block: dedented, blank edges trimmed."""
    body = _trim_blank(textwrap.dedent(content).split('\n'))
    return [f"{FENCE}{tag}", *body, FENCE]


def render(original_lines, fragments) -> str:
    """Emit ``original_lines`` with every fragment's range replaced by its block.

    Uncovered lines are copied verbatim.  If the text ends inside an open
    fence, the matching closing marker is appended.
    """
    by_start = {}
    previous_end = -1
    for fragment in sorted(fragments, key=lambda f: f.start_line):
        if fragment.start_line <= previous_end:
            raise ValueError(f"overlapping fragments at line {fragment.start_line}")
        by_start[fragment.start_line] = fragment
        previous_end = fragment.end_line

    out = []
    tracker = FenceTracker()
    i = 0
    while i < len(original_lines):
        fragment = by_start.get(i)
        if fragment is not None:
            out.extend(format_block(fragment.content, (fragment.dialect or Dialect.GENERIC).fence_tag))
            i = fragment.end_line + 1
            continue
        text = original_lines[i].text
        tracker.feed(text)
        out.append(text)
        i += 1

    if tracker.inside:
        out.append(tracker.closing_marker())
    return '\n'.join(out)
