"""
Fragment assembler.

Step 1 groups consecutive CODE lines into fragments.  Step 2 merges
neighbouring fragments until nothing changes (bounded by
``max_merge_iterations``).  Step 3 drops fragments that look like prose
mentioning an API name once.

Two neighbours merge when they are separated by at most ``merge_gap`` lines, no
fence marker sits between them, and either

  * the first leaves a ``(`` or ``{`` open that the second closes, or
  * an opener pair matches the first's last line against the second's
    first line (``namespace`` -> ``open``, ``open`` -> ``operation``,
    a Python block header -> an indented body, ...).

A merged fragment covers every line from its first to its last code line.
"""

import logging

from .config import get_settings
from .dialects import OPENER_PAIRS, keyword_hits, strongest
from .errors import MergeCycle
from .models import Fragment, Tag

logger = logging.getLogger('codefence')


def _content(classifications, start, end) -> str:
    return '\n'.join(c.line.text for c in classifications[start:end + 1])


def group(classifications) -> list:
    """Collapse runs of consecutive CODE lines into fragments."""
    fragments = []
    start = None

    def close(end):
        run = classifications[start:end + 1]
        fragments.append(Fragment(
            start_line=start,
            end_line=end,
            content=_content(classifications, start, end),
            dialect=strongest(c.dialect for c in run),
            forced=any(c.forced for c in run),
        ))

    for i, c in enumerate(classifications):
        if c.is_code:
            if start is None:
                start = i
        elif start is not None:
            close(i - 1)
            start = None
    if start is not None:
        close(len(classifications) - 1)
    return fragments


def _balance(text: str, opening: str, closing: str) -> int:
    return text.count(opening) - text.count(closing)


def _closes_open_bracket(current: Fragment, following: Fragment) -> bool:
    if _balance(current.content, '(', ')') > 0 and ')' in following.content:
        return True
    if _balance(current.content, '{', '}') > 0 and '}' in following.content:
        return True
    return False


def _fence_between(classifications, current: Fragment, following: Fragment) -> bool:
    return any(
        c.tag is Tag.FENCE
        for c in classifications[current.end_line + 1:following.start_line]
    )


def should_merge(current: Fragment, following: Fragment, classifications, settings) -> bool:
    if following.start_line - current.end_line - 1 > settings.merge_gap:
        return False
    if _fence_between(classifications, current, following):
        return False
    if _closes_open_bracket(current, following):
        return True
    return any(p.joins(current, following) for p in OPENER_PAIRS)


def _join(current: Fragment, following: Fragment, classifications) -> Fragment:
    return Fragment(
        start_line=current.start_line,
        end_line=following.end_line,
        content=_content(classifications, current.start_line, following.end_line),
        dialect=strongest((current.dialect, following.dialect)),
        forced=current.forced or following.forced,
    )


def _merge_pass(fragments, classifications, settings) -> list:
    if not fragments:
        return []
    merged = []
    current = fragments[0]
    for following in fragments[1:]:
        if should_merge(current, following, classifications, settings):
            current = _join(current, following, classifications)
        else:
            merged.append(current)
            current = following
    merged.append(current)
    return merged


def merge(fragments, classifications, settings) -> list:
    """Merge to a fixed point; raise MergeCycle if the cap is reached first."""
    current = list(fragments)
    for _ in range(settings.max_merge_iterations):
        merged = _merge_pass(current, classifications, settings)
        if len(merged) == len(current):
            return merged
        current = merged
    raise MergeCycle(
        f"fragment merge did not settle within {settings.max_merge_iterations} iterations",
        fragments=current,
    )


def is_noise(fragment: Fragment, settings) -> bool:
    """Prose that merely mentions an API: too few keywords and no bracket."""
    if fragment.forced:
        return False
    if any(ch in fragment.content for ch in '(){}'):
        return False
    return keyword_hits(fragment.content) < settings.min_keywords


def assemble(classifications, settings=None) -> list:
    """Turn classified lines into sorted, disjoint code fragments."""
    settings = settings or get_settings()
    initial = group(classifications)
    try:
        merged = merge(initial, classifications, settings)
    except MergeCycle as e:
        logger.warning(f"{e}; keeping {len(e.fragments)} fragments from the last complete pass")
        merged = e.fragments
    kept = [f for f in merged if not is_noise(f, settings)]

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"fragments: {len(initial)} grouped, {len(merged)} after merge, "
            f"{len(merged) - len(kept)} rejected as noise"
        )
    return kept
