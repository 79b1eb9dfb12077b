"""
Line classifier: one greedy forward pass with one line of look-back.

For each line outside an existing fence:

1. keyword test      - any dialect keyword rule matches -> Code(hint)
2. continuation test - the previous line is Code and this one contains one of
                       ``( ) { } => = :``, is short, or starts with a comment
                       marker -> Code(previous hint)
3. otherwise         -> Prose

Blank lines are always prose.  Fence delimiters are tagged FENCE and their
content is passed through as fenced prose.  No backtracking happens here;
the assembler's merge step repairs what this pass splits.
"""

import logging

from .config import get_settings
from .dialects import keyword_hint
from .errors import PatternEngineFailure
from .fences import FenceTracker
from .models import Classification, Dialect, Line, Tag
from .sanitize import normalize_newlines

logger = logging.getLogger('codefence')

CONTINUATION_TOKENS = ('(', ')', '{', '}', '=>', '=', ':')
COMMENT_MARKERS = ('#', '//', '/*', '"""', "'''")


def split_lines(text: str) -> list:
    text, _ = normalize_newlines(text)
    return [Line(index, content) for index, content in enumerate(text.split('\n'))]


def is_continuation(text: str, max_chars: int) -> bool:
    stripped = text.strip()
    if not stripped:
        return False
    return (
        any(token in stripped for token in CONTINUATION_TOKENS)
        or len(stripped) < max_chars
        or stripped.startswith(COMMENT_MARKERS)
    )


def classify(lines, settings=None, forced=frozenset()) -> list:
    """Tag every line as CODE, PROSE or FENCE.

    ``forced`` holds indices that must be CODE(GENERIC) whatever they contain
    (lines the sanitizer found behind a ``CODE:`` marker).
    """
    settings = settings or get_settings()
    tracker = FenceTracker()
    result = []
    previous = None

    for line in lines:
        if tracker.feed(line.text):
            verdict = Classification(line, Tag.FENCE)
        elif tracker.inside:
            verdict = Classification(line, Tag.PROSE, fenced=True)
        elif line.index in forced:
            verdict = Classification(line, Tag.CODE, Dialect.GENERIC, forced=True)
        elif not line.text.strip():
            verdict = Classification(line, Tag.PROSE)
        else:
            if len(line.text) > settings.max_line_chars:
                raise PatternEngineFailure(
                    f"line {line.index} is {len(line.text)} chars, limit is {settings.max_line_chars}"
                )
            hint = keyword_hint(line.text)
            if hint is not None:
                verdict = Classification(line, Tag.CODE, hint)
            elif previous is not None and previous.is_code and is_continuation(line.text, settings.continuation_max_chars):
                verdict = Classification(line, Tag.CODE, previous.dialect)
            else:
                verdict = Classification(line, Tag.PROSE)

        result.append(verdict)
        previous = verdict

    if logger.isEnabledFor(logging.DEBUG):
        code = sum(1 for c in result if c.is_code)
        logger.debug(f"classified {len(result)} lines, {code} as code")
    return result
