"""Tests for codefence.classify: per-line code/prose tagging."""

import pytest

from codefence.classify import classify, is_continuation, split_lines
from codefence.config import FenceSettings
from codefence.errors import PatternEngineFailure
from codefence.models import Dialect, Tag


def tags(text, **kwargs):
    return [c.tag for c in classify(split_lines(text), **kwargs)]


class TestIsContinuation:
    def test_bracket(self):
        assert is_continuation("and then some more words follow here)", 20)

    def test_short_line(self):
        assert is_continuation("x", 20)

    def test_comment(self):
        assert is_continuation("# a rather long comment describing things", 20)

    def test_long_prose(self):
        assert not is_continuation("This is a perfectly ordinary sentence.", 20)

    def test_blank(self):
        assert not is_continuation("   ", 20)


class TestClassify:
    def test_prose_only(self, settings):
        assert tags("Hello there.\nNothing to see here.", settings=settings) == [Tag.PROSE, Tag.PROSE]

    def test_keyword_hint(self, settings):
        result = classify(split_lines("namespace Demo {\nimport os"), settings=settings)
        assert [c.dialect for c in result] == [Dialect.QSHARP, Dialect.PYTHON]
        assert all(c.is_code for c in result)

    def test_continuation_inherits_dialect(self, settings):
        result = classify(split_lines("qc = QuantumCircuit(2,\n    2)"), settings=settings)
        assert result[1].tag is Tag.CODE
        assert result[1].dialect is Dialect.QISKIT

    def test_continuation_needs_code_before(self, settings):
        assert tags("A sentence.\n}", settings=settings) == [Tag.PROSE, Tag.PROSE]

    def test_blank_lines_are_prose(self, settings):
        assert tags("import os\n\nimport sys", settings=settings) == [Tag.CODE, Tag.PROSE, Tag.CODE]

    def test_fenced_lines(self, settings):
        result = classify(split_lines("```python\nimport os\n```\nimport sys"), settings=settings)
        assert [c.tag for c in result] == [Tag.FENCE, Tag.PROSE, Tag.FENCE, Tag.CODE]
        assert result[1].fenced
        assert not result[3].fenced

    def test_tilde_fence_not_closed_by_backticks(self, settings):
        result = classify(split_lines("~~~\n```\nimport os\n~~~"), settings=settings)
        assert [c.tag for c in result] == [Tag.FENCE, Tag.PROSE, Tag.PROSE, Tag.FENCE]

    def test_forced_lines(self, settings):
        result = classify(split_lines("ls -la\nthis is plainly a prose sentence"), settings=settings, forced=frozenset({0}))
        assert result[0].tag is Tag.CODE
        assert result[0].forced
        assert result[0].dialect is Dialect.GENERIC
        assert result[1].tag is Tag.PROSE

    def test_long_line_rejected(self):
        settings = FenceSettings(max_line_chars=50)
        with pytest.raises(PatternEngineFailure):
            classify(split_lines("x" * 51), settings=settings)

    def test_one_verdict_per_line(self, settings):
        text = "a\n\nb\n```\nc"
        assert len(classify(split_lines(text), settings=settings)) == 5
