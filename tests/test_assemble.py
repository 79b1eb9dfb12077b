"""Tests for codefence.assemble: grouping, fixed-point merge, noise rejection."""

import pytest

from codefence.assemble import assemble, group, is_noise, merge, should_merge
from codefence.classify import classify, split_lines
from codefence.config import FenceSettings
from codefence.errors import MergeCycle
from codefence.models import Dialect, Fragment


def fragments_of(text, settings):
    return assemble(classify(split_lines(text), settings=settings), settings=settings)


class TestGroup:
    def test_consecutive_code_lines(self, settings):
        classified = classify(split_lines("import os\nimport sys\n\nSome words.\nimport re"), settings=settings)
        result = group(classified)
        assert [(f.start_line, f.end_line) for f in result] == [(0, 1), (4, 4)]
        assert result[0].content == "import os\nimport sys"

    def test_strongest_dialect_wins(self, settings):
        classified = classify(split_lines("import os\nfrom qiskit import Aer"), settings=settings)
        assert group(classified)[0].dialect is Dialect.QISKIT

    def test_empty(self):
        assert group([]) == []


class TestMerge:
    def test_namespace_then_open(self, settings):
        text = "namespace Foo {\n\nThe imports come next.\n\nopen Microsoft.Quantum.Intrinsic;"
        result = fragments_of(text, settings)
        assert len(result) == 1
        assert (result[0].start_line, result[0].end_line) == (0, 4)
        # Intermediate prose is kept inside the block
        assert "The imports come next." in result[0].content

    def test_open_bracket_closed_later(self, settings):
        classified = classify(split_lines(
            "result = compute(alpha,\n\nwhere the second argument is the beta value\n\nprint(beta))"
        ), settings=settings)
        initial = group(classified)
        assert len(initial) == 2
        assert should_merge(initial[0], initial[1], classified, settings)

    def test_python_header_and_indented_body(self, settings):
        result = fragments_of("def add(a, b):\n\n    return a + b", settings)
        assert len(result) == 1
        assert result[0].content == "def add(a, b):\n\n    return a + b"

    def test_gap_too_large(self):
        settings = FenceSettings(merge_gap=2)
        text = "namespace Foo {\n\none\n\ntwo\n\nopen Microsoft.Quantum.Intrinsic;"
        result = fragments_of(text, settings)
        assert len(result) == 2

    def test_gap_counts_lines_in_between(self):
        settings = FenceSettings(merge_gap=2)
        exactly = "namespace Foo {\nThis line is ordinary prose text.\n\nopen Microsoft.Quantum.Intrinsic;"
        one_more = "namespace Foo {\nThis line is ordinary prose text.\n\n\nopen Microsoft.Quantum.Intrinsic;"
        assert len(fragments_of(exactly, settings)) == 1
        assert len(fragments_of(one_more, settings)) == 2

    def test_never_across_fence(self, settings):
        text = "namespace Foo {\n```\nx\n```\nopen Microsoft.Quantum.Intrinsic;"
        result = fragments_of(text, settings)
        assert [(f.start_line, f.end_line) for f in result] == [(0, 0), (4, 4)]

    def test_unrelated_fragments_stay_apart(self, settings):
        result = fragments_of("import os\nimport sys\n\nSome explanation here.\n\nprint(os.name)", settings)
        assert len(result) == 2

    def test_cap_raises_merge_cycle(self):
        settings = FenceSettings(max_merge_iterations=1)
        classified = classify(split_lines("namespace Foo {\n\nopen Microsoft.Quantum.Intrinsic;"), settings=settings)
        with pytest.raises(MergeCycle) as exc:
            merge(group(classified), classified, settings)
        assert exc.value.fragments

    def test_cap_is_not_fatal(self):
        settings = FenceSettings(max_merge_iterations=1)
        result = fragments_of("namespace Foo {\n\nopen Microsoft.Quantum.Intrinsic;", settings)
        assert len(result) == 1


class TestNoise:
    def test_single_mention_rejected(self, settings):
        fragment = Fragment(0, 0, "import this")
        assert is_noise(fragment, settings)

    def test_brackets_kept(self, settings):
        assert not is_noise(Fragment(0, 0, "print(x)"), settings)

    def test_two_keywords_kept(self, settings):
        assert not is_noise(Fragment(0, 1, "import os\nimport sys"), settings)

    def test_forced_kept(self, settings):
        assert not is_noise(Fragment(0, 0, "ls -la", forced=True), settings)

    def test_lone_prose_mention_dropped(self, settings):
        assert fragments_of("Type the following:\n\nimport this\n\nto read the zen.", settings) == []


class TestFragment:
    def test_start_after_end(self):
        with pytest.raises(ValueError):
            Fragment(3, 2, "x")
