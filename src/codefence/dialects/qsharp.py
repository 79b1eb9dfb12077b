"""Q# recognition.

Q# snippets are the ones most often torn apart upstream (namespace in one
paragraph, ``open`` statements in the next, operation body further down), so
this library carries most of the opener pairs.  It defines no corrections.
"""

from ..models import Dialect, rule
from .base import DialectLibrary, pair

PRIORITY = 40
INTRINSICS = r'(?:H|X|Y|Z|S|T|CNOT|CZ|SWAP|CCNOT|M|Measure|MeasureWithProbability|MResetZ|Reset|ResetAll|ApplyToEach)'


def _q(pattern):
    return rule(pattern, Dialect.QSHARP, PRIORITY)


STRUCTURE_RULES = (
    _q(r'^[ \t]*namespace[ \t]+[A-Za-z_][\w.]*[ \t]*\{?[ \t]*$'),
    _q(r'^[ \t]*open[ \t]+Microsoft\.Quantum(?:\.\w+)*[ \t]*;?[ \t]*$'),
    _q(r'^[ \t]*open[ \t]+[A-Z]\w*(?:\.\w+)+[ \t]*;[ \t]*$'),
    _q(r'\boperation[ \t]+\w+\('),
    _q(r'^[ \t]*function[ \t]+\w+[ \t]*\([^)\n]*\)[ \t]*:[ \t]*\w+'),
    _q(r'^[ \t]*@EntryPoint\(\)'),
    _q(r'^[ \t]*(?:use|using|borrow|borrowing)[ \t]+\(?\w+[ \t]*=[ \t]*Qubit'),
    _q(r'^[ \t]*(?:within|apply)[ \t]*\{'),
    _q(r'\b(?:Controlled|Adjoint)[ \t]+\w+[ \t]*\('),
    _q(r'^[ \t]*(?:controlled|adjoint)[ \t]+(?:adjoint[ \t]+)?(?:\(|self\b|invert\b|auto\b|distribute\b)'),
    _q(r'\bis[ \t]+(?:Adj|Ctl)\b'),
    _q(r'\)[ \t]*:[ \t]*(?:Unit|Result|Result\[\]|Qubit|Bool|Int|Double)\b'),
    _q(r'^[ \t]*mutable[ \t]+\w+[ \t]*='),
    _q(r'^[ \t]*set[ \t]+\w+[ \t]*(?:w/|\+|-)?=[^;\n]*;'),
    _q(r'\bMicrosoft\.Quantum\.\w+'),
)

# Intrinsics count only in statement position (line start, assignment,
# ``return``, or after ``;``/``{``), never mid-sentence.
STATEMENT_START = r'(?:^[ \t]*(?:(?:let|set|mutable)[ \t]+\w+[ \t]*=[ \t]*|return[ \t]+)?|[;{][ \t]*)'

INTRINSIC_RULES = (
    _q(STATEMENT_START + INTRINSICS + r'\(\w'),
)


class QSharpLibrary(DialectLibrary):
    name = "qsharp"
    dialect = Dialect.QSHARP
    priority = PRIORITY
    rules = STRUCTURE_RULES + INTRINSIC_RULES
    corrections = ()
    opener_pairs = (
        pair('namespace-open', r'^[ \t]*namespace[ \t]+[\w.]+', r'^[ \t]*open[ \t]+[\w.]+'),
        pair('open-open', r'^[ \t]*open[ \t]+[\w.]+', r'^[ \t]*open[ \t]+[\w.]+'),
        pair('open-operation', r'^[ \t]*open[ \t]+[\w.]+', r'^[ \t]*(?:@EntryPoint|operation|function)\b'),
        pair('namespace-operation', r'^[ \t]*namespace[ \t]+[\w.]+', r'^[ \t]*(?:@EntryPoint|operation|function)\b'),
        pair('intrinsic-call', r'(?<![.\w])' + INTRINSICS + r'[ \t]*\([^)\n]*$', r'\)'),
    )

    def detect_and_refine(self, fragment):
        # A lone H(...) or X(...) call is too weak; structure or two intrinsics are not.
        content = fragment.content
        for line in content.split('\n'):
            if any(r.search(line) for r in STRUCTURE_RULES):
                return self.dialect
        intrinsic_calls = sum(
            len(r.matcher.findall(line))
            for line in content.split('\n')
            for r in INTRINSIC_RULES
        )
        if intrinsic_calls >= 2:
            return self.dialect
        return None
