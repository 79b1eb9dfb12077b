"""Qiskit recognition and syntax repair.

Qiskit is Python, so claimed fragments are fenced as ``python``; the library
sits above the generic Python rules because circuit code carries its own
correction rules.  The repairs target what search snippets typically mangle:

    qc.h[0]                 -> qc.h(0)
    qc.cx[0,1]              -> qc.cx(0, 1)
    QuantumCircuit([2])     -> QuantumCircuit(2)
    QuantumCircuit([2],[2]) -> QuantumCircuit(2, 2)
"""

import re

from ..models import CorrectionRule, Dialect, rule
from .base import DialectLibrary

PRIORITY = 30

# Gate and instruction methods on a QuantumCircuit.
GATES = (
    'h', 'x', 'y', 'z', 's', 't', 'sdg', 'tdg', 'id', 'sx',
    'rx', 'ry', 'rz', 'p', 'u', 'reset', 'measure', 'measure_all', 'barrier',
    'cx', 'cy', 'cz', 'ch', 'cnot', 'swap', 'crz', 'cp', 'ccx', 'cswap', 'mcx',
)
_GATE_ALT = '|'.join(sorted(GATES, key=len, reverse=True))
# Gate names that rarely appear as methods outside circuit code.
_DISTINCT_GATE_ALT = 'cswap|measure_all|cnot|mcx|ccx|crz|sdg|tdg|cx|cz|h'


def _k(pattern):
    return rule(pattern, Dialect.QISKIT, PRIORITY)


RULES = (
    _k(r'^[ \t]*from[ \t]+qiskit(?:_\w+)?(?:\.\w+)*[ \t]+import\b'),
    _k(r'^[ \t]*import[ \t]+qiskit\b'),
    _k(r'\b(?:QuantumCircuit|QuantumRegister|ClassicalRegister)\('),
    _k(r'\bAer(?:Simulator\(|\.\w+)'),
    _k(r'\b(?:execute|transpile)\([ \t]*(?:qc|circuit|circ|qreg)\b'),
    _k(r'\b(?:qc|circ|circuit)\w*\.(?:' + _GATE_ALT + r')[ \t]*[\[(]'),
    _k(r'\b\w+\.(?:' + _DISTINCT_GATE_ALT + r')\('),
    _k(r'\.get_counts\('),
    _k(r'\bqasm_simulator\b'),
    _k(r'\bplot_(?:histogram|bloch_multivector|bloch_vector|state_\w+)\('),
)


def _bracket_call(m: re.Match) -> str:
    args = ', '.join(a.strip() for a in m.group(3).split(','))
    return f"{m.group(1)}.{m.group(2)}({args})"


def _array_constructor(m: re.Match) -> str:
    args = [m.group(2)] + ([m.group(3)] if m.group(3) else [])
    return f"{m.group(1)}({', '.join(args)})"


CORRECTIONS = (
    CorrectionRule(
        re.compile(r'\b(\w+)\.(' + _GATE_ALT + r')\[[ \t]*(\d+(?:[ \t]*,[ \t]*\d+)*)[ \t]*\]'),
        _bracket_call,
        name='bracket-call',
    ),
    CorrectionRule(
        re.compile(r'\b(QuantumCircuit|QuantumRegister|ClassicalRegister)\([ \t]*\[[ \t]*(\d+)[ \t]*\]'
                   r'(?:[ \t]*,[ \t]*\[[ \t]*(\d+)[ \t]*\])?[ \t]*\)'),
        _array_constructor,
        name='array-constructor',
    ),
)


class QiskitLibrary(DialectLibrary):
    name = "qiskit"
    dialect = Dialect.QISKIT
    priority = PRIORITY
    rules = RULES
    corrections = CORRECTIONS
