"""Generic fallbacks: scientific Python, JavaScript, plain Python.

These are consulted only after the quantum libraries have passed on a
fragment, in the order scientific -> JavaScript -> Python.  None of them
rewrites code.
"""

from ..models import Dialect, rule
from .base import DialectLibrary, pair

SCIENTIFIC_PRIORITY = 20
JAVASCRIPT_PRIORITY = 15
PYTHON_PRIORITY = 10

_SCIENTIFIC_MODULES = r'(?:numpy|pandas|scipy|matplotlib|seaborn|sklearn|tensorflow|torch)'
_DATAFRAME_METHODS = (
    r'(?:head|tail|describe|info|merge|concat|groupby|apply|map|plot|loc|iloc'
    r'|dropna|fillna|sort_values|reset_index|to_csv|value_counts)'
)


class ScientificLibrary(DialectLibrary):
    name = "scientific"
    dialect = Dialect.PYTHON
    priority = SCIENTIFIC_PRIORITY
    rules = tuple(rule(p, Dialect.PYTHON, SCIENTIFIC_PRIORITY) for p in (
        r'^[ \t]*import[ \t]+' + _SCIENTIFIC_MODULES + r'\b',
        r'^[ \t]*from[ \t]+' + _SCIENTIFIC_MODULES + r'(?:\.\w+)*[ \t]+import\b',
        r'\b(?:np|pd|plt|sns|tf|torch)\.[a-z_]\w*',
        r'\bdf\.' + _DATAFRAME_METHODS + r'\b',
        r'^[ \t]*df[ \t]*=',
    ))


class JavaScriptLibrary(DialectLibrary):
    name = "javascript"
    dialect = Dialect.JAVASCRIPT
    priority = JAVASCRIPT_PRIORITY
    rules = tuple(rule(p, Dialect.JAVASCRIPT, JAVASCRIPT_PRIORITY) for p in (
        r'^[ \t]*(?:export[ \t]+)?(?:const|let|var)[ \t]+(?:[\w$]+|\{[^}\n]*\}|\[[^\]\n]*\])[ \t]*=',
        r'^[ \t]*(?:export[ \t]+)?(?:default[ \t]+)?(?:async[ \t]+)?function\b[ \t]*\*?[ \t]*[\w$]*[ \t]*\(',
        r'\([^()\n]*\)[ \t]*=>',
        r'\bconsole\.(?:log|error|warn|info)\(',
        r'\bdocument\.(?:getElementById|querySelector|querySelectorAll|createElement|addEventListener)\(',
        r'\brequire\([ \t]*[\'"]',
        r'^[ \t]*import[ \t]+[^\n]*[ \t]from[ \t]+[\'"]',
        r'^[ \t]*export[ \t]+(?:default|const|function|class)\b',
        r'^[ \t]*class[ \t]+\w+(?:[ \t]+extends[ \t]+[\w.]+)?[ \t]*\{',
    ))


class PythonLibrary(DialectLibrary):
    name = "python"
    dialect = Dialect.PYTHON
    priority = PYTHON_PRIORITY
    rules = tuple(rule(p, Dialect.PYTHON, PYTHON_PRIORITY) for p in (
        r'^[ \t]*(?:async[ \t]+)?def[ \t]+\w+[ \t]*\(',
        r'^[ \t]*class[ \t]+\w+[ \t]*(?:\([^)\n]*\))?[ \t]*:',
        r'^[ \t]*(?:if|elif|while)[ \t]+[^:\n]+:[ \t]*(?:#[^\n]*)?$',
        r'^[ \t]*for[ \t]+\w+(?:[ \t]*,[ \t]*\w+)*[ \t]+in[ \t]+[^:\n]+:[ \t]*$',
        r'^[ \t]*(?:try|else|finally)[ \t]*:[ \t]*$',
        r'^[ \t]*except\b[^:\n]*:[ \t]*$',
        r'^[ \t]*with[ \t]+[^:\n]+:[ \t]*$',
        r'^[ \t]*import[ \t]+[A-Za-z_][\w.]*(?:[ \t]+as[ \t]+\w+)?[ \t]*(?:,|$)',
        r'^[ \t]*from[ \t]+\.*[A-Za-z_][\w.]*[ \t]+import[ \t]+[\w*(]',
        r'^[ \t]*print\(',
        r'^[ \t]*return\b',
        r'^[ \t]*[A-Za-z_][\w.]*[ \t]*=[ \t]*[A-Za-z_][\w.]*\(',
        r'^[ \t]*url[ \t]*=[ \t]*[\'"]https?://',
        r'\brequests\.(?:get|post|put|delete|patch)\(',
    ))
    opener_pairs = (
        pair('block-header', r':[ \t]*(?:#.*)?$', r'^[ \t]+\S'),
        pair('indented-body', r'^[ \t]+\S', r'^[ \t]+\S'),
    )
