from .core import logger, set_debug
from .errors import CodefenceError, MalformedInput, PatternEngineFailure, MergeCycle
from .config import FenceSettings, get_settings, load_settings, reset_settings
from .models import Dialect, Tag, Line, Classification, Fragment, PatternRule, CorrectionRule
from .sanitize import sanitize, sanitize_lines, escape_markdown, fix_system_tags
from .classify import classify, split_lines
from .assemble import assemble
from .render import render
from .dialects import DialectLibrary, LIBRARIES, get_library, dispatch
from .pipeline import transform, has_code_signal, contains_quantum_code

__all__ = [
    "transform",
    "has_code_signal",
    "contains_quantum_code",
    # Stages
    "sanitize",
    "sanitize_lines",
    "escape_markdown",
    "fix_system_tags",
    "classify",
    "split_lines",
    "assemble",
    "dispatch",
    "render",
    # Data
    "Dialect",
    "Tag",
    "Line",
    "Classification",
    "Fragment",
    "PatternRule",
    "CorrectionRule",
    # Libraries
    "DialectLibrary",
    "LIBRARIES",
    "get_library",
    # Settings
    "FenceSettings",
    "get_settings",
    "load_settings",
    "reset_settings",
    # Errors
    "CodefenceError",
    "MalformedInput",
    "PatternEngineFailure",
    "MergeCycle",
    "logger",
    "set_debug",
]

__version__ = "0.1.0"
