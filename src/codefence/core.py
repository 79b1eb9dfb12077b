"""
Package-level wiring shared by every stage: the ``codefence`` logger.

The handler is attached once at import; callers tune verbosity with
``logging.getLogger('codefence').setLevel(...)``.
"""

import logging

logger = logging.getLogger('codefence')
handler = logging.StreamHandler()
logger.addHandler(handler)


def set_debug(enabled: bool = True):
    """Turn the per-stage DEBUG counters on or off."""
    logger.setLevel(logging.DEBUG if enabled else logging.WARNING)
