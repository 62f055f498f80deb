"""Test utilities for code that builds and executes action results.

All public names are re-exported here::

    from roost.testing import StubResolver, make_context
"""

from roost.testing.asgi import ASGIRecorder, asgi_scope
from roost.testing.stubs import RecordingFormatter, StubResolver, make_context

__all__ = [
    "ASGIRecorder",
    "RecordingFormatter",
    "StubResolver",
    "asgi_scope",
    "make_context",
]
