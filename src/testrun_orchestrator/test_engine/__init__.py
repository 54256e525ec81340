"""Test engine exports.

The pytest adapter lives in ``pytest_engine`` and is imported from there, so
that consumers of the result entities do not load pytest.
"""

from .raw_results import EngineProtocol, RawEngineResult, RawTestRecord

__all__ = [
    "EngineProtocol",
    "RawEngineResult",
    "RawTestRecord",
]
