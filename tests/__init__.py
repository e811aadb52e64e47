# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_loan, make_optimization_input
"""

from .utils import legacy_request_payload, make_loan, make_optimization_input

__all__ = ["make_loan", "make_optimization_input", "legacy_request_payload"]
