# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_loan_input
"""

from .utils import base_loan_fields, make_loan_input

__all__ = ["make_loan_input", "base_loan_fields"]
