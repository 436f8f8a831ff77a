"""Shared helpers used across domain modules."""

from .amounts import MAX_AMOUNT_CENTS, validate_amount
from .edits import collect_edits
from .paging import PageRequest

__all__ = ["MAX_AMOUNT_CENTS", "PageRequest", "collect_edits", "validate_amount"]
