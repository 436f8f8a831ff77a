"""Validation of ledger amounts (integer cents)."""

from __future__ import annotations

from typing import Any

from giving_server.core.errors import ValidationError
from giving_server.modules.entities.registry import MAX_CENTS

MAX_AMOUNT_CENTS = MAX_CENTS


def validate_amount(amount: Any, field: str = "amount") -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError("Amount must be a whole number of cents", field)
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero", field)
    if amount > MAX_AMOUNT_CENTS:
        raise ValidationError(f"Amount must not exceed {MAX_AMOUNT_CENTS} cents", field)
    return amount


__all__ = ["MAX_AMOUNT_CENTS", "validate_amount"]
