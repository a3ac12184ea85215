"""
ShiftSync - Settlement Calculator

Full and final settlement at offboarding:

    net_settlement = gratuity + leave_encashment + salary_dues + other_dues - deductions

``net_settlement`` is always derived; any value supplied by the caller is
discarded.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Mapping

from app.utils.error_handling import InvalidAmountException

SETTLEMENT_CREDITS = ("gratuity", "leave_encashment", "salary_dues", "other_dues")
SETTLEMENT_DEBITS = ("deductions",)


def _amount(value: Any, field: str = "amount") -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        amount = None
    if amount is None or not amount.is_finite():
        raise InvalidAmountException(value, field=field, message=f"Invalid {field} '{value}'")
    return amount


def compute_net_settlement(details: Mapping[str, Any]) -> Decimal:
    """Net payable from a settlement breakdown; missing figures count as zero."""
    credits = sum((_amount(details.get(key), key) for key in SETTLEMENT_CREDITS), Decimal("0"))
    debits = sum((_amount(details.get(key), key) for key in SETTLEMENT_DEBITS), Decimal("0"))
    return (credits - debits).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def normalize_settlement(details: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Copy of ``details`` ready for JSON storage: every settlement figure as a
    2-place float and ``net_settlement`` recomputed.
    """
    normalized = dict(details)
    for key in SETTLEMENT_CREDITS + SETTLEMENT_DEBITS:
        normalized[key] = float(_amount(details.get(key), key).quantize(Decimal("0.01")))
    normalized["net_settlement"] = float(compute_net_settlement(details))
    return normalized
