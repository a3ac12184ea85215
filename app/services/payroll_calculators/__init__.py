"""
ShiftSync - Payroll Calculators Package

Pure payroll computations; nothing here touches the database.

Modules:
- earnings_calculator: overtime, public-holiday and week-off pay
- payslip_calculator: gross, proration, deductions and net per employee
- settlement_calculator: offboarding net settlement
"""

from decimal import Decimal

from app.services.payroll_calculators.earnings_calculator import (
    EarningsCalculator,
    EarningsRates,
    SupplementalEarnings,
    compute_supplemental_earnings,
    is_overtime_eligible,
)
from app.services.payroll_calculators.payslip_calculator import (
    Payslip,
    PayslipCalculator,
    PayrollSummary,
    PayrollTotals,
    compute_payslip,
    resolve_period,
    sum_payslips,
)
from app.services.payroll_calculators.settlement_calculator import (
    SETTLEMENT_CREDITS,
    compute_net_settlement,
    normalize_settlement,
)


# ===========================================
# CONVENIENCE FUNCTIONS
# ===========================================

def daily_rate(gross: Decimal, divisor: int = 30) -> Decimal:
    """
    Daily salary rate used for proration and cost estimates.

    Args:
        gross: Monthly gross salary
        divisor: Fixed days per month

    Returns:
        gross / divisor
    """
    return Decimal(gross) / Decimal(divisor)


__all__ = [
    "EarningsCalculator",
    "EarningsRates",
    "SupplementalEarnings",
    "compute_supplemental_earnings",
    "is_overtime_eligible",
    "Payslip",
    "PayslipCalculator",
    "PayrollSummary",
    "PayrollTotals",
    "compute_payslip",
    "resolve_period",
    "sum_payslips",
    "SETTLEMENT_CREDITS",
    "compute_net_settlement",
    "normalize_settlement",
    "daily_rate",
]
