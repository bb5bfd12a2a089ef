"""Loan EMI (equated monthly installment) calculator."""

from calc.currency import round_currency
from model.EmiResult import EmiResult

TENURE_UNITS = ('years', 'months')


def tenure_in_months(tenure: float, unit: str = 'years') -> float:
    """Convert a loan tenure to months.

    Args:
        tenure: The tenure as entered
        unit: 'years' or 'months'
    """
    if unit not in TENURE_UNITS:
        raise ValueError(f"Unknown tenure unit '{unit}'. Expected one of: {', '.join(TENURE_UNITS)}")
    return tenure * 12 if unit == 'years' else tenure


def tenure_in_years(tenure: float, unit: str = 'years') -> float:
    return tenure_in_months(tenure, unit) / 12


def calculate_emi(principal: float, annual_rate_percent: float, months: float) -> EmiResult:
    """Calculate the monthly installment of an amortizing loan.

    A non-positive principal, rate or tenure yields the all-zero result.

    Args:
        principal: Loan amount
        annual_rate_percent: Annual interest rate, e.g. 8.5 for 8.5%
        months: Number of monthly installments

    Returns:
        EmiResult with the installment, total interest and total amount
        payable, each rounded to whole currency units.
    """
    if principal <= 0 or annual_rate_percent <= 0 or months <= 0:
        return EmiResult(emi=0, total_interest=0, total_amount=0)

    rate = annual_rate_percent / 12 / 100
    growth = (1 + rate) ** months
    emi = principal * rate * growth / (growth - 1)

    total_amount = emi * months
    total_interest = total_amount - principal

    return EmiResult(
        emi=round_currency(emi),
        total_interest=round_currency(total_interest),
        total_amount=round_currency(total_amount)
    )
