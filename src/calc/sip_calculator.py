"""SIP (systematic investment plan) return calculator.

Contributions are made at the start of each month (annuity due), so the
future value carries one extra month of growth compared to an ordinary
annuity.
"""

from typing import List

from calc.currency import round_currency
from model.GrowthPoint import GrowthPoint, SipResult


def monthly_rate(annual_return_percent: float) -> float:
    return annual_return_percent / 12 / 100


def _annuity_due_value(monthly_amount: float, months: int, rate: float) -> float:
    if rate == 0:
        return monthly_amount * months
    return monthly_amount * (((1 + rate) ** months - 1) / rate) * (1 + rate)


def future_value_of_sip(monthly_amount: float, years: float, annual_return_percent: float) -> float:
    """Return the maturity value of a monthly SIP.

    Args:
        monthly_amount: Amount invested at the start of every month
        years: Investment horizon in years
        annual_return_percent: Expected annual return, e.g. 12 for 12%

    Returns:
        The unrounded future value. A zero return gives back exactly the
        amount invested.
    """
    months = years * 12
    return _annuity_due_value(monthly_amount, months, monthly_rate(annual_return_percent))


def sip_growth_series(monthly_amount: float, years: int, annual_return_percent: float) -> List[GrowthPoint]:
    """Return the year-end invested amount and maturity value for years 0..years.

    Maturity values are rounded to whole currency units for charting.

    Raises:
        ValueError: if years is not a whole number
    """
    if years != int(years):
        raise ValueError(f"Growth series needs a whole number of years, got {years}")
    rate = monthly_rate(annual_return_percent)
    series = []
    for year in range(0, int(years) + 1):
        months = year * 12
        invested = monthly_amount * months
        series.append(GrowthPoint(
            year=year,
            invested=invested,
            maturity_value=round_currency(_annuity_due_value(monthly_amount, months, rate))
        ))
    return series


def sip_summary(monthly_amount: float, years: float, annual_return_percent: float) -> SipResult:
    """Totals shown next to the growth chart."""
    total_invested = monthly_amount * years * 12
    maturity_value = future_value_of_sip(monthly_amount, years, annual_return_percent)
    return SipResult(
        total_invested=total_invested,
        maturity_value=maturity_value,
        total_gains=maturity_value - total_invested
    )
