"""Retirement corpus planner.

Projects the corpus a saver will have at retirement and compares it with the
corpus needed to pay today's monthly expenses, grown by inflation, for every
month of retirement.

Current savings compound annually. Monthly contributions form an ordinary
annuity (paid at the end of each month), unlike the SIP calculator which
assumes payments at the start of the month.
"""

import math
from typing import Optional

from model.RetirementData import RetirementInputs, RetirementProjection


def _annuity_factor(rate: float, periods: int) -> float:
    """Future value of 1 paid at the end of each period."""
    if rate == 0:
        return periods
    return ((1 + rate) ** periods - 1) / rate


def future_value_of_savings(current_savings: float, annual_return_percent: float, years: int) -> float:
    return current_savings * (1 + annual_return_percent / 100) ** years


def future_value_of_contributions(monthly_contribution: float, annual_return_percent: float, years: int) -> float:
    rate = annual_return_percent / 100 / 12
    return monthly_contribution * _annuity_factor(rate, years * 12)


def inflate_expense(monthly_expense: float, inflation_rate_percent: float, years: int) -> float:
    return monthly_expense * (1 + inflation_rate_percent / 100) ** years


def real_return_rate(annual_return_percent: float, inflation_rate_percent: float) -> float:
    """Inflation adjusted annual return as a fraction (0.05 for 5%)."""
    return (1 + annual_return_percent / 100) / (1 + inflation_rate_percent / 100) - 1


def required_corpus(future_monthly_expense: float, real_rate: float, years_in_retirement: int) -> float:
    """Corpus needed at retirement to pay a monthly expense for the whole retirement.

    The expense is paid monthly while the remaining corpus keeps earning the
    real rate (annual fraction, applied monthly as real_rate / 12). A zero
    real rate means the corpus is simply the sum of all payments.
    """
    months = years_in_retirement * 12
    monthly_real_rate = real_rate / 12
    if monthly_real_rate == 0:
        return future_monthly_expense * months
    return future_monthly_expense * (1 - (1 + monthly_real_rate) ** -months) / monthly_real_rate


def required_monthly_contribution(target_corpus: float, annual_return_percent: float, years: int) -> float:
    """Monthly contribution whose future value after `years` equals target_corpus.

    This inverts future_value_of_contributions. Returns infinity when there
    are no months left to contribute in and the target is positive.
    """
    rate = annual_return_percent / 100 / 12
    factor = _annuity_factor(rate, years * 12)
    if factor == 0:
        return math.inf if target_corpus > 0 else 0.0
    return target_corpus / factor


def _ratio(numerator: float, denominator: float) -> Optional[float]:
    if denominator == 0:
        return None
    return numerator / denominator


def retirement_projection(inputs: RetirementInputs) -> RetirementProjection:
    """Project the retirement corpus and compare it with what retirement costs.

    Args:
        inputs: RetirementInputs, already validated by the caller

    Returns:
        RetirementProjection. When the projected corpus falls short,
        required_monthly_contribution is the total monthly contribution that
        would close the gap; otherwise it is 0.
    """
    years_to_retirement = inputs.retirement_age - inputs.current_age
    years_in_retirement = inputs.life_expectancy - inputs.retirement_age
    months = years_to_retirement * 12

    fv_savings = future_value_of_savings(inputs.current_savings, inputs.expected_return_percent, years_to_retirement)
    fv_contributions = future_value_of_contributions(
        inputs.monthly_contribution, inputs.expected_return_percent, years_to_retirement)
    total_corpus = fv_savings + fv_contributions

    future_expense = inflate_expense(inputs.monthly_expense_today, inputs.inflation_rate_percent, years_to_retirement)
    real_rate = real_return_rate(inputs.expected_return_percent, inputs.inflation_rate_percent)
    needed = required_corpus(future_expense, real_rate, years_in_retirement)

    gap = needed - total_corpus
    is_on_track = gap <= 0

    required_contribution = 0.0
    if gap > 0:
        required_contribution = required_monthly_contribution(
            needed - fv_savings, inputs.expected_return_percent, years_to_retirement)

    suggested_reduction = 0.0
    if not is_on_track and years_in_retirement > 0:
        suggested_reduction = float(math.ceil(gap / years_in_retirement / 12))

    total_invested = inputs.monthly_contribution * months + inputs.current_savings
    gains = total_corpus - total_invested
    roi = _ratio(gains, total_invested)
    funded_ratio = _ratio(total_corpus, needed)

    return RetirementProjection(
        years_to_retirement=years_to_retirement,
        years_in_retirement=years_in_retirement,
        fv_current_savings=fv_savings,
        fv_contributions=fv_contributions,
        total_retirement_corpus=total_corpus,
        total_invested=total_invested,
        investment_gains=gains,
        inflation_rate_percent=inputs.inflation_rate_percent,
        future_monthly_expense=future_expense,
        annual_expense_at_retirement=future_expense * 12,
        real_return_rate_percent=real_rate * 100,
        required_corpus=needed,
        shortfall=abs(gap),
        is_on_track=is_on_track,
        required_monthly_contribution=required_contribution,
        additional_monthly_contribution=max(0.0, required_contribution - inputs.monthly_contribution),
        suggested_expense_reduction=suggested_reduction,
        funded_ratio_percent=None if funded_ratio is None else funded_ratio * 100,
        roi_percent=None if roi is None else roi * 100,
        corpus_multiple=_ratio(total_corpus, total_invested),
        monthly_income_at_retirement=total_corpus * (inputs.expected_return_percent / 100) / 12
    )
