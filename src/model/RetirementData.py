"""Input and result records for the retirement planner.

Rates are percentages (12 means 12% a year). Ages are whole years.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RetirementInputs:
    """Everything the retirement planner needs to know about the saver.

    The caller guarantees 0 <= current_age < retirement_age < life_expectancy <= 100
    (see calc.input_validation.validate_retirement_inputs).
    """
    current_age: int = 30
    retirement_age: int = 60
    life_expectancy: int = 80
    current_savings: float = 500000.0
    monthly_contribution: float = 10000.0
    expected_return_percent: float = 12.0
    inflation_rate_percent: float = 5.4
    monthly_expense_today: float = 30000.0


@dataclass(frozen=True)
class RetirementProjection:
    """Projected corpus against the corpus needed to fund retirement.

    `shortfall` is always the magnitude of the gap; read it as a surplus when
    `is_on_track` is True.
    """
    years_to_retirement: int
    years_in_retirement: int

    # Accumulation
    fv_current_savings: float
    fv_contributions: float
    total_retirement_corpus: float
    total_invested: float
    investment_gains: float

    # Requirement
    inflation_rate_percent: float
    future_monthly_expense: float
    annual_expense_at_retirement: float
    real_return_rate_percent: float
    required_corpus: float

    # Gap analysis
    shortfall: float
    is_on_track: bool
    required_monthly_contribution: float
    additional_monthly_contribution: float
    suggested_expense_reduction: float
    funded_ratio_percent: Optional[float]

    # Ratios (None when nothing was invested)
    roi_percent: Optional[float]
    corpus_multiple: Optional[float]
    monthly_income_at_retirement: float
