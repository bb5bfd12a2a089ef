"""Result records for the income tax estimator."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class TaxSlab:
    """Income and tax attributed to a single slab of the regime."""
    range_label: str
    rate_percent: float
    income_in_slab: float
    tax_in_slab: float


@dataclass(frozen=True)
class TaxBreakdown:
    """Complete income tax estimate for one annual income.

    `slabs` only lists slabs that hold part of the taxable income, lowest first.
    `effective_tax_rate` is a percentage of gross income and is None when the
    gross income is zero.
    """
    annual_income: float
    taxable_income: float
    base_tax: float
    cess: float
    total_tax: float
    rebate: float
    final_tax: float
    monthly_tax: float
    take_home_annual: float
    take_home_monthly: float
    effective_tax_rate: Optional[float]
    slabs: List[TaxSlab] = field(default_factory=list)

    def slab_tax_total(self) -> float:
        """Sum of tax over the listed slabs (equals base_tax)."""
        return sum(s.tax_in_slab for s in self.slabs)
