"""Renderer classes for displaying calculator results.

This module contains renderer classes that handle the presentation logic
for each calculator. Renderers only format numbers the calculators have
already produced; currency is shown in Indian Rupees with Indian digit
grouping (1,00,00,000).
"""

import math
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from calc.currency import round_currency
from model.EmiResult import EmiResult
from model.GrowthPoint import GrowthPoint, SipResult
from model.RetirementData import RetirementInputs, RetirementProjection
from model.TaxBreakdown import TaxBreakdown
from model.field_metadata import get_short_name, wrap_header

RUPEE = '₹'
WIDTH = 60


def format_inr(amount: Optional[float]) -> str:
    """Format an amount as whole rupees with Indian digit grouping.

    Examples: 500 -> '₹500', 123456 -> '₹1,23,456', 50000000 -> '₹5,00,00,000'
    """
    if amount is None or not math.isfinite(amount):
        return 'n/a'
    num = round_currency(amount)
    sign = '-' if num < 0 else ''
    digits = str(abs(num))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ','.join(groups) + ',' + tail
    return f"{sign}{RUPEE}{digits}"


def format_lakhs(amount: float) -> str:
    """Short chart-axis label in lakhs, e.g. 5000000 -> '₹50L'."""
    return f"{RUPEE}{amount / 100000:.0f}L"


def format_percent(value: Optional[float]) -> str:
    if value is None:
        return 'n/a'
    return f"{value:.2f}%"


def format_multiline_headers(columns: List[tuple], first_label: str = 'Year', first_width: int = 6) -> tuple[List[str], str]:
    """Format column headers with multi-line wrapping support.

    Args:
        columns: List of (header_text, width) tuples for each column
        first_label: Label of the leading column
        first_width: Width of the leading column

    Returns:
        Tuple of (list of header lines, separator line)
    """
    wrapped_headers = []
    for header, width in columns:
        lines = wrap_header(header, width)
        wrapped_headers.append((lines, width))

    max_lines = max(len(lines) for lines, _ in wrapped_headers) if wrapped_headers else 1

    # Pad all headers to have the same number of lines (pad at top)
    for lines, _ in wrapped_headers:
        while len(lines) < max_lines:
            lines.insert(0, "")

    header_lines = []
    for line_idx in range(max_lines):
        label = first_label if line_idx == max_lines - 1 else ''
        header_line = f"  {label:<{first_width}}"
        for lines, width in wrapped_headers:
            header_line += f" {lines[line_idx]:>{width}}"
        header_lines.append(header_line)

    sep_line = f"  {'-' * first_width}"
    for _, width in wrapped_headers:
        sep_line += f" {'-' * width}"

    return header_lines, sep_line


def _title(text: str) -> None:
    print()
    print("=" * WIDTH)
    print(f"{text:^{WIDTH}}")
    print("=" * WIDTH)


def _section(text: str) -> None:
    print()
    print("-" * WIDTH)
    print(text)
    print("-" * WIDTH)


def _line(label: str, value: str) -> None:
    print(f"  {label + ':':<36} {value:>20}")


class BaseRenderer(ABC):
    """Abstract base class for all renderers."""

    @abstractmethod
    def render(self, data: Any) -> None:
        """Render the data to output.

        Args:
            data: The calculator result to display
        """
        pass


class SipRenderer(BaseRenderer):
    """Renderer for SIP maturity value and the yearly growth table."""

    def __init__(self, monthly_amount: float, years: int, annual_return_percent: float,
                 category_name: Optional[str] = None):
        self.monthly_amount = monthly_amount
        self.years = years
        self.annual_return_percent = annual_return_percent
        self.category_name = category_name

    def render(self, data: dict) -> None:
        """Render the SIP summary and growth table.

        Args:
            data: dict with 'summary' (SipResult) and 'series' (list of GrowthPoint)
        """
        summary: SipResult = data['summary']
        series: List[GrowthPoint] = data.get('series', [])

        _title("SIP RETURN ESTIMATE")
        _section("INPUTS")
        if self.category_name:
            _line("Fund Category", self.category_name)
        _line("Monthly Investment", format_inr(self.monthly_amount))
        _line("Investment Period", f"{self.years} years")
        _line("Expected Annual Return", format_percent(self.annual_return_percent))

        _section("RESULTS")
        _line(get_short_name("total_invested"), format_inr(summary.total_invested))
        _line("Estimated Returns", format_inr(summary.total_gains))
        _line(get_short_name("maturity_value"), format_inr(summary.maturity_value))

        if series:
            _section("GROWTH BY YEAR")
            columns = [
                (get_short_name("invested"), 16),
                (get_short_name("maturity_value"), 16),
                ("Chart", 8),
            ]
            header_lines, sep_line = format_multiline_headers(columns)
            for line in header_lines:
                print(line)
            print(sep_line)
            for point in series:
                print(f"  {point.year:<6} {format_inr(point.invested):>16} "
                      f"{format_inr(point.maturity_value):>16} {format_lakhs(point.maturity_value):>8}")
        print()


class EmiRenderer(BaseRenderer):
    """Renderer for a loan's EMI and repayment totals."""

    def __init__(self, principal: float, annual_rate_percent: float, months: float,
                 loan_name: Optional[str] = None):
        self.principal = principal
        self.annual_rate_percent = annual_rate_percent
        self.months = months
        self.loan_name = loan_name

    def render(self, data: EmiResult) -> None:
        _title(f"{(self.loan_name or 'LOAN').upper()} EMI")
        _section("LOAN DETAILS")
        _line("Loan Amount", format_inr(self.principal))
        _line("Interest Rate", format_percent(self.annual_rate_percent))
        _line("Tenure", f"{self.months:g} months")

        _section("REPAYMENT")
        _line("Monthly EMI", format_inr(data.emi))
        _line(get_short_name("total_interest"), format_inr(data.total_interest))
        _line(get_short_name("total_amount"), format_inr(data.total_amount))
        if data.total_amount > 0:
            print(f"  {'-' * 57}")
            _line("Principal Share", format_percent(self.principal / data.total_amount * 100))
            _line("Interest Share", format_percent(data.total_interest / data.total_amount * 100))
        print()


class TaxDetailsRenderer(BaseRenderer):
    """Renderer for the income tax breakdown."""

    def __init__(self, regime: str = ''):
        self.regime = regime

    def render(self, data: TaxBreakdown) -> None:
        _title(f"INCOME TAX ({self.regime})" if self.regime else "INCOME TAX")

        _section("INCOME")
        _line("Annual Income", format_inr(data.annual_income))
        _line("Standard Deduction Applied", format_inr(data.annual_income - data.taxable_income))
        _line(get_short_name("taxable_income"), format_inr(data.taxable_income))

        if data.slabs:
            _section("TAX BY SLAB")
            columns = [
                (get_short_name("rate_percent"), 6),
                (get_short_name("income_in_slab"), 14),
                (get_short_name("tax_in_slab"), 12),
            ]
            header_lines, sep_line = format_multiline_headers(columns, first_label='Income Range', first_width=26)
            for line in header_lines:
                print(line)
            print(sep_line)
            for slab in data.slabs:
                print(f"  {slab.range_label:<26} {slab.rate_percent:>5.0f}% "
                      f"{format_inr(slab.income_in_slab):>14} {format_inr(slab.tax_in_slab):>12}")

        _section("TAX")
        _line(get_short_name("base_tax"), format_inr(data.base_tax))
        _line("Health & Education Cess", format_inr(data.cess))
        _line(get_short_name("total_tax"), format_inr(data.total_tax))
        if data.rebate > 0:
            _line(get_short_name("rebate"), "-" + format_inr(data.rebate))
        print(f"  {'-' * 57}")
        _line(get_short_name("final_tax"), format_inr(data.final_tax))

        _section("SUMMARY")
        _line(get_short_name("monthly_tax"), format_inr(data.monthly_tax))
        _line("Take Home (Annual)", format_inr(data.take_home_annual))
        _line("Take Home (Monthly)", format_inr(data.take_home_monthly))
        _line("Effective Tax Rate", format_percent(data.effective_tax_rate))
        print()


class RetirementRenderer(BaseRenderer):
    """Renderer for the retirement corpus projection."""

    def __init__(self, inputs: RetirementInputs):
        self.inputs = inputs

    def render(self, data: RetirementProjection) -> None:
        _title("RETIREMENT PLAN")

        _section("TIMELINE")
        _line("Current Age", str(self.inputs.current_age))
        _line("Retirement Age", str(self.inputs.retirement_age))
        _line("Life Expectancy", str(self.inputs.life_expectancy))
        _line(get_short_name("years_to_retirement"), str(data.years_to_retirement))
        _line(get_short_name("years_in_retirement"), str(data.years_in_retirement))

        _section("PROJECTED CORPUS")
        _line("Current Savings Grow To", format_inr(data.fv_current_savings))
        _line("Contributions Grow To", format_inr(data.fv_contributions))
        print(f"  {'-' * 57}")
        _line(get_short_name("total_retirement_corpus"), format_inr(data.total_retirement_corpus))

        _section("REQUIRED CORPUS")
        _line("Inflation", format_percent(data.inflation_rate_percent))
        _line("Monthly Expense at Retirement", format_inr(data.future_monthly_expense))
        _line("Annual Expense at Retirement", format_inr(data.annual_expense_at_retirement))
        _line(get_short_name("real_return_rate_percent"), format_percent(data.real_return_rate_percent))
        _line(get_short_name("required_corpus"), format_inr(data.required_corpus))

        _section("STATUS")
        if data.is_on_track:
            print("  On track: projected corpus covers retirement.")
            _line("Surplus", format_inr(data.shortfall))
        else:
            print("  Action needed: projected corpus falls short.")
            _line("Shortfall", format_inr(data.shortfall))
            _line(get_short_name("required_monthly_contribution"), format_inr(data.required_monthly_contribution))
            _line(get_short_name("additional_monthly_contribution"), format_inr(data.additional_monthly_contribution))
            _line("Or Cut Monthly Expense By", format_inr(data.suggested_expense_reduction))
        _line(get_short_name("funded_ratio_percent"), format_percent(data.funded_ratio_percent))

        _section("ANALYTICS")
        _line(get_short_name("total_invested"), format_inr(data.total_invested))
        _line(get_short_name("investment_gains"), format_inr(data.investment_gains))
        _line(get_short_name("roi_percent"), format_percent(data.roi_percent))
        multiple = 'n/a' if data.corpus_multiple is None else f"{data.corpus_multiple:.2f}x"
        _line(get_short_name("corpus_multiple"), multiple)
        _line(get_short_name("monthly_income_at_retirement"), format_inr(data.monthly_income_at_retirement))
        print()


# Registry mapping mode names to renderer classes
RENDERER_REGISTRY = {
    'Sip': SipRenderer,
    'Emi': EmiRenderer,
    'TaxDetails': TaxDetailsRenderer,
    'Retirement': RetirementRenderer,
}
