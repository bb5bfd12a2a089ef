"""Field metadata for calculator result fields.

This module provides descriptions and short names for the fields of every
result record. Short names are used as column headers in tables and by the
shell 'fields' command.
"""

from dataclasses import dataclass, fields as dataclass_fields
from typing import Dict, List

from model.EmiResult import EmiResult
from model.GrowthPoint import GrowthPoint, SipResult
from model.RetirementData import RetirementProjection
from model.TaxBreakdown import TaxBreakdown, TaxSlab


@dataclass
class FieldInfo:
    """Metadata for a single field."""
    short_name: str  # Column header (unique, concise)
    description: str  # Full description of the field


FIELD_METADATA: Dict[str, FieldInfo] = {
    # SIP
    "year": FieldInfo("Year", "Whole years since the first installment"),
    "invested": FieldInfo("Invested", "Total installments paid so far"),
    "maturity_value": FieldInfo("Maturity Value", "Value of the investment including returns"),
    "total_invested": FieldInfo("Total Invested", "Total amount paid in"),
    "total_gains": FieldInfo("Total Gains", "Maturity value minus the amount invested"),

    # EMI
    "emi": FieldInfo("EMI", "Equated monthly installment"),
    "total_interest": FieldInfo("Total Interest", "Interest paid over the life of the loan"),
    "total_amount": FieldInfo("Total Payable", "Principal plus interest"),

    # Income tax
    "annual_income": FieldInfo("Annual Income", "Gross annual income"),
    "taxable_income": FieldInfo("Taxable Income", "Income after the standard deduction"),
    "base_tax": FieldInfo("Base Tax", "Tax computed from the slabs, before cess"),
    "cess": FieldInfo("Cess", "Health and education cess on the base tax"),
    "total_tax": FieldInfo("Total Tax", "Base tax plus cess, before rebate"),
    "rebate": FieldInfo("Rebate", "Rebate for taxable income at or below the threshold"),
    "final_tax": FieldInfo("Final Tax", "Tax payable after rebate"),
    "monthly_tax": FieldInfo("Monthly Tax", "Final tax spread over 12 months"),
    "take_home_annual": FieldInfo("Take Home", "Gross income minus final tax"),
    "take_home_monthly": FieldInfo("Take Home / Month", "Take home spread over 12 months"),
    "effective_tax_rate": FieldInfo("Eff Rate", "Final tax as a percentage of gross income"),
    "slabs": FieldInfo("Slabs", "Income and tax attributed to each slab"),
    "range_label": FieldInfo("Income Range", "Income range covered by the slab"),
    "rate_percent": FieldInfo("Rate", "Marginal rate of the slab"),
    "income_in_slab": FieldInfo("Income in Slab", "Taxable income falling in the slab"),
    "tax_in_slab": FieldInfo("Tax in Slab", "Tax charged on the income in the slab"),

    # Retirement
    "years_to_retirement": FieldInfo("Years to Retire", "Years until retirement"),
    "years_in_retirement": FieldInfo("Years Retired", "Years from retirement to life expectancy"),
    "fv_current_savings": FieldInfo("FV Savings", "Current savings grown to the retirement date"),
    "fv_contributions": FieldInfo("FV Contributions", "Monthly contributions grown to the retirement date"),
    "total_retirement_corpus": FieldInfo("Projected Corpus", "Corpus available at retirement"),
    "investment_gains": FieldInfo("Gains", "Projected corpus minus total invested"),
    "inflation_rate_percent": FieldInfo("Inflation", "Annual inflation rate used"),
    "future_monthly_expense": FieldInfo("Expense at Retirement", "Today's monthly expense grown by inflation"),
    "annual_expense_at_retirement": FieldInfo("Annual Expense", "Monthly expense at retirement times 12"),
    "real_return_rate_percent": FieldInfo("Real Return", "Return adjusted for inflation"),
    "required_corpus": FieldInfo("Required Corpus", "Corpus needed to fund every month of retirement"),
    "shortfall": FieldInfo("Gap", "Distance between projected and required corpus"),
    "is_on_track": FieldInfo("On Track", "True if the projected corpus covers the required corpus"),
    "required_monthly_contribution": FieldInfo("Required SIP", "Monthly contribution that closes the gap"),
    "additional_monthly_contribution": FieldInfo("Extra SIP", "Increase over the current monthly contribution"),
    "suggested_expense_reduction": FieldInfo("Expense Cut", "Monthly expense reduction that would spread the gap over retirement"),
    "funded_ratio_percent": FieldInfo("Funded", "Projected corpus as a percentage of the required corpus"),
    "roi_percent": FieldInfo("ROI", "Gains as a percentage of total invested"),
    "corpus_multiple": FieldInfo("Multiple", "Projected corpus divided by total invested"),
    "monthly_income_at_retirement": FieldInfo("Monthly Income", "Monthly income the corpus yields at the expected return"),
}


# Result records produced by each calculator, in display order
CALCULATOR_RESULTS = {
    "sip": [SipResult, GrowthPoint],
    "emi": [EmiResult],
    "tax": [TaxBreakdown, TaxSlab],
    "retire": [RetirementProjection],
}


def get_calculator_fields(calculator: str) -> List[str]:
    """Get the result field names for a calculator ('sip', 'emi', 'tax', 'retire')."""
    names = []
    for record in CALCULATOR_RESULTS.get(calculator, []):
        for f in dataclass_fields(record):
            if f.name not in names:
                names.append(f.name)
    return names


def get_short_name(field_name: str) -> str:
    """Get the short name for a field, or the field name if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.short_name if info else field_name


def get_description(field_name: str) -> str:
    """Get the description for a field, or empty string if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.description if info else ""


def get_field_info(field_name: str) -> FieldInfo | None:
    """Get the full FieldInfo for a field, or None if not found."""
    return FIELD_METADATA.get(field_name)


def wrap_header(text: str, max_width: int) -> list[str]:
    """Wrap a header text into multiple lines to fit within max_width.

    Words are split on spaces and distributed across lines to minimize
    the total number of lines while staying within max_width.

    Args:
        text: The header text to wrap
        max_width: Maximum width per line

    Returns:
        List of strings, each representing a line
    """
    if len(text) <= max_width:
        return [text]

    words = text.split()
    lines = []
    current_line = ""

    for word in words:
        if not current_line:
            current_line = word
        elif len(current_line) + 1 + len(word) <= max_width:
            current_line += " " + word
        else:
            lines.append(current_line)
            current_line = word

    if current_line:
        lines.append(current_line)

    return lines
