"""Financial Calculator Tools for MCP Server.

This module provides the tool implementations that wrap the calculators
and expose their results through MCP as plain JSON-ready dicts.
"""

import os
import sys
import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from tax.IncomeTaxDetails import IncomeTaxDetails
from calc.emi_calculator import calculate_emi, tenure_in_months
from calc.sip_calculator import sip_growth_series, sip_summary
from calc.retirement_calculator import retirement_projection
from calc.reference_data import (
    load_loan_types,
    load_max_loan_amount,
    load_fund_categories,
    load_sip_limits,
    load_inflation_options,
    get_fund_category,
    default_inflation_option,
    resolve_inflation_rate,
)
from calc.input_validation import (
    validate_income,
    validate_loan_inputs,
    validate_retirement_inputs,
    validate_sip_inputs,
)
from model.RetirementData import RetirementInputs

logger = logging.getLogger(__name__)


def _invalid(errors: Dict[str, str]) -> dict:
    return {"error": "Invalid input", "fields": errors}


class CalculatorTools:
    """Tools that wrap the financial calculators for MCP access."""

    def __init__(self, reference_dir: Optional[str] = None):
        """Load the reference tables.

        Args:
            reference_dir: Directory holding the reference JSON files. Defaults
                           to the repository's reference/ directory.
        """
        self.reference_dir = reference_dir
        self.reload_reference_data()

    def reload_reference_data(self) -> dict:
        """Re-read the reference tables from disk."""
        if self.reference_dir:
            self.tax_details = IncomeTaxDetails(ref_path=os.path.join(self.reference_dir, 'income-tax.json'))
        else:
            self.tax_details = IncomeTaxDetails()
        self.loan_types = load_loan_types(self.reference_dir)
        self.max_loan_amount = load_max_loan_amount(self.reference_dir)
        self.fund_categories = load_fund_categories(self.reference_dir)
        self.sip_limits = load_sip_limits(self.reference_dir)
        self.inflation_options = load_inflation_options(self.reference_dir)
        logger.info("Loaded %d loan types, %d fund categories, %d inflation presets",
                    len(self.loan_types), len(self.fund_categories), len(self.inflation_options))
        return {
            "status": "success",
            "loan_types": len(self.loan_types),
            "fund_categories": len(self.fund_categories),
            "inflation_options": len(self.inflation_options)
        }

    def list_loan_types(self) -> dict:
        return {
            "max_loan_amount": self.max_loan_amount,
            "loan_types": {key: asdict(loan) for key, loan in self.loan_types.items()}
        }

    def list_fund_categories(self) -> dict:
        return {
            "sip_limits": asdict(self.sip_limits),
            "fund_categories": [asdict(c) for c in self.fund_categories]
        }

    def list_inflation_options(self) -> dict:
        return {
            "default_option": default_inflation_option(self.reference_dir),
            "options": [asdict(o) for o in self.inflation_options]
        }

    def calculate_sip(self, monthly_amount: Optional[float] = None, years: Optional[int] = None,
                      annual_return_percent: Optional[float] = None,
                      category: Optional[str] = None) -> dict:
        """SIP maturity value and yearly growth series.

        Missing values fall back to the SIP defaults and the category's default
        return. Without a category the return is only checked for being non-negative.
        """
        fund = get_fund_category(category, self.reference_dir) if category else None
        amount = self.sip_limits.default_monthly_amount if monthly_amount is None else monthly_amount
        years = self.sip_limits.default_years if years is None else years
        if annual_return_percent is None:
            annual_return_percent = (fund or self.fund_categories[0]).default_return

        errors = validate_sip_inputs(amount, years, annual_return_percent, fund, self.sip_limits)
        if errors:
            return _invalid(errors)

        summary = sip_summary(amount, years, annual_return_percent)
        return {
            "inputs": {
                "monthly_amount": amount,
                "years": years,
                "annual_return_percent": annual_return_percent,
                "category": fund.name if fund else None
            },
            "total_invested": round(summary.total_invested, 2),
            "maturity_value": round(summary.maturity_value, 2),
            "total_gains": round(summary.total_gains, 2),
            "growth_series": [asdict(p) for p in sip_growth_series(amount, years, annual_return_percent)]
        }

    def calculate_emi(self, loan_type: str = 'home', principal: Optional[float] = None,
                      annual_rate_percent: Optional[float] = None, tenure: Optional[float] = None,
                      tenure_unit: str = 'years') -> dict:
        if loan_type not in self.loan_types:
            return {"error": f"Unknown loan type '{loan_type}'. Available: {', '.join(self.loan_types)}"}
        loan = self.loan_types[loan_type]
        principal = loan.default_amount if principal is None else principal
        annual_rate_percent = loan.default_rate if annual_rate_percent is None else annual_rate_percent
        tenure = loan.default_tenure if tenure is None else tenure

        errors = validate_loan_inputs(loan, principal, annual_rate_percent, tenure, tenure_unit,
                                      self.max_loan_amount)
        if errors:
            return _invalid(errors)

        months = tenure_in_months(tenure, tenure_unit)
        result = calculate_emi(principal, annual_rate_percent, months)
        return {
            "loan_type": loan.name,
            "principal": principal,
            "annual_rate_percent": annual_rate_percent,
            "months": months,
            **asdict(result)
        }

    def calculate_income_tax(self, annual_income: float) -> dict:
        errors = validate_income(annual_income, self.tax_details.max_income)
        if errors:
            return _invalid(errors)
        breakdown = self.tax_details.income_tax(annual_income)
        result = asdict(breakdown)
        result["regime"] = self.tax_details.regime
        return result

    def project_retirement(self, current_age: Optional[int] = None, retirement_age: Optional[int] = None,
                           life_expectancy: Optional[int] = None, current_savings: Optional[float] = None,
                           monthly_contribution: Optional[float] = None,
                           expected_return_percent: Optional[float] = None,
                           inflation_option: Optional[str] = None,
                           custom_inflation_percent: Optional[float] = None,
                           monthly_expense_today: Optional[float] = None) -> dict:
        defaults = RetirementInputs()
        option = inflation_option or default_inflation_option(self.reference_dir)

        def pick(value, default):
            return default if value is None else value

        inputs = RetirementInputs(
            current_age=pick(current_age, defaults.current_age),
            retirement_age=pick(retirement_age, defaults.retirement_age),
            life_expectancy=pick(life_expectancy, defaults.life_expectancy),
            current_savings=pick(current_savings, defaults.current_savings),
            monthly_contribution=pick(monthly_contribution, defaults.monthly_contribution),
            expected_return_percent=pick(expected_return_percent, defaults.expected_return_percent),
            inflation_rate_percent=resolve_inflation_rate(option, custom_inflation_percent, self.reference_dir),
            monthly_expense_today=pick(monthly_expense_today, defaults.monthly_expense_today),
        )
        errors = validate_retirement_inputs(inputs)
        if errors:
            return _invalid(errors)

        return {
            "inputs": asdict(inputs),
            **asdict(retirement_projection(inputs))
        }

    def compare_loans(self, principal: float, tenure_years: float,
                      loan_types: Optional[List[str]] = None) -> dict:
        """EMI for the same principal and tenure under each loan type's default rate.

        Loan types whose limits reject the principal or tenure are reported
        under 'skipped' with the reasons.
        """
        keys = loan_types or list(self.loan_types)
        unknown = [k for k in keys if k not in self.loan_types]
        if unknown:
            return {"error": f"Unknown loan type(s): {', '.join(unknown)}. Available: {', '.join(self.loan_types)}"}

        comparison: Dict[str, Any] = {}
        skipped: Dict[str, Any] = {}
        for key in keys:
            result = self.calculate_emi(key, principal, None, tenure_years, 'years')
            if "error" in result:
                skipped[key] = result.get("fields", result["error"])
            else:
                comparison[key] = result

        cheapest = min(comparison, key=lambda k: comparison[k]["total_interest"]) if comparison else None
        return {
            "principal": principal,
            "tenure_years": tenure_years,
            "loans": comparison,
            "skipped": skipped,
            "lowest_total_interest": cheapest
        }
