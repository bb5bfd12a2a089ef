"""Range checks applied before calling the calculators.

The calculators accept any number and never raise; it is up to the caller to
reject inputs outside the ranges the product supports. Each validator returns
a dict mapping the offending field to a user facing message. An empty dict
means the inputs are valid.
"""

import math
from typing import Dict, Optional

from calc.emi_calculator import tenure_in_years, TENURE_UNITS
from calc.reference_data import FundCategory, LoanType, SipLimits
from model.RetirementData import RetirementInputs

MAX_AGE = 100

NOT_FINITE = 'Value must be a finite number'


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _is_finite(value) -> bool:
    return value is not None and math.isfinite(value)


def validate_loan_inputs(loan_type: LoanType, amount: float, rate: float, tenure: float,
                         tenure_unit: str = 'years', max_amount: float = 100000000) -> Dict[str, str]:
    errors = {}

    if amount is not None and not _is_finite(amount):
        errors['loan_amount'] = NOT_FINITE
    elif not amount or amount <= 0:
        errors['loan_amount'] = 'Loan amount must be greater than 0'
    elif amount > max_amount:
        errors['loan_amount'] = f'Loan amount cannot exceed {max_amount:,.0f}'

    if rate is not None and not _is_finite(rate):
        errors['interest_rate'] = NOT_FINITE
    elif not rate or rate <= 0:
        errors['interest_rate'] = 'Interest rate must be greater than 0'
    elif rate < loan_type.min_rate:
        errors['interest_rate'] = f'Rate must be at least {loan_type.min_rate}% for {loan_type.name}'
    elif rate > loan_type.max_rate:
        errors['interest_rate'] = f'Rate cannot exceed {loan_type.max_rate}% for {loan_type.name}'

    if tenure_unit not in TENURE_UNITS:
        errors['tenure'] = f"Tenure unit must be one of: {', '.join(TENURE_UNITS)}"
    elif tenure is not None and not _is_finite(tenure):
        errors['tenure'] = NOT_FINITE
    elif not tenure or tenure <= 0:
        errors['tenure'] = 'Tenure must be greater than 0'
    elif tenure_in_years(tenure, tenure_unit) > loan_type.max_tenure_years:
        errors['tenure'] = f'Tenure cannot exceed {loan_type.max_tenure_years} years for {loan_type.name}'

    return errors


def validate_income(annual_income: Optional[float], max_income: float) -> Dict[str, str]:
    if annual_income is None:
        return {'annual_income': 'Annual income is required'}
    if not _is_finite(annual_income):
        return {'annual_income': NOT_FINITE}
    if annual_income < 0:
        return {'annual_income': 'Annual income cannot be negative'}
    if annual_income > max_income:
        return {'annual_income': f'Annual income cannot exceed {max_income:,.0f}'}
    return {}


def validate_sip_inputs(monthly_amount: float, years: float, annual_return_percent: float,
                        category: Optional[FundCategory] = None,
                        limits: Optional[SipLimits] = None) -> Dict[str, str]:
    limits = limits or SipLimits()
    errors = {}

    if not _is_finite(monthly_amount):
        errors['monthly_amount'] = NOT_FINITE
    elif not limits.min_monthly_amount <= monthly_amount <= limits.max_monthly_amount:
        errors['monthly_amount'] = (f'Monthly amount must be between {limits.min_monthly_amount:,.0f} '
                                    f'and {limits.max_monthly_amount:,.0f}')

    if not _is_finite(years):
        errors['years'] = NOT_FINITE
    elif years != int(years) or not limits.min_years <= years <= limits.max_years:
        errors['years'] = f'Years must be a whole number between {limits.min_years} and {limits.max_years}'

    if not _is_finite(annual_return_percent):
        errors['annual_return_percent'] = NOT_FINITE
    elif annual_return_percent < 0:
        errors['annual_return_percent'] = 'Expected return cannot be negative'
    elif category and not category.min_return <= annual_return_percent <= category.max_return:
        errors['annual_return_percent'] = (f'Expected return for {category.name} must be between '
                                           f'{category.min_return}% and {category.max_return}%')

    return errors


def validate_retirement_inputs(inputs: RetirementInputs) -> Dict[str, str]:
    errors = {}

    for field_name in ('current_age', 'retirement_age', 'life_expectancy'):
        age = getattr(inputs, field_name)
        if not _is_finite(age):
            errors[field_name] = NOT_FINITE
        elif age != int(age):
            errors[field_name] = 'Age must be a whole number of years'
        elif not 0 <= age <= MAX_AGE:
            errors[field_name] = f'Age must be between 0 and {MAX_AGE}'

    if 'retirement_age' not in errors and 'current_age' not in errors:
        if inputs.retirement_age <= inputs.current_age:
            errors['retirement_age'] = 'Retirement age must be greater than current age'
    if 'life_expectancy' not in errors and 'retirement_age' not in errors:
        if inputs.life_expectancy <= inputs.retirement_age:
            errors['life_expectancy'] = 'Life expectancy must be greater than retirement age'

    for field_name in ('current_savings', 'monthly_contribution', 'monthly_expense_today',
                       'expected_return_percent', 'inflation_rate_percent'):
        value = getattr(inputs, field_name)
        if not _is_finite(value):
            errors[field_name] = NOT_FINITE
        elif value < 0:
            errors[field_name] = 'Value cannot be negative'

    return errors
