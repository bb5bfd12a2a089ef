"""Tests for input range checks."""

import os
import sys
import pytest
from dataclasses import replace

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from calc.input_validation import (
    clamp,
    validate_income,
    validate_loan_inputs,
    validate_retirement_inputs,
    validate_sip_inputs,
)
from calc.reference_data import get_fund_category, get_loan_type, load_sip_limits
from model.RetirementData import RetirementInputs


@pytest.fixture
def home():
    return get_loan_type('home')


def test_clamp():
    assert clamp(5, 1, 10) == 5
    assert clamp(-5, 1, 10) == 1
    assert clamp(50, 1, 10) == 10


def test_valid_loan(home):
    assert validate_loan_inputs(home, 5000000, 8.5, 20) == {}
    assert validate_loan_inputs(home, 5000000, 8.5, 360, 'months') == {}


def test_loan_amount(home):
    assert 'loan_amount' in validate_loan_inputs(home, 0, 8.5, 20)
    assert 'loan_amount' in validate_loan_inputs(home, -1, 8.5, 20)
    assert 'loan_amount' in validate_loan_inputs(home, 100000001, 8.5, 20)
    assert validate_loan_inputs(home, 100000000, 8.5, 20) == {}


def test_loan_rate_outside_band(home):
    errors = validate_loan_inputs(home, 5000000, 7, 20)
    assert list(errors) == ['interest_rate']
    assert 'Home Loan' in errors['interest_rate']
    assert 'interest_rate' in validate_loan_inputs(home, 5000000, 12.5, 20)
    assert 'interest_rate' in validate_loan_inputs(home, 5000000, 0, 20)


def test_loan_tenure(home):
    assert 'tenure' in validate_loan_inputs(home, 5000000, 8.5, 31)
    assert 'tenure' in validate_loan_inputs(home, 5000000, 8.5, 361, 'months')
    assert 'tenure' in validate_loan_inputs(home, 5000000, 8.5, 0)
    assert 'tenure' in validate_loan_inputs(home, 5000000, 8.5, 20, 'weeks')
    assert 'tenure' in validate_loan_inputs(get_loan_type('personal'), 500000, 14, 6)


def test_income():
    assert validate_income(1200000, 1e13) == {}
    assert validate_income(0, 1e13) == {}
    assert 'annual_income' in validate_income(None, 1e13)
    assert 'annual_income' in validate_income(-1, 1e13)
    assert 'annual_income' in validate_income(1e13 + 1, 1e13)


def test_sip_inputs():
    limits = load_sip_limits()
    large_cap = get_fund_category('Large Cap')
    assert validate_sip_inputs(5000, 10, 11, large_cap, limits) == {}
    assert 'monthly_amount' in validate_sip_inputs(100, 10, 11, large_cap, limits)
    assert 'monthly_amount' in validate_sip_inputs(100001, 10, 11, large_cap, limits)
    assert 'years' in validate_sip_inputs(5000, 31, 11, large_cap, limits)
    assert 'years' in validate_sip_inputs(5000, 0, 11, large_cap, limits)
    assert 'years' in validate_sip_inputs(5000, 2.5, 11, large_cap, limits)
    assert 'annual_return_percent' in validate_sip_inputs(5000, 10, 15, large_cap, limits)
    assert 'annual_return_percent' in validate_sip_inputs(5000, 10, -1)


def test_sip_return_without_category_is_not_banded():
    assert validate_sip_inputs(5000, 10, 25) == {}


def test_valid_retirement_inputs():
    assert validate_retirement_inputs(RetirementInputs()) == {}


@pytest.mark.parametrize("changes,field", [
    ({'retirement_age': 30}, 'retirement_age'),
    ({'retirement_age': 25}, 'retirement_age'),
    ({'life_expectancy': 60}, 'life_expectancy'),
    ({'life_expectancy': 101}, 'life_expectancy'),
    ({'current_age': -1}, 'current_age'),
    ({'current_age': 30.5}, 'current_age'),
    ({'current_savings': -1}, 'current_savings'),
    ({'monthly_contribution': -1}, 'monthly_contribution'),
    ({'monthly_expense_today': -1}, 'monthly_expense_today'),
    ({'expected_return_percent': -1}, 'expected_return_percent'),
    ({'inflation_rate_percent': -0.5}, 'inflation_rate_percent'),
])
def test_invalid_retirement_inputs(changes, field):
    errors = validate_retirement_inputs(replace(RetirementInputs(), **changes))
    assert field in errors


def test_retirement_zero_money_is_valid():
    inputs = RetirementInputs(current_savings=0, monthly_contribution=0, expected_return_percent=0,
                              inflation_rate_percent=0, monthly_expense_today=0)
    assert validate_retirement_inputs(inputs) == {}


NON_FINITE = [float('nan'), float('inf'), float('-inf')]


@pytest.mark.parametrize("value", NON_FINITE)
def test_loan_rejects_non_finite(home, value):
    assert validate_loan_inputs(home, value, 8.5, 20) == {'loan_amount': 'Value must be a finite number'}
    assert validate_loan_inputs(home, 5000000, value, 20) == {'interest_rate': 'Value must be a finite number'}
    assert validate_loan_inputs(home, 5000000, 8.5, value) == {'tenure': 'Value must be a finite number'}


@pytest.mark.parametrize("value", NON_FINITE)
def test_income_rejects_non_finite(value):
    assert validate_income(value, 1e13) == {'annual_income': 'Value must be a finite number'}


@pytest.mark.parametrize("value", NON_FINITE)
def test_sip_rejects_non_finite(value):
    assert validate_sip_inputs(value, 10, 11) == {'monthly_amount': 'Value must be a finite number'}
    assert validate_sip_inputs(5000, value, 11) == {'years': 'Value must be a finite number'}
    assert validate_sip_inputs(5000, 10, value) == {'annual_return_percent': 'Value must be a finite number'}


@pytest.mark.parametrize("field", [
    'current_age', 'life_expectancy', 'current_savings', 'monthly_contribution',
    'monthly_expense_today', 'expected_return_percent', 'inflation_rate_percent',
])
@pytest.mark.parametrize("value", NON_FINITE)
def test_retirement_rejects_non_finite(field, value):
    errors = validate_retirement_inputs(replace(RetirementInputs(), **{field: value}))
    assert errors[field] == 'Value must be a finite number'


def test_retirement_age_not_finite_skips_ordering_checks():
    errors = validate_retirement_inputs(replace(RetirementInputs(), retirement_age=float('nan')))
    assert errors == {'retirement_age': 'Value must be a finite number'}
