"""Tests for the MCP server tools module."""

import os
import sys
import json
import shutil
import pytest

# Add src and mcp-server to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../mcp-server')))

from tools import CalculatorTools


# Path to the project root (for reference files)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '../..'))


@pytest.fixture(scope="module")
def calc_tools():
    return CalculatorTools()


@pytest.fixture
def reference_copy(tmp_path):
    """A writable copy of the reference/ directory."""
    target = tmp_path / 'reference'
    shutil.copytree(os.path.join(PROJECT_ROOT, 'reference'), target)
    return target


class TestReferenceTools:
    """Tests for the reference table listings."""

    def test_list_loan_types(self, calc_tools):
        result = calc_tools.list_loan_types()
        assert result['max_loan_amount'] == 100000000
        assert set(result['loan_types']) == {'home', 'personal', 'car', 'education', 'business'}
        assert result['loan_types']['home']['max_tenure_years'] == 30

    def test_list_fund_categories(self, calc_tools):
        result = calc_tools.list_fund_categories()
        assert result['sip_limits']['max_years'] == 30
        assert result['fund_categories'][1]['name'] == 'Mid Cap'

    def test_list_inflation_options(self, calc_tools):
        result = calc_tools.list_inflation_options()
        assert result['default_option'] == '2024'
        assert {'year': '2022', 'rate': 6.7} in result['options']

    def test_reload_reference_data(self, reference_copy):
        calc_tools = CalculatorTools(str(reference_copy))
        assert calc_tools.reload_reference_data() == {
            'status': 'success', 'loan_types': 5, 'fund_categories': 5, 'inflation_options': 6
        }

        loan_file = reference_copy / 'loan-types.json'
        data = json.loads(loan_file.read_text(encoding='utf-8'))
        data['loanTypes'] = {'home': data['loanTypes']['home']}
        loan_file.write_text(json.dumps(data), encoding='utf-8')

        assert calc_tools.reload_reference_data()['loan_types'] == 1
        assert 'error' in calc_tools.calculate_emi('car')

    def test_custom_tax_policy(self, reference_copy):
        tax_file = reference_copy / 'income-tax.json'
        data = json.loads(tax_file.read_text(encoding='utf-8'))
        data['standardDeduction'] = 75000
        tax_file.write_text(json.dumps(data), encoding='utf-8')

        result = CalculatorTools(str(reference_copy)).calculate_income_tax(700000)
        assert result['taxable_income'] == 625000


class TestCalculateSip:
    """Tests for calculate_sip."""

    def test_defaults(self, calc_tools):
        result = calc_tools.calculate_sip()
        assert result['inputs'] == {'monthly_amount': 5000, 'years': 10, 'annual_return_percent': 11,
                                    'category': None}
        assert result['total_invested'] == 600000
        assert len(result['growth_series']) == 11
        assert result['growth_series'][-1]['invested'] == 600000

    def test_category_default_return(self, calc_tools):
        result = calc_tools.calculate_sip(category='mid cap')
        assert result['inputs']['annual_return_percent'] == 13
        assert result['inputs']['category'] == 'Mid Cap'

    def test_return_outside_category_band(self, calc_tools):
        result = calc_tools.calculate_sip(annual_return_percent=20, category='Large Cap')
        assert result['error'] == 'Invalid input'
        assert 'annual_return_percent' in result['fields']

    def test_amount_below_minimum(self, calc_tools):
        result = calc_tools.calculate_sip(monthly_amount=100)
        assert 'monthly_amount' in result['fields']

    def test_unknown_category(self, calc_tools):
        with pytest.raises(ValueError):
            calc_tools.calculate_sip(category='Crypto')


class TestCalculateEmi:
    """Tests for calculate_emi."""

    def test_defaults(self, calc_tools):
        result = calc_tools.calculate_emi()
        assert result['loan_type'] == 'Home Loan'
        assert result['months'] == 240
        assert result['emi'] == 43391

    def test_months(self, calc_tools):
        result = calc_tools.calculate_emi('car', 800000, 9, 60, 'months')
        assert result['months'] == 60
        assert result['total_amount'] == pytest.approx(result['emi'] * 60, abs=60)

    def test_unknown_loan_type(self, calc_tools):
        assert 'Unknown loan type' in calc_tools.calculate_emi('boat')['error']

    def test_invalid_inputs(self, calc_tools):
        result = calc_tools.calculate_emi('personal', 0, 30, 10)
        assert set(result['fields']) == {'loan_amount', 'interest_rate', 'tenure'}


class TestCalculateIncomeTax:
    """Tests for calculate_income_tax."""

    def test_breakdown(self, calc_tools):
        result = calc_tools.calculate_income_tax(2000000)
        assert result['regime'] == 'New Tax Regime'
        assert result['final_tax'] == pytest.approx(208000)
        assert len(result['slabs']) == 6
        assert result['slabs'][0]['range_label'] == '₹0 - ₹3,00,000'

    def test_rebate(self, calc_tools):
        result = calc_tools.calculate_income_tax(700000)
        assert result['final_tax'] == 0

    def test_negative_income(self, calc_tools):
        assert 'annual_income' in calc_tools.calculate_income_tax(-1)['fields']

    def test_non_finite_income(self, calc_tools):
        assert calc_tools.calculate_income_tax(float('nan'))['fields'] == {
            'annual_income': 'Value must be a finite number'}


class TestProjectRetirement:
    """Tests for project_retirement."""

    def test_defaults(self, calc_tools):
        result = calc_tools.project_retirement()
        assert result['inputs']['inflation_rate_percent'] == 5.4
        assert result['years_to_retirement'] == 30
        assert result['is_on_track'] is True

    def test_inflation_presets(self, calc_tools):
        assert calc_tools.project_retirement(inflation_option='2022')['inflation_rate_percent'] == 6.7
        custom = calc_tools.project_retirement(inflation_option='Custom', custom_inflation_percent=7)
        assert custom['inflation_rate_percent'] == 7
        assert calc_tools.project_retirement(inflation_option='Custom')['inflation_rate_percent'] == 6

    def test_shortfall(self, calc_tools):
        result = calc_tools.project_retirement(monthly_expense_today=150000)
        assert result['is_on_track'] is False
        assert result['additional_monthly_contribution'] > 0

    def test_invalid_ages(self, calc_tools):
        result = calc_tools.project_retirement(current_age=40, retirement_age=35)
        assert 'retirement_age' in result['fields']


class TestCompareLoans:
    """Tests for compare_loans."""

    def test_all_loan_types(self, calc_tools):
        result = calc_tools.compare_loans(1000000, 5)
        assert set(result['loans']) == {'home', 'personal', 'car', 'education', 'business'}
        assert result['skipped'] == {}
        assert result['lowest_total_interest'] == 'education'

    def test_tenure_beyond_some_limits(self, calc_tools):
        result = calc_tools.compare_loans(1000000, 10)
        assert set(result['skipped']) == {'personal', 'car'}
        assert 'tenure' in result['skipped']['personal']
        assert set(result['loans']) == {'home', 'education', 'business'}

    def test_selected_types(self, calc_tools):
        result = calc_tools.compare_loans(500000, 3, ['personal', 'car'])
        assert set(result['loans']) == {'personal', 'car'}
        assert result['lowest_total_interest'] == 'car'

    def test_unknown_type(self, calc_tools):
        assert 'boat' in calc_tools.compare_loans(500000, 3, ['boat'])['error']

    def test_nothing_eligible(self, calc_tools):
        result = calc_tools.compare_loans(500000000, 5)
        assert result['loans'] == {}
        assert result['lowest_total_interest'] is None
