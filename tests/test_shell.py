"""Tests for the interactive shell functionality."""

import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from shell import CalculatorShell, COMMAND_KEYS, parse_kv_args


@pytest.fixture
def shell():
    return CalculatorShell()


class TestParseArgs:
    """Tests for key=value argument parsing."""

    def test_empty(self):
        assert parse_kv_args('', COMMAND_KEYS['sip']) == {}

    def test_quoted_values(self):
        args = parse_kv_args('category="Mid Cap" years=5', COMMAND_KEYS['sip'])
        assert args == {'category': 'Mid Cap', 'years': '5'}

    def test_keys_are_case_insensitive(self):
        assert parse_kv_args('AMOUNT=1000', COMMAND_KEYS['sip']) == {'amount': '1000'}

    def test_missing_equals(self):
        with pytest.raises(ValueError, match='key=value'):
            parse_kv_args('amount 1000', COMMAND_KEYS['sip'])

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown argument 'foo'"):
            parse_kv_args('foo=1', COMMAND_KEYS['sip'])


class TestCalculatorCommands:
    """Tests for the calculator commands."""

    def test_sip(self, shell, capsys):
        shell.onecmd('sip amount=10000 years=15 category="Small Cap"')
        out = capsys.readouterr().out
        assert 'Small Cap' in out
        assert '₹18,00,000' in out

    def test_sip_rate_outside_category_band(self, shell, capsys):
        shell.onecmd('sip category="Large Cap" rate=20')
        assert 'Error: annual_return_percent:' in capsys.readouterr().out

    def test_sip_non_numeric(self, shell, capsys):
        shell.onecmd('sip years=abc')
        assert "Error: 'years' must be a number" in capsys.readouterr().out

    def test_sip_unknown_category(self, shell, capsys):
        shell.onecmd('sip category=Crypto')
        assert "Error: Unknown fund category 'Crypto'" in capsys.readouterr().out

    def test_emi_defaults(self, shell, capsys):
        shell.onecmd('emi')
        out = capsys.readouterr().out
        assert 'HOME LOAN EMI' in out
        assert '₹43,391' in out

    def test_emi_months(self, shell, capsys):
        shell.onecmd('emi type=personal amount=300000 rate=12 tenure=36 unit=months')
        out = capsys.readouterr().out
        assert 'PERSONAL LOAN EMI' in out
        assert '36 months' in out

    def test_emi_unknown_type(self, shell, capsys):
        shell.onecmd('emi type=boat')
        assert "Error: Unknown loan type 'boat'" in capsys.readouterr().out

    def test_emi_rate_outside_band(self, shell, capsys):
        shell.onecmd('emi rate=7')
        assert 'Error: interest_rate:' in capsys.readouterr().out

    def test_tax_bare_number(self, shell, capsys):
        shell.onecmd('tax 2000000')
        out = capsys.readouterr().out
        assert '₹2,08,000' in out

    def test_tax_keyword(self, shell, capsys):
        shell.onecmd('tax income=700000')
        out = capsys.readouterr().out
        assert 'Take Home (Annual)' in out
        assert '₹7,00,000' in out

    def test_tax_without_income(self, shell, capsys):
        shell.onecmd('tax')
        assert 'Please specify the annual income' in capsys.readouterr().out

    def test_tax_negative_income(self, shell, capsys):
        shell.onecmd('tax -5')
        assert 'Error: annual_income:' in capsys.readouterr().out

    def test_tax_not_a_number(self, shell, capsys):
        shell.onecmd('tax nan')
        assert 'Error: annual_income: Value must be a finite number' in capsys.readouterr().out

    def test_retire(self, shell, capsys):
        shell.onecmd('retire expense=150000')
        assert 'Action needed' in capsys.readouterr().out

    def test_retire_custom_inflation(self, shell, capsys):
        shell.onecmd('retire inflation=Custom custom_inflation=7.5')
        assert '7.50%' in capsys.readouterr().out

    def test_retire_invalid_ages(self, shell, capsys):
        shell.onecmd('retire current_age=50 retirement_age=45')
        assert 'Error: retirement_age:' in capsys.readouterr().out


class TestReferenceCommands:
    """Tests for the reference table and field commands."""

    def test_loantypes(self, shell, capsys):
        shell.onecmd('loantypes')
        out = capsys.readouterr().out
        assert 'Home Loan' in out
        assert '8-12%' in out
        assert '₹10,00,00,000' in out

    def test_funds(self, shell, capsys):
        shell.onecmd('funds')
        out = capsys.readouterr().out
        assert 'Hybrid Fund' in out
        assert '14-16%' in out

    def test_inflation(self, shell, capsys):
        shell.onecmd('inflation')
        out = capsys.readouterr().out
        assert '2024     5.4%  <- default' in out
        assert 'custom_inflation=<rate>' in out

    def test_fields_for_calculator(self, shell, capsys):
        shell.onecmd('fields emi')
        out = capsys.readouterr().out
        assert 'total_interest' in out
        assert 'maturity_value' not in out

    def test_fields_single_field(self, shell, capsys):
        shell.onecmd('fields corpus_multiple')
        out = capsys.readouterr().out
        assert 'Short name: Multiple' in out

    def test_fields_unknown(self, shell, capsys):
        shell.onecmd('fields nope')
        assert "Unknown field 'nope'" in capsys.readouterr().out


class TestShellBehavior:
    """Tests for shell housekeeping."""

    def test_unknown_command(self, shell, capsys):
        shell.onecmd('bogus')
        assert 'Unknown command: bogus' in capsys.readouterr().out

    def test_empty_line(self, shell, capsys):
        assert not shell.onecmd('')
        assert capsys.readouterr().out == ''

    def test_exit(self, shell, capsys):
        assert shell.onecmd('exit') is True
        assert 'Goodbye!' in capsys.readouterr().out

    def test_quit_and_eof(self, shell):
        assert shell.onecmd('quit') is True
        assert shell.onecmd('EOF') is True

    def test_complete_emi_type(self, shell):
        assert shell.complete_emi('type=c', 'emi type=c', 4, 10) == ['type=car']

    def test_complete_keys(self, shell):
        assert shell.complete_retire('cu', 'retire cu', 7, 9) == ['current_age=', 'custom_inflation=']

    def test_complete_help(self, shell):
        assert shell.complete_help('e', 'help e', 5, 6) == ['emi', 'exit']
