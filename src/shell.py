#!/usr/bin/env python3
"""Interactive command shell for the financial calculators.

Every calculator command takes key=value arguments; anything left out
falls back to the defaults in reference/. Values containing spaces can be
quoted (category="Mid Cap").

Usage:
    python src/shell.py

Commands:
    sip [amount=] [years=] [rate=] [category=]      - SIP maturity value and growth
    emi [type=] [amount=] [rate=] [tenure=] [unit=] - Loan EMI
    tax <income> | tax income=<income>             - Income tax breakdown
    retire [current_age=] [retirement_age=] ...    - Retirement plan
    loantypes / funds / inflation                  - Show reference tables
    fields [calculator|field]                      - Describe result fields
    help                                           - Show help message
    exit/quit                                      - Exit the shell

Examples:
    > sip amount=10000 years=15 category="Small Cap"
    > emi type=car amount=800000 tenure=60 unit=months
    > tax 1500000
    > retire current_age=35 contribution=25000 inflation=Custom custom_inflation=7
"""

import sys
import os
import cmd
import shlex
import readline

# Configure readline for tab completion
# This must be done before the cmd.Cmd class is used
try:
    # For Unix/Linux/macOS - use libedit or GNU readline
    if 'libedit' in readline.__doc__:
        # macOS uses libedit which has different syntax
        readline.parse_and_bind("bind ^I rl_complete")
    else:
        # GNU readline (Linux)
        readline.parse_and_bind("tab: complete")
except (AttributeError, TypeError):
    pass  # readline might not be fully available

# Add src directory to path for imports
sys.path.insert(0, os.path.dirname(__file__))

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
from model.field_metadata import CALCULATOR_RESULTS, FIELD_METADATA, get_calculator_fields
from render.renderers import (
    SipRenderer,
    EmiRenderer,
    TaxDetailsRenderer,
    RetirementRenderer,
    format_inr,
)


# Argument keys accepted by each calculator command
COMMAND_KEYS = {
    'sip': ['amount', 'years', 'rate', 'category'],
    'emi': ['type', 'amount', 'rate', 'tenure', 'unit'],
    'tax': ['income'],
    'retire': ['current_age', 'retirement_age', 'life_expectancy', 'savings', 'contribution',
               'rate', 'expense', 'inflation', 'custom_inflation'],
}


def parse_kv_args(arg: str, allowed: list) -> dict:
    """Parse 'key=value key2="two words"' into a dict.

    Raises:
        ValueError: on tokens without '=' or keys not in allowed
    """
    result = {}
    for token in shlex.split(arg):
        if '=' not in token:
            raise ValueError(f"Expected key=value, got '{token}'")
        key, value = token.split('=', 1)
        key = key.strip().lower()
        if key not in allowed:
            raise ValueError(f"Unknown argument '{key}'. Expected one of: {', '.join(allowed)}")
        result[key] = value.strip()
    return result


def _number(args: dict, key: str, default, cast=float):
    if key not in args:
        return default
    try:
        return cast(args[key])
    except ValueError:
        raise ValueError(f"'{key}' must be a number, got '{args[key]}'")


def print_errors(errors: dict) -> None:
    for field_name, message in errors.items():
        print(f"Error: {field_name}: {message}")


class CalculatorShell(cmd.Cmd):
    """Interactive shell for running the financial calculators."""

    intro = """
Financial Calculators Interactive Shell
=======================================
Calculators: sip, emi, tax, retire
Type 'help' for available commands.
Type 'exit' or 'quit' to exit.
"""
    prompt = '> '

    def __init__(self, tax_details: IncomeTaxDetails = None):
        super().__init__()
        self.tax_details = tax_details or IncomeTaxDetails()
        self.loan_types = load_loan_types()
        self.max_loan_amount = load_max_loan_amount()
        self.sip_limits = load_sip_limits()

    def preloop(self):
        """Set up readline before entering the command loop."""
        try:
            # Set completer delimiters - space separates arguments
            readline.set_completer_delims(' \t\n')
            if 'libedit' in (readline.__doc__ or ''):
                readline.parse_and_bind("bind ^I rl_complete")
            else:
                readline.parse_and_bind("tab: complete")
        except (AttributeError, TypeError):
            pass  # readline might not be fully available

    def _run(self, command: str, arg: str, runner) -> None:
        try:
            args = parse_kv_args(arg, COMMAND_KEYS[command])
            runner(args)
        except ValueError as e:
            print(f"Error: {e}")

    def do_sip(self, arg: str):
        """Estimate SIP returns.

        Usage: sip [amount=<monthly>] [years=<n>] [rate=<percent>] [category=<name>]

        The expected return defaults to the fund category's default return
        and must stay inside the category's band.

        Examples:
            sip
            sip amount=10000 years=20 category="Mid Cap" rate=13.5
        """
        def run(args):
            category = get_fund_category(args['category']) if 'category' in args else load_fund_categories()[0]
            amount = _number(args, 'amount', self.sip_limits.default_monthly_amount)
            years = _number(args, 'years', self.sip_limits.default_years, int)
            rate = _number(args, 'rate', category.default_return)
            errors = validate_sip_inputs(amount, years, rate, category, self.sip_limits)
            if errors:
                print_errors(errors)
                return
            SipRenderer(amount, years, rate, category.name).render({
                'summary': sip_summary(amount, years, rate),
                'series': sip_growth_series(amount, years, rate)
            })
        self._run('sip', arg, run)

    def do_emi(self, arg: str):
        """Calculate a loan EMI.

        Usage: emi [type=<loan type>] [amount=<principal>] [rate=<percent>] [tenure=<n>] [unit=years|months]

        Use 'loantypes' to list loan types with their rate and tenure limits.

        Examples:
            emi
            emi type=personal amount=300000 rate=12 tenure=36 unit=months
        """
        def run(args):
            key = args.get('type', 'home')
            if key not in self.loan_types:
                raise ValueError(f"Unknown loan type '{key}'. Available: {', '.join(self.loan_types)}")
            loan = self.loan_types[key]
            amount = _number(args, 'amount', loan.default_amount)
            rate = _number(args, 'rate', loan.default_rate)
            tenure = _number(args, 'tenure', loan.default_tenure)
            unit = args.get('unit', 'years')
            errors = validate_loan_inputs(loan, amount, rate, tenure, unit, self.max_loan_amount)
            if errors:
                print_errors(errors)
                return
            months = tenure_in_months(tenure, unit)
            EmiRenderer(amount, rate, months, loan.name).render(calculate_emi(amount, rate, months))
        self._run('emi', arg, run)

    def do_tax(self, arg: str):
        """Estimate income tax.

        Usage: tax <annual income>
               tax income=<annual income>
        """
        if arg.strip() and '=' not in arg:
            arg = f"income={arg.strip()}"

        def run(args):
            if 'income' not in args:
                print("Error: Please specify the annual income.")
                print("Usage: tax <annual income>")
                return
            income = _number(args, 'income', None)
            errors = validate_income(income, self.tax_details.max_income)
            if errors:
                print_errors(errors)
                return
            TaxDetailsRenderer(self.tax_details.regime).render(self.tax_details.income_tax(income))
        self._run('tax', arg, run)

    def do_retire(self, arg: str):
        """Project a retirement plan.

        Usage: retire [current_age=] [retirement_age=] [life_expectancy=] [savings=]
                      [contribution=] [rate=] [expense=] [inflation=<year>|Custom] [custom_inflation=]

        Examples:
            retire
            retire current_age=40 retirement_age=58 savings=2000000 contribution=30000
            retire inflation=Custom custom_inflation=7.5
        """
        def run(args):
            defaults = RetirementInputs()
            option = args.get('inflation', default_inflation_option())
            custom = _number(args, 'custom_inflation', None)
            inputs = RetirementInputs(
                current_age=_number(args, 'current_age', defaults.current_age, int),
                retirement_age=_number(args, 'retirement_age', defaults.retirement_age, int),
                life_expectancy=_number(args, 'life_expectancy', defaults.life_expectancy, int),
                current_savings=_number(args, 'savings', defaults.current_savings),
                monthly_contribution=_number(args, 'contribution', defaults.monthly_contribution),
                expected_return_percent=_number(args, 'rate', defaults.expected_return_percent),
                inflation_rate_percent=resolve_inflation_rate(option, custom),
                monthly_expense_today=_number(args, 'expense', defaults.monthly_expense_today),
            )
            errors = validate_retirement_inputs(inputs)
            if errors:
                print_errors(errors)
                return
            RetirementRenderer(inputs).render(retirement_projection(inputs))
        self._run('retire', arg, run)

    def do_loantypes(self, arg: str):
        """List loan types with their interest rate band and maximum tenure."""
        print()
        print(f"  {'Type':<10} {'Name':<16} {'Rate Band':>12} {'Max Tenure':>11} {'Default Amount':>16}")
        print(f"  {'-' * 10} {'-' * 16} {'-' * 12} {'-' * 11} {'-' * 16}")
        for key, loan in self.loan_types.items():
            band = f"{loan.min_rate:g}-{loan.max_rate:g}%"
            print(f"  {key:<10} {loan.name:<16} {band:>12} {str(loan.max_tenure_years) + ' yrs':>11} "
                  f"{format_inr(loan.default_amount):>16}")
        print(f"\n  Maximum loan amount: {format_inr(self.max_loan_amount)}")
        print()

    def do_funds(self, arg: str):
        """List fund categories with their expected return band."""
        print()
        print(f"  {'Category':<14} {'Return Band':>12} {'Default':>8}")
        print(f"  {'-' * 14} {'-' * 12} {'-' * 8}")
        for category in load_fund_categories():
            band = f"{category.min_return:g}-{category.max_return:g}%"
            print(f"  {category.name:<14} {band:>12} {str(category.default_return) + '%':>8}")
        print()

    def do_inflation(self, arg: str):
        """List inflation presets usable with 'retire inflation=<year>'."""
        default = default_inflation_option()
        print()
        for option in load_inflation_options():
            marker = "  <- default" if option.year == default else ""
            rate = "custom_inflation=<rate>" if option.is_custom else f"{option.rate}%"
            print(f"  {option.year:<8} {rate}{marker}")
        print()

    def do_fields(self, arg: str):
        """Describe result fields.

        Usage: fields [calculator | field_name]

        With no argument lists the fields of every calculator. With a
        calculator name (sip, emi, tax, retire) lists that calculator's fields.
        With a field name shows its description.
        """
        name = arg.strip()
        if name in CALCULATOR_RESULTS:
            calculators = [name]
        elif name:
            info = FIELD_METADATA.get(name)
            if info is None:
                print(f"Error: Unknown field '{name}'")
                print("Use 'fields' without arguments to see all available fields.")
                return
            print(f"\n{name}:")
            print(f"  Short name: {info.short_name}")
            print(f"  Description: {info.description}")
            print()
            return
        else:
            calculators = list(CALCULATOR_RESULTS)

        for calculator in calculators:
            print(f"\n{calculator}:")
            for field_name in get_calculator_fields(calculator):
                info = FIELD_METADATA.get(field_name)
                description = info.description if info else ""
                print(f"  {field_name:<32} {description}")
        print()

    def do_exit(self, arg: str):
        """Exit the shell."""
        print("Goodbye!")
        return True

    def do_quit(self, arg: str):
        """Exit the shell."""
        return self.do_exit(arg)

    def do_EOF(self, arg: str):
        """Handle Ctrl+D to exit."""
        print()  # Print newline for clean exit
        return self.do_exit(arg)

    def emptyline(self):
        """Do nothing on empty line."""
        pass

    def default(self, line: str):
        """Handle unknown commands."""
        print(f"Unknown command: {line}")
        print("Type 'help' for available commands.")

    def _complete_keys(self, command: str, text: str) -> list:
        return [f"{k}=" for k in COMMAND_KEYS[command] if k.startswith(text)]

    def complete_sip(self, text, line, begidx, endidx):
        return self._complete_keys('sip', text)

    def complete_emi(self, text, line, begidx, endidx):
        if text.startswith('type='):
            return [f"type={k}" for k in self.loan_types if f"type={k}".startswith(text)]
        return self._complete_keys('emi', text)

    def complete_tax(self, text, line, begidx, endidx):
        return self._complete_keys('tax', text)

    def complete_retire(self, text, line, begidx, endidx):
        return self._complete_keys('retire', text)

    def complete_fields(self, text, line, begidx, endidx):
        candidates = list(CALCULATOR_RESULTS) + list(FIELD_METADATA)
        return [c for c in candidates if c.startswith(text)]

    def complete_help(self, text, line, begidx, endidx):
        """Tab completion for the help command."""
        commands = ['sip', 'emi', 'tax', 'retire', 'loantypes', 'funds', 'inflation', 'fields', 'exit', 'quit']
        return [c for c in commands if c.startswith(text)]


def main():
    shell = CalculatorShell()
    shell.cmdloop()


if __name__ == "__main__":
    main()
