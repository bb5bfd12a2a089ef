import sys
import os
import logging
import argparse

sys.path.insert(0, os.path.dirname(__file__))

from tax.IncomeTaxDetails import IncomeTaxDetails
from calc.emi_calculator import calculate_emi, tenure_in_months, TENURE_UNITS
from calc.sip_calculator import sip_growth_series, sip_summary
from calc.retirement_calculator import retirement_projection
from calc.reference_data import (
    load_loan_types,
    load_max_loan_amount,
    load_fund_categories,
    load_sip_limits,
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
from render.renderers import (
    RENDERER_REGISTRY,
    SipRenderer,
    EmiRenderer,
    TaxDetailsRenderer,
    RetirementRenderer,
)

logger = logging.getLogger(__name__)


def _report_errors(parser: argparse.ArgumentParser, errors: dict) -> None:
    if errors:
        parser.error("; ".join(f"{field}: {message}" for field, message in errors.items()))


def run_sip(args, parser) -> None:
    limits = load_sip_limits()
    category = get_fund_category(args.category) if args.category else load_fund_categories()[0]
    amount = args.amount if args.amount is not None else limits.default_monthly_amount
    years = args.years if args.years is not None else limits.default_years
    rate = args.rate if args.rate is not None else category.default_return

    _report_errors(parser, validate_sip_inputs(amount, years, rate, category, limits))
    logger.debug("SIP: amount=%s years=%s rate=%s category=%s", amount, years, rate, category.name)

    renderer = SipRenderer(amount, years, rate, category.name)
    renderer.render({
        'summary': sip_summary(amount, years, rate),
        'series': sip_growth_series(amount, years, rate)
    })


def run_emi(args, parser) -> None:
    loan_types = load_loan_types()
    loan = loan_types[args.loan_type]
    amount = args.amount if args.amount is not None else loan.default_amount
    rate = args.rate if args.rate is not None else loan.default_rate
    tenure = args.tenure if args.tenure is not None else loan.default_tenure

    _report_errors(parser, validate_loan_inputs(loan, amount, rate, tenure, args.tenure_unit,
                                                load_max_loan_amount()))
    months = tenure_in_months(tenure, args.tenure_unit)
    logger.debug("EMI: loan=%s amount=%s rate=%s months=%s", loan.key, amount, rate, months)

    renderer = EmiRenderer(amount, rate, months, loan.name)
    renderer.render(calculate_emi(amount, rate, months))


def run_tax(args, parser) -> None:
    details = IncomeTaxDetails()
    if args.income is None:
        parser.error("--income is required in TaxDetails mode")
    _report_errors(parser, validate_income(args.income, details.max_income))

    renderer = TaxDetailsRenderer(details.regime)
    renderer.render(details.income_tax(args.income))


def run_retirement(args, parser) -> None:
    defaults = RetirementInputs()
    inflation = resolve_inflation_rate(args.inflation, args.custom_inflation)
    inputs = RetirementInputs(
        current_age=args.current_age if args.current_age is not None else defaults.current_age,
        retirement_age=args.retirement_age if args.retirement_age is not None else defaults.retirement_age,
        life_expectancy=args.life_expectancy if args.life_expectancy is not None else defaults.life_expectancy,
        current_savings=args.savings if args.savings is not None else defaults.current_savings,
        monthly_contribution=args.contribution if args.contribution is not None else defaults.monthly_contribution,
        expected_return_percent=args.rate if args.rate is not None else defaults.expected_return_percent,
        inflation_rate_percent=inflation,
        monthly_expense_today=args.expense if args.expense is not None else defaults.monthly_expense_today,
    )
    _report_errors(parser, validate_retirement_inputs(inputs))
    logger.debug("Retirement: %s", inputs)

    renderer = RetirementRenderer(inputs)
    renderer.render(retirement_projection(inputs))


MODE_RUNNERS = {
    'Sip': run_sip,
    'Emi': run_emi,
    'TaxDetails': run_tax,
    'Retirement': run_retirement,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Financial calculators: SIP returns, loan EMI, income tax and retirement planning',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  Sip         SIP maturity value and yearly growth table (default)
  Emi         Monthly installment and total interest for a loan
  TaxDetails  Income tax by slab with cess and rebate
  Retirement  Projected corpus against the corpus retirement needs

Examples:
  python src/Program.py --mode Sip --amount 5000 --years 10 --category "Mid Cap"
  python src/Program.py --mode Emi --loan-type home --amount 5000000 --rate 8.5 --tenure 20
  python src/Program.py --mode TaxDetails --income 1200000
  python src/Program.py --mode Retirement --current-age 30 --retirement-age 60 --inflation 2024
        """
    )
    parser.add_argument('--mode', '-m',
                        choices=list(RENDERER_REGISTRY.keys()),
                        default='Sip',
                        help='Calculator to run (default: Sip)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log debug details to stderr')

    common = parser.add_argument_group('shared options')
    common.add_argument('--amount', type=float, help='SIP monthly amount or loan amount')
    common.add_argument('--rate', type=float, help='Annual return or interest rate in percent')

    sip = parser.add_argument_group('Sip')
    sip.add_argument('--category', help='Fund category (Large Cap, Mid Cap, Small Cap, Index Fund, Hybrid Fund)')
    sip.add_argument('--years', type=int, help='Investment period in years')

    emi = parser.add_argument_group('Emi')
    emi.add_argument('--loan-type', default='home', choices=list(load_loan_types().keys()),
                     help='Loan type (default: home)')
    emi.add_argument('--tenure', type=float, help='Loan tenure')
    emi.add_argument('--tenure-unit', default='years', choices=TENURE_UNITS, help='Unit of --tenure (default: years)')

    tax = parser.add_argument_group('TaxDetails')
    tax.add_argument('--income', type=float, help='Gross annual income')

    retire = parser.add_argument_group('Retirement')
    retire.add_argument('--current-age', type=int)
    retire.add_argument('--retirement-age', type=int)
    retire.add_argument('--life-expectancy', type=int)
    retire.add_argument('--savings', type=float, help='Current savings')
    retire.add_argument('--contribution', type=float, help='Monthly contribution')
    retire.add_argument('--expense', type=float, help="Today's monthly expense")
    retire.add_argument('--inflation', default=default_inflation_option(),
                        help='Inflation preset year (2020-2024) or Custom')
    retire.add_argument('--custom-inflation', type=float, help='Inflation rate used with --inflation Custom')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr
    )

    try:
        MODE_RUNNERS[args.mode](args, parser)
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
