"""Static lookup tables used by the calculators' callers.

Loan types, fund categories and inflation presets are read from the JSON
files in reference/. None of them feed the engines directly; they provide
defaults and the ranges that input_validation checks against.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

REFERENCE_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), '../../reference'))


@dataclass(frozen=True)
class LoanType:
    key: str
    name: str
    min_rate: float
    max_rate: float
    max_tenure_years: int
    default_rate: float
    default_amount: float
    default_tenure: int


@dataclass(frozen=True)
class FundCategory:
    name: str
    min_return: float
    max_return: float
    default_return: float


@dataclass(frozen=True)
class SipLimits:
    min_monthly_amount: float = 500
    max_monthly_amount: float = 100000
    monthly_amount_step: float = 500
    min_years: int = 1
    max_years: int = 30
    default_monthly_amount: float = 5000
    default_years: int = 10


@dataclass(frozen=True)
class InflationOption:
    year: str
    rate: float

    @property
    def is_custom(self) -> bool:
        return self.year == CUSTOM_INFLATION


CUSTOM_INFLATION = 'Custom'


def _load(filename: str, reference_dir: Optional[str] = None) -> dict:
    path = os.path.join(reference_dir or REFERENCE_DIR, filename)
    logger.debug("Loading reference table %s", path)
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_max_loan_amount(reference_dir: Optional[str] = None) -> float:
    return _load('loan-types.json', reference_dir).get('maxLoanAmount', 0)


def load_loan_types(reference_dir: Optional[str] = None) -> Dict[str, LoanType]:
    """Load loan types keyed by their short name ('home', 'car', ...)."""
    data = _load('loan-types.json', reference_dir)
    raw = data.get('loanTypes', {})
    if not raw:
        raise ValueError("loan-types.json must contain a non-empty 'loanTypes' object")

    loan_types = {}
    for key, cfg in raw.items():
        if cfg['minRate'] > cfg['maxRate']:
            raise ValueError(f"Loan type '{key}' has minRate above maxRate")
        loan_types[key] = LoanType(
            key=key,
            name=cfg.get('name', key),
            min_rate=cfg['minRate'],
            max_rate=cfg['maxRate'],
            max_tenure_years=cfg['maxTenureYears'],
            default_rate=cfg.get('defaultRate', cfg['minRate']),
            default_amount=cfg.get('defaultAmount', 0),
            default_tenure=cfg.get('defaultTenure', 1)
        )
    return loan_types


def get_loan_type(key: str, reference_dir: Optional[str] = None) -> LoanType:
    loan_types = load_loan_types(reference_dir)
    if key not in loan_types:
        raise ValueError(f"Unknown loan type '{key}'. Available: {', '.join(loan_types)}")
    return loan_types[key]


def load_fund_categories(reference_dir: Optional[str] = None) -> List[FundCategory]:
    data = _load('fund-categories.json', reference_dir)
    raw = data.get('fundCategories', [])
    if not raw:
        raise ValueError("fund-categories.json must contain a 'fundCategories' array with at least one entry")
    return [
        FundCategory(
            name=c['name'],
            min_return=c['minReturn'],
            max_return=c['maxReturn'],
            default_return=c.get('defaultReturn', c['minReturn'])
        )
        for c in raw
    ]


def get_fund_category(name: str, reference_dir: Optional[str] = None) -> FundCategory:
    """Look up a fund category by name, ignoring case ('large cap' works)."""
    for category in load_fund_categories(reference_dir):
        if category.name.lower() == name.strip().lower():
            return category
    raise ValueError(f"Unknown fund category '{name}'")


def load_sip_limits(reference_dir: Optional[str] = None) -> SipLimits:
    limits = _load('fund-categories.json', reference_dir).get('sipLimits', {})
    defaults = SipLimits()
    return SipLimits(
        min_monthly_amount=limits.get('minMonthlyAmount', defaults.min_monthly_amount),
        max_monthly_amount=limits.get('maxMonthlyAmount', defaults.max_monthly_amount),
        monthly_amount_step=limits.get('monthlyAmountStep', defaults.monthly_amount_step),
        min_years=limits.get('minYears', defaults.min_years),
        max_years=limits.get('maxYears', defaults.max_years),
        default_monthly_amount=limits.get('defaultMonthlyAmount', defaults.default_monthly_amount),
        default_years=limits.get('defaultYears', defaults.default_years)
    )


def load_inflation_options(reference_dir: Optional[str] = None) -> List[InflationOption]:
    data = _load('inflation-rates.json', reference_dir)
    return [InflationOption(year=str(o['year']), rate=o['rate']) for o in data.get('options', [])]


def default_inflation_option(reference_dir: Optional[str] = None) -> str:
    return str(_load('inflation-rates.json', reference_dir).get('defaultOption', CUSTOM_INFLATION))


def resolve_inflation_rate(option: str, custom_rate: Optional[float] = None,
                           reference_dir: Optional[str] = None) -> float:
    """Turn an inflation preset into a percentage rate.

    'Custom' returns custom_rate. A preset that is not in the table (or a
    missing custom rate) falls back to the table's fallbackRate.
    """
    data = _load('inflation-rates.json', reference_dir)
    fallback = data.get('fallbackRate', 6)
    for o in data.get('options', []):
        if str(o['year']) == str(option):
            if o['year'] == CUSTOM_INFLATION:
                return fallback if custom_rate is None else custom_rate
            return o['rate'] or fallback
    logger.debug("Inflation option %r not found, using fallback rate %s", option, fallback)
    return fallback
