"""Tests for result field metadata."""

import os
import sys
from dataclasses import fields

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from model.field_metadata import (
    CALCULATOR_RESULTS,
    FIELD_METADATA,
    get_calculator_fields,
    get_description,
    get_field_info,
    get_short_name,
    wrap_header,
)


def test_every_result_field_is_described():
    for records in CALCULATOR_RESULTS.values():
        for record in records:
            for f in fields(record):
                assert f.name in FIELD_METADATA, f"{record.__name__}.{f.name} has no metadata"


def test_calculator_fields():
    sip = get_calculator_fields('sip')
    assert 'maturity_value' in sip
    assert sip.count('maturity_value') == 1
    assert get_calculator_fields('emi') == ['emi', 'total_interest', 'total_amount']
    assert 'tax_in_slab' in get_calculator_fields('tax')
    assert get_calculator_fields('unknown') == []


def test_lookups():
    assert get_short_name('total_amount') == 'Total Payable'
    assert get_short_name('no_such_field') == 'no_such_field'
    assert get_description('no_such_field') == ''
    assert get_field_info('no_such_field') is None
    assert get_field_info('emi').short_name == 'EMI'


def test_wrap_header():
    assert wrap_header('Rate', 6) == ['Rate']
    assert wrap_header('Income in Slab', 10) == ['Income in', 'Slab']
