'''
Display formatting tests
'''

import math

from smartcalc.formatting import format_number, number_text


def test_integers_without_fraction():
    assert format_number(12.0) == '12'
    assert format_number(-3.0) == '-3'
    assert format_number(0.0) == '0'
    assert format_number(-0.0) == '0'


def test_nan():
    assert format_number(math.nan) == '0'


def test_infinity():
    assert format_number(math.inf) == 'Infinity'
    assert format_number(-math.inf) == '-Infinity'


def test_small_is_exponential():
    assert format_number(0.0000001) == '1.000000e-7'
    assert format_number(-0.00000025) == '-2.500000e-7'


def test_large_is_exponential():
    assert format_number(1000000000000) == '1.000000e+12'
    assert format_number(-123456789012345.0) == '-1.234568e+14'


def test_just_below_large():
    assert format_number(999999999999.0) == '999999999999'


def test_just_above_small():
    assert format_number(0.000001) == '0.000001'


def test_long_fraction_rounded():
    assert format_number(1.123456789) == '1.12345679'


def test_long_fraction_trailing_zeros_stripped():
    assert format_number(2.100000001) == '2.1'
    assert format_number(3.000000001) == '3'


def test_short_fraction_untouched():
    assert format_number(0.1) == '0.1'
    assert format_number(12.5) == '12.5'


def test_number_text_positional():
    assert number_text(0.00001) == '0.00001'
    assert number_text(0.3) == '0.3'
    assert number_text(7) == '7'


def test_number_text_reads_back():
    for num in 1e21, 1.5e-8, -2.75, 123456.789:
        assert float(number_text(num)) == num


def test_ties_round_away_from_zero():
    assert format_number(0.001953125) == '0.00195313'
    assert format_number(-0.001953125) == '-0.00195313'


def test_number_text_exponential_below_micro():
    assert number_text(0.000001) == '0.000001'
    assert number_text(1.5e-7) == '1.5e-7'
    assert number_text(1e21) == '1e+21'
