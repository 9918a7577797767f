'''
Number rendering for the display and for the stored input text, and the
decimal rounding both the display and the calculator use.
'''

from decimal import Decimal, ROUND_HALF_UP
import math


# Beyond these the display switches to exponential notation.
LARGE = 1e12
SMALL = 1e-6
# Fractional digits shown before rounding kicks in.
DISPLAY_DECIMALS = 8
EXPONENT_DECIMALS = 6


def number_text(num):
    '''
    Shortest decimal text that reads back as num.

    Same as JavaScript's String(num): integral values have no trailing
    ".0", positional notation is used between 1e-6 and 1e21, exponential
    with an unpadded exponent outside of it.
    '''
    num = float(num)
    if math.isnan(num):
        return 'NaN'
    if math.isinf(num):
        return 'Infinity' if num > 0 else '-Infinity'
    if num.is_integer() and abs(num) < 1e21:
        return str(int(num))
    if 1e-6 <= abs(num) < 1e21:
        return format(Decimal(repr(num)), 'f')
    mantissa, exponent = repr(num).split('e')
    return '{}e{:+d}'.format(mantissa, int(exponent))


def round_half_up(num, places):
    '''
    Round finite num half away from zero to places decimals, as a Decimal.

    Works on the shortest decimal text of num, so 0.1 + 0.2 rounds as
    0.30000000000000004 and an exact tie like 0.001953125 rounds up.
    '''
    return Decimal(repr(float(num))).quantize(Decimal(1).scaleb(-places),
                                              rounding=ROUND_HALF_UP)


def exponential(num, decimals=EXPONENT_DECIMALS):
    '''
    Exponential notation, exponent without zero padding: 1.500000e-7.
    '''
    mantissa, exponent = '{:.{}e}'.format(num, decimals).split('e')
    return '{}e{:+d}'.format(mantissa, int(exponent))


def format_number(num):
    '''
    Format number for the calculator display.
    '''
    if math.isnan(num):
        return '0'
    if math.isinf(num):
        return number_text(num)
    if abs(num) >= LARGE or (num != 0 and abs(num) < SMALL):
        return exponential(num)
    text = number_text(num)
    fractional = text.partition('.')[2]
    if len(fractional) > DISPLAY_DECIMALS:
        rounded = round_half_up(num, DISPLAY_DECIMALS)
        return format(rounded, 'f').rstrip('0').rstrip('.')
    return text
