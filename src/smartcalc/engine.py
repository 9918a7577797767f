from collections import namedtuple
from enum import Enum
from functools import wraps
import math
import operator

from .formatting import format_number, number_text, round_half_up
from .util import (CalculationError, DivisionByZero, ResultTooLarge,
                   UnknownOperator, wrap_user_errors)


class Operator(Enum):
    '''
    Binary operators, valued by the symbol accepted on input.
    '''
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    MODULO = '%'

    @classmethod
    def parse(cls, symbol):
        '''
        Return operator for symbol, or symbol itself if already one.
        '''
        if isinstance(symbol, cls):
            return symbol
        try:
            return cls(symbol)
        except ValueError:
            raise UnknownOperator(symbol) from None

    @property
    def display(self):
        return _DISPLAY_SYMBOLS.get(self, self.value)


_DISPLAY_SYMBOLS = {
    Operator.MULTIPLY: '\N{MULTIPLICATION SIGN}',
    Operator.DIVIDE: '\N{DIVISION SIGN}',
}


def _remainder(left, right):
    # Sign of the dividend, like C's fmod; NaN rather than ValueError on 0.
    if right == 0:
        return math.nan
    return math.fmod(left, right)


OPERATIONS = {
    Operator.ADD: operator.__add__,
    Operator.SUBTRACT: operator.__sub__,
    Operator.MULTIPLY: operator.__mul__,
    Operator.DIVIDE: operator.__truediv__,
    Operator.MODULO: _remainder,
}

PRECISION = 8


def round_result(value, places=PRECISION):
    '''
    Round half away from zero to places decimals.

    Neutralizes binary floating point noise, e.g. 0.1 + 0.2.
    '''
    value = float(value)
    # Integral floats, which includes everything from 2 ** 52 up, have
    # nothing to round.
    if not math.isfinite(value) or value.is_integer():
        return value + 0.0
    # + 0.0 turns -0.0 into 0.0
    return float(round_half_up(value, places)) + 0.0


@wrap_user_errors(CalculationError)
def apply(left, right, op):
    '''
    Apply binary operator op to left and right.

    Raises a CalculationError subclass instead of returning a non-finite
    result.
    '''
    try:
        function = OPERATIONS[op]
    except (KeyError, TypeError):
        raise UnknownOperator(op) from None
    if op is Operator.DIVIDE and right == 0:
        raise DivisionByZero()
    try:
        result = function(left, right)
    except OverflowError as e:
        raise ResultTooLarge(e) from e
    if not math.isfinite(result):
        raise ResultTooLarge()
    return round_result(result)


class Action(Enum):
    DIGIT = 'digit'
    DECIMAL = 'decimal'
    OPERATOR = 'operator'
    CALCULATE = 'calculate'
    TOGGLE_SIGN = 'sign'
    SQUARE = 'square'
    BACKSPACE = 'backspace'
    CLEAR = 'clear'


Command = namedtuple('Command', 'action argument', defaults=(None,))


def command(f):
    '''
    Calculator command boundary.

    Dismisses any previous error, and records CalculationErrors rather than
    letting them propagate. Commands must not mutate state before failing.
    '''
    @wraps(f)
    def wrapper(self, *args):
        self.error = None
        try:
            f(self, *args)
        except CalculationError as e:
            self.error = e
    return wrapper


class Calculator:
    '''
    Pocket calculator state machine.

    Holds the number being typed, at most one pending operand and operator,
    and a one line history of the last operation. Evaluates strictly left to
    right; 3 + 4 × 5 is 35.
    '''

    INITIAL_INPUT = '0'
    MAX_INPUT_LENGTH = 12
    ERROR_DISPLAY = 'Error'

    def __init__(self):
        '''
        Create calculator showing 0.
        '''
        self.clear()

    @property
    def error_active(self):
        return self.error is not None

    @property
    def error_message(self):
        if self.error is None:
            return ''
        return self.error.args[0]

    @property
    def display_text(self):
        if self.error_active:
            return self.ERROR_DISPLAY
        return format_number(self._parse(self.current_input))

    @property
    def history_text(self):
        return self.history

    @wrap_user_errors(CalculationError)
    def _parse(self, text):
        return float(text)

    def _store(self, value):
        self.current_input = number_text(value)

    def execute(self, cmd):
        '''
        Run one Command against the calculator.
        '''
        handler = type(self).ACTIONS[cmd.action]
        if cmd.argument is None:
            handler(self)
        else:
            handler(self, cmd.argument)

    def clear(self):
        '''
        Reset everything, including errors and history.
        '''
        self.current_input = self.INITIAL_INPUT
        self.previous_operand = None
        self.pending_operator = None
        self.awaiting_operand = False
        self.history = ''
        self.error = None

    @command
    def input_digit(self, digit):
        '''
        Append digit to the number being typed, or start a new one.
        '''
        if self.awaiting_operand:
            self.current_input = digit
            self.awaiting_operand = False
        elif self.current_input == self.INITIAL_INPUT:
            self.current_input = digit
        else:
            self.current_input += digit
        # Silently, like a real one.
        self.current_input = self.current_input[:self.MAX_INPUT_LENGTH]

    @command
    def input_decimal_point(self):
        if self.awaiting_operand:
            self.current_input = '0.'
            self.awaiting_operand = False
        elif '.' not in self.current_input:
            self.current_input += '.'

    @command
    def toggle_sign(self):
        if self.current_input == self.INITIAL_INPUT:
            return
        if self.current_input.startswith('-'):
            self.current_input = self.current_input[1:]
        else:
            self.current_input = '-' + self.current_input

    @command
    def backspace(self):
        '''
        Delete the last typed character.

        Does nothing to a result that hasn't been typed over yet.
        '''
        if self.awaiting_operand:
            return
        remaining = self.current_input[:-1]
        if remaining in ('', '-'):
            remaining = self.INITIAL_INPUT
        self.current_input = remaining

    @command
    def select_operator(self, symbol):
        '''
        Set the pending operator, first evaluating any pending operation.

        Chaining evaluates left to right: 3 + 4 + is 7 +.
        '''
        op = Operator.parse(symbol)
        value = self._parse(self.current_input)
        if self.previous_operand is None:
            self.previous_operand = value
        elif self.pending_operator is not None:
            result = apply(self.previous_operand, value,
                           self.pending_operator)
            self._store(result)
            self.previous_operand = result
        self.awaiting_operand = True
        self.pending_operator = op
        self.history = '{} {}'.format(format_number(self.previous_operand),
                                      op.display)

    @command
    def calculate(self):
        '''
        Evaluate the pending operation (the = key).
        '''
        if self.previous_operand is None or self.pending_operator is None:
            return
        value = self._parse(self.current_input)
        result = apply(self.previous_operand, value, self.pending_operator)
        self.history = '{} {} {} ='.format(
            format_number(self.previous_operand),
            self.pending_operator.display,
            format_number(value))
        self._store(result)
        self.previous_operand = None
        self.pending_operator = None
        self.awaiting_operand = True

    @command
    def square(self):
        '''
        Square the current number.

        Leaves any pending operation alone: the square becomes its right
        operand.
        '''
        value = self._parse(self.current_input)
        result = apply(value, value, Operator.MULTIPLY)
        self.history = '{}\N{SUPERSCRIPT TWO} ='.format(format_number(value))
        self._store(result)
        self.awaiting_operand = True

    ACTIONS = {
        Action.DIGIT: input_digit,
        Action.DECIMAL: input_decimal_point,
        Action.OPERATOR: select_operator,
        Action.CALCULATE: calculate,
        Action.TOGGLE_SIGN: toggle_sign,
        Action.SQUARE: square,
        Action.BACKSPACE: backspace,
        Action.CLEAR: clear,
    }
