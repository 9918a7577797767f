from pytest import fixture

from smartcalc.engine import Calculator
from smartcalc.lexer import Lexer


@fixture
def calculator():
    return Calculator()


@fixture
def press(calculator):
    '''
    Type keys into the calculator fixture, returning what it displays.
    '''
    lexer = Lexer()

    def press(keys):
        for command in lexer.commands(keys):
            calculator.execute(command)
        return calculator.display_text
    return press
