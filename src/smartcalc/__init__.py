'''
Pocket calculator.

Two operands and one operator at a time, evaluated strictly left to right
the way a handheld calculator does: no precedence, no parentheses. Chained
operators evaluate as they go, so 3 + 4 + 5 = shows 7 on the second + and
12 on the =.

Keys can come from a line of text, a prompt, or a live keypad in the
terminal, where errors show for a couple of seconds before clearing.
'''

from .cli import CLI
from .lexer import Lexer
from .engine import Action, Calculator, Command, Operator, apply
from .formatting import format_number


__all__ = ('Calculator', 'Command', 'Action', 'Operator', 'apply',
           'format_number', 'Lexer', 'CLI')
