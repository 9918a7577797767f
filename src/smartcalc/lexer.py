from functools import reduce
import operator

import regex

from .util import CalcError
from .engine import Action, Command, Operator


class Lexer:
    '''
    Lexer for calculator keystrokes.

    Every lexeme is a single key, except runs of blanks. Works the same on
    a typed line and on raw terminal key data, so Enter, Backspace and
    Escape are lexed from their control characters.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    DIGIT = r'[0-9]'
    DECIMAL = r'\.'
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                      (op.value for op in Operator))) + r')'
    # = or Enter, whichever the terminal sends
    CALCULATE = r'[=\r\n]'
    # _ like dc's negative sign
    SIGN = '[_\N{PLUS-MINUS SIGN}]'
    SQUARE = '[\N{SUPERSCRIPT TWO}q]'
    # < or Backspace, as ^H or DEL
    BACKSPACE = r'[<\x08\x7f]'
    # c or Escape
    CLEAR = r'[cC\x1b]'
    SPACE = r'[\ \t]+'

    # All possible lexemes. Group names are Action values.
    LEXEME = r'(?<digit>' + DIGIT + r')|' \
             r'(?<decimal>' + DECIMAL + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<calculate>' + CALCULATE + r')|' \
             r'(?<sign>' + SIGN + r')|' \
             r'(?<square>' + SQUARE + r')|' \
             r'(?<backspace>' + BACKSPACE + r')|' \
             r'(?<clear>' + CLEAR + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERBOSE},
                   0)

    # Lexemes whose text is passed on to the calculator.
    ARGUMENTS = {Action.DIGIT, Action.OPERATOR}

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Raises CalcError on the first bad lexeme, after yielding all the
        good ones before it.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise CalcError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to a calculator.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return matched groups of a lexeme, by name.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def command(self, match):
        '''
        Return calculator Command for a feedable lexeme.
        '''
        (name, text), = self.matchedgroups(match).items()
        action = Action(name)
        if action in type(self).ARGUMENTS:
            return Command(action, text)
        return Command(action)

    def commands(self, line):
        '''
        Yield calculator Commands for all keys in line.
        '''
        for match in self.lex(line):
            if self.isfeedable(match):
                yield self.command(match)
