from os import isatty
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL, ArgumentTypeError
import traceback

from prompt_toolkit import PromptSession

from .util import CalcError
from .engine import Calculator
from .lexer import Lexer
from .keypad import Keypad


def delay(text):
    '''
    Non-negative number of seconds.
    '''
    seconds = float(text)
    if not seconds >= 0:
        raise ArgumentTypeError('delay must be zero or more seconds')
    return seconds


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    mouse_support=False,
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump all lexemes matches and the commands they make.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(repr)>\t<command>')
        for line in self.args.expressions:
            for match in lexer.lex(line.rstrip('\n')):
                groups = lexer.matchedgroups(match)
                command = lexer.command(match) \
                    if lexer.isfeedable(match) else None
                print(*groups.keys(),
                      repr(match.group(0)),
                      command,
                      sep='\t')

    def _report(self, error):
        print(error.args[0], file=sys.stderr)
        if self.args.verbose:
            traceback.print_exception(type(error), error,
                                      error.__traceback__, file=sys.stderr)

    def _show(self, calculator):
        if self.args.history:
            print(calculator.history_text)
        print(calculator.display_text, flush=True)

    def executor(self):
        '''
        Run calculator over lines of keys, showing the display after each.
        '''
        calculator = Calculator()
        lexer = Lexer()
        for line in self.args.expressions:
            # Abort entire rest of line on error
            try:
                for command in lexer.commands(line.rstrip('\n')):
                    calculator.execute(command)
                    if calculator.error_active:
                        break
            except CalcError as e:
                self._report(e)
            if calculator.error_active:
                self._report(calculator.error)
                # No one to wait for; the error clears straight away.
                calculator.clear()
            else:
                self._show(calculator)

    def keypad(self):
        '''
        Run interactive keypad.
        '''
        Keypad(delay=self.args.clear_delay).run()

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Pocket calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='show tracebacks of errors')
        self.argument_parser.add_argument('-H', '--history',
                                          action='store_true',
                                          help='show history line too')
        self.argument_parser.add_argument('-d', '--clear-delay',
                                          type=delay,
                                          default=Keypad.ERROR_CLEAR_DELAY,
                                          metavar='SECONDS',
                                          help='keypad error display time')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-k', '--keypad', self.keypad),
                                      ('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
