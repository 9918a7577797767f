'''
Live keypad: every key is applied as soon as it's pressed.
'''

import asyncio

from prompt_toolkit import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import (FormattedTextControl, HSplit, Layout,
                                   Window, WindowAlign)
from prompt_toolkit.styles import Style

from .util import CalcError
from .engine import Calculator
from .lexer import Lexer


class ErrorTimer:
    '''
    Clear a calculator some time after it shows an error.

    Cancelled by any new input. Each arming gets a new generation, and a
    callback only clears if it is still the current one, so a late callback
    can't clear what the user typed since.
    '''

    def __init__(self, calculator, delay, on_clear=None):
        self.calculator = calculator
        self.delay = delay
        self.on_clear = on_clear
        self.generation = 0
        self._handle = None

    @property
    def armed(self):
        return self._handle is not None

    def arm(self, loop=None):
        '''
        Schedule clearing on loop, the running one by default.
        '''
        self.cancel()
        if loop is None:
            loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire,
                                       self.generation)

    def cancel(self):
        self.generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, generation):
        if generation != self.generation:
            return
        self._handle = None
        self.calculator.clear()
        if self.on_clear is not None:
            self.on_clear()


class Keypad:
    '''
    Interactive keypad for a calculator, on a prompt_toolkit Application.
    '''

    ERROR_CLEAR_DELAY = 2.0
    LEGEND = ('0-9 . + - * / %   = Enter   _ sign   q square   '
              '< Backspace   c Esc clear   ^C ^D quit')
    STYLE = Style.from_dict({
        'history': 'ansibrightblack',
        'history.error': 'ansired',
        'display': 'bold',
        'display.error': 'ansired bold',
        'legend': 'italic ansibrightblack',
    })

    def __init__(self, calculator=None, delay=None):
        self.calculator = calculator if calculator is not None \
            else Calculator()
        self.lexer = Lexer()
        self.application = None
        self.timer = ErrorTimer(self.calculator,
                                self.ERROR_CLEAR_DELAY if delay is None
                                else delay,
                                on_clear=self.invalidate)

    def press(self, data):
        '''
        Apply raw key data to the calculator.

        Unknown keys ring the bell and are otherwise ignored. Must be called
        from within the running event loop.
        '''
        self.timer.cancel()
        try:
            for cmd in self.lexer.commands(data):
                self.calculator.execute(cmd)
                if self.calculator.error_active:
                    self.timer.arm()
                    break
        except CalcError:
            self.bell()
        self.invalidate()

    def bell(self):
        if self.application is not None:
            self.application.output.bell()

    def invalidate(self):
        if self.application is not None:
            self.application.invalidate()

    def history_fragments(self):
        if self.calculator.error_active:
            return [('class:history.error', self.calculator.error_message)]
        return [('class:history', self.calculator.history_text)]

    def display_fragments(self):
        style = 'class:display'
        if self.calculator.error_active:
            style = 'class:display.error'
        return [(style, self.calculator.display_text)]

    def key_bindings(self):
        bindings = KeyBindings()

        @bindings.add('c-c')
        @bindings.add('c-d')
        def _(event):
            event.app.exit()

        # Named keys don't match <any> reliably, so bind them to what they
        # send.
        @bindings.add('enter')
        def _(event):
            self.press('\r')

        @bindings.add('backspace')
        def _(event):
            self.press('\x7f')

        @bindings.add('escape', eager=True)
        def _(event):
            self.press('\x1b')

        @bindings.add('<any>')
        def _(event):
            self.press(event.data)

        return bindings

    def layout(self):
        return Layout(HSplit([
            Window(FormattedTextControl(self.history_fragments),
                   height=1, align=WindowAlign.RIGHT),
            Window(FormattedTextControl(self.display_fragments),
                   height=1, align=WindowAlign.RIGHT),
            Window(height=1, char='\N{BOX DRAWINGS LIGHT HORIZONTAL}'),
            Window(FormattedTextControl([('class:legend', self.LEGEND)]),
                   height=1),
        ]))

    def run(self):
        '''
        Run keypad until quit.
        '''
        self.application = Application(layout=self.layout(),
                                       key_bindings=self.key_bindings(),
                                       style=self.STYLE,
                                       full_screen=False)
        try:
            self.application.run()
        finally:
            self.timer.cancel()
            self.application = None
