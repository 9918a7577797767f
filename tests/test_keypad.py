'''
Keypad adapter tests, without a terminal
'''

import asyncio

from smartcalc.engine import Calculator
from smartcalc.keypad import ErrorTimer, Keypad


def test_press():
    keypad = Keypad()
    keypad.press('6')
    keypad.press('*')
    keypad.press('7')
    keypad.press('\r')
    assert keypad.calculator.display_text == '42'
    assert keypad.display_fragments() == [('class:display', '42')]
    assert keypad.history_fragments() == \
        [('class:history', '6 \N{MULTIPLICATION SIGN} 7 =')]


def test_unknown_keys_ignored():
    keypad = Keypad()
    keypad.press('4')
    keypad.press('x')
    assert keypad.calculator.current_input == '4'


def test_escape_clears():
    keypad = Keypad()
    keypad.press('4+')
    keypad.press('\x1b')
    assert keypad.calculator.history_text == ''


def test_error_clears_after_delay():
    keypad = Keypad(delay=0.01)

    async def scenario():
        keypad.press('1/0=')
        assert keypad.timer.armed
        assert keypad.display_fragments() == [('class:display.error',
                                               'Error')]
        assert keypad.history_fragments() == [('class:history.error',
                                               'Cannot divide by zero')]
        await asyncio.sleep(0.1)

    asyncio.run(scenario())
    assert not keypad.timer.armed
    assert keypad.calculator.display_text == '0'
    assert keypad.calculator.previous_operand is None


def test_input_cancels_clear():
    keypad = Keypad(delay=0.01)

    async def scenario():
        keypad.press('1/0=')
        keypad.press('5')
        assert not keypad.timer.armed
        await asyncio.sleep(0.1)

    asyncio.run(scenario())
    assert keypad.calculator.display_text == '5'
    assert keypad.calculator.previous_operand == 1


def test_default_delay():
    assert Keypad().timer.delay == Keypad.ERROR_CLEAR_DELAY == 2.0


def test_timer_calls_back():
    calculator = Calculator()
    calculator.input_digit('3')
    cleared = []

    async def scenario():
        timer = ErrorTimer(calculator, 0, on_clear=lambda: cleared.append(1))
        timer.arm()
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert cleared == [1]
    assert calculator.current_input == '0'


def test_stale_timer_ignored():
    calculator = Calculator()
    calculator.input_digit('3')
    timer = ErrorTimer(calculator, 10)
    stale = timer.generation
    timer.cancel()
    timer._fire(stale)
    assert calculator.current_input == '3'


def test_rearming_replaces():
    calculator = Calculator()
    calculator.input_digit('3')
    loop = asyncio.new_event_loop()
    try:
        timer = ErrorTimer(calculator, 10)
        timer.arm(loop)
        first = timer._handle
        timer.arm(loop)
        assert first.cancelled()
        assert timer.armed
        timer.cancel()
        assert not timer.armed
    finally:
        loop.close()


def test_unknown_keys_ring_bell():
    keypad = Keypad()
    rung = []
    keypad.bell = lambda: rung.append(True)
    keypad.press('7')
    keypad.press('x')
    assert rung == [True]
    assert keypad.calculator.display_text == '7'
