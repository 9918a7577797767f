from functools import wraps


class CalcError(Exception):
    pass


class CalculationError(CalcError):
    '''
    Arithmetic failure. Reported by the calculator, never fatal.

    The first argument is always the user facing message.
    '''
    message = 'Calculation error'

    def __init__(self, *args):
        super().__init__(type(self).message, *args)


class DivisionByZero(CalculationError):
    message = 'Cannot divide by zero'


class ResultTooLarge(CalculationError):
    message = 'Result too large'


class UnknownOperator(CalculationError):
    pass


def wrap_user_errors(error):
    '''
    Ugly hack decorator that converts unexpected exceptions to error.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise error(e) from e
        return wrapper
    return decorator
