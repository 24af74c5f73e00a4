'''
Helpers to build the "sanitize" callables of StructField: a lot of these formats
store values that must be fixed before being used (zero meaning "the default",
counters out of the allowed range, values packed in a byte of a larger word).

Every helper returns a function taking the raw integer and returning the fixed one,
so that they can be composed with chain():

    loops = fields.StructField('I', sanitize=chain(low_byte, clamp(1, 9)))
'''
import functools


def clamp(low=None, high=None):
    '''Force the value inside [low, high], a missing bound is not checked.'''
    def _clamp(value):
        if low is not None and value < low:
            return low
        if high is not None and value > high:
            return high

        return value

    return _clamp


def default_when_zero(default):
    return reset_if(lambda value: value == 0, default)


def default_below(threshold, default):
    '''Values less than threshold are replaced with default.'''
    return reset_if(lambda value: value < threshold, default)


def reset_if(predicate, default):
    def _reset(value):
        return default if predicate(value) else value

    return _reset


def low_byte(value):
    return value & 0xff


def high_byte(value):
    return (value >> 8) & 0xff


def low_nibble(value):
    return value & 0x0f


def chain(*functions):
    '''Apply the functions from left to right.'''
    return lambda value: functools.reduce(lambda acc, function: function(acc), functions, value)
