import logging
import math
import numbers
import operator
from fractions import Fraction
from functools import partial

log = logging.getLogger(__name__)

CHANNEL_MIN = 0
CHANNEL_MAX = 255
CHANNEL_BITS = 8


def _divide(x, y):
    try:
        return x / y
    except OverflowError:
        return Fraction(x) / Fraction(y)


def _power(x, y):
    try:
        return float(x) ** float(y)
    except OverflowError:
        pass
    # An operand or the result is past float range, only the limit is left
    if x == 0:
        return 0
    if x < 0 and y != int(y):
        raise ValueError(f'{x} ** {y} is not real')
    sign = -1 if x < 0 and int(y) % 2 else 1
    if abs(x) == 1:
        return sign
    if (abs(x) > 1) == (y > 0):
        return math.copysign(math.inf, sign)
    return 0


def _lshift(x, y):
    # Anything shifted past the channel width is out of range already
    if not x:
        return 0
    if y > CHANNEL_BITS:
        return math.copysign(math.inf, x)
    return x << y


def _integral(func):
    def wrapped(x, y):
        for value in (x, y):
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f'{value} has no integer value')
        return func(int(x), int(y))
    return wrapped


OPERATORS = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': _divide,
    '%': operator.mod,
    '**': _power,
    '<<': _integral(_lshift),
    '>>': _integral(operator.rshift),
    '&': _integral(operator.and_),
    '^': _integral(operator.xor),
    '|': _integral(operator.or_),
}


def is_operand(value):
    """True when `value` can sit on the scalar side of a channel operation."""
    return isinstance(value, numbers.Real)


def settle(value):
    """Truncate toward zero and clamp a raw channel result into range."""
    if isinstance(value, float):
        if math.isnan(value):
            return CHANNEL_MIN
        if math.isinf(value):
            return CHANNEL_MAX if value > 0 else CHANNEL_MIN
    return max(CHANNEL_MIN, min(CHANNEL_MAX, int(value)))


def _channel(func, op, x, y):
    try:
        return func(x, y)
    except (ZeroDivisionError, ValueError) as exc:
        log.debug('channel %r %s %r is undefined (%s), using %d', x, op, y, exc, CHANNEL_MIN)
        return CHANNEL_MIN


def apply_operator(op, left, right, reflected=False):
    """Combine `left` with `right` channel by channel.

    `right` is either another color of the same kind or a real number that
    is applied to every channel. With `reflected` set the operands swap
    sides, for expressions like ``5 - color``.

    The result never fails for out of range or undefined channel values:
    each channel is truncated toward zero and clamped to 0..255.
    """
    try:
        func = OPERATORS[op]
    except KeyError:
        raise ValueError(f'Unsupported operator {op!r}') from None

    kind = type(left)
    if isinstance(right, kind):
        others = right.channels()
    elif is_operand(right):
        others = [right] * 3
    else:
        raise TypeError(f'Cannot apply {op!r} to {kind.__name__} and {type(right).__name__}')

    results = []
    for x, y in zip(left.channels(), others):
        if reflected:
            x, y = y, x
        results.append(settle(_channel(func, op, x, y)))

    return kind.from_channels(results)


add = partial(apply_operator, '+')
subtract = partial(apply_operator, '-')
multiply = partial(apply_operator, '*')
divide = partial(apply_operator, '/')
modulo = partial(apply_operator, '%')
power = partial(apply_operator, '**')
lshift = partial(apply_operator, '<<')
rshift = partial(apply_operator, '>>')
bitand = partial(apply_operator, '&')
bitxor = partial(apply_operator, '^')
bitor = partial(apply_operator, '|')
