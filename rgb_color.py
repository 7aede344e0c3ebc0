import logging
import re

import rgb_math
from rgb_math import CHANNEL_MAX, CHANNEL_MIN

log = logging.getLogger(__name__)

HEX_PATTERN = re.compile(r'#?(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})')
DIGITS_PATTERN = re.compile(r'[0-9]+')


class ColorError(ValueError):
    """Base class for colors that can't be built from the given input"""


class ValidationError(ColorError):
    messages = {
        'list or tuple': 'must be a list or tuple',
        'three elements': 'must have three elements',
        'only digits': 'must contain only digits',
        'between 0 and 255': 'must be between 0 and 255',
        'hex format': 'must match the hex format',
    }

    def __init__(self, param, check, value):
        super().__init__(f'{param} {self.messages[check]}, got {value!r}')
        self.param = param
        self.check = check
        self.value = value


class GuessFailed(ColorError):
    def __init__(self, value):
        super().__init__(f"Couldn't guess color format for {value!r}")
        self.value = value


def _is_digits(value):
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    return isinstance(value, str) and DIGITS_PATTERN.fullmatch(value) is not None


def _in_range(value):
    return CHANNEL_MIN <= int(value) <= CHANNEL_MAX


def _validate_rgb(value):
    if not isinstance(value, (list, tuple)):
        raise ValidationError('rgb', 'list or tuple', value)
    if len(value) != 3:
        raise ValidationError('rgb', 'three elements', value)
    if not all(_is_digits(x) for x in value):
        raise ValidationError('rgb', 'only digits', value)
    if not all(_in_range(x) for x in value):
        raise ValidationError('rgb', 'between 0 and 255', value)


def _validate_rgb_number(value):
    if not _is_digits(value):
        raise ValidationError('rgb_number', 'only digits', value)
    if not _in_range(value):
        raise ValidationError('rgb_number', 'between 0 and 255', value)


def _validate_hex_code(value):
    if not isinstance(value, str) or HEX_PATTERN.fullmatch(value) is None:
        raise ValidationError('hex_code', 'hex format', value)


# Order matters: from_guess tries the formats in this order
VALIDATORS = {
    'rgb': _validate_rgb,
    'rgb_number': _validate_rgb_number,
    'hex_code': _validate_hex_code,
}


def looks_like_channel(value):
    """True when `value` parses as an integer inside the channel range"""
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return False
    return CHANNEL_MIN <= number <= CHANNEL_MAX


def _operator(op, reflected=False):
    def method(self, other):
        if not isinstance(other, type(self)) and not rgb_math.is_operand(other):
            return NotImplemented
        return rgb_math.apply_operator(op, self, other, reflected)
    return method


class ColorTuple:
    def __init__(self, rgb=None, hex_code=None, rgb_number=None):
        """Constructor

        Takes exactly the formats in VALIDATORS as keywords. Every given
        keyword is validated; when several are given `rgb` wins over
        `rgb_number`, which wins over `hex_code`.
        """
        params = {'rgb': rgb, 'rgb_number': rgb_number, 'hex_code': hex_code}
        given = {name: value for name, value in params.items() if value is not None}
        if not given:
            raise TypeError(f'{type(self).__name__}() requires one of {", ".join(VALIDATORS)}')

        for name, value in given.items():
            VALIDATORS[name](value)

        if rgb is not None:
            vals = [int(x) for x in rgb]
        elif rgb_number is not None:
            vals = [int(rgb_number)] * 3
        else:
            vals = self.expand(hex_code)

        self._vals = tuple(vals)

    @classmethod
    def from_channels(cls, triple):
        return cls(rgb=triple)

    @classmethod
    def from_hex(cls, hex_code):
        return cls(hex_code=hex_code)

    @classmethod
    def from_number(cls, number):
        """Gray shade with all three channels set to `number`"""
        return cls(rgb_number=number)

    @classmethod
    def from_guess(cls, value):
        """Build a color from whichever format accepts `value`.

        Formats are tried in VALIDATORS order. A value that reads as a
        number in 0..255 is never tried as hex, so ``"255"`` is always a
        gray shade and never ``#225555``.
        """
        if value is None:
            raise GuessFailed(value)

        single = looks_like_channel(value)
        for param in VALIDATORS:
            if param == 'hex_code' and single:
                continue
            try:
                return cls(**{param: value})
            except ValidationError as exc:
                log.debug('%r is not a valid %s value: %s', value, param, exc)

        raise GuessFailed(value)

    @staticmethod
    def expand(hex_code):
        digits = hex_code.lstrip('#')
        if len(digits) == 3:
            digits = ''.join(c * 2 for c in digits)
        return [int(digits[i:i + 2], 16) for i in (0, 2, 4)]

    @property
    def r(self):
        return self._vals[0]

    @property
    def g(self):
        return self._vals[1]

    @property
    def b(self):
        return self._vals[2]

    def channels(self):
        return list(self._vals)

    def compress(self):
        return (self.r << 16) | (self.g << 8) | self.b

    def to_hex(self):
        return '#{:02x}{:02x}{:02x}'.format(*self._vals)

    def to_hex_upper(self):
        return '#{:02X}{:02X}{:02X}'.format(*self._vals)

    def to_string(self):
        return ','.join(str(x) for x in self._vals)

    def __int__(self):
        return self.compress()

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f'{type(self).__name__}({self.r}, {self.g}, {self.b})'

    def __iter__(self):
        return iter(self._vals)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._vals == other._vals

    def __hash__(self):
        return hash(self._vals)

    __add__ = _operator('+')
    __radd__ = _operator('+', reflected=True)
    __sub__ = _operator('-')
    __rsub__ = _operator('-', reflected=True)
    __mul__ = _operator('*')
    __rmul__ = _operator('*', reflected=True)
    __truediv__ = _operator('/')
    __rtruediv__ = _operator('/', reflected=True)
    __mod__ = _operator('%')
    __rmod__ = _operator('%', reflected=True)
    __pow__ = _operator('**')
    __rpow__ = _operator('**', reflected=True)
    __lshift__ = _operator('<<')
    __rlshift__ = _operator('<<', reflected=True)
    __rshift__ = _operator('>>')
    __rrshift__ = _operator('>>', reflected=True)
    __and__ = _operator('&')
    __rand__ = _operator('&', reflected=True)
    __xor__ = _operator('^')
    __rxor__ = _operator('^', reflected=True)
    __or__ = _operator('|')
    __ror__ = _operator('|', reflected=True)


def rgb(*args):
    """Shorthand for declaring colors: ``rgb(255)``, ``rgb('#00f')``, ``rgb(255, 0, 0)``"""
    if not args:
        raise TypeError('rgb() requires at least one argument')
    value = list(args) if len(args) > 1 else args[0]
    return ColorTuple.from_guess(value)
