# converter.py
from __future__ import annotations

import logging
import math
import string
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import NamedTuple

logger = logging.getLogger(__name__)

INVALID_NUMBER = 'invalid number'
INVALID_UNIT = 'invalid unit'

DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
NUMBER_CHARS = DIGITS | {'/', '.'}
ALLOWED_CHARS = NUMBER_CHARS | LETTERS | {'='}

GAL_TO_L = 3.78541
LBS_TO_KG = 0.453592
KG_TO_LBS = 2.20462


class ConversionError(ValueError):
    message = 'invalid input'

    def __init__(self, detail=''):
        super().__init__(detail or self.message)
        self.detail = detail


class InvalidNumber(ConversionError):
    message = INVALID_NUMBER


class InvalidUnit(ConversionError):
    message = INVALID_UNIT

    def __init__(self, detail='', missing=False):
        super().__init__(detail)
        self.missing = missing


class ConversionEntry(NamedTuple):
    paired_unit: str
    factor: float
    name: str


CONVERSIONS = MappingProxyType({
    'gal': ConversionEntry('L', GAL_TO_L, 'gallons'),
    'l': ConversionEntry('gal', 1 / GAL_TO_L, 'liters'),
    'lbs': ConversionEntry('kg', LBS_TO_KG, 'pounds'),
    'kg': ConversionEntry('lbs', KG_TO_LBS, 'kilograms'),
    'lb': ConversionEntry('kg', LBS_TO_KG, 'pounds'),
})
UNITS = tuple(CONVERSIONS)


@dataclass(frozen=True)
class ConversionResult:
    init_num: float
    init_unit: str
    return_num: float
    return_unit: str
    sentence: str

    def as_dict(self) -> dict:
        return {
            'initNum': _json_number(self.init_num),
            'initUnit': self.init_unit,
            'returnNum': _json_number(self.return_num),
            'returnUnit': self.return_unit,
            'string': self.sentence,
        }


@dataclass(frozen=True)
class ErrorResult:
    error: str

    def as_dict(self) -> dict:
        return {'error': self.error}


# ---------- Number extraction ----------
def _is_decimal(token: str) -> bool:
    # digits with at most one point, e.g. "3", "3.", ".5"
    seen_digit = seen_point = False
    for ch in token:
        if ch in DIGITS:
            seen_digit = True
        elif ch == '.' and not seen_point:
            seen_point = True
        else:
            return False
    return seen_digit


def _term_value(term: str) -> float:
    if '/' not in term:
        if not _is_decimal(term):
            raise InvalidNumber(f'bad term {term!r}')
        return float(term)
    parts = term.split('/')
    if len(parts) != 2 or not all(_is_decimal(p) for p in parts):
        raise InvalidNumber(f'bad fraction {term!r}')
    num, den = float(parts[0]), float(parts[1])
    if den == 0:
        raise InvalidNumber(f'division by zero in {term!r}')
    return num / den


def get_num(text: str) -> float:
    """Return the number at the front of ``text``.

    Letters are skipped, whitespace-separated terms are summed so that mixed
    numbers like ``3 1/2`` work. Raises :class:`InvalidNumber` for anything
    that does not evaluate to a finite value.
    """
    if not text or text.isspace():
        raise InvalidNumber('empty input')
    num_part = ''.join(ch for ch in text if ch in NUMBER_CHARS or ch.isspace()).strip()
    if not num_part:
        raise InvalidNumber('no digits')

    total = sum(_term_value(term) for term in num_part.split())
    if not math.isfinite(total):
        raise InvalidNumber('value out of range')

    # symbols and equations, e.g. "5-2gal" or "a=5gal"
    if any(ch not in ALLOWED_CHARS and not ch.isspace() for ch in text):
        raise InvalidNumber('unexpected symbol')
    if '=' in text:
        # a plain measurement never contains '='
        raise InvalidNumber('looks like an equation')
    return total


# ---------- Unit recognition ----------
def get_unit(text: str) -> str:
    end = len(text or '')
    start = end
    while start > 0 and text[start - 1] in LETTERS:
        start -= 1
    if start == end:
        raise InvalidUnit('no unit', missing=True)
    unit = text[start:end].lower()
    if unit not in CONVERSIONS:
        raise InvalidUnit(f'unknown unit {unit!r}')
    return unit


# ---------- Conversion table ----------
def get_return_unit(init_unit: str) -> str:
    entry = CONVERSIONS.get(init_unit.lower())
    return entry.paired_unit if entry else init_unit


def spell_out_unit(unit: str) -> str:
    entry = CONVERSIONS.get(unit.lower())
    return entry.name if entry else unit


def get_factor(init_unit: str) -> float | None:
    entry = CONVERSIONS.get(init_unit.lower())
    return entry.factor if entry else None


def singular_or_plural(name: str, num: float) -> str:
    if num == 1 and name.endswith('s'):
        return name[:-1]
    return name


def round_significant(value: float, digits: int = 6) -> float:
    return float(f'{value:.{digits}g}')


def format_number(value: float) -> str:
    """Plain decimal text for ``value``: ``3`` not ``3.0``, no exponent."""
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def _json_number(value: float):
    return int(value) if value.is_integer() else value


def convert(init_num: float, init_unit: str) -> ConversionResult:
    factor = get_factor(init_unit)
    return_num = round_significant(init_num * factor) if factor else init_num
    if not math.isfinite(return_num):
        raise InvalidNumber('result out of range')
    return_unit = get_return_unit(init_unit)
    init_name = singular_or_plural(spell_out_unit(init_unit), init_num)
    return_name = singular_or_plural(spell_out_unit(return_unit), return_num)
    sentence = f'{format_number(init_num)} {init_name} = {format_number(return_num)} {return_name}'
    return ConversionResult(init_num, init_unit, return_num, return_unit.lower(), sentence)


# ---------- Pipeline ----------
def parse_input(text: str) -> ConversionResult | ErrorResult:
    """Parse ``text`` and convert it, or return the error to show the user."""
    try:
        init_num = get_num(text)
        init_unit = get_unit(text)
        return convert(init_num, init_unit)
    except ConversionError as e:
        logger.debug('rejected %r: %s (%s)', text, e.message, e.detail)
        return ErrorResult(e.message)
