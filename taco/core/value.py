"""Values of the taco language. The same closed set of kinds describes both the literals the parser reads and the values
the interpreter computes, so one class serves for both.

Integers are 64-bit signed: Value.integer refuses anything outside that range, and the interpreter reports overflow
instead of silently widening. There is no implicit conversion between kinds.
"""

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?|[+-]?(inf|infinity|nan)", re.IGNORECASE)


class Kind(Enum):
    INTEGER = "Integer"
    FLOAT = "Float"
    STRING = "String"
    BOOLEAN = "Boolean"
    NIL = "Nil"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Value:
    """A taco value. data is an int, float, str, bool or None depending on kind."""
    kind: Kind
    data: object = None

    @classmethod
    def integer(cls, number):
        if not INT_MIN <= number <= INT_MAX:
            raise OverflowError(f"{number} does not fit in a 64-bit integer")
        return cls(Kind.INTEGER, int(number))

    @classmethod
    def float(cls, number):
        return cls(Kind.FLOAT, float(number))

    @classmethod
    def string(cls, text):
        return cls(Kind.STRING, text)

    @classmethod
    def boolean(cls, truth):
        return cls(Kind.BOOLEAN, bool(truth))

    @classmethod
    def nil(cls):
        return cls(Kind.NIL)

    @classmethod
    def from_text(cls, text):
        """Builds a Value from raw lexeme text: an integer if text parses as a 64-bit integer, else a float if it parses
        as one, else true/false/nil on an exact match, else the text itself as a string.
        """
        if _INTEGER.fullmatch(text) and INT_MIN <= int(text) <= INT_MAX:
            return cls.integer(int(text))
        elif _FLOAT.fullmatch(text):
            return cls.float(text)
        elif text in ("true", "false"):
            return cls.boolean(text == "true")
        elif text == "nil":
            return cls.nil()
        return cls.string(text)

    @property
    def is_number(self):
        return self.kind in (Kind.INTEGER, Kind.FLOAT)

    def is_truthy(self):
        """Only nil and false are falsy."""
        if self.kind is Kind.NIL:
            return False
        elif self.kind is Kind.BOOLEAN:
            return self.data
        return True

    @staticmethod
    def _format_float(number):
        """Plain decimal text, never scientific notation; integral floats lose their fractional part."""
        if math.isnan(number):
            return "NaN"
        elif math.isinf(number):
            return "inf" if number > 0 else "-inf"
        elif number.is_integer():
            return str(int(number))
        return format(Decimal(repr(number)), "f")

    def __str__(self):
        if self.kind is Kind.FLOAT:
            return Value._format_float(self.data)
        elif self.kind is Kind.BOOLEAN:
            return "true" if self.data else "false"
        elif self.kind is Kind.NIL:
            return "nil"
        return str(self.data)
