import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..errors import InvalidLiteral


FLOW_PORT = "flow"


class LiteralKind(Enum):
    NUMBER = "number"
    TEXT = "text"
    BOOL = "bool"
    ENUM = "enum"


_TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off", ""})


def quote_js(text: str) -> str:
    """Single-quoted JavaScript string literal."""
    escaped = (
        text.replace("\\", "\\\\")
            .replace("'", "\\'")
            .replace("\n", "\\n")
            .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class Literal:
    """
    A node literal, tagged with the kind its node type declares.

    ``raw`` is normalised at construction: float for NUMBER, bool for BOOL,
    str for TEXT and ENUM.  Use ``Literal.of`` rather than the constructor so
    editor values ("5", "true", None, ...) are coerced and checked once.
    """
    kind: LiteralKind
    raw: Union[float, bool, str]

    @classmethod
    def of(cls, kind: LiteralKind, value: Any, node_id: Optional[str] = None) -> "Literal":
        ids = [node_id] if node_id is not None else []

        if kind is LiteralKind.NUMBER:
            if isinstance(value, bool):
                return cls(kind, float(value))
            if value is None or (isinstance(value, str) and not value.strip()):
                return cls(kind, 0.0)
            try:
                return cls(kind, float(str(value).strip()))
            except ValueError:
                raise InvalidLiteral(f"{value!r} is not a number", ids) from None

        if kind is LiteralKind.BOOL:
            if value is None:
                return cls(kind, False)
            if isinstance(value, bool):
                return cls(kind, value)
            if isinstance(value, (int, float)):
                return cls(kind, value != 0)
            word = str(value).strip().lower()
            if word in _TRUE_WORDS:
                return cls(kind, True)
            if word in _FALSE_WORDS:
                return cls(kind, False)
            raise InvalidLiteral(f"{value!r} is not a boolean", ids)

        if isinstance(value, bool):
            return cls(kind, "true" if value else "false")
        return cls(kind, "" if value is None else str(value))

    @classmethod
    def infer(cls, value: Any, node_id: Optional[str] = None) -> "Literal":
        """Pick a kind from a JSON value (per-port literals carry no declared kind)."""
        if isinstance(value, bool):
            return cls.of(LiteralKind.BOOL, value, node_id)
        if isinstance(value, (int, float)):
            return cls.of(LiteralKind.NUMBER, value, node_id)
        return cls.of(LiteralKind.TEXT, value, node_id)

    def render(self) -> str:
        """Emittable expression: quoted for text/enum, bare for number/bool."""
        if self.kind is LiteralKind.NUMBER:
            return _format_number(self.raw)
        if self.kind is LiteralKind.BOOL:
            return "true" if self.raw else "false"
        return quote_js(self.raw)

    def text(self) -> str:
        """Raw literal text with no quoting (identifier-like reads)."""
        if self.kind in (LiteralKind.NUMBER, LiteralKind.BOOL):
            return self.render()
        return self.raw
