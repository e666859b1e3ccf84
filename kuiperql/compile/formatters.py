"""Identifier, literal and window-name formatting for the rule SQL dialect.

These are the leaf functions of the generator.  They never raise: empty or
odd input comes back as an empty string (identifiers) or an empty literal
(values), so the clause builders can simply drop what is blank.
"""
from __future__ import annotations

import re
from typing import Any

from kuiperql.schema.config import DEFAULT_CONFIG, GeneratorConfig

#: Reference to the whole raw message body, coerced to text.
PAYLOAD_FIELD = "payload"
PAYLOAD_EXPRESSION = "CAST(self, 'string')"

_NON_IDENTIFIER_CHAR = re.compile(r"[^A-Za-z0-9_]")

# Everything JavaScript's Number() accepts for a trimmed, non-empty token:
# decimal with optional fraction/exponent, signed Infinity, 0x/0o/0b forms.
_NUMBER_LITERAL = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?Infinity"
    r"|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+"
)
_EDGE_QUOTES = re.compile(r"\A['\"]|['\"]\Z")

_WINDOW_FUNCTIONS: dict[str, str] = {
    "tumbling": "TumblingWindow",
    "hopping": "HoppingWindow",
    "sliding": "SlidingWindow",
    "session": "SessionWindow",
    "count": "CountWindow",
}
DEFAULT_WINDOW_FUNCTION = "TumblingWindow"


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


def format_identifier(raw: str | None, config: GeneratorConfig = DEFAULT_CONFIG) -> str:
    """Render a field, source or alias reference.

    - function calls (anything containing ``(``) and ``*`` pass through;
    - ``payload`` (any case) becomes :data:`PAYLOAD_EXPRESSION`;
    - otherwise each ``.``-separated segment is backtick-quoted when it has a
      character outside ``[A-Za-z0-9_]`` or is a reserved word.  Segments
      already wrapped in backticks are kept.

    >>> format_identifier("data.my-field")
    'data.`my-field`'
    """
    if not raw:
        return ""
    clean = raw.strip()

    if "(" in clean or clean == "*":
        return clean

    if clean.lower() == PAYLOAD_FIELD:
        return PAYLOAD_EXPRESSION

    return ".".join(_format_segment(part, config) for part in clean.split("."))


def _format_segment(part: str, config: GeneratorConfig) -> str:
    if part.startswith("`") and part.endswith("`"):
        return part
    if _NON_IDENTIFIER_CHAR.search(part) or config.is_reserved(part):
        return f"`{part}`"
    return part


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


def format_value(raw: Any) -> str:
    """Render a filter value as a SQL literal.

    Booleans (``true``/``false``), numbers and already-quoted strings are
    emitted verbatim; everything else is wrapped in single quotes.  Embedded
    quotes are not escaped.
    """
    if raw is None or raw == "":
        return "''"
    clean = str(raw).strip()

    if clean in ("true", "false"):
        return clean
    if clean and is_number_literal(clean):
        return clean
    if is_quoted(clean):
        return clean
    return f"'{clean}'"


def is_number_literal(token: str) -> bool:
    return _NUMBER_LITERAL.fullmatch(token) is not None


def is_quoted(token: str) -> bool:
    """True when ``token`` starts and ends with the same quote character."""
    return (token.startswith("'") and token.endswith("'")) or (
        token.startswith('"') and token.endswith('"')
    )


def starts_quoted(token: str) -> bool:
    return token.startswith(("'", '"'))


def strip_quotes(token: str) -> str:
    """Remove one leading and one trailing quote character, if present."""
    return _EDGE_QUOTES.sub("", token)


def cast_expression(expr: str, type_name: str) -> str:
    """``CAST(<expr>, '<type_name>')`` in the rule dialect's call syntax."""
    return f"CAST({expr}, '{type_name}')"


# ---------------------------------------------------------------------------
# Windows
# ---------------------------------------------------------------------------


def map_window_type(kind: str | None) -> str:
    """Map a wizard window kind to the dialect's window function name.

    Unknown or missing kinds fall back to ``TumblingWindow``.
    """
    if not kind:
        return DEFAULT_WINDOW_FUNCTION
    return _WINDOW_FUNCTIONS.get(kind, DEFAULT_WINDOW_FUNCTION)
