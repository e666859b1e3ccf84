"""kuiperQL – rule SQL generation for a visual stream-rule wizard.

Turns a snapshot of the rule wizard (sources, joins, filter groups, window
aggregation, projections) into a statement for the IoT rule engine's SQL
dialect.

Public API
----------
``generate``
    WizardState → SQL text (never raises).

``compile_rule``
    Same, returning :class:`CompiledRule` with non-fatal warnings.

``parse_wizard_state``
    Parse the wizard's camelCase JSON into a :class:`WizardState`.

``build_rule_payload`` / ``build_validation_payload`` / ``build_test_payload``
    Request bodies for the rule engine's rule endpoints.

Example::

    state = kuiperql.parse_wizard_state(wizard_json)
    print(kuiperql.generate(state))
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from kuiperql.compile.base import CompiledRule
from kuiperql.compile.builder import RuleBuilder, compile_rule, generate
from kuiperql.compile.formatters import format_identifier, format_value, map_window_type
from kuiperql.errors import KuiperQLError, MissingRuleIdError, ParseError, PayloadError
from kuiperql.rule.payload import (
    build_rule_payload,
    build_test_payload,
    build_update_payload,
    build_validation_payload,
    sink_to_action,
)
from kuiperql.schema.config import NO_SOURCE_SENTINEL, GeneratorConfig
from kuiperql.schema.wizard_state import (
    AggregateConfig,
    FilterConfig,
    FilterExpression,
    JoinCondition,
    JoinConfig,
    SelectionConfig,
    SinkConfig,
    SourceConfig,
    WizardState,
)

__all__ = [
    # Core pipeline
    "generate",
    "compile_rule",
    "parse_wizard_state",
    "RuleBuilder",
    "CompiledRule",
    # Formatters
    "format_identifier",
    "format_value",
    "map_window_type",
    # Schema types
    "WizardState",
    "SourceConfig",
    "JoinConfig",
    "JoinCondition",
    "FilterConfig",
    "FilterExpression",
    "AggregateConfig",
    "SelectionConfig",
    "SinkConfig",
    # Config
    "GeneratorConfig",
    "NO_SOURCE_SENTINEL",
    # Payloads
    "build_rule_payload",
    "build_validation_payload",
    "build_test_payload",
    "build_update_payload",
    "sink_to_action",
    # Errors
    "KuiperQLError",
    "ParseError",
    "PayloadError",
    "MissingRuleIdError",
]


def parse_wizard_state(raw: str | bytes | dict[str, Any]) -> WizardState:
    """Parse a serialized wizard snapshot.

    Args:
        raw: The wizard's JSON text, or an already-decoded dict.

    Returns:
        The frozen :class:`WizardState`.

    Raises:
        ParseError: If ``raw`` is not valid JSON or not a wizard snapshot.
    """
    data: Any = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Invalid JSON: {exc}", raw=raw) from exc

    if not isinstance(data, dict):
        raise ParseError(
            f"Wizard snapshot must be a JSON object, got {type(data).__name__}.",
            raw=raw,
        )

    try:
        return WizardState.model_validate(data)
    except PydanticValidationError as exc:
        raise ParseError(f"Wizard snapshot is invalid: {exc}", raw=raw) from exc
