"""Rule-creation payloads for the rule engine's REST API.

The functions here only shape dicts; sending them (``POST /rules``,
``POST /rules/validate``, ``PUT /rules/{id}``) is the caller's job.

A deployable rule maps each wizard sink to one action::

    {"id": "temp_alerts", "sql": "SELECT ...;", "actions": [{"mqtt": {...}}]}
"""
from __future__ import annotations

import logging
from typing import Any

from kuiperql.compile.builder import generate
from kuiperql.errors import MissingRuleIdError
from kuiperql.schema.config import GeneratorConfig
from kuiperql.schema.wizard_state import SinkConfig, WizardState

logger = logging.getLogger(__name__)

#: Tag marking rules created for a live sample run.
TEST_SAMPLE_TAG = "__test_sample__"
TEST_SAMPLE_SUFFIX = "_test_sample"
DEFAULT_MEMORY_TOPIC = "result"


def sink_to_action(sink: SinkConfig) -> dict[str, Any] | None:
    """Map a wizard sink to a rule action.

    ``nop`` sinks become an empty ``log`` action; ``memory`` sinks keep only
    their topic.  Unknown targets map to ``None``.
    """
    target = sink.target_type
    if target in ("mqtt", "rest", "log"):
        return {target: dict(sink.properties)}
    if target == "nop":
        return {"log": {}}
    if target == "memory":
        return {"memory": {"topic": sink.properties.get("topic") or DEFAULT_MEMORY_TOPIC}}
    logger.warning("sink '%s' has unsupported target type %r; skipped", sink.id, target)
    return None


def build_rule_payload(
    state: WizardState, config: GeneratorConfig | None = None
) -> dict[str, Any]:
    """Build the body for creating the rule.

    Raises:
        MissingRuleIdError: If the wizard has no rule id.
    """
    rule_id = state.rule_id.strip()
    if not rule_id:
        raise MissingRuleIdError()
    actions = [a for a in (sink_to_action(s) for s in state.sinks) if a is not None]
    return {"id": rule_id, "sql": generate(state, config), "actions": actions}


def build_validation_payload(
    state: WizardState, config: GeneratorConfig | None = None
) -> dict[str, Any]:
    """Build a body for the validate endpoint.

    The id is irrelevant to validation, so the test-sample id is used; the
    single ``log`` action keeps the payload well-formed.
    """
    return {
        "id": sample_rule_id(state),
        "sql": generate(state, config),
        "actions": [{"log": {}}],
    }


def build_test_payload(
    state: WizardState, config: GeneratorConfig | None = None
) -> dict[str, Any]:
    """Build a tagged background rule that writes into an in-memory topic."""
    rule_id = sample_rule_id(state)
    return {
        "id": rule_id,
        "sql": generate(state, config),
        "actions": [{"memory": {"topic": f"test/{rule_id}"}}],
        "tags": [TEST_SAMPLE_TAG],
        "options": {"qos": 0, "sendMetaToSink": False},
    }


def build_update_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Strip ``id`` from a create payload for the update (upsert) call."""
    return {key: value for key, value in payload.items() if key != "id"}


def sample_rule_id(state: WizardState) -> str:
    return f"{state.rule_id.strip()}{TEST_SAMPLE_SUFFIX}"
