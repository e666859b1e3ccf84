"""Unit tests for rule-creation payload builders."""
from __future__ import annotations

import pytest

from kuiperql import (
    MissingRuleIdError,
    PayloadError,
    build_rule_payload,
    build_test_payload,
    build_update_payload,
    build_validation_payload,
    generate,
    sink_to_action,
)
from kuiperql.schema.wizard_state import SinkConfig


@pytest.mark.parametrize(
    ("sink", "expected"),
    [
        (
            SinkConfig(target_type="mqtt", properties={"server": "tcp://b:1883", "topic": "out"}),
            {"mqtt": {"server": "tcp://b:1883", "topic": "out"}},
        ),
        (
            SinkConfig(target_type="rest", properties={"url": "http://h/x", "method": "POST"}),
            {"rest": {"url": "http://h/x", "method": "POST"}},
        ),
        (SinkConfig(target_type="log", properties={"level": "info"}), {"log": {"level": "info"}}),
        (SinkConfig(target_type="nop", properties={"ignored": 1}), {"log": {}}),
        (SinkConfig(target_type="memory", properties={"topic": "t/1"}), {"memory": {"topic": "t/1"}}),
        (SinkConfig(target_type="memory"), {"memory": {"topic": "result"}}),
    ],
)
def test_sink_to_action(sink, expected):
    assert sink_to_action(sink) == expected


def test_rule_payload(pipeline_state):
    payload = build_rule_payload(pipeline_state)
    assert payload == {
        "id": "temp_alerts",
        "sql": generate(pipeline_state),
        "actions": [
            {"mqtt": {"server": "tcp://broker:1883", "topic": "alerts/temp"}},
            {"memory": {"topic": "result"}},
        ],
    }


def test_rule_payload_requires_rule_id(with_state):
    state = with_state(ruleId="  ")
    with pytest.raises(MissingRuleIdError) as exc_info:
        build_rule_payload(state)
    assert isinstance(exc_info.value, PayloadError)
    assert exc_info.value.to_error_response()["error"] == "MISSING_RULE_ID"


def test_validation_payload(stream_state):
    payload = build_validation_payload(stream_state)
    assert payload["id"] == "test-rule_test_sample"
    assert payload["sql"] == generate(stream_state)
    assert payload["actions"] == [{"log": {}}]


def test_test_payload(stream_state):
    payload = build_test_payload(stream_state)
    assert payload["id"] == "test-rule_test_sample"
    assert payload["actions"] == [{"memory": {"topic": "test/test-rule_test_sample"}}]
    assert payload["tags"] == ["__test_sample__"]
    assert payload["options"] == {"qos": 0, "sendMetaToSink": False}


def test_update_payload_drops_id(pipeline_state):
    payload = build_rule_payload(pipeline_state)
    update = build_update_payload(payload)
    assert "id" not in update
    assert update["sql"] == payload["sql"]
    assert "id" in payload


def test_unsupported_sink_skipped(with_state):
    state = with_state(
        sinks=[
            {"id": "k1", "targetType": "kafka", "properties": {"brokers": "b:9092"}},
            {"id": "l1", "targetType": "log", "properties": {}},
        ]
    )
    assert sink_to_action(state.sinks[0]) is None
    assert build_rule_payload(state)["actions"] == [{"log": {}}]
