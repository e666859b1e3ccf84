"""kuiperQL rule payload builders."""
from kuiperql.rule.payload import (
    build_rule_payload,
    build_test_payload,
    build_update_payload,
    build_validation_payload,
    sink_to_action,
)

__all__ = [
    "build_rule_payload",
    "build_test_payload",
    "build_update_payload",
    "build_validation_payload",
    "sink_to_action",
]
