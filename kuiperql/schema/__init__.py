"""kuiperQL schema layer: wizard snapshot models and generator config."""
from kuiperql.schema.config import DEFAULT_CONFIG, GeneratorConfig
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
    "DEFAULT_CONFIG",
    "GeneratorConfig",
    "AggregateConfig",
    "FilterConfig",
    "FilterExpression",
    "JoinCondition",
    "JoinConfig",
    "SelectionConfig",
    "SinkConfig",
    "SourceConfig",
    "WizardState",
]
