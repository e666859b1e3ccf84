"""Pydantic models for the rule wizard snapshot.

The wizard UI serializes its state as a single camelCase JSON object.  These
models mirror that shape; every field has a lenient default so that a
half-finished wizard (the normal state while a user is still editing) always
parses.  Unknown enum values fall back to their default and ``null``
text reads as blank, so the generator, not the parser, decides what to drop.
Field names are snake_case in Python and the camelCase wire name is
kept as the alias::

    state = WizardState.model_validate(
        {"sources": [{"id": "s1", "resourceName": "demo", "resourceType": "stream"}]}
    )
    state.sources[0].resource_name  # "demo"

All models are frozen: one snapshot is read by the generator and never
mutated.  Keys the generator does not know about are ignored.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, get_args

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

ResourceType = Literal["stream", "table", "topic"]
JoinType = Literal["LEFT", "RIGHT", "INNER", "FULL", "CROSS"]
FilterLogic = Literal["AND", "OR"]
CastType = Literal["auto", "number", "string"]
WindowType = Literal["tumbling", "hopping", "sliding", "session", "count"]
TestStatus = Literal["idle", "running", "success", "failed"]


def _blank_if_none(value: Any) -> Any:
    return "" if value is None else value


def _one_of(kind: Any, default: Any) -> BeforeValidator:
    """Replace values outside the ``Literal`` ``kind`` with ``default``."""
    allowed = get_args(kind)

    def _check(value: Any) -> Any:
        return value if value in allowed else default

    return BeforeValidator(_check)


#: Text field where ``null`` reads as blank.
Text = Annotated[str, BeforeValidator(_blank_if_none)]

# Unknown enum values fall back instead of failing validation.
SourceKind = Annotated[ResourceType, _one_of(ResourceType, "stream")]
JoinKind = Annotated[JoinType, _one_of(JoinType, "INNER")]
GroupLogic = Annotated[FilterLogic, _one_of(FilterLogic, "AND")]
CastKind = Annotated[CastType | None, _one_of(CastType, None)]
Status = Annotated[TestStatus, _one_of(TestStatus, "idle")]


class _WizardModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


# ---------------------------------------------------------------------------
# Sources & joins
# ---------------------------------------------------------------------------


class SourceConfig(_WizardModel):
    """A stream, table or topic the rule reads from.

    Attributes:
        id: Wizard-local identifier, referenced by joins.
        resource_name: Name of the stream/table on the rule engine.
        resource_type: Kind of resource.
        alias: Optional alias used in FROM / JOIN.
    """

    id: Text = ""
    resource_name: Text = Field(default="", alias="resourceName")
    resource_type: SourceKind = Field(default="stream", alias="resourceType")
    alias: str | None = None

    @property
    def is_stream(self) -> bool:
        return self.resource_type == "stream"


class JoinCondition(_WizardModel):
    """One ``left <op> right`` term of a JOIN ... ON clause."""

    left_field: Text = Field(default="", alias="leftField")
    operator: Text = "="
    right_field: Text = Field(default="", alias="rightField")


class JoinConfig(_WizardModel):
    """A join against another configured source.

    Attributes:
        id: Wizard-local identifier.
        join_type: SQL join type.
        target_source_id: ``SourceConfig.id`` of the joined source.
        conditions: ON terms, ANDed together in order.
    """

    id: Text = ""
    join_type: JoinKind = Field(default="INNER", alias="joinType")
    target_source_id: Text = Field(default="", alias="targetSourceId")
    conditions: list[JoinCondition] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class FilterExpression(_WizardModel):
    """A single ``field <op> value`` comparison.

    ``value`` is always text at this layer; the formatter decides whether it
    is rendered as a number, boolean or quoted string.
    """

    id: Text = ""
    field: Text = ""
    operator: Text = "="
    value: str | None = ""
    cast_type: CastKind = Field(default=None, alias="castType")


class FilterConfig(_WizardModel):
    """A group of expressions ANDed together.

    Attributes:
        id: Wizard-local identifier.
        logic: Connective joining this group to the *previous* group.
            Ignored for the first group.
        expressions: Ordered expressions of the group.
    """

    id: Text = ""
    logic: GroupLogic = "AND"
    expressions: list[FilterExpression] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Transformations
# ---------------------------------------------------------------------------


class SelectionConfig(_WizardModel):
    """An explicit projection.

    ``function`` is recorded by the transform step but not rendered.
    """

    field: Text = ""
    alias: str | None = None
    function: str | None = None


class AggregateConfig(_WizardModel):
    """GROUP BY and window settings."""

    enabled: bool = False
    window_type: WindowType | str | None = Field(default=None, alias="windowType")
    window_unit: str | None = Field(default=None, alias="windowUnit")
    window_length: int | float | str | None = Field(default=None, alias="windowLength")
    window_interval: int | float | str | None = Field(
        default=None, alias="windowInterval"
    )
    group_by_fields: list[str | None] = Field(default_factory=list, alias="groupByFields")


# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------


class SinkConfig(_WizardModel):
    """A rule action target."""

    id: Text = ""
    target_type: Text = Field(default="log", alias="targetType")
    properties: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class WizardState(_WizardModel):
    """Snapshot of the rule wizard.

    Only ``sources``, ``joins``, ``filters``, ``aggregation``,
    ``selections`` and ``source_schemas`` influence the generated SQL.
    ``rule_id`` and ``sinks`` feed the rule payload builders; the remaining
    fields are UI bookkeeping carried for round-tripping.
    """

    current_step: int = Field(default=0, alias="currentStep")
    is_step_valid: bool = Field(default=False, alias="isStepValid")
    rule_id: Text = Field(default="", alias="ruleId")
    sources: list[SourceConfig] = Field(default_factory=list)
    joins: list[JoinConfig] = Field(default_factory=list)
    filters: list[FilterConfig] = Field(default_factory=list)
    aggregation: AggregateConfig = Field(default_factory=AggregateConfig)
    selections: list[SelectionConfig] = Field(default_factory=list)
    sinks: list[SinkConfig] = Field(default_factory=list)
    tour_focus: str | None = Field(default=None, alias="tourFocus")
    source_schemas: dict[str, Any] = Field(default_factory=dict, alias="sourceSchemas")
    shared_configs: dict[str, Any] = Field(default_factory=dict, alias="sharedConfigs")
    test_status: Status = Field(default="idle", alias="testStatus")
    test_output: list[Any] = Field(default_factory=list, alias="testOutput")

    @property
    def main_source(self) -> SourceConfig | None:
        """The first source; drives the FROM clause."""
        return self.sources[0] if self.sources else None
