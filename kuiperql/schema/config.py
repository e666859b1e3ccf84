"""Generator configuration.

``GeneratorConfig`` collects the few knobs of SQL generation that are
dialect conventions rather than wizard input.  The defaults match the rule
engine's dialect; callers normally pass nothing::

    sql = kuiperql.generate(state)
    sql = kuiperql.generate(state, GeneratorConfig(enrich_streams=False))
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

#: Placeholder returned when the wizard has no source yet.
NO_SOURCE_SENTINEL = "-- No Source Selected"

#: Implicit projections appended for stream sources.
STREAM_METADATA_FIELDS: tuple[str, ...] = (
    "meta(topic) AS topic",
    "event_time() AS timestamp",
)


class GeneratorConfig(BaseModel):
    """Conventions applied while generating rule SQL.

    Attributes:
        reserved_words: Identifier segments that are always backtick-quoted
            (compared case-insensitively).
        default_window_unit: Window unit used when none is configured.
        default_window_length: Window length used when none is configured.
        enrich_streams: Append ``meta(topic)`` / ``event_time()`` to the
            projection of stream sources without explicit selections.
        empty_sentinel: Text returned when no source is configured.
        metadata_fields: Implicit projections appended for streams.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    reserved_words: tuple[str, ...] = ("timestamp", "topic")
    default_window_unit: str = "ss"
    default_window_length: str = "10"
    enrich_streams: bool = True
    empty_sentinel: str = NO_SOURCE_SENTINEL
    metadata_fields: tuple[str, ...] = Field(default=STREAM_METADATA_FIELDS)

    @field_validator("reserved_words")
    @classmethod
    def _lower_reserved(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(word.lower() for word in value)

    @field_validator("default_window_unit", "default_window_length")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("window defaults must not be blank")
        return value.strip()

    def is_reserved(self, segment: str) -> bool:
        return segment.lower() in self.reserved_words


DEFAULT_CONFIG = GeneratorConfig()
