"""Shared pytest fixtures for kuiperQL tests."""
from __future__ import annotations

import pytest

from kuiperql.schema.wizard_state import WizardState
from tests.fixtures import load_wizard_state


@pytest.fixture
def stream_state() -> WizardState:
    """One aliased stream source, nothing else configured."""
    return load_wizard_state("stream_source")


@pytest.fixture
def pipeline_state() -> WizardState:
    """Stream joined to a table with filters, a hopping window and sinks."""
    return load_wizard_state("joined_pipeline")


@pytest.fixture
def with_state(stream_state: WizardState):
    """Return a copy of ``stream_state`` with camelCase overrides applied."""

    def _apply(**updates) -> WizardState:
        data = stream_state.model_dump(by_alias=True)
        data.update(updates)
        return WizardState.model_validate(data)

    return _apply
