"""Test fixtures: serialized wizard snapshots."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from kuiperql.schema.wizard_state import WizardState

_FIXTURES_DIR = Path(__file__).parent


def load_wizard_json(name: str) -> dict[str, Any]:
    """Return the raw camelCase snapshot stored in ``<name>.json``."""
    return json.loads((_FIXTURES_DIR / f"{name}.json").read_text())


def load_wizard_state(name: str) -> WizardState:
    """Load ``<name>.json`` as a :class:`WizardState`."""
    return WizardState.model_validate(load_wizard_json(name))
