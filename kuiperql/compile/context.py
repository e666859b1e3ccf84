"""Compilation context value objects.

``CompilationContext`` packages the static configuration shared by every
clause builder; ``RuntimeContext`` accumulates the warnings of a single
generation run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from kuiperql.schema.config import DEFAULT_CONFIG, GeneratorConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilationContext:
    """Immutable context for a single generation run.

    Attributes:
        config: Dialect conventions (reserved words, window defaults, ...).
    """

    config: GeneratorConfig = DEFAULT_CONFIG


@dataclass
class RuntimeContext:
    """Collects non-fatal warnings during a single generation run.

    A fresh instance is created per call, so concurrent generations never
    share state.
    """

    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        """Record that part of the wizard input was dropped."""
        logger.debug("rule generation: %s", message)
        self.warnings.append(message)
