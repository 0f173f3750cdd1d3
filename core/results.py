# core/results.py

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    """Result of a best-effort side effect. Callers may ignore it."""

    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def best_effort(fn: Callable, *args, description: str, level: int = logging.WARNING, context: Optional[dict] = None, **kwargs) -> Outcome:
    """Run ``fn`` and log instead of raising when it fails."""
    try:
        return Outcome(value=fn(*args, **kwargs))
    except Exception as exc:
        logger.log(
            level,
            f"{description} failed: {exc}",
            extra={'operation': description, 'error': str(exc), **(context or {})},
            exc_info=True,
        )
        return Outcome(error=exc)
