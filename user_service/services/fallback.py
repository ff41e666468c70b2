"""Fallback Boundary — substitute a fixed value when a read operation fails unexpectedly.

Invariants:
    - Every call attempts the real operation first (no shared state across calls)
    - Exceptions listed in `propagate` are re-raised unchanged (domain errors stay visible)
    - Any other Exception is swallowed: not re-raised, not retried, logged at WARNING
    - The fallback receives the original exception and returns the degraded value

Design Decisions:
    - Stateless substitute-on-failure over a closed/open/half-open breaker: availability
      for reads without failure-rate bookkeeping
    - Function over decorator: call sites choose the fallback value per invocation
      (the placeholder user needs the requested id)
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_with_fallback(
    operation: Callable[[], Awaitable[T]],
    fallback: Callable[[Exception], T],
    *,
    name: str,
    propagate: tuple[type[Exception], ...] = (),
) -> T:
    """Run `operation`; on unexpected failure return `fallback(exc)` instead."""
    try:
        return await operation()
    except propagate:
        raise
    except Exception as e:
        logger.warning(
            f"Fallback engaged for {name}: {type(e).__name__}: {e}",
            extra={"operation": name, "fallback": True},
        )
        return fallback(e)
