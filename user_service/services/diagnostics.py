"""Fallback Diagnostics — simulated operation for exercising the fallback boundary by hand.

Invariants:
    - Runs through the same run_with_fallback as the user read paths
    - Never raises: failures come back as the fallback text

Design Decisions:
    - asyncio.sleep for the delay: never blocks the event loop
"""

import asyncio

from user_service.core.domain_types import ReadOperation
from user_service.services.fallback import run_with_fallback

MAX_DELAY_MS = 60_000

USAGE_MESSAGE = (
    "Circuit Breaker endpoints are available. "
    "Use /test/circuit-breaker with parameters: delay, error, success"
)


class SimulatedFailure(RuntimeError):
    """Raised by the simulated operation when asked to fail."""


def _fallback_text(exc: Exception) -> str:
    return f"Fallback: Service is temporarily unavailable. Original error: {exc}"


async def run_circuit_breaker_test(
    delay_ms: int = 0, error: bool = False, success: bool = False,
) -> str:
    """Simulate a slow and/or failing call guarded by the fallback boundary."""

    async def _simulated() -> str:
        if delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000)
        if error:
            raise SimulatedFailure("Simulated failure for circuit breaker test")
        if success:
            return f"Circuit Breaker Test - SUCCESS. Delay: {delay_ms}ms"
        return f"Circuit Breaker Test - OK. Delay: {delay_ms}ms"

    return await run_with_fallback(
        _simulated, _fallback_text, name=ReadOperation.DIAGNOSTIC.value,
    )
