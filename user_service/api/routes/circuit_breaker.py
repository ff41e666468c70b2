"""Fallback Diagnostics Routes — manual probe of the read-path fallback boundary.

Invariants:
    - Always 200: failures come back as fallback text, never as an error status
    - delay is 0..MAX_DELAY_MS milliseconds (400 otherwise)

Design Decisions:
    - Lives under the users prefix (/test/...) so operators find it next to the guarded routes
"""

from fastapi import APIRouter, Query

from user_service.api.dependencies import USERS_PREFIX
from user_service.schemas.user import CircuitBreakerTestResult
from user_service.services.diagnostics import (
    MAX_DELAY_MS, USAGE_MESSAGE, run_circuit_breaker_test,
)

router = APIRouter(prefix=f"{USERS_PREFIX}/test", tags=["diagnostics"])


@router.get(
    "/circuit-breaker", response_model=CircuitBreakerTestResult,
    summary="Exercise the fallback boundary with a simulated call",
)
async def test_circuit_breaker(
    delay: int = Query(
        0, ge=0, le=MAX_DELAY_MS, description="Simulated latency in ms",
    ),
    error: bool = Query(False, description="Make the simulated call fail"),
    success: bool = Query(False, description="Return the SUCCESS variant"),
):
    result = await run_circuit_breaker_test(delay, error, success)
    return CircuitBreakerTestResult(result=result)


@router.get("/circuit-breaker/status", summary="Describe the diagnostics endpoint")
async def circuit_breaker_status():
    return {"message": USAGE_MESSAGE}
