"""
Health check endpoints
"""

import asyncio
from datetime import datetime, timezone
from fastapi.responses import JSONResponse
from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from rdmpass.config import settings
from rdmpass.security_limits import SEED_BYTES
from rdmpass.services.charsets import Category, GenerationSettings
from rdmpass.services.generator import derive_password
from rdmpass.services.telemetry import get_counters_snapshot

router = APIRouter()

# Fixed probe; the output is never returned.
_PROBE_SEED = bytes(SEED_BYTES)
_PROBE_SETTINGS = GenerationSettings.of(
    32,
    Category.LOWERCASE,
    Category.UPPERCASE,
    Category.NUMBERS,
    Category.SYMBOLS,
    require_each_selected=True,
)


@router.get("/health")
async def health_check():
    """Basic liveness probe - returns healthy if the service is running"""
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check():
    """
    Readiness probe.
    Runs one derivation under the request timeout; 200 if it completes, 503 otherwise.
    """
    checks = {}
    all_healthy = True

    try:
        probe = await asyncio.wait_for(
            run_in_threadpool(derive_password, _PROBE_SEED, _PROBE_SETTINGS),
            timeout=settings.GENERATE_TIMEOUT_SECONDS,
        )
        if len(probe) == _PROBE_SETTINGS.length:
            checks["deriver"] = "healthy"
        else:
            checks["deriver"] = "unhealthy"
            all_healthy = False
    except asyncio.TimeoutError:
        checks["deriver"] = "timeout"
        all_healthy = False
    except Exception as e:
        checks["deriver"] = f"unhealthy: {type(e).__name__}"
        all_healthy = False

    response_data = {
        "status": "healthy" if all_healthy else "unhealthy",
        "checks": checks,
        "counters": get_counters_snapshot(),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

    if all_healthy:
        return response_data
    else:
        return JSONResponse(status_code=503, content=response_data)
