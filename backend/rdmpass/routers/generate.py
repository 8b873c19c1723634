"""
Password derivation endpoint
"""

import asyncio

from fastapi import APIRouter, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool

from rdmpass.config import settings
from rdmpass.logging_config import (
    log_generation_failure,
    log_generation_success,
    log_generation_timeout,
)
from rdmpass.schemas.generate import ErrorResponse, GenerateRequest, GenerateResponse
from rdmpass.security_limits import SEED_BYTES
from rdmpass.errors import CoverageUnsatisfiable, GenerationError
from rdmpass.services.generator import derive
from rdmpass.services.telemetry import increment_counter
from rdmpass.utils.network import get_client_ip
from rdmpass.utils.payload_validation import decode_base64_field

router = APIRouter()


def _status_for(error: GenerationError) -> int:
    if isinstance(error, CoverageUnsatisfiable):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_400_BAD_REQUEST


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def generate_password(body: GenerateRequest, request: Request):
    """Derive a password from a client-reduced 256-bit seed"""
    client_ip = get_client_ip(request)
    seed = decode_base64_field(
        body.entropy,
        field_name="entropy",
        max_bytes=SEED_BYTES,
        exact_bytes=SEED_BYTES,
    )
    snapshot = body.settings.to_generation_settings()

    # On timeout the worker thread still runs derive to completion (bounded by MAX_COVERAGE_ATTEMPTS).
    try:
        result = await asyncio.wait_for(
            run_in_threadpool(
                derive, seed, snapshot, max_attempts=settings.MAX_COVERAGE_ATTEMPTS
            ),
            timeout=settings.GENERATE_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        increment_counter("generate_timeout_total")
        log_generation_timeout(client_ip, settings.GENERATE_TIMEOUT_SECONDS)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Password derivation timed out",
        )
    except GenerationError as e:
        increment_counter("generate_failed_total")
        log_generation_failure(client_ip, e)
        raise HTTPException(status_code=_status_for(e), detail=str(e))

    increment_counter("generate_success_total")
    if result.attempts > 1:
        increment_counter("generate_coverage_retries_total", result.attempts - 1)
    log_generation_success(client_ip, len(result.password), result.alphabet_size, result.attempts)

    return GenerateResponse(password=result.password)
