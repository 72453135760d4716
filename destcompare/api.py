import logging
import time
from typing import Any, Dict

import requests
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import ValidationError

from destcompare.comparison_service import (
    ComparisonError,
    ComparisonRequest,
    compare_airports,
    validation_detail,
    validation_message,
)
from destcompare.fetcher import fetch_passthrough
from destcompare.logging_setup import setup_logging
from destcompare.report import render_error, render_html, render_page
from destcompare.security import RateLimiter, is_allowed_proxy_target
from destcompare.settings import Settings, combine_regex_patterns

setup_logging()
logger = logging.getLogger(__name__)

settings = Settings.from_env()

app = FastAPI(
    title="Airport Destination Comparator",
    description="Compare passenger destinations of two airports using their Wikipedia articles.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_origin_regex=combine_regex_patterns(settings.cors_origin_regexes),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

rate_limiter = RateLimiter.from_settings(settings)


@app.middleware("http")
async def add_timing_and_rate_limit(request: Request, call_next):
    client_host = request.client.host if request.client else "unknown"
    if not rate_limiter.is_allowed(client_host):
        return JSONResponse({"detail": "Too many requests"}, status_code=429)

    start = time.perf_counter()
    response: Response = await call_next(request)
    latency_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-Latency-ms"] = f"{latency_ms:.2f}"

    logger.info(
        "request",
        extra={
            "request_path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
            "latency_ms": round(latency_ms, 2),
            "client": client_host,
        },
    )
    return response


async def _run_comparison(payload: ComparisonRequest) -> Dict[str, Any]:
    try:
        return await run_in_threadpool(compare_airports, payload, settings)
    except ComparisonError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/api/compare")
async def compare_query(
    a: str = Query(..., description="First airport code."),
    b: str = Query(..., description="Second airport code."),
) -> Dict[str, Any]:
    try:
        payload = ComparisonRequest(airport_a=a, airport_b=b)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=validation_detail(exc)) from exc
    return await _run_comparison(payload)


@app.post("/api/compare")
async def compare_body(payload: ComparisonRequest) -> Dict[str, Any]:
    return await _run_comparison(payload)


@app.get("/compare", response_class=HTMLResponse)
async def compare_page(a: str = Query(...), b: str = Query(...)) -> HTMLResponse:
    try:
        payload = ComparisonRequest(airport_a=a, airport_b=b)
        result = await run_in_threadpool(compare_airports, payload, settings)
    except ValidationError as exc:
        return HTMLResponse(render_page(render_error(validation_message(exc))), status_code=422)
    except ComparisonError as exc:
        return HTMLResponse(render_page(render_error(str(exc))), status_code=exc.status_code)
    return HTMLResponse(render_page(render_html(result)))


@app.get("/api/proxy")
async def proxy(url: str = Query(default="")) -> Response:
    if not url:
        raise HTTPException(status_code=400, detail="Missing url parameter")
    if not is_allowed_proxy_target(url, settings.proxy_allowed_hosts):
        raise HTTPException(status_code=400, detail="URL not allowed")
    try:
        body, content_type = await run_in_threadpool(
            fetch_passthrough, url, timeout=settings.timeout, user_agent=settings.user_agent
        )
    except requests.RequestException as exc:
        return JSONResponse({"error": str(exc)}, status_code=502, headers={"Access-Control-Allow-Origin": "*"})
    return Response(content=body, media_type=content_type, headers={"Access-Control-Allow-Origin": "*"})
