import logging
import os
import time

import requests
from flask import Flask, Response, jsonify, request
from flask_cors import CORS
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
from destcompare.settings import Settings

settings = Settings.from_env()
explicit_origins = list(settings.cors_origins)
cors_origins = explicit_origins if explicit_origins == ["*"] else list(
    dict.fromkeys([*explicit_origins, *settings.cors_origin_regexes])
)

setup_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, resources={r"/api/*": {"origins": cors_origins}}, supports_credentials=True)

rate_limiter = RateLimiter.from_settings(settings)


@app.before_request
def before_request():
    client = request.remote_addr or "unknown"
    if not rate_limiter.is_allowed(client):
        return jsonify({"detail": "Too many requests"}), 429
    request.start_time = time.perf_counter()


@app.after_request
def log_request(response):
    start = getattr(request, "start_time", None)
    latency_ms = 0.0
    if start is not None:
        latency_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-Latency-ms"] = f"{latency_ms:.2f}"

    logger.info(
        "request",
        extra={
            "request_path": request.path,
            "method": request.method,
            "status_code": response.status_code,
            "latency_ms": round(latency_ms, 2),
            "client": request.remote_addr,
        },
    )
    return response


def _query_codes():
    return {"airport_a": request.args.get("a", ""), "airport_b": request.args.get("b", "")}


def _compare(payload):
    try:
        request_model = ComparisonRequest(**payload)
    except ValidationError as exc:
        return jsonify({"detail": validation_detail(exc)}), 422

    try:
        result = compare_airports(request_model, settings)
    except ComparisonError as exc:
        return jsonify({"detail": str(exc)}), exc.status_code

    return jsonify(result)


@app.get("/health")
def healthcheck():
    return jsonify({"status": "ok"})


@app.get("/api/compare")
def compare_query():
    return _compare(_query_codes())


@app.post("/api/compare")
def compare_body():
    payload = request.get_json(force=True, silent=True) or {}
    return _compare(payload)


@app.get("/compare")
def compare_page():
    try:
        request_model = ComparisonRequest(**_query_codes())
    except ValidationError as exc:
        return render_page(render_error(validation_message(exc))), 422

    try:
        result = compare_airports(request_model, settings)
    except ComparisonError as exc:
        return render_page(render_error(str(exc))), exc.status_code

    return render_page(render_html(result))


@app.get("/api/proxy")
def proxy():
    target = request.args.get("url")
    if not target:
        return jsonify({"error": "Missing url parameter"}), 400
    if not is_allowed_proxy_target(target, settings.proxy_allowed_hosts):
        return jsonify({"error": "URL not allowed"}), 400

    try:
        body, content_type = fetch_passthrough(target, timeout=settings.timeout, user_agent=settings.user_agent)
    except requests.RequestException as exc:
        response = jsonify({"error": str(exc)})
        response.status_code = 502
    else:
        response = Response(body, status=200, content_type=content_type)
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


if __name__ == "__main__":
    port = int(os.environ.get("PORT", "8000"))
    app.run(host="0.0.0.0", port=port)
