import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.services import history, leetcode

log = logging.getLogger(__name__)

app = FastAPI(title="LeetCode Solved Fetcher")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

FETCH_SOLVED_PATH = "/api/fetchSolved"


def _json(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content, status_code=status_code, headers=CORS_HEADERS)


def _normalize_handle(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None


async def _get_payload(request: Request) -> dict[str, Any]:
    body = await request.body()
    if not body:
        return {}
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@app.options(FETCH_SOLVED_PATH)
async def fetch_solved_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@app.post(FETCH_SOLVED_PATH)
async def fetch_solved(request: Request):
    payload = await _get_payload(request)
    username = _normalize_handle(payload.get("username"))
    if not username:
        return _json({"error": "Username is required"}, status_code=400)

    full = history.wants_full_history(payload)
    try:
        async with leetcode.make_client() as client:
            result = await history.collect_solved(client, username, full)
    except Exception as exc:
        log.exception("fetchSolved failed for %s", username)
        return _json({"error": "Server error", "details": str(exc)}, status_code=500)

    return _json(result)


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed(request: Request, exc: StarletteHTTPException):
    # every method other than POST and OPTIONS on the fetch path
    if exc.status_code == 405 and request.url.path == FETCH_SOLVED_PATH:
        return _json({"error": "Only POST allowed"}, status_code=405)
    return await http_exception_handler(request, exc)


@app.get("/api/health")
async def api_health():
    return JSONResponse({"ok": True, "time": datetime.now(timezone.utc).isoformat()})


@app.get("/healthz")
async def healthz():
    return JSONResponse({"ok": True, "time": datetime.now(timezone.utc).isoformat()})
