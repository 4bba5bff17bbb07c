"""Strategy API: one POST endpoint returning the generated content strategy."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from config import Settings, get_settings
from models import StrategyRequest
from orchestrator.service import StrategyOrchestrator, ensure_configured
from utils.exceptions import ConfigurationError, GenerationError, RequestValidationFailed
from utils.logger import setup_logger
from webapp.runtime import create_orchestrator


logger = logging.getLogger(__name__)

STRATEGY_PATHS = ("/api/strategy", "/api")

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

INVALID_BODY_ERROR = "Invalid request body. Ensure all required fields are present."
CONFIG_ERROR = "Server configuration error."
INTERNAL_ERROR = "An internal server error occurred."

OrchestratorFactory = Callable[[Settings], StrategyOrchestrator]


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger(level=get_settings().log_level)
    logger.info("Content strategy API ready")
    yield


app = FastAPI(title="Content Strategy Engine API", lifespan=lifespan)


@app.middleware("http")
async def _cors_headers(request: Request, call_next):
    response = await call_next(request)
    for key, value in CORS_HEADERS.items():
        response.headers[key] = value
    return response


def get_app_settings() -> Settings:
    return get_settings()


def get_orchestrator_factory() -> OrchestratorFactory:
    return create_orchestrator


def parse_strategy_request(body: Any) -> StrategyRequest:
    """Validate the inbound JSON body before any network activity."""
    if not isinstance(body, dict):
        raise RequestValidationFailed(INVALID_BODY_ERROR)
    try:
        return StrategyRequest.from_wire(body)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
        raise RequestValidationFailed(INVALID_BODY_ERROR, {"fields": fields}) from exc


def _error(status_code: int, message: str, details: Optional[str] = None) -> JSONResponse:
    content: Dict[str, Any] = {"error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def create_strategy(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    orchestrator_factory: OrchestratorFactory = Depends(get_orchestrator_factory),
) -> Response:
    try:
        body = await request.json()
    except ValueError:
        return _error(400, INVALID_BODY_ERROR)

    try:
        payload = parse_strategy_request(body)
    except RequestValidationFailed as exc:
        logger.warning(f"Rejected strategy request: {exc}")
        return _error(400, INVALID_BODY_ERROR)

    try:
        ensure_configured(settings)
    except ConfigurationError:
        return _error(500, CONFIG_ERROR)

    try:
        async with orchestrator_factory(settings) as orchestrator:
            raw = await orchestrator.run(payload)
    except GenerationError as exc:
        return _error(500, INTERNAL_ERROR, str(exc.details.get("cause") or exc.message))
    except Exception as exc:
        logger.exception("Strategy run failed")
        return _error(500, INTERNAL_ERROR, str(exc))

    return Response(content=raw, status_code=200, media_type="application/json")


async def strategy_preflight() -> Response:
    return Response(status_code=204)


async def strategy_method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=405,
        content={"error": "Method Not Allowed"},
        headers={"Allow": "POST, OPTIONS"},
    )


for _path in STRATEGY_PATHS:
    app.add_api_route(_path, create_strategy, methods=["POST"])
    app.add_api_route(_path, strategy_preflight, methods=["OPTIONS"])
    app.add_api_route(_path, strategy_method_not_allowed, methods=["GET", "PUT", "PATCH", "DELETE"])


@app.get("/api/health")
def health(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    return {
        "ok": True,
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "configured": settings.is_configured(),
    }
