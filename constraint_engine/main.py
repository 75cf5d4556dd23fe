"""
Constraint Engine HTTP API — validation reports for editors and CI.

  POST /validate → run a built-in rule set over submitted sources
  GET  /rules    → built-in rule metadata
  GET  /health   → {"status": "ok", ...}
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from constraint_engine.api.routes.health import router as health_router
from constraint_engine.api.routes.validate import router as validate_router
from constraint_engine.config import VERSION, settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("constraint_engine")

app = FastAPI(
    title="Constraint Engine",
    description="Rule-based static validation of source files",
    version=VERSION,
)

app.include_router(health_router)
app.include_router(validate_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    logger.warning(f"Rejected {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=422, content={"detail": errors})
