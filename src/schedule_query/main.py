from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schedule_query.adapters.api.controllers.network import router as network_router
from schedule_query.adapters.api.controllers.routes import router as routes_router
from schedule_query.adapters.api.controllers.stops import router as stops_router
from schedule_query.adapters.settings import RuntimeConfig, configure_logging
from schedule_query.domain.exceptions import (
    EmptySchedule,
    InvalidArgument,
    InvalidState,
    NotFound,
)

configure_logging()

app = FastAPI(title="Schedule Query")
app.include_router(routes_router)
app.include_router(stops_router)
app.include_router(network_router)


def _detail(exc: Exception) -> dict[str, str]:
    return {"detail": str(exc) or exc.__class__.__name__}


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content=_detail(exc))


@app.exception_handler(EmptySchedule)
async def empty_schedule_handler(request: Request, exc: EmptySchedule) -> JSONResponse:
    return JSONResponse(status_code=404, content=_detail(exc))


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument) -> JSONResponse:
    return JSONResponse(status_code=422, content=_detail(exc))


@app.exception_handler(InvalidState)
async def invalid_state_handler(request: Request, exc: InvalidState) -> JSONResponse:
    return JSONResponse(status_code=409, content=_detail(exc))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keep 500s as JSON so clients can always parse the body."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = RuntimeConfig.from_env().reveal_errors
    if reveal or isinstance(exc, FileNotFoundError):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
