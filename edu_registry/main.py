"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from edu_registry import __version__
from edu_registry.api.v1 import router as api_router
from edu_registry.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Edu Registry API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_dev else settings.CORS_ORIGINS,
    allow_credentials=not settings.is_dev,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s -> %s",
        request.method,
        request.url.path,
        response.status_code,
        extra={"duration_ms": round((time.perf_counter() - started) * 1000, 1)},
    )
    return response


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed input (bad JSON, wrong types, over-long fields) is a 400, not a 422."""
    logger.info("Rejected invalid request body on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Datos de entrada inválidos",
            "errors": jsonable_encoder(exc.errors(), exclude={"input", "ctx"}),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    """Generic 500; the exception text is only exposed when APP_ENV=dev."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    body: dict[str, str] = {"detail": "Error en el servidor"}
    if settings.is_dev:
        body["error"] = str(exc)
    return JSONResponse(status_code=500, content=body)


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Edu Registry API", "version": __version__}
