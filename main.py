import logging
import os

import structlog
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from database import StorageError, check_connection
from routers import all_routers
from services.exceptions import ServiceError

# Load .env
load_dotenv()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = structlog.get_logger()

# App instance
app = FastAPI(
    title="Rent Manager",
    description="Rent invoicing and tenant payment verification",
    version="1.0.0",
)

# CORS
origins = [o for o in os.getenv("CORS_ORIGINS", "").split(",") if o]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _failure(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message, **extra})


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return _failure(exc.status_code, exc.message)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return _failure(500, exc.message)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("database_error", path=request.url.path, error=str(exc))
    return _failure(500, "The data could not be loaded. Please try again.")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return _failure(404, "Route not found")
    return _failure(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = {
        ".".join(str(part) for part in err["loc"] if part != "body"): err["msg"]
        for err in exc.errors()
    }
    return _failure(422, "Validation failed", fields=fields)


for router in all_routers:
    app.include_router(router)


@app.get("/health")
def health():
    return {"status": "ok", "database": "connected" if check_connection() else "unavailable"}


if __name__ == "__main__":
    port = int(os.getenv("PORT", 10000))
    logger.info("starting", port=port)
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
