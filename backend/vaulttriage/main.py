"""FastAPI application entry point"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import get_settings
from .connection import VaultConnection
from .api import router
from .middleware import ObservabilityMiddleware, setup_logging

logger = logging.getLogger("vaulttriage.api")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # 仅在服务端记录错误详情
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app(connection: VaultConnection | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    settings = get_settings()

    # 初始化日志
    setup_logging(log_level=settings.log_level)

    app = FastAPI(
        title="Vault Triage",
        description="Scan and triage a local vault of markdown notes",
        version=__version__,
    )
    app.state.connection = connection or VaultConnection(settings)

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # 观测性中间件，记录所有请求
    app.add_middleware(ObservabilityMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


# Create app instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "vaulttriage.main:app",
        host=settings.host,
        port=settings.port,
    )
