import logging
import time
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.api.error import ClientError, client_error_handler
from src.api.routes import invoices

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    app = FastAPI(
        title="Invoice Engine",
        description="Invoices, numbering, status lifecycle and activity log",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start_time = time.time()
            response = await call_next(request)
            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({duration_ms:.1f} ms)"
            )
            return response

    app.add_exception_handler(ClientError, client_error_handler)

    app.include_router(invoices.router, prefix=config.API_PREFIX)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
