from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from services.exceptions import AppError
from services.logger import logger


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"⚠️ {request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(content={"detail": exc.message}, status_code=exc.status_code)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(content={"detail": "Internal server error"}, status_code=500)
