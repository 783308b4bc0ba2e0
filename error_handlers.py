import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from models import JobStatus
from services import JobNotFoundError

logger = logging.getLogger("mockvideo.errors")


def register_error_handlers(app: FastAPI):
    @app.exception_handler(HTTPException)
    async def http_exc_handler(request: Request, exc: HTTPException):
        logger.warning(
            "HTTPException path=%s status=%s detail=%r",
            request.url.path, exc.status_code, exc.detail
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail) if exc.detail else "HTTP error"},
        )

    # Malformed bodies are client errors like a short prompt: 400, nothing stored.
    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "ValidationError path=%s errors=%s",
            request.url.path, exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(JobNotFoundError)
    async def job_not_found_handler(request: Request, exc: JobNotFoundError):
        logger.info("Job lookup miss path=%s job_id=%s", request.url.path, exc.job_id)
        return JSONResponse(
            status_code=404,
            content={"status": JobStatus.FAILED.value, "error": "Job not found"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error at path=%s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )
