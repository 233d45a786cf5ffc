"""Entry point for the Storage API service."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from common.logging_config import mask_sensitive_data, setup_logging
from storage_api import config
from storage_api.exceptions import (
    BadRequestError,
    BlobNotFoundError,
    FileTooLargeError,
    InvalidAPIKeyError,
    InvalidBucketError,
    InvalidIdentifierError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
    StorageAPIException,
    UnsupportedContentTypeError,
)
from storage_api.routes.file_routes import router as file_router
from storage_api.routes.question_routes import router as question_router
from storage_api.schemas.common import ErrorResponse, HealthResponse
from storage_api.service_locator import get_question_service, get_uptime, init_services
from storage_api.utils import get_current_timestamp

logger = setup_logging('storage_api')
mask_sensitive_data('uvicorn.access')

app = FastAPI(
    title="CodeMaze Storage API",
    description="File-backed storage for question data and uploaded files",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Bootstrap the data directories on application startup.
    """
    logger.info("Storage API starting up...")

    init_services()

    if not config.API_KEY:
        logger.warning("STORAGE_API_KEY is not set - all key-protected routes will reject requests")


def _error_response(status_code: int, exc: Exception, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=str(exc), code=code).model_dump()
    )


def _log_warning(request: Request, label: str, exc: Exception) -> None:
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"{label}: {exc} [request_id={request_id}] path={request.url.path}"
    )


@app.exception_handler(RecordNotFoundError)
async def record_not_found_handler(request: Request, exc: RecordNotFoundError):
    _log_warning(request, "Question not found error", exc)
    return _error_response(status.HTTP_404_NOT_FOUND, exc, "QUESTION_NOT_FOUND")


@app.exception_handler(BlobNotFoundError)
async def blob_not_found_handler(request: Request, exc: BlobNotFoundError):
    _log_warning(request, "File not found error", exc)
    return _error_response(status.HTTP_404_NOT_FOUND, exc, "FILE_NOT_FOUND")


@app.exception_handler(RecordAlreadyExistsError)
async def record_already_exists_handler(request: Request, exc: RecordAlreadyExistsError):
    _log_warning(request, "Question already exists error", exc)
    return _error_response(status.HTTP_409_CONFLICT, exc, "QUESTION_ALREADY_EXISTS")


@app.exception_handler(InvalidBucketError)
async def invalid_bucket_handler(request: Request, exc: InvalidBucketError):
    _log_warning(request, "Invalid folder error", exc)
    return _error_response(status.HTTP_400_BAD_REQUEST, exc, "INVALID_FOLDER")


@app.exception_handler(UnsupportedContentTypeError)
async def unsupported_content_type_handler(request: Request, exc: UnsupportedContentTypeError):
    _log_warning(request, "Unsupported file type error", exc)
    return _error_response(status.HTTP_400_BAD_REQUEST, exc, "UNSUPPORTED_FILE_TYPE")


@app.exception_handler(FileTooLargeError)
async def file_too_large_handler(request: Request, exc: FileTooLargeError):
    _log_warning(request, "File too large error", exc)
    return _error_response(status.HTTP_400_BAD_REQUEST, exc, "FILE_TOO_LARGE")


@app.exception_handler(InvalidIdentifierError)
async def invalid_identifier_handler(request: Request, exc: InvalidIdentifierError):
    _log_warning(request, "Invalid identifier error", exc)
    return _error_response(status.HTTP_400_BAD_REQUEST, exc, "INVALID_IDENTIFIER")


@app.exception_handler(BadRequestError)
async def bad_request_handler(request: Request, exc: BadRequestError):
    _log_warning(request, "Bad request error", exc)
    return _error_response(status.HTTP_400_BAD_REQUEST, exc, "BAD_REQUEST")


@app.exception_handler(InvalidAPIKeyError)
async def invalid_api_key_handler(request: Request, exc: InvalidAPIKeyError):
    _log_warning(request, "Invalid API key error", exc)
    return _error_response(status.HTTP_401_UNAUTHORIZED, exc, "INVALID_API_KEY")


@app.exception_handler(StorageAPIException)
async def storage_exception_handler(request: Request, exc: StorageAPIException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Storage exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc, "INTERNAL_ERROR")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    _log_warning(request, "Request validation error", exc)
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": f"Invalid request: {details}", "code": "BAD_REQUEST"}
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail), "code": "HTTP_ERROR"},
        headers=getattr(exc, 'headers', None)
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Unhandled error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error", "code": "INTERNAL_ERROR"}
    )


app.include_router(question_router)
app.include_router(file_router)


@app.get("/")
async def root():
    """
    Root endpoint.
    """
    return {"message": "CodeMaze Storage API", "status": "running"}


@app.get("/health", response_model=HealthResponse)
def health_check():
    """
    Health check endpoint for Docker healthcheck.
    Returns 200 with the number of stored questions and process uptime.
    """
    return HealthResponse(
        status="ok",
        timestamp=get_current_timestamp(),
        questionsCount=get_question_service().count(),
        uptime=round(get_uptime(), 3),
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "storage_api.main:app",
        host=config.STORAGE_HOST,
        port=config.STORAGE_PORT,
    )


if __name__ == "__main__":
    main()
