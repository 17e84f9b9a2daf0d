"""
Error Responses

Maps the inspection NFT error taxonomy onto HTTP responses with a
uniform {error, details} body.
"""

from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from inspection_nft.exceptions import PipelineTimeoutError, QueryError


def error_response(status_code: int, error: str, details: Any = None, **extra: Any) -> JSONResponse:
    """Build a JSON error response"""
    content = {"error": error, "details": details}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def query_error_response(error: str, exc: QueryError) -> JSONResponse:
    """
    Error response for a failed indexer query.

    The upstream HTTP status is passed through unchanged; transport
    failures without a status become 500.
    """
    status_code = exc.status_code if exc.status_code and 400 <= exc.status_code <= 599 else 500
    return error_response(status_code, error, exc.detail or exc.message, upstreamStatus=exc.status_code)


def timeout_response(error: str, exc: PipelineTimeoutError) -> JSONResponse:
    return error_response(504, error, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 with the offending fields"""
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg"),
        }
        for error in exc.errors()
    ]
    missing = [d["field"] for d in details if d["message"] == "Field required"]
    error = "Missing required fields" if missing else "Invalid request"
    return error_response(400, error, details)
