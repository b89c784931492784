import logging
from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inkwell.errors import NotFoundError, ValidationError
from inkwell.schemas.blog import ApiResponse

logger = logging.getLogger(__name__)


def ok(data: Any = None) -> ApiResponse:
    return ApiResponse(success=True, data=data)


@contextmanager
def http_errors(failure_detail: str) -> Iterator[None]:
    """
    Translate service errors into HTTP errors. Anything unexpected is logged
    and reported with failure_detail only, so store internals never leak.
    """
    try:
        yield
    except HTTPException:
        raise
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message or "Not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"{failure_detail}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=failure_detail)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    body = ApiResponse(success=False, error=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    body = ApiResponse(success=False, error=message)
    return JSONResponse(status_code=422, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
