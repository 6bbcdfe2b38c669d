import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api import books as books_router
from .api import clients as clients_router
from .api import meta as meta_router
from .api import orders as orders_router
from simple_books.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


# Global error handlers: 서비스와 같은 {"error": ...} 형태
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=str(exc.detail)).model_dump())


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = ".".join(str(p) for p in errors[0]["loc"][1:]) if errors else ""
    detail = f"Invalid or missing {field}." if field else "Invalid request body."
    return JSONResponse(status_code=400, content=ErrorResponse(error=detail).model_dump())


async def unhandled_exception_handler(request: Request, exc: Exception):
    logging.exception("stub: unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=ErrorResponse(error="Internal server error.").model_dump())


def create_app() -> FastAPI:
    """New stub app with its own ``dependency_overrides``."""
    app = FastAPI(title="Simple Books API (stub)", version="0.1.0")

    app.include_router(meta_router.router)
    app.include_router(clients_router.router)
    app.include_router(books_router.router)
    app.include_router(orders_router.router)

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    return app
