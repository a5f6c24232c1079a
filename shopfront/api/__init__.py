# shopfront/api/__init__.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shopfront.domain.errors import PartialCommit, ShopError
from shopfront.utils.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ShopError)
    async def shop_error_handler(request: Request, exc: ShopError):
        body = {"detail": exc.message, "error": exc.kind}
        if isinstance(exc, PartialCommit):
            body["charge_id"] = exc.charge_id
            body["retriable"] = exc.retriable
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        #zadnych szczegolow wewnetrznych w odpowiedzi
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Something went wrong, please try again later", "error": "InternalError"},
        )
