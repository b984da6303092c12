"""
Gestionnaires d’exceptions.
- CheckoutError: code HTTP porté par l'erreur, body {"message": ...}.
- HTTPException (404/405 du routage, etc.): même format {"message": ...}.
- Exception: 500 générique, jamais de stack trace côté client.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from checkout_api.errors import CheckoutError
from .middlewares import CORS_HEADERS

logger = logging.getLogger(__name__)

def message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=CORS_HEADERS)

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers d'erreurs JSON.
    Les clients (front, scripts) reçoivent toujours un objet avec "message".
    """
    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return message_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return message_response(exc.status_code, str(exc.detail or "Request failed"))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Erreur non gérée %s %s", request.method, request.url.path)
        return message_response(500, "Internal server error")
