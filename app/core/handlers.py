import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import PersistenceError, ReportAPIError, ValidationError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    payload = {"error": message}
    payload.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))


def register_exception_handlers(app: FastAPI):
    """Traduce las excepciones de dominio y de FastAPI a respuestas JSON."""

    @app.exception_handler(ReportAPIError)
    async def handle_report_error(request: Request, exc: ReportAPIError):
        if isinstance(exc, PersistenceError):
            # el detalle ya quedó en el log del store
            return error_response(exc.status_code, exc.message)
        details = exc.details if isinstance(exc, ValidationError) and exc.details else None
        logger.info("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
        return error_response(exc.status_code, exc.message, details=details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        details = []
        for err in exc.errors():
            detail = {"message": err.get("msg", "")}
            # loc = ("body", "status") o ("body", <posición>) si el JSON no se pudo leer
            field = ".".join(p for p in err.get("loc", ())[1:] if isinstance(p, str))
            if field:
                detail["field"] = field
            details.append(detail)
        return error_response(status.HTTP_400_BAD_REQUEST, "Datos de entrada inválidos", details=details)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(404, "Ruta no encontrada", path=request.url.path)
        if exc.status_code == 413:
            return error_response(400, "Archivo demasiado grande")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Error no tratado en %s %s", request.method, request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error interno del servidor")
