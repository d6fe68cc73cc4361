from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from acai_control.config.settings import Settings
from acai_control.core.exceptions import AcaiControlError, PersistenceError
import time
import logging

logger = logging.getLogger(__name__)

# Prefixos que o FastAPI coloca na localização do erro
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def setup_middleware(app: FastAPI, settings: Settings):
    """Configure all middleware for the application"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With"
        ],
        max_age=3600
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            "%s %s - Status: %s - Time: %.4fs",
            request.method,
            request.url.path,
            response.status_code,
            process_time
        )

        return response


def _format_validation_errors(exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in _LOCATION_PREFIXES:
            location = location[1:]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Valor inválido")
        })
    return errors


def setup_exception_handlers(app: FastAPI):
    """Traduzir a taxonomia de erros para respostas HTTP"""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Dados inválidos", "errors": _format_validation_errors(exc)}
        )

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        logger.error("Falha de persistência em %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(AcaiControlError)
    async def domain_error_handler(request: Request, exc: AcaiControlError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
