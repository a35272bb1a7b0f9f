"""
Logging setup for the Ebee API.

Everything goes through structlog bound to stdlib loggers. Development gets a
readable console renderer; production writes JSON lines to stdout and to a
rotating file under ``logs/``.
"""
import logging
import logging.config
import os
import sys
import time
import uuid
from typing import Any, Dict, Optional

import structlog

from ebee.core.config import settings

SERVICE_NAME = "ebee-api"
SERVICE_VERSION = "1.0.0"

LOG_DIR = "logs"
LOG_FILE = os.path.join(LOG_DIR, "ebee.log")

# Third-party loggers that are too chatty at the application level
QUIET_LOGGERS = {
    "uvicorn": "INFO",
    "uvicorn.access": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "celery": "INFO",
    "urllib3": "WARNING",
    "passlib": "ERROR",
}

# Requests to these paths are logged at debug level
PROBE_PATHS = ("/health",)

REQUEST_ID_HEADER = b"x-request-id"


def _is_production() -> bool:
    return settings.ENVIRONMENT == "production"


def _logging_config() -> Dict[str, Any]:
    production = _is_production()
    handlers = ["console"]

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(module)s %(lineno)d",
            },
            "plain": {"format": "%(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if production else "plain",
                "stream": sys.stdout,
            },
        },
        "loggers": {},
    }

    if production:
        os.makedirs(LOG_DIR, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": LOG_FILE,
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 10,
            "formatter": "json",
        }
        handlers.append("file")

    config["root"] = {"handlers": handlers, "level": settings.LOG_LEVEL}
    config["loggers"]["ebee"] = {"handlers": handlers, "level": settings.LOG_LEVEL, "propagate": False}
    for name, level in QUIET_LOGGERS.items():
        config["loggers"][name] = {"handlers": handlers, "level": level, "propagate": False}
    return config


def _add_service_metadata(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", SERVICE_VERSION)
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def setup_logging() -> None:
    """Configure stdlib logging and structlog; safe to call more than once."""
    logging.config.dictConfig(_logging_config())

    renderer = structlog.processors.JSONRenderer() if _is_production() else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _add_service_metadata,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name or "ebee")


class LoggingMiddleware:
    """
    ASGI middleware that logs one line per request.

    A caller-supplied ``X-Request-ID`` is reused, otherwise one is generated.
    The id is bound into structlog's context vars for the duration of the
    request, so service-level log lines carry it too, and is echoed back on
    the response.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        request_id = headers.get(REQUEST_ID_HEADER, b"").decode() or uuid.uuid4().hex
        path = scope["path"]

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        request_logger = get_logger("ebee.request").bind(method=scope["method"], path=path)

        status_code = 500
        started = time.perf_counter()

        async def send_with_request_id(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                message.setdefault("headers", [])
                message["headers"] = list(message["headers"]) + [(REQUEST_ID_HEADER, request_id.encode())]
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        except Exception:
            request_logger.exception("Unhandled error while serving request")
            raise
        finally:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
            log = request_logger.debug if path in PROBE_PATHS else request_logger.info
            log("request", status_code=status_code, duration_ms=elapsed_ms)
            structlog.contextvars.clear_contextvars()


def log_auth_event(event_type: str, user_email: str = None, success: bool = True, **kwargs):
    """Signup, login and password-reset outcomes. Failures are logged as warnings."""
    auth_logger = get_logger("ebee.auth")
    log = auth_logger.info if success else auth_logger.warning
    log(event_type, user_email=user_email, success=success, **kwargs)


def log_business_event(event_type: str, user_id: int = None, **kwargs):
    """Domain events such as product_created, order_created or payment_paid."""
    get_logger("ebee.business").info(event_type, user_id=user_id, **kwargs)


_SEVERITY_LEVELS = {
    "low": logging.INFO,
    "medium": logging.WARNING,
    "high": logging.ERROR,
    "critical": logging.CRITICAL,
}


def log_security_event(event_type: str, severity: str = "medium", **kwargs):
    level = _SEVERITY_LEVELS.get(severity.lower(), logging.WARNING)
    get_logger("ebee.security").log(level, event_type, severity=severity, **kwargs)
