# labelprinter/services/log_service.py
import logging
from flask import has_request_context, request

SERVICE_LOGGER = logging.getLogger("labelprinter.service")
AUDIT_LOGGER   = logging.getLogger("labelprinter.audit")
ERROR_LOGGER   = logging.getLogger("labelprinter.error")


# ---------------------------------------------------------
# Insere dados do contexto HTTP automaticamente
# ---------------------------------------------------------
def _with_request_context(data: dict) -> dict:
    if has_request_context():
        data.setdefault("client_ip", request.remote_addr)
        data.setdefault("method", request.method)
        data.setdefault("path", request.path)
        data.setdefault("user_agent",
                        getattr(request, "user_agent", None)
                        and request.user_agent.string)
    return data


# ---------------------------------------------------------
# Logs gerais do sistema (INFO)
# ---------------------------------------------------------
def log_service(message: str, **meta):
    SERVICE_LOGGER.info(message, extra=_with_request_context(meta))


# ---------------------------------------------------------
# Auditoria: um registro por tentativa de impressão
# ---------------------------------------------------------
def log_audit(action: str, **meta):
    AUDIT_LOGGER.info(action, extra=_with_request_context(meta))


# ---------------------------------------------------------
# Alertas e erros
# ---------------------------------------------------------
def log_warning(message: str, **meta):
    ERROR_LOGGER.warning(message, extra=_with_request_context(meta))


def log_error(message: str, **meta):
    ERROR_LOGGER.error(message, extra=_with_request_context(meta))


def log_exception(message: str, exc_info=True, **meta):
    ERROR_LOGGER.error(message, exc_info=exc_info, extra=_with_request_context(meta))
