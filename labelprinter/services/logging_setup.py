# labelprinter/services/logging_setup.py
import os, json, socket, logging, time
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler

from ..constants import APP_NAME

APP_VERSION = os.environ.get("LABELPRINTER_APP_VERSION", "dev")
HOSTNAME    = socket.gethostname()
PROCESS_ID  = os.getpid()

LOGGER_NAMES = ("labelprinter.service", "labelprinter.audit", "labelprinter.error")

# Atributos padrão de LogRecord que não vão para o JSON como "extra"
_RESERVED = {
    "msg", "args", "levelno", "levelname", "name", "created", "msecs",
    "relativeCreated", "pathname", "filename", "module", "lineno", "funcName",
    "thread", "threadName", "process", "processName", "exc_info", "exc_text",
    "stack_info", "stacklevel", "taskName",
}


class JsonFormatter(logging.Formatter):
    # Gera uma linha JSON por registro
    def __init__(self, environment: str = "prd"):
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts":      time.strftime("%Y-%m-%dT%H:%M:%S%z", time.localtime(record.created)),
            "level":   record.levelname,
            "logger":  record.name,
            "message": record.getMessage(),
            "app":     APP_NAME,
            "version": APP_VERSION,
            "env":     self.environment,
            "host":    HOSTNAME,
            "pid":     PROCESS_ID,
            "module":  record.module,
            "func":    record.funcName,
        }
        # logger.info("msg", extra={"key": "val"})
        for k, v in record.__dict__.items():
            if k not in base and k not in _RESERVED:
                base[k] = v
        if record.exc_info:
            base["exception"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


def _make_handler(path: Path, environment: str) -> TimedRotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    h = TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        backupCount=7,           # mantém 7 dias
        encoding="utf-8",
        utc=False
    )
    h.setFormatter(JsonFormatter(environment))
    return h


def setup_logging(logs_dir: Path, environment: str = "prd") -> dict:
    """
    Cria 3 loggers:
      - labelprinter.service → startup/shutdown, pedidos e resultados de impressão
      - labelprinter.audit   → trace de cada tentativa de impressão
      - labelprinter.error   → logo inválido, falhas de entrega, exceções
    Retorna os loggers em um dict.
    """
    logs_dir = Path(logs_dir)

    # Evita duplicar handlers se setup_logging for chamado 2x
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
        logger.propagate = False
        logger.setLevel(logging.INFO)

    service_logger = logging.getLogger("labelprinter.service")
    audit_logger   = logging.getLogger("labelprinter.audit")
    error_logger   = logging.getLogger("labelprinter.error")

    service_logger.addHandler(_make_handler(logs_dir / "service.log", environment))
    audit_logger.addHandler(_make_handler(logs_dir / "audit.log", environment))
    error_logger.addHandler(_make_handler(logs_dir / "error.log", environment))
    error_logger.setLevel(logging.WARNING)  # erros/alertas

    # Espelha tudo no console fora de produção
    if environment != "prd":
        console = logging.StreamHandler()
        console.setFormatter(JsonFormatter(environment))
        for logger in (service_logger, audit_logger, error_logger):
            logger.addHandler(console)

    return {
        "service": service_logger,
        "audit":   audit_logger,
        "error":   error_logger,
    }
