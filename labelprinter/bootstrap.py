import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .constants import (
    DEFAULT_APP_HOST, DEFAULT_APP_PORT, DEFAULT_LOG_DIR,
    DEFAULT_PRINTER_PORT, DEFAULT_PRINTER_TIMEOUT,
)
from .services.printing_service import PrinterConfig


class Settings:
    """
    Configuração do processo, montada uma vez no bootstrap e passada
    explicitamente para create_app().
    """
    def __init__(self, printer: PrinterConfig, app_host: str = DEFAULT_APP_HOST,
                 app_port: int = DEFAULT_APP_PORT, log_dir: Optional[Path] = None,
                 environment: str = "prd"):
        self.printer     = printer
        self.app_host    = app_host
        self.app_port    = app_port
        self.log_dir     = Path(log_dir) if log_dir else Path(DEFAULT_LOG_DIR)
        self.environment = environment

    def __repr__(self) -> str:
        return (f"Settings(printer={self.printer!r}, app={self.app_host}:{self.app_port}, "
                f"log_dir={str(self.log_dir)!r}, env={self.environment!r})")


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = (environ.get(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = (environ.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw.replace(",", "."))
    except ValueError:
        return default
    return value if value > 0 else default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Lê a configuração do ambiente.
    Sem `environ`, carrega antes o arquivo .env (se existir) para os.environ.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    printer = PrinterConfig(
        host=(environ.get("PRINTER_IP") or "").strip(),
        port=_env_int(environ, "PRINTER_PORT", DEFAULT_PRINTER_PORT),
        timeout=_env_float(environ, "PRINTER_TIMEOUT", DEFAULT_PRINTER_TIMEOUT),
    )
    return Settings(
        printer=printer,
        app_host=(environ.get("APP_HOST") or DEFAULT_APP_HOST).strip(),
        app_port=_env_int(environ, "APP_PORT", DEFAULT_APP_PORT),
        log_dir=Path(environ.get("LABELPRINTER_LOG_DIR") or DEFAULT_LOG_DIR),
        environment=(environ.get("LABELPRINTER_ENV") or "prd").strip().lower(),
    )
