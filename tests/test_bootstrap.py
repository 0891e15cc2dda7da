import json
import logging
from pathlib import Path

from labelprinter.app import create_app
from labelprinter.bootstrap import load_settings
from labelprinter.services.logging_setup import setup_logging
from labelprinter.services.log_service import log_service, log_warning
from labelprinter.services.printing_service import PrinterClient


def test_defaults_from_empty_environment():
    settings = load_settings({})
    assert settings.printer.host == ""
    assert settings.printer.port == 9100
    assert settings.printer.timeout == 7.0
    assert settings.app_host == "0.0.0.0"
    assert settings.app_port == 8080
    assert settings.log_dir == Path("logs")
    assert settings.environment == "prd"


def test_values_from_environment():
    settings = load_settings({
        "PRINTER_IP": " 192.168.0.50 ",
        "PRINTER_PORT": "6101",
        "PRINTER_TIMEOUT": "3,5",
        "APP_PORT": "9000",
        "LABELPRINTER_LOG_DIR": "/tmp/labels",
        "LABELPRINTER_ENV": "DEV",
    })
    assert settings.printer.address == "192.168.0.50:6101"
    assert settings.printer.timeout == 3.5
    assert settings.app_port == 9000
    assert settings.log_dir == Path("/tmp/labels")
    assert settings.environment == "dev"


def test_invalid_numbers_fall_back():
    settings = load_settings({"PRINTER_PORT": "abc", "APP_PORT": "", "PRINTER_TIMEOUT": "-1"})
    assert settings.printer.port == 9100
    assert settings.app_port == 8080
    assert settings.printer.timeout == 7.0


def test_load_settings_reads_dotenv(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("PRINTER_IP=10.1.2.3\nPRINTER_PORT=9200\n")
    monkeypatch.chdir(tmp_path)
    # setenv grava o estado original para o teardown; delenv deixa o .env valer
    for key in ("PRINTER_IP", "PRINTER_PORT"):
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)

    settings = load_settings()
    assert settings.printer.address == "10.1.2.3:9200"


def test_create_app_wires_explicit_config():
    settings = load_settings({"PRINTER_IP": "10.0.0.9"})
    app = create_app(settings)
    assert app.config["SETTINGS"] is settings
    client = app.config["PRINTER"]
    assert isinstance(client, PrinterClient)
    assert client.config is settings.printer


def test_setup_logging_writes_json_lines(tmp_path):
    loggers = setup_logging(tmp_path, environment="prd")
    assert set(loggers) == {"service", "audit", "error"}

    log_service("startup", printer="10.0.0.1:9100")
    log_warning("logo_skipped", reason="bad length")
    for logger in loggers.values():
        for h in logger.handlers:
            h.flush()

    service = [json.loads(line) for line in (tmp_path / "service.log").read_text().splitlines()]
    assert service[-1]["message"] == "startup"
    assert service[-1]["printer"] == "10.0.0.1:9100"
    assert service[-1]["app"] == "LabelPrinter"

    error = [json.loads(line) for line in (tmp_path / "error.log").read_text().splitlines()]
    assert error[-1]["level"] == "WARNING"
    assert error[-1]["reason"] == "bad length"


def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path):
    setup_logging(tmp_path)
    setup_logging(tmp_path)
    assert len(logging.getLogger("labelprinter.service").handlers) == 1


def test_print_attempt_is_audited(tmp_path, closed_port, app_factory):
    setup_logging(tmp_path)
    client = app_factory("127.0.0.1", closed_port).test_client()
    client.post("/print", data={"sampleName": "Widget"})

    for name in ("labelprinter.audit", "labelprinter.error"):
        for h in logging.getLogger(name).handlers:
            h.flush()

    audit = json.loads((tmp_path / "audit.log").read_text().splitlines()[-1])
    assert audit["message"] == "print_label"
    assert audit["trace"]["status"] == "erro"
    assert audit["trace"]["events"][-1]["event"] == "send_failed"
    assert audit["path"] == "/print"

    error = json.loads((tmp_path / "error.log").read_text().splitlines()[-1])
    assert error["message"] == "print_failed"
