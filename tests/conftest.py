import logging
import socket
import threading

import pytest

from labelprinter.app import create_app
from labelprinter.bootstrap import Settings
from labelprinter.services.logging_setup import LOGGER_NAMES
from labelprinter.services.printing_service import PrinterConfig


class StubPrinter:
    """
    Impressora falsa em 127.0.0.1.
      - "drain": lê até EOF e fecha (como a Zebra depois de consumir o job)
      - "hang":  aceita e fica parada, nunca fecha
    """
    def __init__(self, mode: str = "drain"):
        self.mode = mode
        self.received = []
        self.done = threading.Event()
        self._stop = threading.Event()
        self._server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._server.bind(("127.0.0.1", 0))
        self._server.listen(5)
        self._server.settimeout(0.1)
        self.host, self.port = self._server.getsockname()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self):
        self._thread.start()
        return self

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._server.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with conn:
                if self.mode == "hang":
                    self._stop.wait(10)
                    continue
                conn.settimeout(5)
                chunks = []
                while True:
                    data = conn.recv(4096)
                    if not data:
                        break
                    chunks.append(data)
                self.received.append(b"".join(chunks))
                self.done.set()

    def stop(self):
        self._stop.set()
        self._thread.join(timeout=5)
        self._server.close()


@pytest.fixture
def stub_printer():
    stub = StubPrinter().start()
    yield stub
    stub.stop()


@pytest.fixture
def hanging_printer():
    stub = StubPrinter(mode="hang").start()
    yield stub
    stub.stop()


@pytest.fixture
def closed_port():
    """Porta local sem ninguém escutando."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port


def make_app(host: str, port: int, timeout: float = 2.0):
    settings = Settings(printer=PrinterConfig(host, port, timeout=timeout))
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def app_factory():
    return make_app


@pytest.fixture
def client(stub_printer):
    return make_app(stub_printer.host, stub_printer.port).test_client()


@pytest.fixture
def offline_client(closed_port):
    return make_app("127.0.0.1", closed_port).test_client()


@pytest.fixture(autouse=True)
def _reset_loggers():
    yield
    # setup_logging desliga propagate; devolve ao padrão para o caplog
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
