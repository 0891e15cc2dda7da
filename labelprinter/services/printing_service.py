import socket
import time

from ..constants import DEFAULT_PRINTER_PORT, DEFAULT_PRINTER_TIMEOUT, PRINTER_ENCODING


class PrinterError(Exception):
    """Falha ao entregar um documento ZPL à impressora."""


class PrinterConnectionError(PrinterError, ConnectionError):
    pass


class PrinterTimeoutError(PrinterError, TimeoutError):
    pass


class PrinterConfig:
    def __init__(self, host: str, port: int = DEFAULT_PRINTER_PORT,
                 timeout: float = DEFAULT_PRINTER_TIMEOUT):
        self.host    = host
        self.port    = port
        self.timeout = timeout

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def __repr__(self) -> str:
        return f"PrinterConfig(host={self.host!r}, port={self.port}, timeout={self.timeout})"


class PrinterClient:
    """
    Envia ZPL puro para a impressora via TCP (porta RAW, 9100 por padrão).

    Uma conexão por chamada, sem retry: conecta, escreve tudo, fecha o lado
    de escrita e espera a impressora encerrar a conexão. O timeout vale para
    a sequência inteira (connect -> write -> close).
    """
    def __init__(self, config: PrinterConfig):
        self.config = config

    def send(self, zpl: str) -> None:
        if not self.config.host:
            raise PrinterError("Printer address is not configured")

        payload  = zpl.encode(PRINTER_ENCODING, errors="replace")
        deadline = time.monotonic() + self.config.timeout

        def _remaining() -> float:
            left = deadline - time.monotonic()
            if left <= 0:
                raise socket.timeout("deadline exceeded")
            return left

        sock = None
        try:
            sock = self._connect(_remaining)
            sock.settimeout(_remaining())
            sock.sendall(payload)
            sock.shutdown(socket.SHUT_WR)
            # Drena até a impressora fechar (recv == b"")
            while True:
                sock.settimeout(_remaining())
                if not sock.recv(1024):
                    break
        except socket.timeout as e:
            raise PrinterTimeoutError(
                f"Timeout after {self.config.timeout}s talking to printer {self.config.address}"
            ) from e
        except OSError as e:
            raise PrinterConnectionError(
                f"Could not deliver label to printer {self.config.address}: {e}"
            ) from e
        finally:
            if sock is not None:
                sock.close()

    def _connect(self, remaining) -> socket.socket:
        """
        Tenta cada endereço do host (A, AAAA...) dentro do mesmo prazo.
        Propaga o último erro se nenhum conectar.
        """
        infos = socket.getaddrinfo(self.config.host, self.config.port, type=socket.SOCK_STREAM)
        last_error = None
        for family, socktype, proto, _, sockaddr in infos:
            sock = socket.socket(family, socktype, proto)
            try:
                sock.settimeout(remaining())
                sock.connect(sockaddr)
                return sock
            except OSError as e:
                sock.close()
                last_error = e
                if isinstance(e, socket.timeout):
                    break
        if last_error is None:
            raise OSError(f"no address found for {self.config.host}")
        raise last_error
