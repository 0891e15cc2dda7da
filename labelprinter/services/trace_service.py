import uuid, time
from flask import g, has_request_context


class RequestTrace:
    """Linha do tempo de uma tentativa de impressão (vai inteira para o audit log)."""
    def __init__(self, action: str):
        self.id = str(uuid.uuid4())
        self.action = action
        self.start = time.monotonic()
        self.events = []
        self.status = None
        self.duration = None

    def add(self, event: str, **meta):
        self.events.append({
            "t": round(time.monotonic() - self.start, 3),
            "event": event,
            **meta
        })

    def finish(self, status="ok") -> dict:
        self.status = status
        self.duration = round(time.monotonic() - self.start, 3)
        return {
            "trace_id": self.id,
            "action": self.action,
            "duration": self.duration,
            "status": status,
            "events": self.events
        }


def start_trace(action: str) -> RequestTrace:
    """Cria um trace novo e, se houver request Flask, guarda em g.trace."""
    trace = RequestTrace(action)
    if has_request_context():
        g.trace = trace
    return trace


def get_trace():
    if has_request_context():
        return g.get("trace")
    return None
