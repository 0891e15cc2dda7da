from typing import Mapping

from .zpl_builder import LabelRequest, build_zpl
from .printing_service import PrinterClient, PrinterError
from .trace_service import start_trace
from .log_service import log_service, log_audit, log_error


def print_label(fields: Mapping, client: PrinterClient) -> dict:
    """
    Monta o ZPL a partir dos campos do form/JSON e envia para a impressora.
    Retorna o trace finalizado; falha de entrega propaga como PrinterError.
    """
    trace = start_trace("print_label")
    label = LabelRequest.from_fields(fields)
    trace.add("request",
              sample_name=label.sample_name,
              barcode_type=label.barcode_type if label.barcode else None,
              has_logo=label.logo is not None,
              printer=client.config.address)

    zpl = build_zpl(label)
    trace.add("zpl_built", size=len(zpl), logo_emitted="^GFA" in zpl)

    try:
        client.send(zpl)
    except PrinterError as e:
        trace.add("send_failed", error=str(e), kind=type(e).__name__)
        log_error("print_failed", printer=client.config.address, error=str(e))
        log_audit("print_label", trace=trace.finish("erro"))
        raise

    trace.add("sent")
    dados = trace.finish("ok")
    log_audit("print_label", trace=dados)
    log_service("label_printed", printer=client.config.address,
                sample_name=label.sample_name, duration=dados["duration"])
    return dados


def preview_label(fields: Mapping) -> str:
    return build_zpl(LabelRequest.from_fields(fields))
