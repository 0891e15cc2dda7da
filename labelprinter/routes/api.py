# labelprinter/routes/api.py
"""
API JSON para o frontend.
Endpoints:
  POST /api/print    → recebe JSON, gera o ZPL e envia para a impressora
  POST /api/preview  → devolve o ZPL gerado, sem imprimir
  POST /api/logo     → converte uma imagem enviada em logoW/logoH/logoHex
  GET  /api/health   → status e impressora configurada
"""
from flask import Blueprint, request, jsonify, current_app
from PIL import Image, UnidentifiedImageError

from labelprinter.constants import LABEL_WIDTH_DOTS, LABEL_HEIGHT_DOTS
from labelprinter.services.label_service import print_label, preview_label
from labelprinter.services.logo_service import image_to_logo
from labelprinter.services.printing_service import PrinterError
from labelprinter.services.zpl_builder import parse_int
from labelprinter.services.log_service import log_warning

bp = Blueprint("api", __name__, url_prefix="/api")


# ---------------------------------------------------------
# CORS básico para dev local (frontend em porta diferente)
# ---------------------------------------------------------
@bp.after_request
def _add_cors(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response


def _bounded(value, limit: int) -> int:
    """Tamanho pedido para o logo, limitado ao tamanho da etiqueta."""
    n = parse_int(value)
    if n is None or n <= 0 or n > limit:
        return limit
    return n


def _payload() -> dict:
    """Aceita JSON ou form; corpo inválido vira dict vazio (campos com default)."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form.to_dict()


@bp.route("/print", methods=["POST", "OPTIONS"])
def api_print():
    if request.method == "OPTIONS":
        return "", 204

    try:
        dados = print_label(_payload(), current_app.config["PRINTER"])
    except PrinterError as e:
        return jsonify({"success": False, "error": str(e)}), 500

    return jsonify({"success": True, "trace_id": dados["trace_id"]})


@bp.route("/preview", methods=["POST", "OPTIONS"])
def api_preview():
    if request.method == "OPTIONS":
        return "", 204
    return preview_label(_payload()), 200, {"Content-Type": "text/plain; charset=utf-8"}


@bp.route("/logo", methods=["POST", "OPTIONS"])
def api_logo():
    """Recebe multipart com `image` (+ width, height, threshold opcionais)."""
    if request.method == "OPTIONS":
        return "", 204

    upload = request.files.get("image")
    if upload is None or not upload.filename:
        return jsonify({"error": "Missing image upload"}), 400

    try:
        with Image.open(upload.stream) as img:
            logo = image_to_logo(
                img,
                max_width=_bounded(request.form.get("width"), LABEL_WIDTH_DOTS),
                max_height=_bounded(request.form.get("height"), LABEL_HEIGHT_DOTS),
                threshold=parse_int(request.form.get("threshold"), 128),
            )
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        log_warning("logo_upload_invalid", upload_name=upload.filename, error=str(e))
        return jsonify({"error": "Unreadable image"}), 400

    return jsonify({
        "logoW": logo.width,
        "logoH": logo.height,
        "logoHex": logo.hex_data,
    })


@bp.route("/health", methods=["GET"])
def health():
    printer = current_app.config["PRINTER"]
    return jsonify({
        "status": "ok",
        "printer": printer.config.address if printer.config.host else None,
    })
