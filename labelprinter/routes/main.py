from flask import Blueprint, render_template, request, current_app

from labelprinter.constants import (
    DEFAULT_FONT_MAIN, DEFAULT_FONT_SMALL, DEFAULT_LOGO_X, DEFAULT_LOGO_Y,
)
from labelprinter.services.label_service import print_label
from labelprinter.services.printing_service import PrinterError

bp = Blueprint("main", __name__)

_TEXT = {"Content-Type": "text/plain; charset=utf-8"}


@bp.route("/", methods=["GET"])
def index():
    printer = current_app.config["PRINTER"]
    return render_template(
        "index.html",
        printer=printer.config.address if printer.config.host else None,
        font_main=DEFAULT_FONT_MAIN,
        font_small=DEFAULT_FONT_SMALL,
        logo_x=DEFAULT_LOGO_X,
        logo_y=DEFAULT_LOGO_Y,
    )


# O form da página posta aqui (application/x-www-form-urlencoded)
@bp.route("/print", methods=["POST"])
def print_form():
    try:
        print_label(request.form, current_app.config["PRINTER"])
    except PrinterError as e:
        return f"Printing failed: {e}", 500, _TEXT
    return "Label sent to printer.", 200, _TEXT
