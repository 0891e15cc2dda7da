import os
from typing import Optional

from flask import Flask

from .constants import BASE_DIR
from .bootstrap import Settings, load_settings
from .services.printing_service import PrinterClient
from .services.log_service import log_exception
from .routes.main import bp as main_bp
from .routes.api import bp as api_bp


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or load_settings()

    app = Flask(__name__,
                template_folder=os.path.join(BASE_DIR, "templates"),
                static_folder=os.path.join(BASE_DIR, "static"))

    # Configuração explícita, sem singleton de módulo
    app.config["SETTINGS"] = settings
    app.config["PRINTER"]  = PrinterClient(settings.printer)

    # Blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)

    # Loga 500 com stack
    @app.errorhandler(500)
    def _err500(e):
        original = getattr(e, "original_exception", None) or e
        log_exception("unhandled_error", exc_info=original, error=str(original))
        return "Internal error. See error.log for details.", 500

    return app
