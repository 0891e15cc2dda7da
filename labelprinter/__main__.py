from labelprinter.app import create_app
from labelprinter.bootstrap import load_settings
from labelprinter.services.logging_setup import setup_logging
from labelprinter.services.log_service import log_service


def main():
    settings = load_settings()
    setup_logging(settings.log_dir, settings.environment)

    app = create_app(settings)

    log_service("startup", printer=settings.printer.address,
                app_host=settings.app_host, app_port=settings.app_port)
    try:
        app.run(host=settings.app_host, port=settings.app_port, debug=False, use_reloader=False)
    finally:
        log_service("shutdown")


if __name__ == "__main__":
    main()
