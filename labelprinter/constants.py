import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

APP_NAME = "LabelPrinter"

# Etiqueta 2" x 1" a 203 dpi
LABEL_WIDTH_DOTS  = 406
LABEL_HEIGHT_DOTS = 203

# Layout fixo (dots)
MARGIN_X   = 10
HEADLINE_Y = 12
PRICE_Y    = HEADLINE_Y + 34
NOTES_Y    = PRICE_Y + 28
CODE_Y     = NOTES_Y + 30

# Defaults dos campos
DEFAULT_FONT_MAIN    = 28
DEFAULT_FONT_SMALL   = 22
DEFAULT_BARCODE_TYPE = "code128"
DEFAULT_ROTATE       = "N"
DEFAULT_LOGO_X       = 300
DEFAULT_LOGO_Y       = 10

BARCODE_TYPES = ("code128", "qr")
ROTATIONS     = ("N", "R")

# Impressora / serviço
DEFAULT_PRINTER_PORT    = 9100
DEFAULT_PRINTER_TIMEOUT = 7.0
DEFAULT_APP_HOST        = "0.0.0.0"
DEFAULT_APP_PORT        = 8080
DEFAULT_LOG_DIR         = "logs"
PRINTER_ENCODING        = "latin-1"
