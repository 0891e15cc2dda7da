# labelprinter/services/zpl_builder.py
"""
Gera o ZPL da etiqueta 2" x 1" (406 x 203 dots a 203 dpi).

Layout fixo, sem template: título, preço, observação opcional, código de
barras (Code 128) ou QR opcional e logo opcional (^GFA).
Função pura: a mesma entrada sempre gera o mesmo texto.
"""
import re
from typing import Mapping, Optional

from ..constants import (
    LABEL_WIDTH_DOTS, LABEL_HEIGHT_DOTS, MARGIN_X,
    HEADLINE_Y, PRICE_Y, NOTES_Y, CODE_Y,
    DEFAULT_FONT_MAIN, DEFAULT_FONT_SMALL, DEFAULT_BARCODE_TYPE, DEFAULT_ROTATE,
    DEFAULT_LOGO_X, DEFAULT_LOGO_Y, BARCODE_TYPES, ROTATIONS,
)
from .logo_service import Logo, InvalidLogoData, validate_logo
from .log_service import log_warning
from .trace_service import get_trace

# ^ e ~ iniciam comandos ZPL; \ é o indicador de hexa do ^FH
_RESERVED_RE = re.compile(r"[\^~\\]")


def sanitize(value) -> str:
    if value is None:
        return ""
    return _RESERVED_RE.sub(" ", str(value))


def parse_int(s, default=None):
    """
    Aceita 28, '28', '28.0' ou '28,0'.
    Vazio ou inválido retorna `default`.
    """
    if isinstance(s, bool):
        return default
    if isinstance(s, int):
        return s
    s = str(s if s is not None else "").strip()
    if not s:
        return default
    try:
        return int(float(s.replace(",", ".")))
    except (ValueError, OverflowError):
        return default


def _positive(value, default: int) -> int:
    n = parse_int(value, default)
    return n if n > 0 else default


class LabelRequest:
    def __init__(self, sample_name: str = "", price: str = "", notes: str = "",
                 barcode: str = "", barcode_type: str = DEFAULT_BARCODE_TYPE,
                 font_main=DEFAULT_FONT_MAIN, font_small=DEFAULT_FONT_SMALL,
                 rotate: str = DEFAULT_ROTATE, logo: Optional[Logo] = None):
        self.sample_name = sample_name or ""
        self.price = price or ""
        self.notes = notes or ""
        self.barcode = barcode or ""

        kind = (barcode_type or "").strip().lower()
        self.barcode_type = kind if kind in BARCODE_TYPES else DEFAULT_BARCODE_TYPE

        rot = (rotate or "").strip().upper()
        self.rotate = rot if rot in ROTATIONS else DEFAULT_ROTATE

        self.font_main = _positive(font_main, DEFAULT_FONT_MAIN)
        self.font_small = _positive(font_small, DEFAULT_FONT_SMALL)
        self.logo = logo

    @classmethod
    def from_fields(cls, data: Mapping) -> "LabelRequest":
        """Monta a partir do form/JSON (sampleName, price, fontMain, logoHex, ...)."""
        def text(key):
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            sample_name=text("sampleName"),
            price=text("price"),
            notes=text("notes"),
            barcode=text("barcode"),
            barcode_type=text("barcodeType"),
            font_main=data.get("fontMain"),
            font_small=data.get("fontSmall"),
            rotate=text("rotate"),
            logo=logo_from_fields(data),
        )

    def __repr__(self) -> str:
        return (f"LabelRequest(sample_name={self.sample_name!r}, price={self.price!r}, "
                f"barcode_type={self.barcode_type!r}, logo={self.logo!r})")


def logo_from_fields(data: Mapping) -> Optional[Logo]:
    """Logo só existe com logoHex, logoW e logoH preenchidos."""
    hex_data = str(data.get("logoHex") or "").strip()
    width = parse_int(data.get("logoW"))
    height = parse_int(data.get("logoH"))
    if not hex_data or width is None or height is None:
        return None
    return Logo(
        width, height, hex_data,
        x=parse_int(data.get("logoX"), DEFAULT_LOGO_X),
        y=parse_int(data.get("logoY"), DEFAULT_LOGO_Y),
    )


def _code_block(label: LabelRequest) -> list:
    data = sanitize(label.barcode)
    if label.barcode_type == "qr":
        # Model 2, ampliação 3. O "L" de "LA" no ^FD define a correção (nível L)
        # e prevalece sobre o H do ^BQ; "A" = entrada automática. Mantido "LA"
        # porque é o prefixo que o formulário sempre enviou.
        return [f"^FO{MARGIN_X},{CODE_Y}^BQN,2,3,H^FDLA,{data}^FS"]
    return [
        "^BY2,2,50",
        f"^FO{MARGIN_X},{CODE_Y}^BC{label.rotate},60,Y,N,N",
        f"^FD{data}^FS",
    ]


def _logo_block(logo: Logo) -> list:
    try:
        validate_logo(logo)
    except InvalidLogoData as e:
        log_warning("logo_skipped", reason=str(e), logo_w=logo.width, logo_h=logo.height)
        trace = get_trace()
        if trace is not None:
            trace.add("logo_skipped", reason=str(e))
        return []
    total = logo.total_bytes
    return [f"^FO{logo.x},{logo.y}^GFA,{total},{total},{logo.bytes_per_row},{logo.hex_data.upper()}^FS"]


def build_zpl(label: LabelRequest) -> str:
    lines = [
        "^XA",
        f"^PW{LABEL_WIDTH_DOTS}",
        f"^LL{LABEL_HEIGHT_DOTS}",
        "^LH0,0",
        "^CI0",  # texto em byte único

        # Título (nome da amostra)
        f"^CF0,{label.font_main}",
        f"^FO{MARGIN_X},{HEADLINE_Y}^FD{sanitize(label.sample_name)}^FS",

        # Preço
        f"^CF0,{label.font_small}",
        f"^FO{MARGIN_X},{PRICE_Y}^FD{sanitize(label.price)}^FS",
    ]

    if label.notes:
        lines.append(f"^CF0,{label.font_small}^FO{MARGIN_X},{NOTES_Y}^FD{sanitize(label.notes)}^FS")

    if label.barcode:
        lines += _code_block(label)

    if label.logo is not None:
        lines += _logo_block(label.logo)

    lines.append("^XZ")
    return "\n".join(lines)
