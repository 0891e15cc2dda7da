import string
from typing import Optional

from PIL import Image

from ..constants import DEFAULT_LOGO_X, DEFAULT_LOGO_Y

HEX_DIGITS = set(string.hexdigits)


class InvalidLogoData(ValueError):
    """Bitmap do logo não bate com o formato do ^GFA (tamanho ou charset)."""


class Logo:
    """
    Bitmap monocromático no formato do ^GFA: 1 bit por pixel, linha a linha,
    cada linha completada até um byte inteiro, codificado em hexadecimal.
    """
    def __init__(self, width: int, height: int, hex_data: str,
                 x: int = DEFAULT_LOGO_X, y: int = DEFAULT_LOGO_Y):
        self.width = width
        self.height = height
        self.hex_data = hex_data
        self.x = max(0, x)
        self.y = max(0, y)

    @property
    def bytes_per_row(self) -> int:
        return (self.width + 7) // 8

    @property
    def total_bytes(self) -> int:
        return self.bytes_per_row * self.height

    def __eq__(self, other):
        if not isinstance(other, Logo):
            return NotImplemented
        return (self.width, self.height, self.hex_data, self.x, self.y) == \
               (other.width, other.height, other.hex_data, other.x, other.y)

    def __repr__(self) -> str:
        return (f"Logo({self.width}x{self.height} at {self.x},{self.y}, "
                f"{len(self.hex_data)} hex chars)")


def validate_logo(logo: Logo) -> None:
    """Levanta InvalidLogoData se o hex não corresponder a width x height."""
    if logo.width <= 0 or logo.height <= 0:
        raise InvalidLogoData(f"logo geometry must be positive, got {logo.width}x{logo.height}")

    expected = 2 * logo.total_bytes
    if len(logo.hex_data) != expected:
        raise InvalidLogoData(
            f"logo hex length {len(logo.hex_data)} does not match "
            f"{logo.width}x{logo.height} (expected {expected})"
        )
    if not set(logo.hex_data) <= HEX_DIGITS:
        raise InvalidLogoData("logo data contains non-hex characters")


def image_to_logo(image: Image.Image, max_width: Optional[int] = None,
                  max_height: Optional[int] = None, threshold: int = 128,
                  x: int = DEFAULT_LOGO_X, y: int = DEFAULT_LOGO_Y) -> Logo:
    """
    Converte uma imagem qualquer (PIL) para o bitmap do ^GFA.
    Pixel escuro (< threshold) = bit 1 = ponto impresso.
    """
    if image.mode in ("RGBA", "LA", "P"):
        # Transparente vira branco (não imprime)
        rgba = image.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        image = Image.alpha_composite(background, rgba)
    img = image.convert("L")
    max_width = max_width if max_width and max_width > 0 else None
    max_height = max_height if max_height and max_height > 0 else None
    if max_width or max_height:
        img.thumbnail((max_width or img.width, max_height or img.height))

    width, height = img.size
    bytes_per_row = (width + 7) // 8
    pixels = img.load()

    rows = []
    for row_y in range(height):
        row = bytearray(bytes_per_row)
        for col_x in range(width):
            if pixels[col_x, row_y] < threshold:
                row[col_x // 8] |= 0x80 >> (col_x % 8)
        rows.append(row.hex().upper())

    return Logo(width, height, "".join(rows), x=x, y=y)
