from io import BytesIO

from PIL import Image

from gitfetch.services.chart import ANSI_RESET

UPPER_HALF_BLOCK = "▀"


class AvatarError(Exception):
    """Raised when avatar bytes cannot be decoded into an image."""


def decode_avatar(data: bytes) -> Image.Image:
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            return _flatten(image)
    except (OSError, ValueError) as exc:
        raise AvatarError("avatar image cannot be decoded") from exc


def _flatten(image: Image.Image) -> Image.Image:
    """Return an RGB copy with transparency composited on black."""

    rgba = image.convert("RGBA")
    background = Image.new("RGBA", rgba.size, (0, 0, 0, 255))
    return Image.alpha_composite(background, rgba).convert("RGB")


def render_avatar(image: Image.Image, width: int = 20, height: int = 10) -> list[str]:
    """Render an image as `height` terminal lines of `width` cells.

    Each cell is an upper half block: the foreground carries the top pixel
    and the background the bottom one, so a cell holds two pixel rows.
    """

    if width <= 0 or height <= 0:
        return []

    pixels = image.convert("RGB").resize((width, height * 2), Image.Resampling.LANCZOS)
    lines: list[str] = []
    for row in range(height):
        cells: list[str] = []
        for column in range(width):
            top = pixels.getpixel((column, row * 2))
            bottom = pixels.getpixel((column, row * 2 + 1))
            cells.append(
                f"\x1b[38;2;{top[0]};{top[1]};{top[2]}m"
                f"\x1b[48;2;{bottom[0]};{bottom[1]};{bottom[2]}m"
                f"{UPPER_HALF_BLOCK}"
            )
        lines.append("".join(cells) + ANSI_RESET)

    return lines
