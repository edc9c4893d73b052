import math
from collections.abc import Sequence

from gitfetch.schemas.config import RGB

# Block glyphs ordered from emptiest to fullest.
GLYPHS: tuple[str, ...] = ("▁", "▂", "▃", "▄", "▅", "▆", "▇", "█")

# Contribution palette ordered from lowest to highest activity.
DEFAULT_COLOR_LEVELS: tuple[RGB, ...] = (
    (33, 110, 57),
    (48, 161, 78),
    (64, 196, 99),
    (155, 233, 168),
    (235, 237, 240),
)

COLOR_LEVEL_COUNT = 5

ANSI_RESET = "\x1b[0m"


def log_fraction(value: int, maximum: int) -> float:
    """Map a count to [0, 1] on a logarithmic scale relative to `maximum`.

    A series whose maximum is zero has no scale; every value maps to 0.
    """

    divisor = math.log(maximum + 1)
    if divisor <= 0:
        return 0.0
    return min(1.0, max(0.0, math.log(value + 1) / divisor))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def height_index(fraction: float) -> int:
    return min(len(GLYPHS) - 1, max(0, _round_half_up(fraction * (len(GLYPHS) - 1))))


def color_index(fraction: float) -> int:
    top = COLOR_LEVEL_COUNT - 1
    return min(top, max(0, _round_half_up(fraction * top)))


def colorize(text: str, rgb: RGB) -> str:
    """Wrap text in a 24-bit foreground color escape followed by a reset."""

    red, green, blue = rgb
    return f"\x1b[38;2;{red};{green};{blue}m{text}{ANSI_RESET}"


def encode_glyph(fraction: float, color_levels: Sequence[RGB]) -> str:
    return colorize(GLYPHS[height_index(fraction)], color_levels[color_index(fraction)])


def render_chart(
    counts: Sequence[int],
    color_levels: Sequence[RGB] = DEFAULT_COLOR_LEVELS,
) -> str:
    """Render daily counts as one line of colored block glyphs.

    Counts are drawn left to right in the given order. `color_levels` must
    hold at least five entries; only the first five are used.
    """

    if len(color_levels) < COLOR_LEVEL_COUNT:
        raise ValueError(f"color_levels needs {COLOR_LEVEL_COUNT} entries")

    maximum = max(counts, default=0)
    return "".join(
        encode_glyph(log_fraction(count, maximum), color_levels) for count in counts
    )
