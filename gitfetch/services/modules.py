from collections.abc import Mapping
from collections.abc import Sequence

from gitfetch.schemas.config import RGB
from gitfetch.schemas.config import GitfetchConfig
from gitfetch.schemas.profile import UserProfile
from gitfetch.schemas.report import Module
from gitfetch.services.chart import COLOR_LEVEL_COUNT
from gitfetch.services.chart import DEFAULT_COLOR_LEVELS
from gitfetch.services.chart import colorize
from gitfetch.services.chart import render_chart

IDENTITY = "identity"
DISPLAY_NAME = "display-name"
TOTAL = "total"
CHART = "chart"

DEFAULT_MODULE_ORDER: tuple[str, ...] = (IDENTITY, DISPLAY_NAME, TOTAL, CHART)

# Optional profile fields, shown only when requested by name in the config.
PROFILE_FIELD_MODULES: dict[str, tuple[str, str]] = {
    "email": ("Email", "email"),
    "company": ("Company", "company"),
    "location": ("Location", "location"),
    "website": ("Website", "website_url"),
    "twitter": ("Twitter", "twitter_username"),
    "bio": ("Bio", "bio"),
}


def resolve_color_levels(config: GitfetchConfig | None) -> Sequence[RGB]:
    if config is None or config.color_levels is None:
        return DEFAULT_COLOR_LEVELS
    return config.color_levels


def resolve_username_color(config: GitfetchConfig | None) -> RGB:
    """Return the configured username color, or the brightest color level."""

    if config is not None and config.username_color is not None:
        return config.username_color
    return resolve_color_levels(config)[COLOR_LEVEL_COUNT - 1]


def _labelled(label: str, value: str | None) -> str:
    if not value:
        return ""
    return f"{label}:\t{value}"


def build_modules(
    profile: UserProfile, config: GitfetchConfig | None = None
) -> dict[str, Module]:
    """Compute every known module once from the fetched profile."""

    counts = profile.counts
    chart = render_chart(counts, resolve_color_levels(config))
    login = colorize(profile.login, resolve_username_color(config))

    modules = [
        Module(name=IDENTITY, contents=f"Github:\t{login}"),
        Module(name=DISPLAY_NAME, contents=_labelled("Name", profile.name)),
        Module(name=TOTAL, contents=f"Contributions in the last year:\t{sum(counts)}"),
        Module(name=CHART, contents=f"Contribution Chart over the last year:\n{chart}"),
    ]
    for name, (label, field) in PROFILE_FIELD_MODULES.items():
        modules.append(
            Module(name=name, contents=_labelled(label, getattr(profile, field)))
        )

    # Later entries replace earlier ones sharing a name.
    return {module.name: module for module in modules}


def resolve_module_order(config: GitfetchConfig | None) -> Sequence[str]:
    if config is None or config.string_modules is None:
        return DEFAULT_MODULE_ORDER
    return config.string_modules


def compose_modules(
    modules: Mapping[str, Module], order: Sequence[str] | None = None
) -> list[str]:
    """Return module contents in the requested order.

    Unknown names are skipped. Each module is emitted at most once, even when
    its name is repeated in `order`.
    """

    if order is None:
        order = DEFAULT_MODULE_ORDER

    pool = dict(modules)
    contents: list[str] = []
    for name in order:
        module = pool.pop(name, None)
        if module is None:
            continue
        contents.append(module.contents)

    return contents
