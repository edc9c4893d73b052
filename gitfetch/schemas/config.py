import logging
from typing import Annotated
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import ValidationInfo
from pydantic import ValidatorFunctionWrapHandler
from pydantic import field_validator

logger = logging.getLogger(__name__)

MIN_COLOR_LEVELS = 5

Channel = Annotated[int, Field(ge=0, le=255)]
RGB = tuple[Channel, Channel, Channel]
ColorLevels = Annotated[list[RGB], Field(min_length=MIN_COLOR_LEVELS)]


class GitfetchConfig(BaseModel):
    """User configuration read from the JSON config file.

    Every field is optional. A field that fails validation is dropped with a
    warning instead of invalidating the whole file, so a palette with fewer
    than five entries is never partially applied.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    color_levels: ColorLevels | None = None
    username_color: RGB | None = None
    string_modules: list[str] | None = None

    @field_validator("color_levels", "username_color", "string_modules", mode="wrap")
    @classmethod
    def _drop_invalid_field(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError as exc:
            logger.warning(
                "Ignoring invalid config field %r: %s",
                info.field_name,
                exc.errors(include_url=False)[0]["msg"],
            )
            return None
