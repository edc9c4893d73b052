from pydantic import BaseModel
from pydantic import ConfigDict


class Module(BaseModel):
    """Named text fragment that can be placed in the report."""

    model_config = ConfigDict(frozen=True)

    name: str
    contents: str
