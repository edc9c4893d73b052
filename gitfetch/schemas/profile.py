from datetime import date

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic.alias_generators import to_camel


class ContributionDay(BaseModel):
    """Single calendar day with its contribution count."""

    model_config = ConfigDict(frozen=True)

    date: date
    count: int = Field(ge=0)


class UserProfile(BaseModel):
    """Profile and activity record returned by the GitHub GraphQL query.

    Field names follow the GraphQL response (camelCase aliases) so the raw
    user object can be validated directly.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    login: str = Field(min_length=1)
    name: str | None = None
    email: str | None = None
    bio: str | None = None
    company: str | None = None
    location: str | None = None
    website_url: str | None = None
    twitter_username: str | None = None
    avatar_url: str
    days: list[ContributionDay] = Field(default_factory=list)

    @property
    def counts(self) -> list[int]:
        return [day.count for day in self.days]
