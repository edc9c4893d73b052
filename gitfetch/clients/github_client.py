from collections.abc import Mapping
from typing import Any

import httpx

USER_AGENT = "gitfetch"

PROFILE_QUERY = """
query($login: String!) {
  user(login: $login) {
    avatarUrl(size: 256)
    login
    name
    email
    bio
    company
    location
    websiteUrl
    twitterUsername
    contributionsCollection {
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""

PROFILE_FIELDS = (
    "login",
    "name",
    "email",
    "bio",
    "company",
    "location",
    "websiteUrl",
    "twitterUsername",
    "avatarUrl",
)


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"GitHub {what} is missing or invalid")
    return value


def _require_list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"GitHub {what} is missing or invalid")
    return value


def _parse_day(item: Any, position: str) -> dict[str, str | int]:
    day = _require_mapping(item, f"contribution day {position}")
    raw_date = day.get("date")
    raw_count = day.get("contributionCount")
    if not isinstance(raw_date, str) or not raw_date:
        raise ValueError(f"GitHub contribution day {position} has no date")
    # bool is an int subclass.
    if isinstance(raw_count, bool) or not isinstance(raw_count, int) or raw_count < 0:
        raise ValueError(f"GitHub contribution day {position} has an invalid count")
    return {"date": raw_date, "count": raw_count}


def _flatten_calendar(user: Mapping[str, Any]) -> list[dict[str, str | int]]:
    """Flatten calendar weeks into one chronological list of days.

    Any malformed week or day is an error: dropping it would shift the chart
    and change the total.
    """

    collection = _require_mapping(
        user.get("contributionsCollection"), "contributionsCollection"
    )
    calendar = _require_mapping(
        collection.get("contributionCalendar"), "contributionCalendar"
    )
    weeks = _require_list(calendar.get("weeks"), "contribution weeks")

    days: list[dict[str, str | int]] = []
    for week_number, raw_week in enumerate(weeks):
        week = _require_mapping(raw_week, f"contribution week {week_number}")
        week_days = _require_list(
            week.get("contributionDays"), f"contribution week {week_number} days"
        )
        days.extend(
            _parse_day(item, f"{week_number}.{day_number}")
            for day_number, item in enumerate(week_days)
        )

    return days


def _user_from_payload(payload: Any) -> Mapping[str, Any]:
    body = _require_mapping(payload, "GraphQL response")
    if body.get("errors"):
        raise ValueError("GitHub GraphQL returned errors")

    data = _require_mapping(body.get("data"), "GraphQL data")
    user = data.get("user")
    if not isinstance(user, Mapping):
        raise ValueError("GitHub user not found")
    return user


def fetch_user_profile(
    username: str,
    token: str | None,
    graphql_url: str,
    timeout: float = 20.0,
) -> dict[str, Any]:
    """Fetch profile fields and the contribution calendar for a user.

    The calendar is flattened into a chronological `days` list of
    `{"date", "count"}` items.
    """

    headers = {
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"

    response = httpx.post(
        graphql_url,
        json={"query": PROFILE_QUERY, "variables": {"login": username}},
        headers=headers,
        timeout=timeout,
    )
    response.raise_for_status()

    user = _user_from_payload(response.json())
    profile: dict[str, Any] = {field: user.get(field) for field in PROFILE_FIELDS}
    profile["days"] = _flatten_calendar(user)
    return profile


def fetch_avatar_bytes(avatar_url: str, timeout: float = 20.0) -> bytes:
    """Download the raw avatar image."""

    response = httpx.get(
        avatar_url,
        headers={"User-Agent": USER_AGENT},
        timeout=timeout,
        follow_redirects=True,
    )
    response.raise_for_status()
    return response.content
