from datetime import date

import httpx
import pytest

from gitfetch.schemas.profile import UserProfile
from gitfetch.services.fetch_service import GitHubAPIError
from gitfetch.services.fetch_service import InvalidGitHubTokenError
from gitfetch.services.fetch_service import fetch_avatar
from gitfetch.services.fetch_service import fetch_user

GRAPHQL_URL = "https://api.github.com/graphql"


def raw_profile() -> dict[str, object]:
    return {
        "login": "octocat",
        "name": None,
        "avatarUrl": "https://avatars.example.com/u/583231",
        "days": [
            {"date": "2026-02-19", "count": 2},
            {"date": "2026-02-20", "count": 0},
        ],
    }


def status_error(
    status_code: int, headers: dict[str, str] | None = None
) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", GRAPHQL_URL)
    response = httpx.Response(status_code, headers=headers, request=request)
    return httpx.HTTPStatusError("failed", request=request, response=response)


def test_fetch_user_validates_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_fetch_user_profile(username, token, graphql_url, timeout):
        assert username == "octocat"
        assert timeout == 7.0
        return raw_profile()

    monkeypatch.setattr(
        "gitfetch.services.fetch_service.fetch_user_profile", fake_fetch_user_profile
    )

    profile = fetch_user("octocat", "secret", GRAPHQL_URL, timeout=7.0)

    assert profile.login == "octocat"
    assert profile.name is None
    assert profile.days[0].date == date(2026, 2, 19)
    assert profile.counts == [2, 0]


@pytest.mark.parametrize("status_code", [401, 403])
def test_fetch_user_maps_auth_failures(
    monkeypatch: pytest.MonkeyPatch, status_code: int
) -> None:
    def fake_fetch_user_profile(**kwargs):
        raise status_error(status_code)

    monkeypatch.setattr(
        "gitfetch.services.fetch_service.fetch_user_profile", fake_fetch_user_profile
    )

    with pytest.raises(InvalidGitHubTokenError):
        fetch_user("octocat", "bad-token", GRAPHQL_URL)


def test_fetch_user_reports_stage_on_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_fetch_user_profile(**kwargs):
        raise httpx.ReadTimeout("slow")

    monkeypatch.setattr(
        "gitfetch.services.fetch_service.fetch_user_profile", fake_fetch_user_profile
    )

    with pytest.raises(GitHubAPIError) as exc_info:
        fetch_user("octocat", None, GRAPHQL_URL)

    assert exc_info.value.stage == "profile query"
    assert str(exc_info.value) == "profile query failed: timed out"


def test_fetch_user_wraps_invalid_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_fetch_user_profile(**kwargs):
        raise ValueError("GitHub user not found")

    monkeypatch.setattr(
        "gitfetch.services.fetch_service.fetch_user_profile", fake_fetch_user_profile
    )

    with pytest.raises(GitHubAPIError, match="GitHub user not found"):
        fetch_user("ghost", None, GRAPHQL_URL)


def test_fetch_user_rejects_malformed_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_fetch_user_profile(**kwargs):
        payload = raw_profile()
        payload["days"] = [{"date": "2026-02-19", "count": -1}]
        return payload

    monkeypatch.setattr(
        "gitfetch.services.fetch_service.fetch_user_profile", fake_fetch_user_profile
    )

    with pytest.raises(GitHubAPIError, match="malformed"):
        fetch_user("octocat", None, GRAPHQL_URL)


def test_fetch_avatar_reports_avatar_stage(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_fetch_avatar_bytes(avatar_url, timeout):
        raise status_error(404)

    monkeypatch.setattr(
        "gitfetch.services.fetch_service.fetch_avatar_bytes", fake_fetch_avatar_bytes
    )
    profile = UserProfile.model_validate(raw_profile())

    with pytest.raises(GitHubAPIError) as exc_info:
        fetch_avatar(profile)

    assert exc_info.value.stage == "avatar download"
    assert exc_info.value.detail == "HTTP 404"


@pytest.mark.parametrize(
    ("status_code", "headers"),
    [(403, {"X-RateLimit-Remaining": "0"}), (429, None)],
)
def test_fetch_user_reports_rate_limit_instead_of_bad_token(
    monkeypatch: pytest.MonkeyPatch, status_code: int, headers: dict[str, str] | None
) -> None:
    def fake_fetch_user_profile(**kwargs):
        raise status_error(status_code, headers)

    monkeypatch.setattr(
        "gitfetch.services.fetch_service.fetch_user_profile", fake_fetch_user_profile
    )

    with pytest.raises(GitHubAPIError) as exc_info:
        fetch_user("octocat", None, GRAPHQL_URL)

    assert exc_info.value.stage == "profile query"
    assert "rate limited" in exc_info.value.detail


def test_fetch_user_reports_malformed_calendar_day(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    days = [
        {"date": "2026-02-15", "contributionCount": 3},
        {"date": "2026-02-16", "contributionCount": "7"},
        {"date": "2026-02-17", "contributionCount": 1},
    ]
    body = {
        "data": {
            "user": {
                "login": "octocat",
                "avatarUrl": "https://avatars.example.com/u/583231",
                "contributionsCollection": {
                    "contributionCalendar": {"weeks": [{"contributionDays": days}]}
                },
            }
        }
    }

    def fake_post(url: str, **kwargs) -> httpx.Response:
        return httpx.Response(200, json=body, request=httpx.Request("POST", url))

    monkeypatch.setattr("gitfetch.clients.github_client.httpx.post", fake_post)

    with pytest.raises(GitHubAPIError) as exc_info:
        fetch_user("octocat", "secret", GRAPHQL_URL)

    assert exc_info.value.stage == "profile query"
    assert "contribution day 0.1 has an invalid count" in exc_info.value.detail
