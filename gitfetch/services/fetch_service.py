import httpx
from pydantic import ValidationError

from gitfetch.clients.github_client import fetch_avatar_bytes
from gitfetch.clients.github_client import fetch_user_profile
from gitfetch.schemas.profile import UserProfile

PROFILE_STAGE = "profile query"
AVATAR_STAGE = "avatar download"
RATE_LIMITED_DETAIL = "rate limited by GitHub (pass a token with --token)"


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the provided token."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""

    def __init__(self, stage: str, detail: str = "request failed") -> None:
        super().__init__(f"{stage} failed: {detail}")
        self.stage = stage
        self.detail = detail


def _is_rate_limited(response: httpx.Response) -> bool:
    if response.status_code == 429:
        return True
    return (
        response.status_code == 403
        and response.headers.get("x-ratelimit-remaining") == "0"
    )


def _translate_http_error(stage: str, exc: httpx.HTTPError) -> Exception:
    if isinstance(exc, httpx.HTTPStatusError):
        if _is_rate_limited(exc.response):
            return GitHubAPIError(stage, RATE_LIMITED_DETAIL)
        if exc.response.status_code in {401, 403}:
            return InvalidGitHubTokenError()
        return GitHubAPIError(stage, f"HTTP {exc.response.status_code}")
    if isinstance(exc, httpx.TimeoutException):
        return GitHubAPIError(stage, "timed out")
    return GitHubAPIError(stage, str(exc) or type(exc).__name__)


def fetch_user(
    username: str,
    token: str | None,
    graphql_url: str,
    timeout: float = 20.0,
) -> UserProfile:
    """Fetch and validate the profile record for `username`."""

    try:
        raw_profile = fetch_user_profile(
            username=username,
            token=token,
            graphql_url=graphql_url,
            timeout=timeout,
        )
    except httpx.HTTPError as exc:
        raise _translate_http_error(PROFILE_STAGE, exc) from exc
    except ValueError as exc:
        raise GitHubAPIError(PROFILE_STAGE, str(exc)) from exc

    try:
        return UserProfile.model_validate(raw_profile)
    except ValidationError as exc:
        raise GitHubAPIError(PROFILE_STAGE, "response is malformed") from exc


def fetch_avatar(profile: UserProfile, timeout: float = 20.0) -> bytes:
    try:
        return fetch_avatar_bytes(profile.avatar_url, timeout=timeout)
    except httpx.HTTPError as exc:
        raise _translate_http_error(AVATAR_STAGE, exc) from exc
