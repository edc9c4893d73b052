import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from gitfetch.core.observability import configure_logging
from gitfetch.core.observability import init_sentry
from gitfetch.services.avatar import AvatarError
from gitfetch.services.avatar import decode_avatar
from gitfetch.services.avatar import render_avatar
from gitfetch.services.config_loader import load_config
from gitfetch.services.fetch_service import GitHubAPIError
from gitfetch.services.fetch_service import InvalidGitHubTokenError
from gitfetch.services.fetch_service import fetch_avatar
from gitfetch.services.fetch_service import fetch_user
from gitfetch.services.modules import build_modules
from gitfetch.services.modules import compose_modules
from gitfetch.services.modules import resolve_module_order
from gitfetch.services.report import render_report
from gitfetch.settings import Settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitfetch",
        description="Show a GitHub user's avatar and contribution chart in the terminal.",
    )
    parser.add_argument("-u", "--user", required=True, help="GitHub username to fetch")
    parser.add_argument("-t", "--token", help="personal GitHub access token")
    parser.add_argument("-c", "--config", type=Path, help="path to the JSON config file")
    parser.add_argument(
        "--no-avatar", action="store_true", help="do not download or draw the avatar"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log progress to stderr"
    )
    return parser


def _fail(message: str) -> int:
    print(f"gitfetch: {message}", file=sys.stderr)
    return 1


def run(argv: Sequence[str] | None = None) -> int:
    """Fetch, compose and print the report. Returns the process exit code."""

    args = build_parser().parse_args(argv)
    settings = Settings()

    configure_logging(logging.INFO if args.verbose else settings.log_level)
    init_sentry(settings)

    token = args.token or settings.github_token
    if not token:
        logger.warning("No token provided, you may be rate limited!")

    config_path = args.config or settings.gitfetch_config
    if config_path is not None:
        config_path = config_path.expanduser()
    config = load_config(config_path)

    try:
        logger.info("Fetching profile for %s", args.user)
        profile = fetch_user(
            username=args.user,
            token=token,
            graphql_url=settings.github_graphql_url,
            timeout=settings.request_timeout_seconds,
        )

        avatar_lines: list[str] = []
        if not args.no_avatar:
            logger.info("Downloading avatar from %s", profile.avatar_url)
            image = decode_avatar(
                fetch_avatar(profile, timeout=settings.request_timeout_seconds)
            )
            avatar_lines = render_avatar(
                image, width=settings.avatar_width, height=settings.avatar_height
            )
    except InvalidGitHubTokenError:
        return _fail("GitHub token is invalid")
    except GitHubAPIError as exc:
        return _fail(str(exc))
    except AvatarError as exc:
        return _fail(str(exc))

    modules = build_modules(profile, config)
    contents = compose_modules(modules, resolve_module_order(config))
    print(render_report(avatar_lines, contents))
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
