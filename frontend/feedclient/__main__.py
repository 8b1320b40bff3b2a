"""Command-line entry point.

Usage:
    python -m feedclient login-test
    python -m feedclient feed
    python -m feedclient post https://picsum.photos/600/400 "First shot"
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from .api import ApiClient, ApiError
from .app import FeedApp
from .config import ClientSettings
from .credentials import FileTokenStore, Session

ANONYMOUS_HINT = (
    "Not logged in. Run `login EMAIL PASSWORD`, `signup USERNAME EMAIL PASSWORD` "
    "or `login-test` to get started."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="miniig-client", description="miniig API client")
    parser.add_argument("--verbose", action="store_true", help="log HTTP activity")
    commands = parser.add_subparsers(dest="command", required=True)

    signup = commands.add_parser("signup", help="create an account and log in")
    signup.add_argument("username")
    signup.add_argument("email")
    signup.add_argument("password")

    login = commands.add_parser("login", help="log in and store the token")
    login.add_argument("email")
    login.add_argument("password")

    commands.add_parser("login-test", help="log in with the test account")
    commands.add_parser("logout", help="forget the stored token")
    commands.add_parser("status", help="show whether a token is stored")
    commands.add_parser("feed", help="show posts from followed accounts")

    post = commands.add_parser("post", help="share an image URL with a caption")
    post.add_argument("image_url")
    post.add_argument("caption")

    for name in ("like", "unlike"):
        command = commands.add_parser(name, help=f"{name} a post")
        command.add_argument("post_id")

    comment = commands.add_parser("comment", help="comment on a post")
    comment.add_argument("post_id")
    comment.add_argument("text")

    for name in ("follow", "unfollow", "profile"):
        command = commands.add_parser(name, help=f"{name} a user")
        command.add_argument("user_id")

    return parser


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, default=str))


async def run_command(args: argparse.Namespace, app: FeedApp) -> int:
    command = args.command
    if command == "status":
        print(app.state)
        return 0
    if command == "logout":
        app.logout()
        print("Logged out.")
        return 0
    if command == "signup":
        await app.signup(args.username, args.email, args.password)
        print(f"Signed up as {args.username}.")
        return 0
    if command == "login":
        await app.login(args.email, args.password)
        print("Logged in.")
        return 0
    if command == "login-test":
        await app.login_with_test_account()
        print(f"Logged in as {app.settings.test_email}.")
        return 0

    if app.state == "anonymous":
        print(ANONYMOUS_HINT)
        return 1

    if command == "feed":
        await app.refresh_feed()
        if app.error:
            print(app.error, file=sys.stderr)
            return 1
        _print_json(app.posts)
    elif command == "post":
        _print_json(await app.create_post(args.image_url, args.caption))
    elif command == "like":
        _print_json(await app.like(args.post_id))
    elif command == "unlike":
        _print_json(await app.unlike(args.post_id))
    elif command == "comment":
        _print_json(await app.comment(args.post_id, args.text))
    elif command == "follow":
        _print_json(await app.follow(args.user_id))
    elif command == "unfollow":
        _print_json(await app.unfollow(args.user_id))
    elif command == "profile":
        _print_json(await app.profile(args.user_id))
    return 0


async def _main(args: argparse.Namespace, settings: ClientSettings) -> int:
    session = Session(FileTokenStore(settings.token_path))
    async with ApiClient(settings.api_base_url, session) as api:
        app = FeedApp(api, settings)
        try:
            return await run_command(args, app)
        except ValueError as exc:
            print(str(exc), file=sys.stderr)
            return 2
        except ApiError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            return 1


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    return asyncio.run(_main(args, ClientSettings()))


if __name__ == "__main__":
    sys.exit(main())
