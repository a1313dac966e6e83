#!/usr/bin/env python3
"""
Pixora terminal client.

Local commands keep everything in two JSON records under ``--data-dir``;
``remote-feed`` renders the feed of a running API instead.
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from pixora.config import settings
from pixora.client import feed
from pixora.client.api_client import ApiError, PixoraClient
from pixora.client.render import entries_from_views, render_entries, render_feed
from pixora.client.store import LocalStore

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pixora-client", description="Pixora feed client")
    parser.add_argument("--data-dir", default=settings.LOCAL_DATA_DIR, help="Local state directory")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login", help="Sign in locally")
    login_parser.add_argument("username")

    subparsers.add_parser("logout", help="Clear the local session")
    subparsers.add_parser("whoami", help="Show the local profile")

    post_parser = subparsers.add_parser("post", help="Share an image")
    post_parser.add_argument("image_url")
    post_parser.add_argument("caption")

    like_parser = subparsers.add_parser("like", help="Toggle a like")
    like_parser.add_argument("post_id")

    comment_parser = subparsers.add_parser("comment", help="Comment on a post")
    comment_parser.add_argument("post_id")
    comment_parser.add_argument("text")

    delete_parser = subparsers.add_parser("delete", help="Delete one of your posts")
    delete_parser.add_argument("post_id")

    feed_parser = subparsers.add_parser("feed", help="Render the local feed")
    feed_parser.add_argument("--mine", action="store_true", help="Only your posts")
    feed_parser.add_argument("--search", default="", help="Filter captions")

    remote_parser = subparsers.add_parser("remote-feed", help="Render the feed of a running API")
    remote_parser.add_argument("--api", default=f"http://localhost:{settings.PORT}", help="API base URL")
    remote_parser.add_argument("--username", required=True)
    remote_parser.add_argument("--password", required=True)
    remote_parser.add_argument("--mine", action="store_true", help="Only your posts")

    return parser

def run_local(args: argparse.Namespace) -> int:
    store = LocalStore(args.data_dir)
    state = store.load()

    if args.command == "login":
        try:
            user = feed.login(state, args.username)
        except feed.LocalInputError as e:
            print(f"⚠️  {e}")
            return 1
        store.save(state)
        print(f"✅ Logged in as @{user.username}")
        return 0

    if args.command == "logout":
        feed.logout(state)
        store.clear_user()
        print("👋 Session cleared")
        return 0

    if state.current_user is None:
        print("⚠️  Please log in first.")
        return 1

    if args.command == "whoami":
        user = state.current_user
        print(f"@{user.username} ({user.display_name})")
        print(user.bio)
        print(f"{feed.my_post_count(state)} posts")
        return 0

    if args.command == "feed":
        state.filter = "mine" if args.mine else "all"
        state.search = args.search
        print(render_feed(state))
        return 0

    if args.command == "post":
        changed = feed.create_post(state, args.image_url, args.caption) is not None
    elif args.command == "like":
        changed = feed.toggle_like(state, args.post_id) is not None
    elif args.command == "comment":
        changed = feed.add_comment(state, args.post_id, args.text) is not None
    elif args.command == "delete":
        changed = feed.delete_post(state, args.post_id)
    else:
        raise ValueError(f"Unknown command: {args.command}")

    if not changed:
        print("⚠️  Nothing changed")
        return 1
    store.save(state)
    print(render_feed(state))
    return 0

async def run_remote(args: argparse.Namespace) -> int:
    async with PixoraClient(base_url=args.api, api_prefix=settings.API_PREFIX) as client:
        try:
            await client.login(args.username, args.password)
            views = await client.list_posts("mine" if args.mine else "all")
        except ApiError as e:
            print(f"❌ {e.detail}")
            return 1
        print(render_entries(entries_from_views(views, client.user["id"])))
    return 0

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "remote-feed":
        return asyncio.run(run_remote(args))
    return run_local(args)

if __name__ == "__main__":
    sys.exit(main())
