#!/usr/bin/env python3
"""
Database initialization script
"""
import asyncio
import sys
from pathlib import Path

# Add the project root to the Python path
current_dir = Path(__file__).parent
root_dir = current_dir.parent
sys.path.insert(0, str(root_dir))

DEMO_PASSWORD = "Password123!"

DEMO_POSTS = [
    ("pixie", "https://images.unsplash.com/photo-1500530855697-b586d89ba3ee", "Golden hour over the valley"),
    ("lens_lover", "https://images.unsplash.com/photo-1501785888041-af3ef285b470", "Lake mirror"),
    ("pixie", "https://images.unsplash.com/photo-1470071459604-3b5ec3a7fe05", "Morning fog"),
]

async def init_database() -> None:
    """Initialize database with tables"""
    from pixora.db.session import init_db
    from pixora.config import settings

    print(f"🚀 Initializing database: {settings.database_url}")

    try:
        await init_db()
        print("✅ Database initialized successfully")
    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        sys.exit(1)

async def create_initial_data() -> None:
    """Create demo users, posts, likes and comments for development"""
    from pixora.db.session import AsyncSessionLocal
    from pixora.errors import Conflict
    from pixora.schemas.auth_schema import RegisterRequest
    from pixora.schemas.post_schema import PostCreate
    from pixora.services.auth_service import AuthService
    from pixora.services.comment_service import CommentService
    from pixora.services.like_service import LikeService
    from pixora.services.post_service import PostService

    print("👤 Creating initial data...")

    async with AsyncSessionLocal() as db:
        auth_service = AuthService(db)

        users = {}
        for username in sorted({author for author, _, _ in DEMO_POSTS}):
            try:
                users[username] = await auth_service.register(
                    RegisterRequest(username=username, password=DEMO_PASSWORD)
                )
                print(f"✅ Created user: {username}")
            except Conflict:
                users[username] = await auth_service.users.get_user_by_username(username)
                print(f"ℹ️  User already exists: {username}")

        post_service = PostService(db)
        like_service = LikeService(db)
        comment_service = CommentService(db)
        for author, image_url, caption in DEMO_POSTS:
            post = await post_service.create_post(
                users[author].id, PostCreate(image_url=image_url, caption=caption)
            )
            for username, user in users.items():
                if username != author:
                    await like_service.like_post(post.id, user.id)
                    await comment_service.create_comment(post, user.id, "Love this ✨")

        print(f"✅ Created {len(DEMO_POSTS)} posts (password for all users: {DEMO_PASSWORD})")

async def check_database_connection() -> bool:
    """Check if database is accessible"""
    from pixora.db.session import engine
    from sqlalchemy import text

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        print("✅ Database connection successful")
        return True
    except Exception as e:
        print(f"❌ Database connection failed: {e}")
        return False

async def drop_database(confirm: bool = False) -> None:
    """Drop all database tables"""
    if not confirm:
        print("⚠️  WARNING: This will drop ALL tables and data!")
        print("   Use --confirm flag to proceed")
        return

    from pixora.db.session import engine
    from pixora.models import Base

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        print("✅ Database dropped successfully")
    except Exception as e:
        print(f"❌ Error dropping database: {e}")

def main() -> None:
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="Pixora database initialization")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init", help="Initialize database")
    subparsers.add_parser("check", help="Check database connection")

    drop_parser = subparsers.add_parser("drop", help="Drop database (DANGEROUS!)")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm drop")

    subparsers.add_parser("seed", help="Seed demo data")

    reset_parser = subparsers.add_parser("reset", help="Drop and reinitialize")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "init":
            asyncio.run(init_database())

        elif args.command == "check":
            success = asyncio.run(check_database_connection())
            sys.exit(0 if success else 1)

        elif args.command == "drop":
            asyncio.run(drop_database(args.confirm))

        elif args.command == "seed":
            asyncio.run(create_initial_data())

        elif args.command == "reset":
            if not args.confirm:
                print("⚠️  WARNING: This will drop ALL tables and data!")
                print("   Use --confirm flag to proceed")
                return

            asyncio.run(drop_database(True))
            asyncio.run(init_database())

    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
