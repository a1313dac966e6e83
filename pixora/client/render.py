"""Plain-text feed rendering shared by the local and the API-backed client"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pixora.client.feed import now_ms, visible_posts
from pixora.client.state import AppState

EMPTY_FEED = "No posts yet. Be the first to share something ✨"

@dataclass
class FeedEntry:
    post_id: str
    author_username: str
    author_display_name: str
    image_url: str
    caption: str
    created_at: int  # epoch milliseconds
    likes_count: int = 0
    is_liked: bool = False
    comments: List[Tuple[str, str]] = field(default_factory=list)  # (username, text)
    can_delete: bool = False

def format_time_ago(timestamp: int, now: Optional[int] = None) -> str:
    now = now if now is not None else now_ms()
    sec = max(0, (now - timestamp) // 1000)
    if sec < 60:
        return f"{sec}s ago"
    minutes = sec // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    return datetime.fromtimestamp(timestamp / 1000).strftime("%Y-%m-%d")

def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"

def render_entries(entries: Iterable[FeedEntry], now: Optional[int] = None) -> str:
    blocks = []
    for entry in entries:
        header = f"{entry.author_display_name} @{entry.author_username} • {format_time_ago(entry.created_at, now)}"
        if entry.can_delete:
            header += "  [delete]"
        lines = [
            f"[{entry.post_id}] {header}",
            f"  {entry.image_url}",
            f"  @{entry.author_username} {entry.caption}",
            f"  {'♥' if entry.is_liked else '♡'} {_plural(entry.likes_count, 'like')} • "
            f"{_plural(len(entry.comments), 'comment')}",
        ]
        lines.extend(f"    @{username} {text}" for username, text in entry.comments)
        blocks.append("\n".join(lines))

    if not blocks:
        return EMPTY_FEED
    return "\n\n".join(blocks)

def entries_from_state(state: AppState) -> List[FeedEntry]:
    me = state.current_user.username if state.current_user else None
    return [
        FeedEntry(
            post_id=post.id,
            author_username=post.author_username,
            author_display_name=post.author_display_name,
            image_url=post.image_url,
            caption=post.caption,
            created_at=post.created_at,
            likes_count=len(post.likes),
            is_liked=me is not None and me in post.likes,
            comments=[(c.author_username, c.text) for c in post.comments],
            can_delete=me is not None and post.author_username == me,
        )
        for post in visible_posts(state)
    ]

def _iso_to_ms(value: str) -> int:
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        # API timestamps are naive UTC
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)

def entries_from_views(views: Iterable[Dict[str, Any]], viewer_id: Optional[int] = None) -> List[FeedEntry]:
    """Adapt PostView JSON returned by the API"""
    entries = []
    for view in views:
        author = view["author"]
        entries.append(FeedEntry(
            post_id=str(view["id"]),
            author_username=author["username"],
            author_display_name=author["displayName"],
            image_url=view["imageUrl"],
            caption=view["caption"],
            created_at=_iso_to_ms(view["createdAt"]),
            likes_count=view["likesCount"],
            is_liked=view["isLiked"],
            comments=[(c["author"]["username"], c["text"]) for c in view["comments"]],
            can_delete=viewer_id is not None and author["id"] == viewer_id,
        ))
    return entries

def render_feed(state: AppState, now: Optional[int] = None) -> str:
    return render_entries(entries_from_state(state), now)
