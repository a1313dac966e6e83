"""
Local-mode feed operations.

Each mutation takes the ``AppState`` explicitly and changes it in place;
callers persist it right after with ``LocalStore.save``.
"""
import time
import uuid
from typing import List, Optional

from pixora.client.state import AppState, LocalComment, LocalPost, LocalUser

MIN_USERNAME_LENGTH = 3

class LocalInputError(ValueError):
    """Input the user should be told about, such as a too-short username"""

def now_ms() -> int:
    return int(time.time() * 1000)

def login(state: AppState, username: str) -> LocalUser:
    username = username.strip()
    if len(username) < MIN_USERNAME_LENGTH:
        raise LocalInputError(f"Username must be at least {MIN_USERNAME_LENGTH} characters.")
    state.current_user = LocalUser(username=username, display_name=username)
    return state.current_user

def logout(state: AppState) -> None:
    state.current_user = None

def create_post(state: AppState, image_url: str, caption: str,
                created_at: Optional[int] = None) -> Optional[LocalPost]:
    user = state.current_user
    image_url, caption = image_url.strip(), caption.strip()
    if user is None or not image_url or not caption:
        return None

    created_at = created_at if created_at is not None else now_ms()
    post = LocalPost(
        id=f"post_{created_at}_{uuid.uuid4().hex[:8]}",
        author_username=user.username,
        author_display_name=user.display_name or user.username,
        image_url=image_url,
        caption=caption,
        created_at=created_at,
    )
    state.posts.insert(0, post)
    return post

def toggle_like(state: AppState, post_id: str) -> Optional[bool]:
    """Flip the current user's like; returns the new liked flag"""
    user = state.current_user
    post = state.find_post(post_id)
    if user is None or post is None:
        return None

    if user.username in post.likes:
        post.likes.remove(user.username)
        return False
    post.likes.append(user.username)
    return True

def add_comment(state: AppState, post_id: str, text: str,
                created_at: Optional[int] = None) -> Optional[LocalComment]:
    user = state.current_user
    text = text.strip()
    post = state.find_post(post_id)
    if user is None or not text or post is None:
        return None

    created_at = created_at if created_at is not None else now_ms()
    comment = LocalComment(
        id=f"c_{created_at}_{uuid.uuid4().hex[:8]}",
        author_username=user.username,
        text=text,
        created_at=created_at,
    )
    post.comments.append(comment)
    return comment

def delete_post(state: AppState, post_id: str) -> bool:
    """Remove one of the current user's posts; others' posts are left alone"""
    user = state.current_user
    post = state.find_post(post_id)
    if user is None or post is None or post.author_username != user.username:
        return False
    state.posts = [p for p in state.posts if p.id != post_id]
    return True

def visible_posts(state: AppState) -> List[LocalPost]:
    """Posts after the ``mine`` filter and the caption search"""
    posts = list(state.posts)

    if state.filter == "mine" and state.current_user:
        posts = [p for p in posts if p.author_username == state.current_user.username]

    query = state.search.strip().lower()
    if query:
        posts = [p for p in posts if query in p.caption.lower()]

    return posts

def my_post_count(state: AppState) -> int:
    if not state.current_user:
        return 0
    return sum(1 for p in state.posts if p.author_username == state.current_user.username)
