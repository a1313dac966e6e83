from typing import List, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from pixora.models.post import Post
from pixora.schemas.post_schema import AuthorSummary, PostView
from pixora.schemas.comment_schema import CommentAuthor, CommentView
from pixora.services.like_service import LikeService
from pixora.services.comment_service import CommentService

logger = logging.getLogger(__name__)

class FeedService:
    """Turns posts into PostViews with two batch queries, whatever the post count"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.likes = LikeService(db)
        self.comments = CommentService(db)
    
    async def assemble(self, posts: Sequence[Post], viewer_id: int) -> List[PostView]:
        """Build views in input order; ``posts`` must have their author loaded"""
        if not posts:
            return []
        
        post_ids = [post.id for post in posts]
        likers_by_post = await self.likes.get_likers_by_post(post_ids)
        comments_by_post = await self.comments.get_comments_by_post(post_ids)
        
        views = []
        for post in posts:
            likers = likers_by_post.get(post.id, [])
            comments = comments_by_post.get(post.id, [])
            views.append(PostView(
                id=post.id,
                image_url=post.image_url,
                caption=post.caption,
                created_at=post.created_at,
                author=AuthorSummary.model_validate(post.author),
                likes_count=len(likers),
                is_liked=viewer_id in likers,
                comments=[
                    CommentView(
                        id=comment.id,
                        text=comment.text,
                        created_at=comment.created_at,
                        author=CommentAuthor.model_validate(comment.author),
                    )
                    for comment in comments
                ],
            ))
        return views
    
    async def assemble_one(self, post: Post, viewer_id: int) -> PostView:
        views = await self.assemble([post], viewer_id)
        return views[0]
