from typing import List
import logging

from sqlalchemy.orm import Session

from app.db.store import EntityStore
from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import Post as PostSchema

logger = logging.getLogger("app.posts")

post_store: EntityStore[Post, PostSchema] = EntityStore(Post, PostSchema)

def get_user_posts(db: Session, user_id: str) -> List[PostSchema]:
    """Get posts by user ID, newest first"""
    logger.debug(f"Getting posts for user ID: {user_id}")
    rows = (
        db.query(Post)
        .filter(Post.user_id == user_id)
        .order_by(Post.created_at.desc())
        .all()
    )
    return [PostSchema.model_validate(post) for post in rows]
