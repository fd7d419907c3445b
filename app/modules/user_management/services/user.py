from typing import Optional
import logging

from sqlalchemy.orm import Session

from app.db.store import EntityStore
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import User as UserSchema
from app.modules.posts.models.post import Post

logger = logging.getLogger("app.users")

user_store: EntityStore[User, UserSchema] = EntityStore(User, UserSchema)

def delete_user(db: Session, user_id: str) -> Optional[UserSchema]:
    """
    Delete user and all posts they own
    """
    if not user_store.exists(db, user_id):
        return None

    # Remove posts first so the foreign key holds on databases without ON DELETE CASCADE
    removed = db.query(Post).filter(Post.user_id == user_id).delete(synchronize_session=False)
    if removed:
        logger.info(f"Deleted {removed} posts owned by user {user_id}")

    return user_store.delete(db, user_id)
