from database.database import Base, Store
from database.user import User
from database.post import Post
from database.comment import Comment
from database.repository import ContentRepository

__all__ = ["Base", "Store", "User", "Post", "Comment", "ContentRepository"]
