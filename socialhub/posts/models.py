from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from socialhub.users.models import UserProfile


PostType = Literal["post", "story", "reel"]
LikeTargetType = Literal["post", "comment"]


class InsertPost(BaseModel):
    author_id: str
    content: str
    images: Optional[List[str]] = None
    type: PostType = "post"
    group_id: Optional[str] = None


class Post(InsertPost):
    id: str
    likes_count: int = 0
    comments_count: int = 0
    shares_count: int = 0
    created_at: datetime


class InsertComment(BaseModel):
    post_id: str
    author_id: str
    content: str
    parent_id: Optional[str] = None


class Comment(InsertComment):
    id: str
    likes_count: int = 0
    created_at: datetime


class Like(BaseModel):
    id: str
    user_id: str
    target_id: str
    target_type: LikeTargetType
    created_at: datetime


class PostWithAuthor(Post):
    author: UserProfile
    is_liked: Optional[bool] = None


class CommentWithAuthor(Comment):
    author: UserProfile
