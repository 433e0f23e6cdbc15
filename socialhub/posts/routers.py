from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query

from socialhub.core.dependencies import get_storage
from socialhub.core.storage import IStorage
from .models import Comment, CommentWithAuthor, InsertComment, InsertPost, PostWithAuthor
from .schemas import (
    CreatePostModel,
    CreateCommentModel,
    ToggleLikeModel,
    ToggleLikeResponseModel,
    IsLikedResponseModel,
    MessageResponseModel,
)


router = APIRouter()
comments_router = APIRouter()
likes_router = APIRouter()


@router.post("", response_model=PostWithAuthor, status_code=201)
async def create_post(data: CreatePostModel, storage: IStorage = Depends(get_storage)):
    """
    Create a post and return it with its author attached.

    **Input**
    - `author_id`: ID of the posting user.
    - `content`: Post text (must not be blank).
    - `images`: Optional list of image URLs.
    - `type`: One of `post`, `story`, `reel` (default `post`).
    - `group_id`: Optional group the post belongs to.

    **Errors**
    - 400: Invalid body
    - 404: The author does not exist (nothing is stored)
    """
    # Author exists
    if not await storage.get_user(data.author_id):
        raise HTTPException(status_code=404, detail="Author not found")

    post = await storage.create_post(InsertPost(**data.model_dump()))
    return await storage.get_post_by_id(post.id)


@router.get("/feed/{user_id}", response_model=List[PostWithAuthor], status_code=200)
async def get_feed(
    user_id: str,
    limit: Optional[int] = Query(default=None, ge=1),
    storage: IStorage = Depends(get_storage),
):
    """
    Newest posts across all authors, each flagged with whether `user_id`
    liked it.
    """
    return await storage.get_feed_posts(user_id, limit)


@router.get("/user/{user_id}", response_model=List[PostWithAuthor], status_code=200)
async def get_user_posts(user_id: str, storage: IStorage = Depends(get_storage)):
    return await storage.get_user_posts(user_id)


@router.get("/{post_id}", response_model=PostWithAuthor, status_code=200)
async def get_post(post_id: str, storage: IStorage = Depends(get_storage)):
    post = await storage.get_post_by_id(post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.delete("/{post_id}", response_model=MessageResponseModel, status_code=200)
async def delete_post(post_id: str, storage: IStorage = Depends(get_storage)):
    deleted = await storage.delete_post(post_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Post not found")
    return {"message": "Post deleted"}


@router.get("/{post_id}/comments", response_model=List[CommentWithAuthor], status_code=200)
async def get_post_comments(post_id: str, storage: IStorage = Depends(get_storage)):
    """Comments on a post, oldest first, each with its author."""
    return await storage.get_post_comments(post_id)


@comments_router.post("", response_model=Comment, status_code=201)
async def create_comment(data: CreateCommentModel, storage: IStorage = Depends(get_storage)):
    """
    Add a comment to a post. The post's `comments_count` goes up by one.

    **Errors**
    - 400: Invalid body
    """
    return await storage.create_comment(InsertComment(**data.model_dump()))


@comments_router.delete("/{comment_id}", response_model=MessageResponseModel, status_code=200)
async def delete_comment(comment_id: str, storage: IStorage = Depends(get_storage)):
    deleted = await storage.delete_comment(comment_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"message": "Comment deleted"}


@likes_router.post("", response_model=ToggleLikeResponseModel, status_code=200)
async def toggle_like(data: ToggleLikeModel, storage: IStorage = Depends(get_storage)):
    """
    Like or unlike a post or comment.

    Calling this twice for the same user and target returns both the like
    state and the target's `likes_count` to where they started.

    **Returns**
    - `liked`: `true` if the target is now liked, `false` if it was unliked.
    """
    liked = await storage.toggle_like(data.user_id, data.target_id, data.target_type)
    return {"liked": liked}


@likes_router.get("/{user_id}/{target_id}", response_model=IsLikedResponseModel, status_code=200)
async def is_liked(user_id: str, target_id: str, storage: IStorage = Depends(get_storage)):
    return {"is_liked": await storage.is_liked(user_id, target_id)}
