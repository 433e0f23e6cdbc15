"""
Service facade over the entity store.

Every route handler talks to an ``IStorage``. Methods are coroutines so the
in-memory implementation can later be replaced by a database-backed one
without changing callers. "Not found" is reported as ``None``/``False``;
nothing here raises a domain error.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from socialhub.chat.models import (
    Conversation,
    ConversationWithParticipants,
    InsertMessage,
    Message,
    MessageWithSender,
)
from socialhub.friendship.models import FriendRequest, Friendship
from socialhub.groups.models import Group, GroupMembership, InsertGroup
from socialhub.notifications.models import InsertNotification, Notification
from socialhub.posts.models import (
    Comment,
    CommentWithAuthor,
    InsertComment,
    InsertPost,
    Like,
    LikeTargetType,
    Post,
    PostWithAuthor,
)
from socialhub.users.models import InsertUser, User, UserWithStats
from socialhub.utils.passwords import hash_password

from .store import EntityStore
from .suggestions import FriendSuggestionPolicy, RandomStatsSuggestionPolicy


logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 10


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IStorage(ABC):
    # Users
    @abstractmethod
    async def get_user(self, id: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, data: InsertUser) -> User: ...

    @abstractmethod
    async def update_user(self, id: str, updates: Dict[str, Any]) -> Optional[User]: ...

    @abstractmethod
    async def search_users(self, query: str) -> List[User]: ...

    @abstractmethod
    async def get_suggested_friends(self, user_id: str) -> List[UserWithStats]: ...

    # Posts
    @abstractmethod
    async def create_post(self, data: InsertPost) -> Post: ...

    @abstractmethod
    async def get_post_by_id(self, id: str) -> Optional[PostWithAuthor]: ...

    @abstractmethod
    async def get_feed_posts(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[PostWithAuthor]: ...

    @abstractmethod
    async def get_user_posts(self, user_id: str) -> List[PostWithAuthor]: ...

    @abstractmethod
    async def get_group_posts(self, group_id: str) -> List[PostWithAuthor]: ...

    @abstractmethod
    async def delete_post(self, id: str) -> bool: ...

    # Comments
    @abstractmethod
    async def create_comment(self, data: InsertComment) -> Comment: ...

    @abstractmethod
    async def get_post_comments(self, post_id: str) -> List[CommentWithAuthor]: ...

    @abstractmethod
    async def delete_comment(self, id: str) -> bool: ...

    # Likes
    @abstractmethod
    async def toggle_like(
        self, user_id: str, target_id: str, target_type: LikeTargetType
    ) -> bool: ...

    @abstractmethod
    async def is_liked(self, user_id: str, target_id: str) -> bool: ...

    # Friendships
    @abstractmethod
    async def send_friend_request(self, user_id: str, friend_id: str) -> Friendship: ...

    @abstractmethod
    async def accept_friend_request(self, user_id: str, friend_id: str) -> bool: ...

    @abstractmethod
    async def remove_friend(self, user_id: str, friend_id: str) -> bool: ...

    @abstractmethod
    async def get_friends(self, user_id: str) -> List[User]: ...

    @abstractmethod
    async def get_friend_requests(self, user_id: str) -> List[FriendRequest]: ...

    # Groups
    @abstractmethod
    async def create_group(self, data: InsertGroup) -> Group: ...

    @abstractmethod
    async def get_group(self, id: str) -> Optional[Group]: ...

    @abstractmethod
    async def get_user_groups(self, user_id: str) -> List[Group]: ...

    @abstractmethod
    async def join_group(self, user_id: str, group_id: str) -> bool: ...

    @abstractmethod
    async def leave_group(self, user_id: str, group_id: str) -> bool: ...

    # Messages
    @abstractmethod
    async def create_conversation(self, participant_ids: List[str]) -> Conversation: ...

    @abstractmethod
    async def get_conversation(self, id: str) -> Optional[ConversationWithParticipants]: ...

    @abstractmethod
    async def get_user_conversations(
        self, user_id: str
    ) -> List[ConversationWithParticipants]: ...

    @abstractmethod
    async def send_message(self, data: InsertMessage) -> Message: ...

    @abstractmethod
    async def get_conversation_messages(
        self, conversation_id: str
    ) -> List[MessageWithSender]: ...

    @abstractmethod
    async def mark_messages_as_read(self, conversation_id: str, user_id: str) -> bool: ...

    # Notifications
    @abstractmethod
    async def create_notification(self, data: InsertNotification) -> Notification: ...

    @abstractmethod
    async def get_user_notifications(self, user_id: str) -> List[Notification]: ...

    @abstractmethod
    async def mark_notification_as_read(self, id: str) -> bool: ...

    @abstractmethod
    async def get_unread_notifications_count(self, user_id: str) -> int: ...


class MemStorage(IStorage):
    """``IStorage`` backed by an ``EntityStore`` held in process memory."""

    def __init__(
        self,
        store: Optional[EntityStore] = None,
        suggestion_policy: Optional[FriendSuggestionPolicy] = None,
        feed_limit: int = DEFAULT_FEED_LIMIT,
    ):
        self.store = store if store is not None else EntityStore()
        self.suggestion_policy = suggestion_policy or RandomStatsSuggestionPolicy()
        self.feed_limit = feed_limit

    # Users

    async def get_user(self, id: str) -> Optional[User]:
        return self.store.users.get(id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return self.store.users.find_by_username(username)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return self.store.users.find_by_email(email)

    async def create_user(self, data: InsertUser) -> User:
        now = utcnow()
        fields = data.model_dump(exclude={"password"})
        user = User(
            **fields,
            id=new_id(),
            password_hash=hash_password(data.password),
            is_online=False,
            last_seen=now,
            created_at=now,
        )
        self.store.users.add(user)
        logger.debug(f"user_created id={user.id} username={user.username}")
        return user

    async def update_user(self, id: str, updates: Dict[str, Any]) -> Optional[User]:
        user = self.store.users.get(id)
        if user is None:
            return None

        # id is the store key; it cannot be changed through an update.
        updates = {k: v for k, v in updates.items() if k != "id"}
        updated = user.model_copy(update=updates)
        self.store.users.add(updated)
        return updated

    async def search_users(self, query: str) -> List[User]:
        return self.store.users.search(query)

    async def get_suggested_friends(self, user_id: str) -> List[UserWithStats]:
        return self.suggestion_policy.suggest(user_id, self.store.users.all())

    # Posts

    def _with_author(self, post: Post, is_liked: Optional[bool] = None) -> Optional[PostWithAuthor]:
        author = self.store.users.get(post.author_id)
        if author is None:
            return None
        return PostWithAuthor(**post.model_dump(), author=author.profile(), is_liked=is_liked)

    async def create_post(self, data: InsertPost) -> Post:
        post = Post(
            **data.model_dump(),
            id=new_id(),
            likes_count=0,
            comments_count=0,
            shares_count=0,
            created_at=utcnow(),
        )
        self.store.posts.add(post)
        logger.debug(f"post_created id={post.id} author_id={post.author_id}")
        return post

    async def get_post_by_id(self, id: str) -> Optional[PostWithAuthor]:
        post = self.store.posts.get(id)
        if post is None:
            return None
        return self._with_author(post)

    async def get_feed_posts(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[PostWithAuthor]:
        if limit is None:
            limit = self.feed_limit

        feed = []
        for post in self.store.posts.recent(limit):
            resolved = self._with_author(post, is_liked=await self.is_liked(user_id, post.id))
            if resolved is not None:
                feed.append(resolved)
        return feed

    async def get_user_posts(self, user_id: str) -> List[PostWithAuthor]:
        author = self.store.users.get(user_id)
        if author is None:
            return []

        profile = author.profile()
        return [
            PostWithAuthor(**post.model_dump(), author=profile)
            for post in self.store.posts.find_by_author(user_id)
        ]

    async def get_group_posts(self, group_id: str) -> List[PostWithAuthor]:
        posts = (self._with_author(post) for post in self.store.posts.find_by_group(group_id))
        return [post for post in posts if post is not None]

    async def delete_post(self, id: str) -> bool:
        deleted = self.store.posts.delete(id)
        if deleted:
            logger.debug(f"post_deleted id={id}")
        return deleted

    # Comments

    async def create_comment(self, data: InsertComment) -> Comment:
        comment = Comment(**data.model_dump(), id=new_id(), likes_count=0, created_at=utcnow())
        self.store.comments.add(comment)

        post = self.store.posts.get(data.post_id)
        if post is not None:
            post.comments_count += 1

        logger.debug(f"comment_created id={comment.id} post_id={comment.post_id}")
        return comment

    async def get_post_comments(self, post_id: str) -> List[CommentWithAuthor]:
        comments = []
        for comment in self.store.comments.find_by_post(post_id):
            author = self.store.users.get(comment.author_id)
            if author is not None:
                comments.append(
                    CommentWithAuthor(**comment.model_dump(), author=author.profile())
                )
        return comments

    async def delete_comment(self, id: str) -> bool:
        comment = self.store.comments.get(id)
        if comment is None:
            return False

        post = self.store.posts.get(comment.post_id)
        if post is not None and post.comments_count > 0:
            post.comments_count -= 1

        logger.debug(f"comment_deleted id={id} post_id={comment.post_id}")
        return self.store.comments.delete(id)

    # Likes

    def _like_target(self, target_id: str, target_type: LikeTargetType):
        if target_type == "post":
            return self.store.posts.get(target_id)
        return self.store.comments.get(target_id)

    async def toggle_like(
        self, user_id: str, target_id: str, target_type: LikeTargetType
    ) -> bool:
        target = self._like_target(target_id, target_type)

        if self.store.likes.find(user_id, target_id) is not None:
            self.store.likes.delete((user_id, target_id))
            if target is not None and target.likes_count > 0:
                target.likes_count -= 1
            logger.debug(f"like_removed user_id={user_id} target_id={target_id}")
            return False

        self.store.likes.add(
            Like(
                id=new_id(),
                user_id=user_id,
                target_id=target_id,
                target_type=target_type,
                created_at=utcnow(),
            )
        )
        if target is not None:
            target.likes_count += 1
        logger.debug(f"like_added user_id={user_id} target_id={target_id}")
        return True

    async def is_liked(self, user_id: str, target_id: str) -> bool:
        return self.store.likes.exists((user_id, target_id))

    # Friendships

    async def send_friend_request(self, user_id: str, friend_id: str) -> Friendship:
        friendship = Friendship(
            id=new_id(),
            user_id=user_id,
            friend_id=friend_id,
            status="pending",
            created_at=utcnow(),
        )
        self.store.friendships.add(friendship)
        logger.debug(f"friend_request_sent user_id={user_id} friend_id={friend_id}")
        return friendship

    async def accept_friend_request(self, user_id: str, friend_id: str) -> bool:
        """`user_id` is the accepting user and must be the request's recipient."""
        friendship = self.store.friendships.find_pending(requester_id=friend_id, recipient_id=user_id)
        if friendship is None:
            return False

        friendship.status = "accepted"
        logger.debug(f"friend_request_accepted id={friendship.id}")
        return True

    async def remove_friend(self, user_id: str, friend_id: str) -> bool:
        friendships = self.store.friendships.find_between(user_id, friend_id)
        for friendship in friendships:
            self.store.friendships.delete(friendship.id)
        return len(friendships) > 0

    async def get_friends(self, user_id: str) -> List[User]:
        friends = []
        for friendship in self.store.friendships.find_accepted_for(user_id):
            other_id = friendship.friend_id if friendship.user_id == user_id else friendship.user_id
            friend = self.store.users.get(other_id)
            if friend is not None:
                friends.append(friend)
        return friends

    async def get_friend_requests(self, user_id: str) -> List[FriendRequest]:
        requests = []
        for friendship in self.store.friendships.find_incoming_pending(user_id):
            requester = self.store.users.get(friendship.user_id)
            if requester is not None:
                requests.append(
                    FriendRequest(**friendship.model_dump(), user=requester.profile())
                )
        return requests

    # Groups

    async def create_group(self, data: InsertGroup) -> Group:
        now = utcnow()
        group = Group(**data.model_dump(), id=new_id(), members_count=1, created_at=now)
        self.store.groups.add(group)

        self.store.group_memberships.add(
            GroupMembership(
                id=new_id(),
                group_id=group.id,
                user_id=data.owner_id,
                role="admin",
                joined_at=now,
            )
        )
        logger.debug(f"group_created id={group.id} owner_id={group.owner_id}")
        return group

    async def get_group(self, id: str) -> Optional[Group]:
        return self.store.groups.get(id)

    async def get_user_groups(self, user_id: str) -> List[Group]:
        groups = []
        for membership in self.store.group_memberships.find_for_user(user_id):
            group = self.store.groups.get(membership.group_id)
            if group is not None:
                groups.append(group)
        return groups

    async def join_group(self, user_id: str, group_id: str) -> bool:
        self.store.group_memberships.add(
            GroupMembership(
                id=new_id(),
                group_id=group_id,
                user_id=user_id,
                role="member",
                joined_at=utcnow(),
            )
        )

        group = self.store.groups.get(group_id)
        if group is not None:
            group.members_count += 1

        logger.debug(f"group_joined user_id={user_id} group_id={group_id}")
        return True

    async def leave_group(self, user_id: str, group_id: str) -> bool:
        memberships = self.store.group_memberships.find(user_id, group_id)
        for membership in memberships:
            self.store.group_memberships.delete(membership.id)

        if not memberships:
            return False

        group = self.store.groups.get(group_id)
        if group is not None and group.members_count > 0:
            group.members_count -= 1

        logger.debug(f"group_left user_id={user_id} group_id={group_id}")
        return True

    # Messages

    async def create_conversation(self, participant_ids: List[str]) -> Conversation:
        now = utcnow()
        conversation = Conversation(
            id=new_id(),
            participant_ids=list(participant_ids),
            last_message_id=None,
            updated_at=now,
            created_at=now,
        )
        self.store.conversations.add(conversation)
        return conversation

    def _with_sender(self, message: Message) -> Optional[MessageWithSender]:
        sender = self.store.users.get(message.sender_id)
        if sender is None:
            return None
        return MessageWithSender(**message.model_dump(), sender=sender.profile())

    async def get_conversation(self, id: str) -> Optional[ConversationWithParticipants]:
        conversation = self.store.conversations.get(id)
        if conversation is None:
            return None

        participants = [
            user.profile()
            for user in (self.store.users.get(pid) for pid in conversation.participant_ids)
            if user is not None
        ]

        last_message = None
        if conversation.last_message_id:
            message = self.store.messages.get(conversation.last_message_id)
            if message is not None:
                last_message = self._with_sender(message)

        return ConversationWithParticipants(
            **conversation.model_dump(),
            participants=participants,
            last_message=last_message,
            unread_count=0,  # TODO: count messages whose read_by lacks the viewing user
        )

    async def get_user_conversations(
        self, user_id: str
    ) -> List[ConversationWithParticipants]:
        conversations = []
        for conversation in self.store.conversations.find_for_user(user_id):
            resolved = await self.get_conversation(conversation.id)
            if resolved is not None:
                conversations.append(resolved)
        return conversations

    async def send_message(self, data: InsertMessage) -> Message:
        now = utcnow()
        message = Message(
            **data.model_dump(),
            id=new_id(),
            read_by=[data.sender_id],
            created_at=now,
        )
        self.store.messages.add(message)

        conversation = self.store.conversations.get(data.conversation_id)
        if conversation is not None:
            conversation.last_message_id = message.id
            conversation.updated_at = now

        logger.debug(f"message_sent id={message.id} conversation_id={message.conversation_id}")
        return message

    async def get_conversation_messages(
        self, conversation_id: str
    ) -> List[MessageWithSender]:
        messages = (
            self._with_sender(message)
            for message in self.store.messages.find_by_conversation(conversation_id)
        )
        return [message for message in messages if message is not None]

    async def mark_messages_as_read(self, conversation_id: str, user_id: str) -> bool:
        for message in self.store.messages.find_by_conversation(conversation_id):
            if user_id not in message.read_by:
                message.read_by.append(user_id)
        return True

    # Notifications

    async def create_notification(self, data: InsertNotification) -> Notification:
        notification = Notification(
            **data.model_dump(), id=new_id(), is_read=False, created_at=utcnow()
        )
        self.store.notifications.add(notification)
        return notification

    async def get_user_notifications(self, user_id: str) -> List[Notification]:
        return self.store.notifications.find_for_user(user_id)

    async def mark_notification_as_read(self, id: str) -> bool:
        notification = self.store.notifications.get(id)
        if notification is None:
            return False

        notification.is_read = True
        return True

    async def get_unread_notifications_count(self, user_id: str) -> int:
        return self.store.notifications.count_unread(user_id)


def seed_demo_data(store: EntityStore) -> None:
    """Load the demo user and the demo group used by the web client."""
    now = utcnow()
    demo_user = User(
        id="demo-user-1",
        username="alexjohnson",
        email="alex@example.com",
        password_hash=hash_password("password123"),
        display_name="Alex Johnson",
        bio="Web Developer & Designer",
        avatar="https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150",
        location="San Francisco, CA",
        website="https://alexjohnson.dev",
        is_online=True,
        last_seen=now,
        created_at=now,
    )
    store.users.add(demo_user)

    store.groups.add(
        Group(
            id="group-1",
            name="Web Developers Hub",
            description="A community for web developers to share knowledge and network",
            owner_id=demo_user.id,
            members_count=12489,
            is_private=False,
            created_at=now,
        )
    )
    logger.info("demo_data_seeded users=1 groups=1")
