"""
In-memory entity store.

One repository per entity type, each a thin wrapper over a dict keyed by id.
Lookups for a missing key return ``None``; nothing here raises on absence.
Repositories expose narrow query methods so that a database-backed store can
replace this one without touching the service layer.
"""

from typing import Callable, Dict, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

from socialhub.chat.models import Conversation, Message
from socialhub.friendship.models import Friendship
from socialhub.groups.models import Group, GroupMembership
from socialhub.notifications.models import Notification
from socialhub.posts.models import Comment, Like, Post
from socialhub.users.models import User


T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


class Repository(Generic[K, T]):
    def __init__(self, key: Callable[[T], K]):
        self._rows: Dict[K, T] = {}
        self._key = key

    def get(self, key: K) -> Optional[T]:
        return self._rows.get(key)

    def add(self, row: T) -> T:
        self._rows[self._key(row)] = row
        return row

    def delete(self, key: K) -> bool:
        return self._rows.pop(key, None) is not None

    def exists(self, key: K) -> bool:
        return key in self._rows

    def all(self) -> List[T]:
        return list(self._rows.values())

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        return [row for row in self._rows.values() if predicate(row)]

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._rows.values()))

    def __len__(self) -> int:
        return len(self._rows)


def newest_first(rows: List[T], attr: str = "created_at") -> List[T]:
    # Reverse insertion order first so equal timestamps still put the newest row on top.
    return sorted(reversed(rows), key=lambda row: getattr(row, attr), reverse=True)


def oldest_first(rows: List[T], attr: str = "created_at") -> List[T]:
    return sorted(rows, key=lambda row: getattr(row, attr))


class UserRepository(Repository[str, User]):
    def __init__(self):
        super().__init__(key=lambda user: user.id)

    def find_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self if u.username == username), None)

    def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self if u.email == email), None)

    def search(self, query: str) -> List[User]:
        needle = query.lower()
        return self.filter(
            lambda u: needle in u.display_name.lower() or needle in u.username.lower()
        )


class PostRepository(Repository[str, Post]):
    def __init__(self):
        super().__init__(key=lambda post: post.id)

    def recent(self, limit: Optional[int] = None) -> List[Post]:
        posts = newest_first(self.all())
        return posts if limit is None else posts[:limit]

    def find_by_author(self, author_id: str) -> List[Post]:
        return newest_first(self.filter(lambda p: p.author_id == author_id))

    def find_by_group(self, group_id: str) -> List[Post]:
        return newest_first(self.filter(lambda p: p.group_id == group_id))


class CommentRepository(Repository[str, Comment]):
    def __init__(self):
        super().__init__(key=lambda comment: comment.id)

    def find_by_post(self, post_id: str) -> List[Comment]:
        return oldest_first(self.filter(lambda c: c.post_id == post_id))


class LikeRepository(Repository[Tuple[str, str], Like]):
    """Likes are keyed by (user_id, target_id); at most one row per pair."""

    def __init__(self):
        super().__init__(key=lambda like: (like.user_id, like.target_id))

    def find(self, user_id: str, target_id: str) -> Optional[Like]:
        return self.get((user_id, target_id))


class FriendshipRepository(Repository[str, Friendship]):
    def __init__(self):
        super().__init__(key=lambda friendship: friendship.id)

    def find_pending(self, requester_id: str, recipient_id: str) -> Optional[Friendship]:
        return next(
            (
                f
                for f in self
                if f.user_id == requester_id
                and f.friend_id == recipient_id
                and f.status == "pending"
            ),
            None,
        )

    def find_between(self, user_id: str, other_id: str) -> List[Friendship]:
        """Rows in either direction, any status."""
        return self.filter(lambda f: f.involves(user_id, other_id))

    def find_accepted_for(self, user_id: str) -> List[Friendship]:
        return self.filter(
            lambda f: user_id in (f.user_id, f.friend_id) and f.status == "accepted"
        )

    def find_incoming_pending(self, user_id: str) -> List[Friendship]:
        return self.filter(lambda f: f.friend_id == user_id and f.status == "pending")


class GroupRepository(Repository[str, Group]):
    def __init__(self):
        super().__init__(key=lambda group: group.id)


class GroupMembershipRepository(Repository[str, GroupMembership]):
    def __init__(self):
        super().__init__(key=lambda membership: membership.id)

    def find_for_user(self, user_id: str) -> List[GroupMembership]:
        return self.filter(lambda m: m.user_id == user_id)

    def find(self, user_id: str, group_id: str) -> List[GroupMembership]:
        return self.filter(lambda m: m.user_id == user_id and m.group_id == group_id)


class ConversationRepository(Repository[str, Conversation]):
    def __init__(self):
        super().__init__(key=lambda conversation: conversation.id)

    def find_for_user(self, user_id: str) -> List[Conversation]:
        return newest_first(
            self.filter(lambda c: user_id in c.participant_ids), attr="updated_at"
        )


class MessageRepository(Repository[str, Message]):
    def __init__(self):
        super().__init__(key=lambda message: message.id)

    def find_by_conversation(self, conversation_id: str) -> List[Message]:
        return oldest_first(self.filter(lambda m: m.conversation_id == conversation_id))


class NotificationRepository(Repository[str, Notification]):
    def __init__(self):
        super().__init__(key=lambda notification: notification.id)

    def find_for_user(self, user_id: str) -> List[Notification]:
        return newest_first(self.filter(lambda n: n.user_id == user_id))

    def count_unread(self, user_id: str) -> int:
        return len(self.filter(lambda n: n.user_id == user_id and not n.is_read))


class EntityStore:
    """Holds every collection. Build one per process and pass it around."""

    def __init__(self):
        self.users = UserRepository()
        self.posts = PostRepository()
        self.comments = CommentRepository()
        self.likes = LikeRepository()
        self.friendships = FriendshipRepository()
        self.groups = GroupRepository()
        self.group_memberships = GroupMembershipRepository()
        self.conversations = ConversationRepository()
        self.messages = MessageRepository()
        self.notifications = NotificationRepository()
