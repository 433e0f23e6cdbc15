import random
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from socialhub.users.models import User, UserWithStats


class FriendSuggestionPolicy(ABC):
    """Picks which users to suggest as friends for a given user."""

    @abstractmethod
    def suggest(self, user_id: str, candidates: Iterable[User]) -> List[UserWithStats]:
        ...


class RandomStatsSuggestionPolicy(FriendSuggestionPolicy):
    """
    Placeholder policy: the first `limit` users other than the caller, in store
    order, with random friend/post counts. No ranking is performed.
    """

    def __init__(self, limit: int = 5, rng: Optional[random.Random] = None):
        self.limit = limit
        self.rng = rng or random.Random()

    def suggest(self, user_id: str, candidates: Iterable[User]) -> List[UserWithStats]:
        others = [user for user in candidates if user.id != user_id][: self.limit]

        return [
            UserWithStats(
                **user.profile().model_dump(),
                friends_count=self.rng.randrange(100),
                posts_count=self.rng.randrange(50),
                is_friend=False,
                friendship_status="none",
            )
            for user in others
        ]
