from conftest import make_user, run

from socialhub.posts.models import InsertComment, InsertPost


def create_post(storage, author, content="hello", **fields):
    return run(storage.create_post(InsertPost(author_id=author.id, content=content, **fields)))


def create_comment(storage, post, author, content="nice"):
    return run(
        storage.create_comment(InsertComment(post_id=post.id, author_id=author.id, content=content))
    )


def test_create_post_initialises_counters(storage):
    alice = make_user(storage, "alice")

    post = create_post(storage, alice, images=["https://img/1.png"], type="reel")

    assert post.likes_count == 0
    assert post.comments_count == 0
    assert post.shares_count == 0
    assert post.type == "reel"
    assert post.images == ["https://img/1.png"]


def test_get_post_by_id_attaches_author(storage):
    alice = make_user(storage, "alice")
    post = create_post(storage, alice)

    resolved = run(storage.get_post_by_id(post.id))

    assert resolved.id == post.id
    assert resolved.content == "hello"
    assert resolved.author.id == alice.id
    assert run(storage.get_post_by_id("missing")) is None


def test_post_with_missing_author_is_unavailable(storage):
    post = run(storage.create_post(InsertPost(author_id="ghost", content="boo")))

    assert run(storage.get_post_by_id(post.id)) is None
    assert run(storage.get_feed_posts("anyone")) == []
    assert run(storage.get_user_posts("ghost")) == []


def test_feed_is_newest_first_and_limited(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    posts = [create_post(storage, alice if i % 2 else bob, f"post {i}") for i in range(12)]

    feed = run(storage.get_feed_posts(alice.id))

    assert len(feed) == 10
    assert [p.id for p in feed] == [p.id for p in reversed(posts)][:10]

    short = run(storage.get_feed_posts(alice.id, limit=3))
    assert [p.content for p in short] == ["post 11", "post 10", "post 9"]


def test_feed_example_like_flow(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    post = create_post(storage, alice, "hello")

    feed = run(storage.get_feed_posts(bob.id))
    assert len(feed) == 1
    assert feed[0].author.id == alice.id
    assert feed[0].is_liked is False

    assert run(storage.toggle_like(bob.id, post.id, "post")) is True

    feed = run(storage.get_feed_posts(bob.id))
    assert feed[0].is_liked is True
    assert feed[0].likes_count == 1

    # Alice has not liked it herself.
    assert run(storage.get_feed_posts(alice.id))[0].is_liked is False


def test_user_and_group_posts(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    first = create_post(storage, alice, "one", group_id="g1")
    create_post(storage, bob, "two", group_id="g2")
    third = create_post(storage, alice, "three")

    user_posts = run(storage.get_user_posts(alice.id))
    assert [p.id for p in user_posts] == [third.id, first.id]
    assert all(p.author.id == alice.id for p in user_posts)

    group_posts = run(storage.get_group_posts("g1"))
    assert [p.id for p in group_posts] == [first.id]
    assert run(storage.get_group_posts("nope")) == []


def test_delete_post(storage):
    alice = make_user(storage, "alice")
    post = create_post(storage, alice)

    assert run(storage.delete_post(post.id)) is True
    assert run(storage.delete_post(post.id)) is False
    assert run(storage.get_post_by_id(post.id)) is None


def test_comments_count_tracks_live_comments(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    post = create_post(storage, alice)

    comments = [create_comment(storage, post, bob, f"c{i}") for i in range(3)]
    assert run(storage.get_post_by_id(post.id)).comments_count == 3

    assert run(storage.delete_comment(comments[1].id)) is True
    assert run(storage.delete_comment(comments[1].id)) is False
    create_comment(storage, post, alice, "c3")

    resolved = run(storage.get_post_by_id(post.id))
    live = run(storage.get_post_comments(post.id))
    assert resolved.comments_count == len(live) == 3
    assert [c.content for c in live] == ["c0", "c2", "c3"]
    assert live[0].author.id == bob.id


def test_comments_count_never_negative(store, storage):
    alice = make_user(storage, "alice")
    post = create_post(storage, alice)
    comment = create_comment(storage, post, alice)
    store.posts.get(post.id).comments_count = 0

    run(storage.delete_comment(comment.id))

    assert store.posts.get(post.id).comments_count == 0


def test_comment_on_missing_post_is_still_stored(storage):
    alice = make_user(storage, "alice")

    comment = run(
        storage.create_comment(InsertComment(post_id="missing", author_id=alice.id, content="hi"))
    )

    assert [c.id for c in run(storage.get_post_comments("missing"))] == [comment.id]


def test_toggle_like_twice_restores_state(storage):
    alice = make_user(storage, "alice")
    post = create_post(storage, alice)

    assert run(storage.toggle_like(alice.id, post.id, "post")) is True
    assert run(storage.is_liked(alice.id, post.id)) is True
    assert run(storage.get_post_by_id(post.id)).likes_count == 1

    assert run(storage.toggle_like(alice.id, post.id, "post")) is False
    assert run(storage.is_liked(alice.id, post.id)) is False
    assert run(storage.get_post_by_id(post.id)).likes_count == 0


def test_likes_from_different_users_accumulate(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    post = create_post(storage, alice)

    run(storage.toggle_like(alice.id, post.id, "post"))
    run(storage.toggle_like(bob.id, post.id, "post"))

    assert run(storage.get_post_by_id(post.id)).likes_count == 2


def test_toggle_like_on_comment(store, storage):
    alice = make_user(storage, "alice")
    post = create_post(storage, alice)
    comment = create_comment(storage, post, alice)

    assert run(storage.toggle_like(alice.id, comment.id, "comment")) is True
    assert store.comments.get(comment.id).likes_count == 1
    assert store.posts.get(post.id).likes_count == 0

    assert run(storage.toggle_like(alice.id, comment.id, "comment")) is False
    assert store.comments.get(comment.id).likes_count == 0


def test_unlike_clamps_counter_at_zero(store, storage):
    alice = make_user(storage, "alice")
    post = create_post(storage, alice)
    run(storage.toggle_like(alice.id, post.id, "post"))
    store.posts.get(post.id).likes_count = 0

    run(storage.toggle_like(alice.id, post.id, "post"))

    assert store.posts.get(post.id).likes_count == 0


def test_like_on_missing_target_only_records_like(storage):
    assert run(storage.toggle_like("u1", "nothing", "post")) is True
    assert run(storage.is_liked("u1", "nothing")) is True
