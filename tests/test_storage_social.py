from conftest import make_user, run

from socialhub.chat.models import InsertMessage
from socialhub.groups.models import InsertGroup
from socialhub.notifications.models import InsertNotification


# Friendships


def test_accept_only_by_recipient(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    request = run(storage.send_friend_request(alice.id, bob.id))
    assert request.status == "pending"

    # The requester cannot accept their own request.
    assert run(storage.accept_friend_request(alice.id, bob.id)) is False
    assert run(storage.get_friends(alice.id)) == []

    assert run(storage.accept_friend_request(bob.id, alice.id)) is True
    assert request.status == "accepted"

    # Nothing left pending.
    assert run(storage.accept_friend_request(bob.id, alice.id)) is False


def test_friends_are_symmetric_once_accepted(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    carol = make_user(storage, "carol")
    run(storage.send_friend_request(alice.id, bob.id))
    run(storage.send_friend_request(carol.id, alice.id))
    run(storage.accept_friend_request(bob.id, alice.id))

    assert [u.id for u in run(storage.get_friends(alice.id))] == [bob.id]
    assert [u.id for u in run(storage.get_friends(bob.id))] == [alice.id]
    # Carol's request is still pending.
    assert run(storage.get_friends(carol.id)) == []


def test_friend_requests_lists_incoming_pending_with_requester(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    carol = make_user(storage, "carol")
    run(storage.send_friend_request(alice.id, bob.id))
    run(storage.send_friend_request(carol.id, bob.id))
    run(storage.accept_friend_request(bob.id, carol.id))

    requests = run(storage.get_friend_requests(bob.id))

    assert len(requests) == 1
    assert requests[0].user.id == alice.id
    assert requests[0].friend_id == bob.id
    assert run(storage.get_friend_requests(alice.id)) == []


def test_remove_friend_from_either_side_any_status(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    run(storage.send_friend_request(alice.id, bob.id))

    assert run(storage.remove_friend(bob.id, alice.id)) is True
    assert run(storage.get_friend_requests(bob.id)) == []
    assert run(storage.remove_friend(bob.id, alice.id)) is False

    run(storage.send_friend_request(alice.id, bob.id))
    run(storage.accept_friend_request(bob.id, alice.id))
    assert run(storage.remove_friend(alice.id, bob.id)) is True
    assert run(storage.get_friends(alice.id)) == []


def test_friend_with_missing_user_is_skipped(store, storage):
    alice = make_user(storage, "alice")
    run(storage.send_friend_request("ghost", alice.id))
    run(storage.accept_friend_request(alice.id, "ghost"))

    assert run(storage.get_friends(alice.id)) == []


# Groups


def test_create_group_makes_owner_admin(store, storage):
    alice = make_user(storage, "alice")

    group = run(storage.create_group(InsertGroup(name="Hikers", owner_id=alice.id)))

    assert group.members_count == 1
    memberships = store.group_memberships.find(alice.id, group.id)
    assert [m.role for m in memberships] == ["admin"]
    assert run(storage.get_group(group.id)) == group
    assert [g.id for g in run(storage.get_user_groups(alice.id))] == [group.id]


def test_join_and_leave_group(store, storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    group = run(storage.create_group(InsertGroup(name="Hikers", owner_id=alice.id)))

    assert run(storage.join_group(bob.id, group.id)) is True
    assert group.members_count == 2
    assert [m.role for m in store.group_memberships.find(bob.id, group.id)] == ["member"]
    assert [g.id for g in run(storage.get_user_groups(bob.id))] == [group.id]

    assert run(storage.leave_group(bob.id, group.id)) is True
    assert group.members_count == 1
    assert run(storage.get_user_groups(bob.id)) == []


def test_leave_never_joined_group_changes_nothing(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    group = run(storage.create_group(InsertGroup(name="Hikers", owner_id=alice.id)))

    assert run(storage.leave_group(bob.id, group.id)) is False
    assert group.members_count == 1


def test_leave_removes_duplicate_rows_but_decrements_once(store, storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    group = run(storage.create_group(InsertGroup(name="Hikers", owner_id=alice.id)))
    run(storage.join_group(bob.id, group.id))
    run(storage.join_group(bob.id, group.id))
    assert group.members_count == 3

    assert run(storage.leave_group(bob.id, group.id)) is True

    assert group.members_count == 2
    assert store.group_memberships.find(bob.id, group.id) == []


# Conversations and messages


def test_send_message_updates_conversation(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    conversation = run(storage.create_conversation([alice.id, bob.id]))
    before = conversation.updated_at

    message = run(
        storage.send_message(
            InsertMessage(conversation_id=conversation.id, sender_id=alice.id, content="hi")
        )
    )

    assert message.read_by == [alice.id]
    assert message.type == "text"
    resolved = run(storage.get_conversation(conversation.id))
    assert resolved.last_message_id == message.id
    assert resolved.updated_at >= before
    assert resolved.last_message.content == "hi"
    assert resolved.last_message.sender.id == alice.id


def test_conversation_resolves_participants_and_reports_zero_unread(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    conversation = run(storage.create_conversation([alice.id, "ghost", bob.id]))
    run(
        storage.send_message(
            InsertMessage(conversation_id=conversation.id, sender_id=alice.id, content="hi")
        )
    )

    resolved = run(storage.get_conversation(conversation.id))

    assert resolved.participant_ids == [alice.id, "ghost", bob.id]
    assert [p.id for p in resolved.participants] == [alice.id, bob.id]
    assert resolved.unread_count == 0
    assert run(storage.get_conversation("missing")) is None


def test_user_conversations_most_recent_first(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    carol = make_user(storage, "carol")
    first = run(storage.create_conversation([alice.id, bob.id]))
    second = run(storage.create_conversation([alice.id, carol.id]))
    run(storage.create_conversation([bob.id, carol.id]))

    conversations = run(storage.get_user_conversations(alice.id))
    assert [c.id for c in conversations] == [second.id, first.id]


def test_conversation_messages_oldest_first_with_sender(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    conversation = run(storage.create_conversation([alice.id, bob.id]))
    for sender, text in [(alice, "one"), (bob, "two"), (alice, "three")]:
        run(
            storage.send_message(
                InsertMessage(conversation_id=conversation.id, sender_id=sender.id, content=text)
            )
        )

    messages = run(storage.get_conversation_messages(conversation.id))

    assert [m.content for m in messages] == ["one", "two", "three"]
    assert [m.sender.id for m in messages] == [alice.id, bob.id, alice.id]


def test_mark_messages_as_read(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    conversation = run(storage.create_conversation([alice.id, bob.id]))
    message = run(
        storage.send_message(
            InsertMessage(conversation_id=conversation.id, sender_id=alice.id, content="hi")
        )
    )

    assert run(storage.mark_messages_as_read(conversation.id, bob.id)) is True
    assert run(storage.mark_messages_as_read(conversation.id, bob.id)) is True

    assert message.read_by == [alice.id, bob.id]


# Notifications


def test_notifications_lifecycle(storage):
    alice = make_user(storage, "alice")
    first = run(
        storage.create_notification(
            InsertNotification(user_id=alice.id, type="like", title="Bob liked your post")
        )
    )
    second = run(
        storage.create_notification(
            InsertNotification(
                user_id=alice.id, type="comment", title="New comment", target_id="post-1"
            )
        )
    )
    run(storage.create_notification(InsertNotification(user_id="other", type="message", title="x")))

    assert first.is_read is False
    assert [n.id for n in run(storage.get_user_notifications(alice.id))] == [second.id, first.id]
    assert run(storage.get_unread_notifications_count(alice.id)) == 2

    assert run(storage.mark_notification_as_read(first.id)) is True
    assert run(storage.get_unread_notifications_count(alice.id)) == 1
    assert run(storage.mark_notification_as_read("missing")) is False
