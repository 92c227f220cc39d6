"""Tests for the in-memory session store."""

from datetime import datetime, timedelta

from supportbot.core.models import ConversationTurn, TurnRole
from supportbot.core.session import SessionStore


def _turns(*contents: str) -> list[ConversationTurn]:
    return [ConversationTurn(role=TurnRole.USER, content=c) for c in contents]


class TestSessionStore:
    """Tests for SessionStore."""

    def test_new_session_generated(self) -> None:
        store = SessionStore()

        session = store.get_or_create()

        assert session.session_id
        assert session.chat_history == []
        assert len(store) == 0

    def test_save_and_reload(self) -> None:
        store = SessionStore()
        session = store.get_or_create()

        store.save(session.session_id, _turns("hi"), user_id="U1")
        reloaded = store.get_or_create(session.session_id)

        assert [t.content for t in reloaded.chat_history] == ["hi"]
        assert reloaded.user_id == "U1"
        assert reloaded.turn_count == 1

    def test_returned_session_is_a_copy(self) -> None:
        store = SessionStore()
        store.save("s1", _turns("hi"))

        session = store.get_or_create("s1")
        session.chat_history.append(ConversationTurn(role=TurnRole.USER, content="x"))

        assert len(store.get_or_create("s1").chat_history) == 1

    def test_user_id_kept_when_not_given(self) -> None:
        store = SessionStore()
        store.save("s1", _turns("a"), user_id="U1")
        store.save("s1", _turns("a", "b"))

        assert store.get_or_create("s1").user_id == "U1"

    def test_unknown_id_starts_fresh_under_same_id(self) -> None:
        session = SessionStore().get_or_create("client-chosen")

        assert session.session_id == "client-chosen"
        assert session.chat_history == []

    def test_stale_session_discarded(self) -> None:
        store = SessionStore(max_age=timedelta(minutes=5))
        store.save("s1", _turns("old"))
        store._sessions["s1"].last_updated = datetime.now() - timedelta(minutes=10)

        session = store.get_or_create("s1")

        assert session.chat_history == []
        assert len(store) == 0

    def test_clear(self) -> None:
        store = SessionStore()
        store.save("s1", _turns("a"))

        assert store.clear("s1") is True
        assert store.clear("s1") is False

    def test_evicts_least_recently_used_when_full(self) -> None:
        store = SessionStore(max_sessions=2)
        store.save("a", _turns("1"))
        store.save("b", _turns("2"))
        store._sessions["a"].last_updated = datetime.now() - timedelta(seconds=30)

        store.save("c", _turns("3"))

        assert len(store) == 2
        assert store.get_or_create("a").chat_history == []
        assert len(store.get_or_create("b").chat_history) == 1
