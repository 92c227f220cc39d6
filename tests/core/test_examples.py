"""Tests for compiling human corrections into planner examples."""

from unittest.mock import MagicMock

import pytest

from supportbot.core.feedback import FallbackStore, FewShotExampleCompiler


@pytest.fixture
def store(tmp_path) -> FallbackStore:
    return FallbackStore(tmp_path / "feedback_store.json")


class TestFewShotExampleCompiler:
    """Tests for FewShotExampleCompiler.compile."""

    def test_empty_store(self, store: FallbackStore) -> None:
        assert FewShotExampleCompiler(store).compile() == ""

    def test_unresolved_entries_skipped(self, store: FallbackStore) -> None:
        store.log("Do you ship abroad?", None, None, "Handoff")
        blank = store.log("Gift wrap?", None, None, "Handoff")
        store.update(blank.id, "   ")

        assert FewShotExampleCompiler(store).compile() == ""

    def test_resolved_entries_rendered_in_order(self, store: FallbackStore) -> None:
        first = store.log("Do you ship abroad?", None, None, "Handoff")
        store.log("Unanswered question", None, None, "Handoff")
        second = store.log("Gift wrap?", None, None, "Handoff")
        store.update(first.id, "Yes, to 30 countries.")
        store.update(second.id, "Yes, for $5.")

        text = FewShotExampleCompiler(store).compile()

        assert "Example 1 (from past human correction):" in text
        assert "Example 2 (from past human correction):" in text
        assert "Example 3" not in text
        assert 'User Query: "Do you ship abroad?"' in text
        assert 'Human Agent\'s Correction/Response: "Yes, to 30 countries."' in text
        assert "Unanswered question" not in text
        assert text.index("Do you ship abroad?") < text.index("Gift wrap?")

    def test_unreadable_store_gives_no_examples(self) -> None:
        store = MagicMock()
        store.list.side_effect = PermissionError("denied")

        assert FewShotExampleCompiler(store).compile() == ""

    def test_non_utf8_store_gives_no_examples(self, store: FallbackStore) -> None:
        store.path.write_bytes(b"\xff\xfe[garbage\x80]")

        assert FewShotExampleCompiler(store).compile() == ""
