"""
Tests for the Intent Planner.

The LLM is replaced by LangChain's FakeListChatModel, or by an AsyncMock
when a test needs to inspect the prompt or force a failure.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage

from supportbot.core.models import ConversationTurn, TurnRole
from supportbot.llm.planner import IntentPlanner


def _recording_llm(content: str) -> MagicMock:
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content=content))
    return llm


def _prompt_text(llm: MagicMock) -> str:
    messages = llm.ainvoke.call_args[0][0]
    return "\n".join(m.content for m in messages)


class TestIntentPlanner:
    """Tests for IntentPlanner.plan."""

    @pytest.mark.asyncio
    async def test_returns_decoded_plan(self) -> None:
        llm = FakeListChatModel(responses=[
            '{"intent": "product_price", "cypher": "MATCH (p:Product {name: \'Kettle\'}) RETURN p.price AS price"}'
        ])
        planner = IntentPlanner(llm=llm)

        plan = await planner.plan("How much is the Kettle?")

        assert plan.intent == "product_price"
        assert plan.query.startswith("MATCH (p:Product")
        assert not plan.is_fallback

    @pytest.mark.asyncio
    async def test_fenced_output_decoded(self) -> None:
        llm = FakeListChatModel(responses=['```json\n{"intent": "fallback"}\n```'])

        plan = await IntentPlanner(llm=llm).plan("Can I get a refund?")

        assert plan.is_fallback
        assert plan.query is None

    @pytest.mark.asyncio
    async def test_undecodable_output_is_fallback(self) -> None:
        llm = FakeListChatModel(responses=["I'm not sure what you mean."])

        plan = await IntentPlanner(llm=llm).plan("???")

        assert plan.is_fallback
        assert plan.message is None

    @pytest.mark.asyncio
    async def test_llm_error_is_fallback_with_diagnostic(self) -> None:
        llm = MagicMock()
        llm.ainvoke = AsyncMock(side_effect=RuntimeError("quota exceeded"))

        plan = await IntentPlanner(llm=llm).plan("Where is my order?")

        assert plan.is_fallback
        assert "quota exceeded" in plan.message

    @pytest.mark.asyncio
    async def test_user_id_bound_when_placeholder_used(self) -> None:
        llm = FakeListChatModel(responses=[
            '{"intent": "user_orders", "cypher": "MATCH (u:User {id: $userId})-[:PLACED]->(o:Order) RETURN o.id AS id"}'
        ])

        plan = await IntentPlanner(llm=llm).plan("What are my orders?", user_id="U42")

        assert plan.parameters == {"userId": "U42"}

    @pytest.mark.asyncio
    async def test_user_id_not_bound_without_placeholder(self) -> None:
        llm = FakeListChatModel(responses=[
            '{"intent": "product_list", "cypher": "MATCH (p:Product) RETURN p.name AS name"}'
        ])

        plan = await IntentPlanner(llm=llm).plan("List products", user_id="U42")

        assert plan.parameters == {}


class TestPromptAssembly:
    """Tests for what the planner sends to the model."""

    @pytest.mark.asyncio
    async def test_history_and_examples_in_prompt(self) -> None:
        llm = _recording_llm('{"intent": "fallback"}')
        history = [
            ConversationTurn(role=TurnRole.USER, content="Show me kettles"),
            ConversationTurn(role=TurnRole.ASSISTANT, content="We have the Steel Kettle."),
        ]
        examples = '\nExample 1 (from past human correction):\nUser Query: "Do you ship abroad?"'

        await IntentPlanner(llm=llm).plan(
            "How much is it?",
            chat_history=history,
            dynamic_examples=examples,
        )

        text = _prompt_text(llm)
        assert "Learn from these past conversations that needed a human agent:" in text
        assert "Do you ship abroad?" in text
        assert "User: Show me kettles" in text
        assert "Assistant: We have the Steel Kettle." in text
        assert 'User Query: "How much is it?"' in text

    @pytest.mark.asyncio
    async def test_signed_in_user_context(self) -> None:
        llm = _recording_llm('{"intent": "fallback"}')

        await IntentPlanner(llm=llm).plan("My orders", user_id="U7")

        assert "(userId: U7)" in _prompt_text(llm)

    @pytest.mark.asyncio
    async def test_anonymous_user_context(self) -> None:
        llm = _recording_llm('{"intent": "fallback"}')

        await IntentPlanner(llm=llm).plan("My orders")

        assert "No user is signed in" in _prompt_text(llm)

    def test_empty_blocks_omitted(self) -> None:
        planner = IntentPlanner(llm=FakeListChatModel(responses=["{}"]))

        variables = planner.build_variables("Hi", None, [], "   ")

        assert variables["dynamic_examples"] == ""
        assert variables["chat_history"] == ""

    def test_prompt_version(self) -> None:
        planner = IntentPlanner(llm=FakeListChatModel(responses=["{}"]), prompt_version="v1")
        assert planner.prompt_version == "v1"
