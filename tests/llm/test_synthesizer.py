"""Tests for the Response Synthesizer."""

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage

from supportbot.llm.synthesizer import SYNTHESIS_ERROR_MESSAGE, ResponseSynthesizer


class TestResponseSynthesizer:
    """Tests for ResponseSynthesizer.synthesize."""

    @pytest.mark.asyncio
    async def test_returns_trimmed_model_output(self) -> None:
        llm = FakeListChatModel(responses=["  The Steel Kettle costs $39.50.  \n"])

        reply = await ResponseSynthesizer(llm=llm).synthesize(
            "How much is the Steel Kettle?",
            [{"productName": "Steel Kettle", "price": 39.5}],
        )

        assert reply == "The Steel Kettle costs $39.50."

    @pytest.mark.asyncio
    async def test_rows_and_question_in_prompt(self) -> None:
        llm = MagicMock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))
        rows = [{"orderId": "O1", "orderDate": date(2024, 5, 1)}]

        await ResponseSynthesizer(llm=llm).synthesize("When did I order?", rows)

        human_text = llm.ainvoke.call_args[0][0][-1].content
        assert 'Question: "When did I order?"' in human_text
        assert json.dumps(rows, indent=2, default=str) in human_text

    @pytest.mark.asyncio
    async def test_list_content_blocks_joined(self) -> None:
        llm = MagicMock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content=[
            {"type": "text", "text": "No orders "},
            {"type": "text", "text": "found."},
        ]))

        reply = await ResponseSynthesizer(llm=llm).synthesize("My orders?", [])

        assert reply == "No orders found."

    @pytest.mark.asyncio
    async def test_error_returns_fixed_message(self) -> None:
        llm = MagicMock()
        llm.ainvoke = AsyncMock(side_effect=TimeoutError("deadline"))

        reply = await ResponseSynthesizer(llm=llm).synthesize("Anything?", [{"a": 1}])

        assert reply == SYNTHESIS_ERROR_MESSAGE
