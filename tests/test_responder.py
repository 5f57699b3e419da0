"""
Tests for the per-interaction reply state machine.
"""
import pytest

from conftest import make_interaction
from translator_bot.responder import InteractionResponder, InvalidReplyTransition, ReplyState


@pytest.mark.asyncio
async def test_direct_reply():
    interaction = make_interaction()
    responder = InteractionResponder(interaction)
    await responder.send("hello")
    assert responder.state is ReplyState.REPLIED
    interaction.response.send_message.assert_awaited_once()
    assert interaction.response.send_message.await_args.kwargs["ephemeral"] is True


@pytest.mark.asyncio
async def test_defer_then_edit():
    interaction = make_interaction()
    responder = InteractionResponder(interaction)
    await responder.defer()
    assert responder.state is ReplyState.DEFERRED
    await responder.edit("done")
    assert responder.state is ReplyState.REPLIED
    interaction.edit_original_response.assert_awaited_once()
    assert interaction.edit_original_response.await_args.kwargs["content"] == "done"


@pytest.mark.asyncio
async def test_edit_requires_defer():
    responder = InteractionResponder(make_interaction())
    with pytest.raises(InvalidReplyTransition):
        await responder.edit("too early")


@pytest.mark.asyncio
async def test_second_final_reply_is_refused():
    interaction = make_interaction()
    responder = InteractionResponder(interaction)
    await responder.send("first")
    with pytest.raises(InvalidReplyTransition):
        await responder.send("second")
    with pytest.raises(InvalidReplyTransition):
        await responder.defer()
    assert interaction.response.send_message.await_count == 1


@pytest.mark.asyncio
async def test_fail_before_any_reply_sends():
    interaction = make_interaction()
    responder = InteractionResponder(interaction)
    await responder.fail("oops")
    interaction.response.send_message.assert_awaited_once()
    interaction.edit_original_response.assert_not_awaited()
    assert responder.state is ReplyState.REPLIED


@pytest.mark.asyncio
async def test_fail_after_defer_edits():
    interaction = make_interaction()
    responder = InteractionResponder(interaction)
    await responder.defer()
    await responder.fail("oops")
    interaction.edit_original_response.assert_awaited_once()
    interaction.response.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_fail_swallows_secondary_errors():
    interaction = make_interaction()
    interaction.response.send_message.side_effect = RuntimeError("gateway down")
    responder = InteractionResponder(interaction)
    await responder.fail("oops")
    assert responder.state is ReplyState.NOT_STARTED
