import enum
import logging

import discord
from discord.utils import MISSING

logger = logging.getLogger(__name__)


class ReplyState(enum.Enum):
    NOT_STARTED = "not_started"
    DEFERRED = "deferred"
    REPLIED = "replied"


class InvalidReplyTransition(RuntimeError):
    pass


class InteractionResponder:
    """Tracks how far one interaction's reply has progressed.

    NOT_STARTED moves to DEFERRED (acknowledged, answer pending) or straight
    to REPLIED. DEFERRED moves to REPLIED with a single edit. Anything else
    is a bug in the caller and raises InvalidReplyTransition.
    """

    def __init__(self, interaction: discord.Interaction, ephemeral: bool = True):
        self.interaction = interaction
        self.ephemeral = ephemeral
        self.state = ReplyState.NOT_STARTED

    def _require(self, expected: ReplyState, action: str):
        if self.state is not expected:
            raise InvalidReplyTransition(f"cannot {action} an interaction in state {self.state.value}")

    async def send(self, content: str, view: discord.ui.View = MISSING):
        self._require(ReplyState.NOT_STARTED, "reply to")
        await self.interaction.response.send_message(content, view=view, ephemeral=self.ephemeral)
        self.state = ReplyState.REPLIED

    async def defer(self):
        self._require(ReplyState.NOT_STARTED, "defer")
        await self.interaction.response.defer(ephemeral=self.ephemeral, thinking=True)
        self.state = ReplyState.DEFERRED

    async def edit(self, content: str, view: discord.ui.View = MISSING):
        self._require(ReplyState.DEFERRED, "edit")
        await self.interaction.edit_original_response(content=content, view=view)
        self.state = ReplyState.REPLIED

    async def fail(self, content: str):
        """Best-effort error notice; never raises"""
        try:
            if self.state is ReplyState.NOT_STARTED:
                await self.interaction.response.send_message(content, ephemeral=self.ephemeral)
            else:
                await self.interaction.edit_original_response(content=content, view=None)
            self.state = ReplyState.REPLIED
        except Exception:
            logger.exception("❌ Error handling interaction error")
