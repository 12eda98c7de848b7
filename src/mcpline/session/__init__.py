"""Session control: turn-taking loop, prompt turns and the approval gate."""

from mcpline.session.gate import Decision, PendingToolRequest, ToolApprovalGate
from mcpline.session.loop import SessionLoop, SessionState
from mcpline.session.turn import PromptTurnController, TurnOutcome, TurnState

__all__ = [
    "Decision",
    "PendingToolRequest",
    "PromptTurnController",
    "SessionLoop",
    "SessionState",
    "ToolApprovalGate",
    "TurnOutcome",
    "TurnState",
]
