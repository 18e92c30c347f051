"""
Root conftest.py — shared fixtures for the entire test suite.

Guidelines:
    • No __init__.py in test sub-directories (avoids shadowing root packages).
    • pytest.ini_options lives in pyproject.toml with pythonpath=["."].
    • Time is pinned through the ``clock`` fixture; nothing reads the wall clock.
"""

import random
from datetime import datetime, timedelta
from typing import Callable, List

import pytest

from domain.models import (
    Board,
    BoardTranscript,
    Comment,
    Meeting,
    TranscriptEntry,
    TranscriptSegment,
    VisualNode,
)
from shared_utils.config_loader import Settings


FIXED_NOW = datetime(2026, 3, 16, 12, 0, 0)


# ---------------------------------------------------------------------------
# Clock / randomness / settings
# ---------------------------------------------------------------------------

@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture()
def clock() -> Callable[[], datetime]:
    """Clock pinned to ``FIXED_NOW``."""
    return lambda: FIXED_NOW


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture()
def settings() -> Settings:
    """Default engine settings, isolated from any local .env file."""
    return Settings(_env_file=None)


# ---------------------------------------------------------------------------
# Meeting factories
# ---------------------------------------------------------------------------

def make_segment(speaker: str, text: str, minute: int = 0) -> TranscriptSegment:
    return TranscriptSegment(
        speaker=speaker,
        text=text,
        timestamp=FIXED_NOW - timedelta(days=1) + timedelta(minutes=minute),
    )


def make_meeting(
    meeting_id: str,
    title: str,
    days_ago: float,
    lines: List[tuple],
    summary: str = None,
    action_items: List[str] = None,
) -> Meeting:
    return Meeting(
        id=meeting_id,
        title=title,
        date=FIXED_NOW - timedelta(days=days_ago),
        transcript=[make_segment(s, t, i) for i, (s, t) in enumerate(lines)],
        summary=summary,
        action_items=action_items or [],
    )


@pytest.fixture()
def budget_meeting() -> Meeting:
    return make_meeting(
        "m-budget",
        "Budget Sync",
        days_ago=2,
        lines=[
            ("John", "I think we should cut the marketing budget by 10%"),
            ("Sarah", "I'm worried about the hiring plan if the budget shrinks"),
            ("Maria", "We agreed to revisit the marketing budget next quarter"),
        ],
        summary=(
            "The team reviewed the quarterly budget in detail. "
            "Marketing spend will be reduced by ten percent next quarter. Ok"
        ),
        action_items=[
            "Sarah will finalize the deck by Friday",
            "John to share the revised budget sheet",
        ],
    )


@pytest.fixture()
def roadmap_meeting() -> Meeting:
    return make_meeting(
        "m-roadmap",
        "Roadmap Review",
        days_ago=20,
        lines=[
            ("Maria", "The product roadmap for Q3 focuses on the mobile launch"),
            ("John", "We decided to delay the analytics dashboard until Q4"),
            ("Alex", "There is a risk that the API migration slips past the launch date"),
        ],
        action_items=["Maria to update the roadmap slides"],
    )


@pytest.fixture()
def retro_meeting() -> Meeting:
    return make_meeting(
        "m-retro",
        "Sprint Retro",
        days_ago=200,
        lines=[
            ("Alex", "Deployments were difficult because the release pipeline kept failing"),
            ("Sarah", "Sarah needs to document the release checklist for the team"),
        ],
    )


@pytest.fixture()
def meetings(budget_meeting, roadmap_meeting, retro_meeting) -> List[Meeting]:
    return [budget_meeting, roadmap_meeting, retro_meeting]


# ---------------------------------------------------------------------------
# Board factories
# ---------------------------------------------------------------------------

@pytest.fixture()
def launch_board() -> Board:
    return Board(
        id="b-launch",
        name="Launch Plan",
        visual_nodes=[
            VisualNode(
                id="n-decision",
                type="sticky",
                content="📌 Decision: launch the mobile app in September",
                created_by="u-anna",
                comments=[
                    Comment(
                        id="c-1",
                        user_id="u-ben",
                        content="The marketing budget for the launch is still open",
                        timestamp=FIXED_NOW,
                    ),
                ],
            ),
            VisualNode(id="n-risk", type="risk", content="API migration could slip the launch"),
            VisualNode(id="n-action", type="action", content="Alex to prepare the launch checklist"),
            VisualNode(
                id="n-short",
                type="sticky",
                content=" ok ",
                comments=[
                    Comment(id="c-2", user_id="u-ben", content="launch launch launch", timestamp=FIXED_NOW),
                ],
            ),
        ],
        transcripts=[
            BoardTranscript(
                id="t-1",
                entries=[
                    TranscriptEntry(speaker="Anna", text="The launch budget needs another review", timestamp=0),
                ],
                started_at=FIXED_NOW - timedelta(hours=1),
                ended_at=FIXED_NOW,
            ),
        ],
    )


@pytest.fixture()
def boards(launch_board) -> List[Board]:
    return [launch_board]
