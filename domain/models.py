"""
Pure domain models for the Meeting Recall engine.

Data flow:
  Meeting / Board (caller-supplied corpus snapshot, never mutated)
        → ClassifiedQuery (query type + extracted entities)
        → MeetingResult / CanvasResult (ranked, scored spans)
        → Answer (templated content + cited sources + confidence)
        → ConversationTurn (appended by the caller)
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Corpus: meetings
# ---------------------------------------------------------------------------


class TranscriptSegment(BaseModel):
    """Single utterance from a meeting transcript."""
    speaker: str
    text: str
    timestamp: datetime


class Meeting(BaseModel):
    """A recorded meeting with its ordered transcript."""
    id: str
    title: str
    date: datetime
    transcript: List[TranscriptSegment] = []
    summary: Optional[str] = None
    action_items: List[str] = []


# ---------------------------------------------------------------------------
# Corpus: canvas boards
# ---------------------------------------------------------------------------


class Comment(BaseModel):
    """Comment left on a canvas node."""
    id: str
    user_id: str = ""
    content: str = ""
    timestamp: datetime


class VisualNode(BaseModel):
    """Canvas node such as a sticky note, risk card or action card."""
    id: str
    type: str
    content: str = ""
    created_by: str = ""
    comments: List[Comment] = []


class TranscriptEntry(BaseModel):
    """Line of a transcript captured live on a board."""
    speaker: str
    text: str
    timestamp: int  # epoch milliseconds


class BoardTranscript(BaseModel):
    """Transcript embedded in a board."""
    id: str
    entries: List[TranscriptEntry] = []
    started_at: datetime
    ended_at: datetime


class Board(BaseModel):
    """Collaborative canvas searched alongside meetings."""
    id: str
    name: str
    visual_nodes: List[VisualNode] = []
    transcripts: List[BoardTranscript] = []


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class QueryType(str, Enum):
    """Classified intent of a question; selects the answer strategy."""

    WHAT_SAID = "what_said"
    WHEN_DISCUSSED = "when_discussed"
    ACTION_ITEMS = "action_items"
    SUMMARIZE = "summarize"
    CONCERNS = "concerns"
    GENERAL = "general"
    FOLLOW_UP = "follow_up"


class ClassifiedQuery(BaseModel):
    """Raw query plus the attributes derived from it."""
    raw: str
    query_type: QueryType
    speaker: Optional[str] = None
    topic: str = ""


# ---------------------------------------------------------------------------
# Search results
# ---------------------------------------------------------------------------


class ScoredSegment(BaseModel):
    """Transcript segment with its relevance to the query."""
    speaker: str
    text: str
    timestamp: datetime
    relevance_score: float = Field(ge=0.0, le=1.0)


class MeetingResult(BaseModel):
    """Meeting with its best-matching segments, sorted descending."""
    meeting: Meeting
    segments: List[ScoredSegment] = []
    overall_relevance: float = 0.0


class CanvasResult(BaseModel):
    """Board node, comment or board-transcript line that matched the query."""
    board_id: str
    board_name: str
    node_id: str
    node_type: str
    content: str
    created_by: str
    relevance_score: float = Field(ge=0.0, le=1.0)


# ---------------------------------------------------------------------------
# Answers and conversation
# ---------------------------------------------------------------------------


class MessageSource(BaseModel):
    """A citation attached to an answer."""
    meeting_id: str
    title: str
    date: datetime
    excerpt: str
    speaker: Optional[str] = None
    relevance_score: float = Field(ge=0.0, le=1.0)


class Answer(BaseModel):
    """Synthesized response.

    ``content`` uses ``**bold**`` and ``• `` bullet markers that the
    renderer relies on; they are emitted verbatim.
    """
    content: str
    sources: List[MessageSource] = []
    canvas_sources: List[CanvasResult] = []
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    query_type: Optional[QueryType] = None


class Role(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ConversationTurn(BaseModel):
    """One message in the caller-owned, append-only history."""
    role: Role
    content: str
    sources: List[MessageSource] = []
    confidence: Optional[float] = None
    query_type: Optional[QueryType] = None
    timestamp: datetime = Field(default_factory=datetime.now)
    is_error: bool = False
    error_code: Optional[str] = None


class Suggestion(BaseModel):
    """Suggested question shown to the user."""
    text: str
    query_type: QueryType
