"""
Keyword search over meetings and canvas boards.

Both searchers score every candidate span with ``calculate_relevance``,
keep those above a threshold, and return a ranked, truncated list.
Scoring per meeting / per board shares no state, so it can fan out to a
thread pool when ``Settings.search_workers`` > 1; ranking happens after
fan-in and is deterministic.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from domain.models import (
    Board,
    CanvasResult,
    Meeting,
    MeetingResult,
    QueryType,
    ScoredSegment,
)
from recall_engine.engine.classifier import QueryClassifier
from recall_engine.engine.scoring import calculate_recency_bonus, calculate_relevance
from recall_engine.parser.tokenizer import tokenize
from shared_utils.config_loader import Settings, get_settings
from shared_utils.constants import LogScope
from shared_utils.logging_utils import ContextualLogger


logger = ContextualLogger(scope=LogScope.SEARCH)

T = TypeVar("T")
R = TypeVar("R")

CANVAS_COMMENT = "comment"
CANVAS_TRANSCRIPT = "transcript"


def _fan_out(func: Callable[[T], R], items: Sequence[T], workers: int) -> List[R]:
    """Apply *func* to *items*, preserving order, optionally on a thread pool."""
    if workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=min(workers, len(items))) as pool:
        return list(pool.map(func, items))


def speaker_matches(segment_speaker: str, target: str) -> bool:
    """Case-insensitive substring match in either direction."""
    a, b = segment_speaker.lower(), target.lower()
    return b in a or a in b


class MeetingSearcher:
    """Ranks meetings by the relevance of their transcript segments."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        classifier: Optional[QueryClassifier] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.settings = settings or get_settings()
        self.classifier = classifier or QueryClassifier()
        self.clock = clock

    def search(
        self,
        query: str,
        meetings: Sequence[Meeting],
        query_type: QueryType,
    ) -> List[MeetingResult]:
        """Search all meetings for *query*.

        For ``what_said`` queries naming a speaker, only that speaker's
        segments are considered.

        Returns:
            At most ``max_meeting_results`` results sorted by overall relevance
        """
        target_speaker = None
        if query_type == QueryType.WHAT_SAID:
            target_speaker = self.classifier.extract_speaker(query)
        now = self.clock()

        def score_meeting(meeting: Meeting) -> Optional[MeetingResult]:
            return self._score_meeting(query, meeting, query_type, target_speaker, now)

        scored = _fan_out(score_meeting, list(meetings), self.settings.search_workers)
        results = [r for r in scored if r is not None]
        results.sort(key=lambda r: r.overall_relevance, reverse=True)
        results = results[: self.settings.max_meeting_results]

        logger.debug(
            "meeting_search_completed",
            meetings_scanned=len(meetings),
            results=len(results),
            speaker_filter=target_speaker,
        )
        return results

    def _score_meeting(
        self,
        query: str,
        meeting: Meeting,
        query_type: QueryType,
        target_speaker: Optional[str],
        now: datetime,
    ) -> Optional[MeetingResult]:
        matching: List[ScoredSegment] = []

        for segment in meeting.transcript:
            if target_speaker and not speaker_matches(segment.speaker, target_speaker):
                continue

            relevance = calculate_relevance(query, segment.text, segment.speaker, query_type)
            if relevance > self.settings.segment_threshold:
                matching.append(
                    ScoredSegment(
                        speaker=segment.speaker,
                        text=segment.text,
                        timestamp=segment.timestamp,
                        relevance_score=relevance,
                    )
                )

        if not matching:
            return None

        matching.sort(key=lambda s: s.relevance_score, reverse=True)
        # Average covers every kept segment, not only the returned top-k.
        average = sum(s.relevance_score for s in matching) / len(matching)
        recency_bonus = calculate_recency_bonus(meeting.date, now)

        return MeetingResult(
            meeting=meeting,
            segments=matching[: self.settings.max_segments_per_meeting],
            overall_relevance=average * (1 + recency_bonus),
        )


class BoardSearcher:
    """Ranks canvas nodes, node comments and board transcript lines."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def search(self, query: str, boards: Sequence[Board]) -> List[CanvasResult]:
        """Search every board for *query*.

        Queries with no searchable tokens return nothing rather than
        matching indiscriminately.

        Returns:
            At most ``max_canvas_results`` results sorted by relevance
        """
        if not tokenize(query):
            return []

        def score_board(board: Board) -> List[CanvasResult]:
            return list(self._score_board(query, board))

        per_board = _fan_out(score_board, list(boards), self.settings.search_workers)
        results = [r for board_results in per_board for r in board_results]
        results.sort(key=lambda r: r.relevance_score, reverse=True)
        results = results[: self.settings.max_canvas_results]

        logger.debug(
            "board_search_completed",
            boards_scanned=len(boards),
            results=len(results),
        )
        return results

    def _score_board(self, query: str, board: Board) -> Iterable[CanvasResult]:
        threshold = self.settings.canvas_threshold

        for node in board.visual_nodes:
            content = (node.content or "").strip()
            # Near-empty nodes are skipped together with their comments.
            if not content or len(content) < self.settings.canvas_min_content_length:
                continue

            relevance = calculate_relevance(query, content, None, QueryType.GENERAL)
            if relevance > threshold:
                yield CanvasResult(
                    board_id=board.id,
                    board_name=board.name,
                    node_id=node.id,
                    node_type=node.type,
                    content=content,
                    created_by=node.created_by or "Unknown",
                    relevance_score=relevance,
                )

            for comment in node.comments:
                relevance = calculate_relevance(query, comment.content, None, QueryType.GENERAL)
                if relevance > threshold:
                    yield CanvasResult(
                        board_id=board.id,
                        board_name=board.name,
                        node_id=node.id,
                        node_type=CANVAS_COMMENT,
                        content=comment.content,
                        created_by=comment.user_id or "Unknown",
                        relevance_score=relevance,
                    )

        for transcript in board.transcripts:
            for entry in transcript.entries:
                relevance = calculate_relevance(query, entry.text, entry.speaker, QueryType.GENERAL)
                if relevance > threshold:
                    yield CanvasResult(
                        board_id=board.id,
                        board_name=board.name,
                        node_id=transcript.id,
                        node_type=CANVAS_TRANSCRIPT,
                        content=f"{entry.speaker}: {entry.text}",
                        created_by=entry.speaker,
                        relevance_score=relevance,
                    )
