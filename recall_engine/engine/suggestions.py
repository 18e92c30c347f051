"""
Suggested questions derived from recent board activity and meetings.
"""

from typing import List, Sequence

from domain.models import Board, Meeting, QueryType, Suggestion


MAX_SUGGESTIONS = 6
MIN_DYNAMIC_SUGGESTIONS = 4
DECISION_MARKERS = ("decision", "decided", "📌")

DEFAULT_SUGGESTIONS = (
    Suggestion(text="What did John say about the budget?", query_type=QueryType.WHAT_SAID),
    Suggestion(text="When did we last discuss the product roadmap?", query_type=QueryType.WHEN_DISCUSSED),
    Suggestion(text="What action items are pending for Sarah?", query_type=QueryType.ACTION_ITEMS),
    Suggestion(text="Summarize all meetings about the Q4 launch", query_type=QueryType.SUMMARIZE),
    Suggestion(text="What concerns has the team raised about the timeline?", query_type=QueryType.CONCERNS),
    Suggestion(text="What decisions were made in the last 3 meetings?", query_type=QueryType.GENERAL),
)

FILLER_SUGGESTIONS = (
    Suggestion(text="What decisions did we make about the roadmap?", query_type=QueryType.GENERAL),
    Suggestion(text="Show me all action items across boards", query_type=QueryType.ACTION_ITEMS),
    Suggestion(text="What concerns has the team raised?", query_type=QueryType.CONCERNS),
)


def generate_suggestions(boards: Sequence[Board], meetings: Sequence[Meeting]) -> List[Suggestion]:
    """Suggest questions about the first three boards and the latest meeting.

    Pads with generic questions when fewer than four are found. With no
    boards and no meetings at all the static example questions are returned.

    Returns:
        At most six suggestions
    """
    if not boards and not meetings:
        return list(DEFAULT_SUGGESTIONS)

    suggestions: List[Suggestion] = []

    for board in boards[:3]:
        if any(
            marker in (node.content or "").lower()
            for node in board.visual_nodes
            for marker in DECISION_MARKERS
        ):
            suggestions.append(Suggestion(
                text=f'What decisions were made on "{board.name}"?',
                query_type=QueryType.GENERAL,
            ))

        if any(node.type == "risk" for node in board.visual_nodes):
            suggestions.append(Suggestion(
                text=f'What are the risks on "{board.name}"?',
                query_type=QueryType.CONCERNS,
            ))

        if any(node.type == "action" for node in board.visual_nodes):
            suggestions.append(Suggestion(
                text=f'What action items are pending on "{board.name}"?',
                query_type=QueryType.ACTION_ITEMS,
            ))

    if meetings:
        suggestions.append(Suggestion(
            text=f"Summarize the {meetings[-1].title} meeting",
            query_type=QueryType.SUMMARIZE,
        ))

    if len(suggestions) < MIN_DYNAMIC_SUGGESTIONS:
        suggestions.extend(FILLER_SUGGESTIONS)

    return suggestions[:MAX_SUGGESTIONS]
