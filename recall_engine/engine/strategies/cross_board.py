"""
Cross-board answer: fuses canvas board hits with meeting hits.
"""

from typing import List, Sequence

from domain.models import (
    Answer,
    CanvasResult,
    Meeting,
    MeetingResult,
    MessageSource,
    QueryType,
)
from recall_engine.engine.context import ConversationContext
from recall_engine.engine.formatting import format_date, plural, truncate
from recall_engine.engine.strategies.base import AnswerStrategy, mean_relevance, segment_source


NODE_ICONS = {
    "sticky": "📌",
    "transcript": "🎙️",
    "comment": "💬",
}
DEFAULT_NODE_ICON = "📄"


class CrossBoardAnswer(AnswerStrategy):
    """Narrative with a canvas section followed by a meetings section.

    Used whenever canvas results exist, whatever the query type.
    """

    query_type = QueryType.GENERAL
    USED_CANVAS = 5
    SHOWN_CANVAS = 4
    CITED_CANVAS = 3
    EXCERPT_LIMIT = 120
    CITATION_LIMIT = 200

    def generate(
        self,
        query: str,
        results: List[MeetingResult],
        meetings: Sequence[Meeting],
        context: ConversationContext,
        canvas_results: Sequence[CanvasResult] = (),
    ) -> Answer:
        used_canvas = list(canvas_results[: self.USED_CANVAS])
        sources: List[MessageSource] = [
            segment_source(result, segment)
            for result in results[:3]
            for segment in result.segments[:2]
        ]

        content = ""
        if used_canvas:
            board_names = list(dict.fromkeys(c.board_name for c in canvas_results))
            content += f"Found relevant content across **{plural(len(board_names), 'board')}**"
            if results:
                content += f" and **{plural(len(results), 'meeting')}**"
            content += ":\n\n"

            content += "**📋 From Canvas Boards:**\n"
            for hit in used_canvas[: self.SHOWN_CANVAS]:
                icon = NODE_ICONS.get(hit.node_type, DEFAULT_NODE_ICON)
                content += f'• {icon} **{hit.board_name}**: "{truncate(hit.content, self.EXCERPT_LIMIT)}"\n'

        if results:
            if used_canvas:
                content += "\n"
            content += "**🎙️ From Meetings:**\n"
            for result in results[:3]:
                if not result.segments:
                    continue
                excerpt = truncate(result.segments[0].text, self.EXCERPT_LIMIT)
                content += f'• **{result.meeting.title}** ({format_date(result.meeting.date)}): "{excerpt}"\n'

        scores = [s.relevance_score for s in sources] + [c.relevance_score for c in used_canvas]
        confidence = mean_relevance(scores)

        # Canvas hits are also cited in the meeting-style source list.
        now = self.clock()
        for hit in used_canvas[: self.CITED_CANVAS]:
            sources.append(
                MessageSource(
                    meeting_id=hit.board_id,
                    title=f"📋 {hit.board_name}",
                    date=now,
                    excerpt=hit.content[: self.CITATION_LIMIT],
                    speaker=hit.created_by,
                    relevance_score=hit.relevance_score,
                )
            )

        return Answer(
            content=content,
            sources=sources,
            canvas_sources=used_canvas,
            confidence=confidence,
        )
