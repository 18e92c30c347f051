"""
Action item answers: per person when a name is given, otherwise the most
recent items across all meetings.

Works over the whole corpus rather than the ranked results, since action
items are recorded per meeting independent of the query wording.
"""

import re
from typing import List, Sequence, Tuple

from domain.models import Answer, Meeting, MeetingResult, MessageSource, QueryType
from recall_engine.engine.context import ConversationContext
from recall_engine.engine.formatting import format_date
from recall_engine.engine.scoring import days_between
from recall_engine.engine.strategies.base import AnswerStrategy
from shared_utils.constants import Confidence


MIN_CLAUSE_LENGTH = 10


def extract_action_items_for_person(
    person: str, meetings: Sequence[Meeting]
) -> List[Tuple[Meeting, str]]:
    """Find action items that mention *person*.

    Recorded ``action_items`` mentioning the person are taken as-is;
    transcript clauses such as "Sarah will send the report" are added as
    ``"<speaker>: <clause>"`` unless already covered by a found item.
    """
    items: List[Tuple[Meeting, str]] = []
    person_lower = person.lower()
    name = re.escape(person_lower)
    clause_patterns = (
        re.compile(rf"{name} (?:will|needs? to|should|is going to|has to) ([^.]+)", re.IGNORECASE),
        re.compile(rf"(?:assign|give|task)(?:ed|ing)? (?:to )?{name}:? ([^.]+)", re.IGNORECASE),
    )

    for meeting in meetings:
        for item in meeting.action_items:
            if person_lower in item.lower():
                items.append((meeting, item))

        for segment in meeting.transcript:
            for pattern in clause_patterns:
                match = pattern.search(segment.text)
                if not match or not match.group(1):
                    continue
                clause = match.group(1).strip()
                if len(clause) > MIN_CLAUSE_LENGTH and not any(clause in found for _, found in items):
                    items.append((meeting, f"{segment.speaker}: {clause}"))

    return items


class ActionItemsAnswer(AnswerStrategy):
    """Lists action items for a named person or across all meetings."""

    query_type = QueryType.ACTION_ITEMS
    MAX_PERSON_ITEMS = 6
    MAX_RECENT_ITEMS = 8
    NO_ITEMS = (
        "I couldn't find any documented action items in the meeting history. "
        "You might want to check if action items were recorded in the meeting summaries."
    )

    def generate(
        self,
        query: str,
        results: List[MeetingResult],
        meetings: Sequence[Meeting],
        context: ConversationContext,
    ) -> Answer:
        person = self.classifier.extract_person(query)
        if person:
            return self._for_person(person, meetings)
        return self._most_recent(meetings)

    def _for_person(self, person: str, meetings: Sequence[Meeting]) -> Answer:
        found = extract_action_items_for_person(person, meetings)
        if not found:
            return Answer(
                content=f"I couldn't find any specific action items for **{person}** in the meeting history.",
                confidence=Confidence.PERSON_ACTION_ITEMS_MISSING,
            )

        sources: List[MessageSource] = []
        lines: List[str] = []
        for meeting, item in found[: self.MAX_PERSON_ITEMS]:
            sources.append(_item_source(meeting, item, Confidence.PERSON_ACTION_ITEM_SOURCE))
            lines.append(f"• **{item}** (from {meeting.title}, {format_date(meeting.date)})")

        content = f"Here are the action items I found for **{person}**:\n\n" + "\n\n".join(lines)
        return Answer(content=content, sources=sources, confidence=Confidence.PERSON_ACTION_ITEMS)

    def _most_recent(self, meetings: Sequence[Meeting]) -> Answer:
        all_items = [(meeting, item) for meeting in meetings for item in meeting.action_items]
        if not all_items:
            return Answer(content=self.NO_ITEMS, confidence=Confidence.ALL_ACTION_ITEMS_MISSING)

        now = self.clock()
        all_items.sort(key=lambda pair: days_between(pair[0].date, now))

        sources: List[MessageSource] = []
        lines: List[str] = []
        for meeting, item in all_items[: self.MAX_RECENT_ITEMS]:
            sources.append(_item_source(meeting, item, Confidence.ACTION_ITEM_SOURCE))
            lines.append(f"• **{item}** ({meeting.title})")

        content = "Here are the most recent action items from your meetings:\n\n" + "\n\n".join(lines)
        return Answer(content=content, sources=sources, confidence=Confidence.ALL_ACTION_ITEMS)


def _item_source(meeting: Meeting, item: str, relevance: float) -> MessageSource:
    return MessageSource(
        meeting_id=meeting.id,
        title=meeting.title,
        date=meeting.date,
        excerpt=item,
        relevance_score=relevance,
    )
