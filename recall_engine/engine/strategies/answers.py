"""
Per-type answer templates for meeting-only results.
"""

import re
from typing import List, Sequence

from domain.models import Answer, Meeting, MeetingResult, MessageSource, QueryType
from recall_engine.engine.context import ConversationContext
from recall_engine.engine.formatting import format_date, relative_time, truncate
from recall_engine.engine.scoring import days_between
from recall_engine.engine.strategies.base import AnswerStrategy, mean_relevance, segment_source
from shared_utils.constants import Confidence


class WhatSaidAnswer(AnswerStrategy):
    """Verbatim quotes, attributed to the named speaker when there is one."""

    query_type = QueryType.WHAT_SAID
    MAX_QUOTES = 4

    def generate(
        self,
        query: str,
        results: List[MeetingResult],
        meetings: Sequence[Meeting],
        context: ConversationContext,
    ) -> Answer:
        speaker = self.classifier.extract_speaker(query)
        topic = self.classifier.extract_topic(query)
        sources: List[MessageSource] = []
        quotes: List[str] = []

        for result in results[:3]:
            for segment in result.segments[:2]:
                quotes.append(f'"{segment.text}"')
                sources.append(segment_source(result, segment))

        unique_titles = list(dict.fromkeys(s.title for s in sources))
        if len(unique_titles) == 1:
            meeting_context = f"the {unique_titles[0]} meeting"
        else:
            meeting_context = f"{len(unique_titles)} meetings"

        bullets = "\n\n".join(f"• {q}" for q in quotes[: self.MAX_QUOTES])
        if speaker:
            content = f"Based on {meeting_context}, here's what {speaker} said about **{topic}**:\n\n{bullets}"
        else:
            content = f"Here's what was discussed about **{topic}** in {meeting_context}:\n\n{bullets}"

        return Answer(
            content=content,
            sources=sources,
            confidence=mean_relevance([s.relevance_score for s in sources]),
        )


class WhenDiscussedAnswer(AnswerStrategy):
    """Dated mentions, most recent meeting first."""

    query_type = QueryType.WHEN_DISCUSSED
    EXCERPT_LIMIT = 100

    def generate(
        self,
        query: str,
        results: List[MeetingResult],
        meetings: Sequence[Meeting],
        context: ConversationContext,
    ) -> Answer:
        topic = self.classifier.extract_topic(query)
        sources: List[MessageSource] = []
        discussions: List[str] = []

        now = self.clock()
        by_date = sorted(results, key=lambda r: days_between(r.meeting.date, now))

        for result in by_date[:3]:
            top = result.segments[0]
            discussions.append(
                f"• **{result.meeting.title}** ({format_date(result.meeting.date)}) - "
                f'{top.speaker} mentioned: "{truncate(top.text, self.EXCERPT_LIMIT)}"'
            )
            sources.append(segment_source(result, top))

        if len(discussions) == 1:
            when = relative_time(by_date[0].meeting.date, now)
            content = f"**{topic}** was discussed {when} in:\n\n{discussions[0]}"
        else:
            content = f"**{topic}** was discussed in {len(discussions)} meetings:\n\n" + "\n\n".join(discussions)

        return Answer(content=content, sources=sources, confidence=Confidence.WHEN_DISCUSSED)


class SummaryAnswer(AnswerStrategy):
    """Key points from meeting summaries plus decisions found in transcripts."""

    query_type = QueryType.SUMMARIZE
    DECISION_KEYWORDS = ("decided", "decision", "agreed", "conclusion", "going with")
    SENTENCE_SPLIT = re.compile(r"[.!?]+")

    def generate(
        self,
        query: str,
        results: List[MeetingResult],
        meetings: Sequence[Meeting],
        context: ConversationContext,
    ) -> Answer:
        topic = self.classifier.extract_topic(query)
        sources: List[MessageSource] = []
        key_points: List[str] = []
        decisions: List[str] = []

        for result in results[:3]:
            if result.meeting.summary:
                sentences = [
                    s for s in self.SENTENCE_SPLIT.split(result.meeting.summary)
                    if len(s.strip()) > 20
                ]
                key_points.extend(sentences[:2])

            for segment in result.segments[:3]:
                lowered = segment.text.lower()
                if any(keyword in lowered for keyword in self.DECISION_KEYWORDS):
                    decisions.append(segment.text)
                sources.append(segment_source(result, segment))

        count = len(results)
        content = f"Based on {count} meeting{'s' if count > 1 else ''} discussing **{topic}**:\n\n"

        if key_points:
            points = "\n".join(f"• {p.strip()}" for p in key_points[:5])
            content += f"**Key Discussion Points:**\n{points}\n\n"

        if decisions:
            made = "\n".join(f"• {d}" for d in decisions[:3])
            content += f"**Decisions Made:**\n{made}"

        if not key_points and not decisions:
            excerpts = "\n\n".join(f'• "{s.text}"' for s in results[0].segments[:3])
            content += (
                f"The meetings covered various aspects of **{topic}**. "
                f"Here are some relevant excerpts:\n\n{excerpts}"
            )

        return Answer(content=content, sources=sources, confidence=Confidence.SUMMARY)


class ConcernsAnswer(AnswerStrategy):
    """Segments voicing risks, problems or uncertainty."""

    query_type = QueryType.CONCERNS
    CONCERN_PATTERNS = (
        re.compile(r"(?:worried|concerned|concern) (?:about|that)", re.IGNORECASE),
        re.compile(r"(?:problem|issue|challenge|risk|blocker)", re.IGNORECASE),
        re.compile(r"(?:not sure|uncertain|unclear|don'?t know)", re.IGNORECASE),
        re.compile(r"(?:difficult|hard|struggle|struggling)", re.IGNORECASE),
    )
    NO_CONCERNS = (
        "I couldn't find any specific concerns raised in the meetings. "
        "The discussions about this topic seem to be positive or neutral."
    )

    def generate(
        self,
        query: str,
        results: List[MeetingResult],
        meetings: Sequence[Meeting],
        context: ConversationContext,
    ) -> Answer:
        sources: List[MessageSource] = []
        concerns: List[str] = []

        for result in results[:4]:
            for segment in result.segments:
                if any(p.search(segment.text) for p in self.CONCERN_PATTERNS):
                    concerns.append(
                        f'• **{segment.speaker}** ({result.meeting.title}): "{segment.text}"'
                    )
                    sources.append(segment_source(result, segment))

        if not concerns:
            return Answer(content=self.NO_CONCERNS, confidence=Confidence.CONCERNS_MISSING)

        content = "Here are the concerns that were raised:\n\n" + "\n\n".join(concerns[:6])
        return Answer(content=content, sources=sources, confidence=Confidence.CONCERNS)


class GeneralAnswer(AnswerStrategy):
    """Top excerpts across the best three meetings."""

    query_type = QueryType.GENERAL

    def generate(
        self,
        query: str,
        results: List[MeetingResult],
        meetings: Sequence[Meeting],
        context: ConversationContext,
    ) -> Answer:
        sources: List[MessageSource] = []
        excerpts: List[str] = []
        mentioned: List[str] = []

        for result in results[:3]:
            if result.meeting.title not in mentioned:
                mentioned.append(result.meeting.title)
            for segment in result.segments[:2]:
                excerpts.append(
                    f'• **{segment.speaker}** ({result.meeting.title}): "{segment.text}"'
                )
                sources.append(segment_source(result, segment))

        meeting_context = mentioned[0] if len(mentioned) == 1 else f"{len(mentioned)} different meetings"
        content = f"Based on {meeting_context}, here's what I found:\n\n" + "\n\n".join(excerpts)

        return Answer(
            content=content,
            sources=sources,
            confidence=mean_relevance([s.relevance_score for s in sources]),
        )


class FollowUpAnswer(GeneralAnswer):
    """General answer over the previous user question joined with this one.

    Reuses the results already computed for the current query; search is
    not re-run for the combined string.
    """

    query_type = QueryType.FOLLOW_UP

    def generate(
        self,
        query: str,
        results: List[MeetingResult],
        meetings: Sequence[Meeting],
        context: ConversationContext,
    ) -> Answer:
        combined = context.resolve_follow_up(query)
        return super().generate(combined, results, meetings, context)
