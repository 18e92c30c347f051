from recall_engine.engine.strategies.base import AnswerStrategy
from recall_engine.engine.strategies.answers import (
    WhatSaidAnswer,
    WhenDiscussedAnswer,
    SummaryAnswer,
    ConcernsAnswer,
    GeneralAnswer,
    FollowUpAnswer,
)
from recall_engine.engine.strategies.action_items import ActionItemsAnswer
from recall_engine.engine.strategies.cross_board import CrossBoardAnswer

__all__ = [
    "AnswerStrategy",
    "WhatSaidAnswer",
    "WhenDiscussedAnswer",
    "ActionItemsAnswer",
    "SummaryAnswer",
    "ConcernsAnswer",
    "GeneralAnswer",
    "FollowUpAnswer",
    "CrossBoardAnswer",
]
