from __future__ import annotations

from stmtguard.segment.splitter import Segmentation, segment, split_sql
from stmtguard.segment.states import InDollarQuote, LexicalState, Normal
from stmtguard.segment.tags import read_dollar_tag

__all__ = [
    "InDollarQuote",
    "LexicalState",
    "Normal",
    "Segmentation",
    "read_dollar_tag",
    "segment",
    "split_sql",
]
