# chatreader/core/content.py
"""
Structural statistics over a conversation's messages.
"""

import re
from dataclasses import dataclass
from typing import Iterable

from .message import Message


CODE_BLOCK_PATTERN = re.compile(r'```.*?```', re.DOTALL)
LIST_ITEM_PATTERN = re.compile(r'^[ \t]*[-*]\s', re.MULTILINE)


@dataclass(frozen=True)
class ContentStats:
    code_block_count: int = 0
    list_item_count: int = 0
    total_text_length: int = 0


class ContentAnalyzer:
    """Counts fenced code blocks, list items and characters."""

    def analyze(self, messages: Iterable[Message]) -> ContentStats:
        code_blocks = 0
        list_items = 0
        text_length = 0

        for msg in messages:
            content = msg.content if msg is not None else ''
            text_length += len(content)
            code_blocks += len(CODE_BLOCK_PATTERN.findall(content))
            list_items += len(LIST_ITEM_PATTERN.findall(content))

        return ContentStats(
            code_block_count=code_blocks,
            list_item_count=list_items,
            total_text_length=text_length,
        )
