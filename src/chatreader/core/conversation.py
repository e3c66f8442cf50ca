# chatreader/core/conversation.py
"""
Conversation record produced by the schema normalizer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .message import Message


@dataclass
class Conversation:
    """A reconstructed chat session: a title and its messages in source order."""

    title: str
    messages: List[Message] = field(default_factory=list)
    date: Optional[datetime] = None
    source_key: Optional[str] = None  # store key the record was read from

    @property
    def message_count(self) -> int:
        return len(self.messages)
