# chatreader/core/message.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class Role(str, Enum):
    USER = 'user'
    ASSISTANT = 'assistant'
    SYSTEM = 'system'
    UNKNOWN = 'unknown'

    @classmethod
    def from_value(cls, value: Any) -> 'Role':
        """Map a raw role string onto a Role, falling back to UNKNOWN."""
        if isinstance(value, str):
            value = value.lower()
            if value == 'ai':  # cursor writes assistant bubbles as "ai"
                return cls.ASSISTANT
            for role in cls:
                if role.value == value:
                    return role
        return cls.UNKNOWN


def coerce_content(value: Any) -> str:
    if isinstance(value, str):
        return value
    return ''


@dataclass(frozen=True)
class Message:
    """One normalized chat message."""

    role: Role
    content: str = ''
    # epoch milliseconds for timeline records, opaque ordering key for bubbles
    timestamp: Optional[Union[int, float, str]] = None

    def __post_init__(self):
        object.__setattr__(self, 'content', coerce_content(self.content))

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()
