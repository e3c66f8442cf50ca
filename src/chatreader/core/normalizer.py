# chatreader/core/normalizer.py
"""
Turn raw JSON values read from the key-value store into Conversation records.

Two on-disk layouts are recognized, decided once from the structure of the
decoded value:

* tabbed: ``{"tabs": [{"chatTitle": ..., "bubbles": [{"type", "text", "id"}]}]}``
* flat timeline: ``[{"commandType", "isUser", "text", "timestamp"}, ...]``

Anything else yields no conversations.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from loguru import logger

from .conversation import Conversation
from .message import Message, Role, coerce_content
from ..data.config import format_date
from ..data.validation import describe_shape


# 2000-01-01T00:00:00Z; anything at or below is a placeholder, not a real date
MIN_VALID_TIMESTAMP_MS = 946_684_800_000
# 9999-12-31T23:59:59.999Z, the last instant datetime can represent
MAX_VALID_TIMESTAMP_MS = 253_402_300_799_999

SYSTEM_COMMAND_TYPE = 2
UNTITLED_CHAT = 'Untitled Chat'


class ParseError(ValueError):
    """Raised when a raw store value is not valid JSON."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


@dataclass(frozen=True)
class TabbedShape:
    tabs: List[Any]


@dataclass(frozen=True)
class FlatTimelineShape:
    records: List[Any]


@dataclass(frozen=True)
class UnrecognizedShape:
    value: Any


RawShape = Union[TabbedShape, FlatTimelineShape, UnrecognizedShape]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def is_datable(timestamp: Any) -> bool:
    """True if a timestamp can be trusted as an epoch-millisecond date."""
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        return False
    return MIN_VALID_TIMESTAMP_MS < timestamp <= MAX_VALID_TIMESTAMP_MS


def tab_title(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return UNTITLED_CHAT


class SchemaNormalizer:
    """Normalizes tabbed and flat-timeline transcripts into conversations."""

    def __init__(self,
                 clock: Optional[Callable[[], datetime]] = None,
                 date_format: Callable[[datetime], str] = format_date):
        self.clock = clock or utc_now
        self.date_format = date_format

    def parse(self, raw: Any, key: Optional[str] = None) -> Any:
        """Decode a raw store value, raising ParseError if it is not JSON."""
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode('utf-8', errors='replace')
        if not isinstance(raw, str):
            raise ParseError(f"Expected a JSON string, got {type(raw).__name__}", key=key)
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON: {e}", key=key) from e
        except RecursionError as e:
            raise ParseError("JSON nested too deeply", key=key) from e

    @staticmethod
    def classify(value: Any) -> RawShape:
        """Decide which layout a decoded value uses."""
        if isinstance(value, dict) and isinstance(value.get('tabs'), list):
            return TabbedShape(value['tabs'])
        if isinstance(value, list):
            return FlatTimelineShape(value)
        return UnrecognizedShape(value)

    def normalize(self, raw: Any, key: Optional[str] = None) -> List[Conversation]:
        """Parse one raw value into zero or more conversations."""
        value = self.parse(raw, key=key)
        shape = self.classify(value)

        if isinstance(shape, TabbedShape):
            conversations = self._from_tabs(shape.tabs)
        elif isinstance(shape, FlatTimelineShape):
            conversation = self._from_timeline(shape.records)
            conversations = [conversation] if conversation else []
        else:
            logger.warning(f"Unrecognized chat layout for key {key}: {describe_shape(shape.value)}")
            return []

        if not conversations:
            logger.debug(f"No messages found for key {key} ({type(shape).__name__})")

        for conversation in conversations:
            conversation.source_key = key
        return conversations

    def normalize_records(self, records: Iterable[Tuple[str, Any]]) -> List[Conversation]:
        """Normalize a batch of (key, value) rows; malformed rows are logged and skipped."""
        conversations = []
        for key, raw in records:
            try:
                conversations.extend(self.normalize(raw, key=key))
            except ParseError as e:
                logger.warning(f"Failed to parse data for key {key}: {e}")
                continue
        return conversations

    def _from_tabs(self, tabs: List[Any]) -> List[Conversation]:
        conversations = []
        for tab in tabs:
            if not isinstance(tab, dict) or not isinstance(tab.get('bubbles'), list):
                continue

            messages = [
                Message(
                    role=Role.from_value(bubble.get('type')),
                    content=coerce_content(bubble.get('text')),
                    timestamp=bubble.get('id'),
                )
                for bubble in tab['bubbles']
                if isinstance(bubble, dict)
            ]
            if not messages:
                continue

            conversations.append(Conversation(
                title=tab_title(tab.get('chatTitle')),
                messages=messages,
            ))
        return conversations

    def _from_timeline(self, records: List[Any]) -> Optional[Conversation]:
        now = self.clock()
        now_ms = to_epoch_ms(now)

        messages = []
        for record in records:
            if not isinstance(record, dict):
                continue
            messages.append(Message(
                role=self._timeline_role(record),
                content=coerce_content(record.get('text')),
                timestamp=record.get('timestamp') or now_ms,
            ))

        if not messages:
            return None

        chat_date = self._infer_date([msg.timestamp for msg in messages], now)
        return Conversation(
            title=f"Chat-{self.date_format(chat_date)}",
            messages=messages,
            date=chat_date,
        )

    @staticmethod
    def _timeline_role(record: Dict[str, Any]) -> Role:
        if record.get('commandType') == SYSTEM_COMMAND_TYPE:
            return Role.SYSTEM
        if record.get('isUser'):
            return Role.USER
        return Role.ASSISTANT

    @staticmethod
    def _infer_date(timestamps: List[Any], fallback: datetime) -> datetime:
        """Earliest trustworthy timestamp, or the fallback when there is none."""
        candidates = [ts for ts in timestamps if is_datable(ts)]
        if not candidates:
            return fallback
        return datetime.fromtimestamp(min(candidates) / 1000, tz=timezone.utc)
