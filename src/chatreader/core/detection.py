# chatreader/core/detection.py
"""
Technology and category detection rules.

Each rule is a (label, pattern) pair; adding a detector means adding a row,
the analyzer iterates the tables uniformly.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .message import Message
from .ordered_set import OrderedSet


DetectionRule = Tuple[str, 're.Pattern[str]']


def _rule(label: str, *keywords: str) -> DetectionRule:
    return label, re.compile('|'.join(keywords), re.IGNORECASE)


######################
#  Technology Rules  #
######################

TECHNOLOGY_RULES: List[DetectionRule] = [
    _rule('python', 'python', 'django', 'flask', 'pip'),
    _rule('javascript', 'javascript', 'node', 'npm', 'react', 'vue', 'angular'),
    _rule('css', 'css', 'scss', 'sass', 'styling', 'flexbox', 'grid'),
    _rule('database', 'sql', 'mongodb', 'database', 'query'),
    _rule('git', 'git', 'commit', 'merge', 'branch'),
    _rule('docker', 'docker', 'container', 'image', 'kubernetes'),
]


######################
#   Category Rules   #
######################
# russian and english variants of each topic

CATEGORY_RULES: List[DetectionRule] = [
    _rule('coding',
          'функция', 'код', 'программирование', 'разработка',
          'function', 'code', 'programming'),
    _rule('architecture',
          'архитектура', 'дизайн', 'паттерн', 'структура',
          'architecture', 'design', 'pattern'),
    _rule('debugging',
          'отладка', 'ошибка', 'исключение', 'баг',
          'debug', 'error', 'exception'),
    _rule('optimization',
          'оптимизация', 'производительность', 'улучшение',
          'optimize', 'performance'),
    _rule('learning',
          'обучение', 'изучение',
          'tutorial', 'learn', 'guide'),
]


@dataclass
class ContextTags:
    technologies: OrderedSet = field(default_factory=OrderedSet)
    categories: OrderedSet = field(default_factory=OrderedSet)


def match_rules(text: str, rules: Iterable[DetectionRule]) -> OrderedSet:
    """Labels of every rule whose pattern occurs anywhere in text, in table order."""
    labels = OrderedSet()
    for label, pattern in rules:
        if pattern.search(text):
            labels.add(label)
    return labels


class ContextAnalyzer:
    """Detects which technologies and topics a conversation touches."""

    def __init__(self,
                 technology_rules: Optional[List[DetectionRule]] = None,
                 category_rules: Optional[List[DetectionRule]] = None):
        self.technology_rules = TECHNOLOGY_RULES if technology_rules is None else technology_rules
        self.category_rules = CATEGORY_RULES if category_rules is None else category_rules

    def analyze(self, messages: Iterable[Message]) -> ContextTags:
        text = build_text_buffer(messages)
        return ContextTags(
            technologies=match_rules(text, self.technology_rules),
            categories=match_rules(text, self.category_rules),
        )


def build_text_buffer(messages: Iterable[Message]) -> str:
    """Join non-empty message contents with a single space."""
    contents = (msg.content if msg is not None else '' for msg in messages)
    return ' '.join(content for content in contents if content)
