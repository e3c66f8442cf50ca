# chatreader/core/metadata.py
"""
Metadata generation: runs the analyzers over a conversation and synthesizes tags.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .content import ContentAnalyzer, ContentStats
from .conversation import Conversation
from .detection import ContextAnalyzer, ContextTags
from .ordered_set import OrderedSet
from .terms import TagExtractor, Term


@dataclass
class Metadata:
    content: ContentStats = field(default_factory=ContentStats)
    context: ContextTags = field(default_factory=ContextTags)
    terms: List[Term] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)


def is_long_enough(metadata: Metadata, min_text_length: int) -> bool:
    """Conversations with less text than min_text_length are not rendered."""
    return metadata.content.total_text_length >= min_text_length


def format_term_tag(term: Term) -> str:
    return f"#{term.stem}({term.count})"


def synthesize_tags(context: ContextTags, terms: List[Term]) -> List[str]:
    """Technologies, then categories, then ranked terms; each display string once."""
    tags = OrderedSet()
    for technology in context.technologies:
        tags.add(f"#{technology}")
    for category in context.categories:
        tags.add(f"#{category}")
    for term in terms:
        tags.add(format_term_tag(term))
    return tags.to_list()


class MetadataGenerator:
    """Orchestrates content, context and term analysis for one conversation."""

    def __init__(self,
                 content_analyzer: Optional[ContentAnalyzer] = None,
                 context_analyzer: Optional[ContextAnalyzer] = None,
                 tag_extractor: Optional[TagExtractor] = None):
        self.content_analyzer = content_analyzer or ContentAnalyzer()
        self.context_analyzer = context_analyzer or ContextAnalyzer()
        self.tag_extractor = tag_extractor or TagExtractor()

    def generate(self, conversation: Conversation) -> Metadata:
        messages = conversation.messages
        content = self.content_analyzer.analyze(messages)
        context = self.context_analyzer.analyze(messages)
        terms = self.tag_extractor.extract(messages)

        return Metadata(
            content=content,
            context=context,
            terms=terms,
            tags=synthesize_tags(context, terms),
        )
