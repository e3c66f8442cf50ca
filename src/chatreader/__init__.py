# chatreader/__init__.py
"""
Extracts AI-assistant chat transcripts from editor state backups,
analyzes them and renders them as Markdown notes.
"""

from .core.message import Message, Role
from .core.conversation import Conversation
from .core.normalizer import SchemaNormalizer, ParseError
from .core.content import ContentAnalyzer, ContentStats
from .core.detection import ContextAnalyzer, ContextTags, TECHNOLOGY_RULES, CATEGORY_RULES
from .core.terms import TagExtractor, Term, WordTokenizer, SnowballStemmer, ScriptAwareStemmer
from .core.metadata import Metadata, MetadataGenerator
from .core.generate import render_markdown, note_filename
from .core.ordered_set import OrderedSet
from .factory import create_default_generator

from .data import AnalysisConfig, ReaderConfig, get_default_config, BackupLoader, BackupStore
from .processing import ProcessingConfig, ProcessingPipeline, BatchProcessor

__all__ = [
    # Core model and analyzers
    'Message', 'Role', 'Conversation', 'SchemaNormalizer', 'ParseError',
    'ContentAnalyzer', 'ContentStats', 'ContextAnalyzer', 'ContextTags',
    'TECHNOLOGY_RULES', 'CATEGORY_RULES', 'TagExtractor', 'Term',
    'WordTokenizer', 'SnowballStemmer', 'ScriptAwareStemmer',
    'Metadata', 'MetadataGenerator', 'render_markdown', 'note_filename',
    'OrderedSet', 'create_default_generator',

    # Configuration and I/O
    'AnalysisConfig', 'ReaderConfig', 'get_default_config', 'BackupLoader', 'BackupStore',
    'ProcessingConfig', 'ProcessingPipeline', 'BatchProcessor',
]
