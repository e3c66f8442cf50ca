# chatreader/factory.py
"""
Factory to create a metadata generator wired from the analysis configuration.
"""
from typing import Optional

from .core.content import ContentAnalyzer
from .core.detection import ContextAnalyzer
from .core.metadata import MetadataGenerator
from .core.terms import Stemmer, TagExtractor, Tokenizer
from .data.config import AnalysisConfig


def create_default_generator(config: Optional[AnalysisConfig] = None,
                             tokenizer: Optional[Tokenizer] = None,
                             stemmer: Optional[Stemmer] = None) -> MetadataGenerator:
    """Create a generator with the default detection tables and stop words."""
    if config is None:
        config = AnalysisConfig()

    tag_extractor = TagExtractor(
        stop_words=config.stop_words,
        max_terms=config.max_terms,
        tokenizer=tokenizer,
        stemmer=stemmer,
    )
    return MetadataGenerator(
        content_analyzer=ContentAnalyzer(),
        context_analyzer=ContextAnalyzer(),
        tag_extractor=tag_extractor,
    )
