# chatreader/processing/pipeline.py
"""
Processing pipeline machinery: backups in, Markdown notes out.
"""

import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from loguru import logger

from ..core.conversation import Conversation
from ..core.generate import DEFAULT_TEMPLATE, note_filename, render_markdown
from ..core.metadata import Metadata, MetadataGenerator
from ..core.normalizer import SchemaNormalizer
from ..data.config import ReaderConfig, get_default_config
from ..data.loaders import BackupLoader
from ..factory import create_default_generator


AnalyzedConversation = Tuple[Conversation, Metadata]


@dataclass
class ProcessingConfig:
    """Configuration for processing pipeline."""

    reader: ReaderConfig = field(default_factory=get_default_config)

    # Note generation settings
    generate_notes_enabled: bool = True
    template_name: str = DEFAULT_TEMPLATE


class ProcessingPipeline:
    """Turns the chat records of one backup into analyzed conversations."""

    def __init__(self,
                 config: ProcessingConfig,
                 normalizer: Optional[SchemaNormalizer] = None,
                 generator: Optional[MetadataGenerator] = None):
        self.config = config
        self.loader = BackupLoader(config.reader)
        self.normalizer = normalizer or SchemaNormalizer()
        self.generator = generator or create_default_generator(config.reader.analysis)

    def load_conversations(self, backup_path: Union[str, Path]) -> List[Conversation]:
        """Read a backup and normalize its records; bad records are skipped."""
        records = self.loader.load(backup_path)
        conversations = self.normalizer.normalize_records(records)
        logger.info(f"{Path(backup_path).name}: {len(records)} records -> {len(conversations)} conversations")
        return conversations

    def analyze(self, conversations: List[Conversation]) -> List[AnalyzedConversation]:
        """Generate metadata for every conversation that has messages."""
        analyzed = []
        for conversation in conversations:
            if not conversation.messages:
                continue
            analyzed.append((conversation, self.generator.generate(conversation)))
        return analyzed

    def save(self, analyzed: List[AnalyzedConversation]) -> Dict[str, int]:
        """Render and write notes; short conversations are skipped, failed writes logged."""
        target_dir = self.config.reader.target_path
        target_dir.mkdir(parents=True, exist_ok=True)
        min_text_length = self.config.reader.analysis.min_text_length

        counts = {'saved': 0, 'skipped': 0, 'failed': 0}
        taken = set()

        for conversation, metadata in analyzed:
            markdown = render_markdown(
                conversation,
                metadata,
                min_text_length=min_text_length,
                template_name=self.config.template_name,
            )
            if markdown is None:
                logger.info(f"Skipping empty or short conversation: {conversation.title}")
                counts['skipped'] += 1
                continue

            filename = note_filename(conversation.title, taken)
            try:
                (target_dir / filename).write_text(markdown, encoding='utf-8')
                counts['saved'] += 1
                logger.info(f"Saved: {filename}")
            except OSError as e:
                logger.error(f"Failed to save {filename}: {e}")
                counts['failed'] += 1

        logger.info(f"Successfully saved {counts['saved']} conversations")
        return counts


class BatchProcessor:
    """Handles processing across every backup in the backup directory."""

    def __init__(self, config: ProcessingConfig, pipeline: Optional[ProcessingPipeline] = None):
        self.config = config
        self.pipeline = pipeline or ProcessingPipeline(config)

        Path(config.reader.backup_dir).mkdir(parents=True, exist_ok=True)
        Path(config.reader.target_dir).mkdir(parents=True, exist_ok=True)

    def process_all(self) -> Dict[str, Any]:
        """
        Process all backups and save the resulting notes.

        Returns:
            Summary with backup, conversation and note counts
        """
        backup_files = self.pipeline.loader.find()
        logger.info(f"Found {len(backup_files)} backup files for analysis")

        conversations: List[Conversation] = []
        failed_backups = []
        for backup_path in backup_files:
            logger.info(f"Processing backup: {backup_path.name}")
            try:
                conversations.extend(self.pipeline.load_conversations(backup_path))
            except sqlite3.Error as e:
                logger.error(f"Error processing backup {backup_path.name}: {e}")
                failed_backups.append(str(backup_path))

        analyzed = self.pipeline.analyze(conversations)
        if self.config.generate_notes_enabled:
            counts = self.pipeline.save(analyzed)
        else:
            logger.info("Note generation disabled")
            counts = {'saved': 0, 'skipped': 0, 'failed': 0}

        summary = {
            'backups': len(backup_files),
            'failed_backups': failed_backups,
            'conversations': len(analyzed),
            **counts,
        }
        logger.info(f"Processing completed: {summary}")
        return summary
