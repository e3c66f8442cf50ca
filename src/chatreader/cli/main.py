# chatreader/cli/main.py
"""
Main CLI interface for chat backup processing.
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from loguru import logger

from ..data.config import ReaderConfig, get_default_config
from ..data.loaders import BackupLoader
from ..processing.pipeline import BatchProcessor, ProcessingConfig


def create_cli_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog='chatreader',
        description='Extract AI chat transcripts from editor state backups into Markdown notes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Process all backups in the default directory (./backup/)
  chatreader process

  # Process backups from a custom directory into custom notes directory
  chatreader process --backup-dir ~/backups --target-dir ./notes

  # Keep shorter conversations and more keyword tags
  chatreader process --min-text-length 20 --max-terms 15

  # Discovery mode - just show what would be processed
  chatreader discover --backup-dir ./backup

Directory Structure:
  ./backup/                        # Copy editor state backups here
  └── state.vscdb.backup           # any name matching vscdb.*backup
  ./chatReader/                    # Generated notes
        """
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Process command
    process_parser = subparsers.add_parser('process', help='Process chat backups')
    process_parser.add_argument(
        '--backup-dir',
        help='Directory containing state backups (default: ./backup)'
    )
    process_parser.add_argument(
        '--target-dir',
        help='Output directory for generated notes (default: ./chatReader)'
    )
    process_parser.add_argument(
        '--min-text-length',
        type=int,
        help='Minimum conversation length in characters to save a note (default: 100)'
    )
    process_parser.add_argument(
        '--max-terms',
        type=int,
        help='Maximum number of keyword tags per conversation (default: 10)'
    )
    process_parser.add_argument(
        '--no-notes',
        action='store_true',
        help='Skip note generation, only analyze conversations'
    )

    # Discover command
    discover_parser = subparsers.add_parser('discover', help='Discover chat backups')
    discover_parser.add_argument(
        '--backup-dir',
        help='Directory containing state backups (default: ./backup)'
    )

    # Setup command
    subparsers.add_parser('setup', help='Setup directories and show usage')

    return parser


def build_config(backup_dir: Optional[str] = None,
                 target_dir: Optional[str] = None,
                 min_text_length: Optional[int] = None,
                 max_terms: Optional[int] = None) -> ReaderConfig:
    """Default configuration with command-line overrides applied."""
    config = get_default_config()
    if backup_dir:
        config.backup_dir = backup_dir
    if target_dir:
        config.target_dir = target_dir

    analysis_overrides = {}
    if min_text_length is not None:
        analysis_overrides['min_text_length'] = min_text_length
    if max_terms is not None:
        analysis_overrides['max_terms'] = max_terms
    if analysis_overrides:
        config.analysis = replace(config.analysis, **analysis_overrides)
    return config


def setup_command(config: ReaderConfig):
    """Setup directories and show usage information."""
    backup_dir = Path(config.backup_dir)
    target_dir = Path(config.target_dir)

    backup_dir.mkdir(parents=True, exist_ok=True)
    target_dir.mkdir(parents=True, exist_ok=True)

    print("🚀 chatreader setup complete!")
    print()
    print("📁 Directories created:")
    print(f"   Backups: {backup_dir.absolute()}")
    print(f"   Notes:   {target_dir.absolute()}")
    print()
    print("💡 Usage:")
    print("1. Copy your editor state backups (state.vscdb.backup) into the backups directory")
    print()
    print("2. Run processing:")
    print("   chatreader process")
    print()
    print("3. Check generated notes:")
    print(f"   ls {target_dir}/")


def discover_command(config: ReaderConfig) -> int:
    """Discover and show chat backups."""
    print(f"🔍 Discovering chat backups in: {config.backup_dir}")
    print()

    discoveries = BackupLoader(config).discover()

    if not discoveries:
        print("❌ No backup files found!")
        print()
        print("💡 Backups are files whose name matches 'vscdb.*backup', e.g. state.vscdb.backup")
        print("   Run 'chatreader setup' to create the directory structure.")
        return 1

    print(f"✅ Found {len(discoveries)} backup file(s):")
    print()

    for discovery in discoveries:
        print(f"📊 {discovery['path'].name}")
        if discovery.get('error'):
            print(f"   ❌ Unreadable: {discovery['error']}")
        else:
            print(f"   Chat records: {discovery['records_count']}")
        if discovery['backup_date']:
            print(f"   Backup date: {discovery['backup_date'].isoformat()}")
        print()

    print("🚀 Ready to process! Run:")
    print(f"   chatreader process --backup-dir {config.backup_dir}")
    return 0


def process_command(config: ReaderConfig, no_notes: bool = False) -> int:
    """Process all chat backups."""
    print("🚀 Processing chat backups...")
    print(f"   Backups: {config.backup_dir}")
    print(f"   Output:  {config.target_dir}")
    print()

    processor = BatchProcessor(ProcessingConfig(
        reader=config,
        generate_notes_enabled=not no_notes,
    ))
    results = processor.process_all()

    if not results['backups']:
        print("❌ No backup files found!")
        print("   Run 'chatreader discover' to see what is picked up.")
        return 1

    print("✅ Processing complete!")
    print()
    print("📈 Results:")
    print(f"   Backups:       {results['backups']}")
    print(f"   Conversations: {results['conversations']}")
    print(f"   Saved:         {results['saved']}")
    print(f"   Skipped:       {results['skipped']} (shorter than {config.analysis.min_text_length} characters)")
    for failed in results['failed_backups']:
        print(f"   ❌ Could not read {failed}")
    if results['failed']:
        print(f"   ❌ Failed to write {results['failed']} notes")
    print()
    print(f"🎉 Generated {results['saved']} notes in {config.target_dir}")

    return 1 if results['failed'] else 0


def main(argv=None):
    """Main CLI entry point."""
    parser = create_cli_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        level="DEBUG" if args.verbose else "INFO",
        format="<level>{level}</level>: {message}",
        colorize=True
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = build_config(
            backup_dir=getattr(args, 'backup_dir', None),
            target_dir=getattr(args, 'target_dir', None),
            min_text_length=getattr(args, 'min_text_length', None),
            max_terms=getattr(args, 'max_terms', None),
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"❌ Invalid configuration: {e}")
        return 1

    if args.command == 'setup':
        setup_command(config)
        return 0

    elif args.command == 'discover':
        return discover_command(config)

    elif args.command == 'process':
        try:
            return process_command(config, no_notes=args.no_notes)
        except OSError as e:
            logger.error(f"Processing failed: {e}")
            print(f"❌ Processing failed: {e}")
            return 1

    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
