"""
Processing pipeline machinery for batch backup processing.
"""

from .pipeline import ProcessingConfig, ProcessingPipeline, BatchProcessor

__all__ = [
    'ProcessingConfig',
    'ProcessingPipeline',
    'BatchProcessor',
]
