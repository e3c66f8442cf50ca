"""
Core data model and analyzers for chat transcripts.
"""
