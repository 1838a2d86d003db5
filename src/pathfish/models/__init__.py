"""
Data models for pathfish.

This module contains the option and configuration structures used throughout the system.
"""

from .options import ExtractionOptions, PipelineOptions, Strategy
from .config import PathfishConfig

__all__ = ['ExtractionOptions', 'PipelineOptions', 'Strategy', 'PathfishConfig']
