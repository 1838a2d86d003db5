"""
pathfish - Core Package

Extracts plausible file paths from unstructured text such as compiler
diagnostics, linter output, stack traces and diffs, and optionally keeps only
the ones that exist on disk.
"""

__version__ = "0.2.0"

from .core import extract_paths, verify_paths
from .engine import run_pipeline
from .models.options import ExtractionOptions, PipelineOptions, Strategy
from .tools.clipboard import copy_paths_to_clipboard

__all__ = [
    'extract_paths',
    'verify_paths',
    'run_pipeline',
    'copy_paths_to_clipboard',
    'ExtractionOptions',
    'PipelineOptions',
    'Strategy',
]
