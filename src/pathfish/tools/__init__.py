"""
Extraction tools for pathfish.

This package contains the building blocks of the extraction engine: the
ignore policy, the pattern and fuzzy extractors, the existence verifier and
the output formatters.
"""
