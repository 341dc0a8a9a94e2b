"""
Declarative assembly of noise systems from JSON documents.

Available Classes:
- NoiseJSON: Load/save a document and build its sources and generators
- SourceJSON, GeneratorJSON: Entry descriptions
- NoiseConfigError: Structural errors in a document
"""

from .noise_json import (
    DEFAULT_SEED,
    GeneratorJSON,
    NoiseConfigError,
    NoiseJSON,
    SourceJSON,
)

__all__ = [
    "DEFAULT_SEED",
    "NoiseJSON",
    "SourceJSON",
    "GeneratorJSON",
    "NoiseConfigError",
]
