"""Alternative path generation engines."""

from .base import GenerationEngine
from .dummy import DummyGenerationEngine
from .zeroshot import ZeroshotGenerationEngine

__all__ = ["GenerationEngine", "DummyGenerationEngine", "ZeroshotGenerationEngine"]
