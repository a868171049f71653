"""
gen-mode - build-time generator for mode constants.

Reads declarative mode descriptors, builds a validated mode model and renders
it into a source module with constants, a validating setter, start-up
selection from an environment variable, and one predicate per mode.
"""

from .errors import GenModeError, InputOutputError, ParseError, ValidationError
from .loader import load_documents
from .model import Mode, ModeModel, build_model
from .pipeline import GenerationResult, generate
from .renderer import RenderContext, render

__version__ = "0.1.0"

__all__ = [
    "Mode",
    "ModeModel",
    "RenderContext",
    "GenerationResult",
    "load_documents",
    "build_model",
    "render",
    "generate",
    "GenModeError",
    "InputOutputError",
    "ParseError",
    "ValidationError",
]
