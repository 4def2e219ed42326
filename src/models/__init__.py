"""
Models package for mdtransform

Contains data structures and type definitions for the transform pipeline.
"""

from .state import ProgramState, pipeline
from .parser import Heading, TitleExtraction
from .environment import Environment
from .plugins import PluginSpec, PluginOptions, ProcessorFn
from .options import TransformOptions, SanitizeOptions

__all__ = [
    "ProgramState",
    "pipeline",
    "Heading",
    "TitleExtraction",
    "Environment",
    "PluginSpec",
    "PluginOptions",
    "ProcessorFn",
    "TransformOptions",
    "SanitizeOptions",
]
