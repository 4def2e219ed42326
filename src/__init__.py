"""
mdtransform - Markdown to HTML through a pluggable token pipeline

parse -> process -> compile, with a shared Environment carrying the derived
title, headings, metadata and assets.
"""

__version__ = "1.0.0"

from .lib import pipeline_init, transform, TransformPipeline, TransformResult, LOG, state_connectToLogger
from .models import Environment, Heading, PluginSpec, PluginOptions, TransformOptions, SanitizeOptions

__all__ = [
    "pipeline_init",
    "transform",
    "TransformPipeline",
    "TransformResult",
    "Environment",
    "Heading",
    "PluginSpec",
    "PluginOptions",
    "TransformOptions",
    "SanitizeOptions",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
