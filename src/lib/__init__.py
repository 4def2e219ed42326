"""
mdtransform - Markdown to HTML through a pluggable token pipeline
"""

__version__ = "1.0.0"

from .transform import pipeline_init, transform, TransformPipeline, TransformResult
from .log import LOG, WARN, state_connectToLogger

__all__ = [
    "pipeline_init",
    "transform",
    "TransformPipeline",
    "TransformResult",
    "LOG",
    "WARN",
    "state_connectToLogger",
    "__version__",
]
