"""Frenzy letter auto placer for template-based puzzle videos.

This package exposes the public API surface via:

- ``autoplacer.engine.runner.PlacementRunner``: validates a job and places answers and frenzy letters.
- ``autoplacer.io.scene.SceneTarget``: JSON-backed placement target.
- ``autoplacer.core.models.PlacementJob`` / ``RunConfig``: run inputs.
"""

from .core.models import PlacementJob, RowInput, RunConfig
from .engine.runner import PlacementRunner, RunReport
from .io.scene import SceneTarget, build_scene, load_job

__all__ = [
    "PlacementJob",
    "PlacementRunner",
    "RowInput",
    "RunConfig",
    "RunReport",
    "SceneTarget",
    "build_scene",
    "load_job",
]

__version__ = "0.1.0"
