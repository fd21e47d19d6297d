"""Build Runner package."""

from .models import BuildPlatform, BuildResult, ProjectMetadata, SceneEntry
from .runner import BuildRunner

__all__ = ["BuildRunner", "BuildPlatform", "BuildResult", "ProjectMetadata", "SceneEntry"]
