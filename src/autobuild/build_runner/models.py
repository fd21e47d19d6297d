"""Build Runner platform, metadata and result models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BuildPlatform(str, Enum):
    IOS = "iOS"
    ANDROID = "Android"
    PC_X86 = "PC_x86"
    PC_X64 = "PC_x64"
    MAC_INTEL = "Mac_Intel"
    MAC_INTEL_64 = "Mac_Intel_64"
    MAC_UNIVERSAL = "Mac_Universal"

    def __str__(self) -> str:
        return self.value


class ProjectMetadata(BaseModel):
    company_name: str = ""
    product_name: str = ""
    bundle_identifier: str = ""


class SceneEntry(BaseModel):
    path: str
    enabled: bool = True


@dataclass(frozen=True)
class BuildTargetSpec:
    platform: BuildPlatform
    folder: str
    output_path: str
    target_id: str
    options: tuple[str, ...]
    success_message: str


class BuildResult(BaseModel):
    platform: BuildPlatform
    succeeded: bool
    output_path: Optional[str] = None
    reason_code: Optional[str] = None
    message: Optional[str] = None
    log_path: Optional[str] = None
    lines: list[str] = Field(default_factory=list)
