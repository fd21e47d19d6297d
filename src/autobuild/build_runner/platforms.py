"""Platform lookup table: folder, engine target and output naming per platform."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .models import BuildPlatform, BuildTargetSpec


@dataclass(frozen=True)
class PlatformProfile:
    folder: str
    target_id: str
    output_suffix: str | None
    success_message: str
    lowercase_name: bool = False


PLATFORM_TABLE: dict[BuildPlatform, PlatformProfile] = {
    BuildPlatform.IOS: PlatformProfile(
        folder="iOS",
        target_id="iPhone",
        output_suffix=None,
        success_message="AutoBuild: SUCCESS: Created iOS Xcode Project Folder.",
    ),
    BuildPlatform.ANDROID: PlatformProfile(
        folder="Android",
        target_id="Android",
        output_suffix=".apk",
        success_message="AutoBuild: SUCCESS: Created Google Play - Android APK file.",
        lowercase_name=True,
    ),
    BuildPlatform.PC_X86: PlatformProfile(
        folder="PC/x86",
        target_id="StandaloneWindows",
        output_suffix=".exe",
        success_message="AutoBuild: SUCCESS: Created PC (x86 -> 32-bit) Build folder.",
    ),
    BuildPlatform.PC_X64: PlatformProfile(
        folder="PC/x64",
        target_id="StandaloneWindows64",
        output_suffix=".exe",
        success_message="AutoBuild: SUCCESS: Created PC (x64 -> 64-bit) Build folder.",
    ),
    BuildPlatform.MAC_INTEL: PlatformProfile(
        folder="Mac/Intel/x86",
        target_id="StandaloneOSXIntel",
        output_suffix="",
        success_message="AutoBuild: SUCCESS: Created Mac (Intel -> 32-bit) Build folder.",
    ),
    BuildPlatform.MAC_INTEL_64: PlatformProfile(
        folder="Mac/Intel/x64",
        target_id="StandaloneOSXIntel64",
        output_suffix="",
        success_message="AutoBuild: SUCCESS: Created Mac (Intel -> 64-bit) Build folder.",
    ),
    BuildPlatform.MAC_UNIVERSAL: PlatformProfile(
        folder="Mac/Universal",
        target_id="StandaloneOSXUniversal",
        output_suffix="",
        success_message="AutoBuild: SUCCESS: Created Mac (Universal) Build folder.",
    ),
}

PC_ALL_ARCHITECTURES: tuple[BuildPlatform, ...] = (BuildPlatform.PC_X86, BuildPlatform.PC_X64)
MAC_ALL_ARCHITECTURES: tuple[BuildPlatform, ...] = (
    BuildPlatform.MAC_INTEL,
    BuildPlatform.MAC_INTEL_64,
    BuildPlatform.MAC_UNIVERSAL,
)


def platform_folder(platform: BuildPlatform) -> str:
    return PLATFORM_TABLE[platform].folder


def output_name(platform: BuildPlatform, product_name: str) -> str:
    """Return the file/folder name the pipeline writes inside the platform folder.

    Spaces are always stripped from the product name. Android additionally
    lowercases it because the output is a package file. iOS builds straight into
    the platform folder, so its name is empty.
    """
    profile = PLATFORM_TABLE[platform]
    if profile.output_suffix is None:
        return ""
    name = product_name.replace(" ", "")
    if profile.lowercase_name:
        name = name.lower()
    return f"{name}{profile.output_suffix}"


def resolve_target(
    platform: BuildPlatform,
    product_name: str,
    builds_root: Path,
    options: Sequence[str] = (),
) -> BuildTargetSpec:
    profile = PLATFORM_TABLE[platform]
    folder_path = builds_root / profile.folder
    name = output_name(platform, product_name)
    # iOS exports an Xcode project into the folder itself; keep the trailing slash.
    output_path = f"{folder_path.as_posix()}/{name}"
    return BuildTargetSpec(
        platform=platform,
        folder=profile.folder,
        output_path=output_path,
        target_id=profile.target_id,
        options=tuple(options),
        success_message=profile.success_message,
    )
