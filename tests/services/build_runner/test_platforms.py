from __future__ import annotations

from pathlib import Path

import pytest

from autobuild.build_runner.models import BuildPlatform
from autobuild.build_runner.platforms import (
    MAC_ALL_ARCHITECTURES,
    PC_ALL_ARCHITECTURES,
    PLATFORM_TABLE,
    output_name,
    platform_folder,
    resolve_target,
)


@pytest.mark.parametrize(
    ("platform", "folder"),
    [
        (BuildPlatform.IOS, "iOS"),
        (BuildPlatform.ANDROID, "Android"),
        (BuildPlatform.PC_X86, "PC/x86"),
        (BuildPlatform.PC_X64, "PC/x64"),
        (BuildPlatform.MAC_INTEL, "Mac/Intel/x86"),
        (BuildPlatform.MAC_INTEL_64, "Mac/Intel/x64"),
        (BuildPlatform.MAC_UNIVERSAL, "Mac/Universal"),
    ],
)
def test_platform_folder_mapping(platform: BuildPlatform, folder: str) -> None:
    assert platform_folder(platform) == folder


def test_every_platform_has_a_profile() -> None:
    assert set(PLATFORM_TABLE) == set(BuildPlatform)
    messages = [profile.success_message for profile in PLATFORM_TABLE.values()]
    assert len(set(messages)) == len(messages)


def test_android_output_is_lowercased_apk(tmp_path: Path) -> None:
    spec = resolve_target(BuildPlatform.ANDROID, "My Cool Game", tmp_path / "Builds")
    assert spec.target_id == "Android"
    assert spec.output_path == f"{(tmp_path / 'Builds').as_posix()}/Android/mycoolgame.apk"
    assert spec.success_message == "AutoBuild: SUCCESS: Created Google Play - Android APK file."


def test_pc_output_keeps_case_and_strips_spaces() -> None:
    assert output_name(BuildPlatform.PC_X86, "My Cool Game") == "MyCoolGame.exe"
    assert output_name(BuildPlatform.PC_X64, "My Cool Game") == "MyCoolGame.exe"
    assert output_name(BuildPlatform.MAC_UNIVERSAL, "My Cool Game") == "MyCoolGame"


def test_ios_builds_into_platform_folder(tmp_path: Path) -> None:
    spec = resolve_target(BuildPlatform.IOS, "My Cool Game", tmp_path)
    assert spec.target_id == "iPhone"
    assert spec.output_path == f"{tmp_path.as_posix()}/iOS/"


def test_target_ids_for_desktop() -> None:
    ids = {platform: PLATFORM_TABLE[platform].target_id for platform in PC_ALL_ARCHITECTURES + MAC_ALL_ARCHITECTURES}
    assert ids == {
        BuildPlatform.PC_X86: "StandaloneWindows",
        BuildPlatform.PC_X64: "StandaloneWindows64",
        BuildPlatform.MAC_INTEL: "StandaloneOSXIntel",
        BuildPlatform.MAC_INTEL_64: "StandaloneOSXIntel64",
        BuildPlatform.MAC_UNIVERSAL: "StandaloneOSXUniversal",
    }


def test_resolve_target_carries_options(tmp_path: Path) -> None:
    spec = resolve_target(BuildPlatform.PC_X64, "Game", tmp_path, options=["Development"])
    assert spec.options == ("Development",)
    assert spec.folder == "PC/x64"
