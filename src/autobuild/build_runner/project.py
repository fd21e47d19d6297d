"""Project metadata store and scene registry backends."""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from pathlib import Path
from typing import Any

import yaml

from .models import ProjectMetadata, SceneEntry


class ProjectStoreError(ValueError):
    """Raised when project settings cannot be read or updated."""


class ProjectStore:
    def read_metadata(self) -> ProjectMetadata:
        raise NotImplementedError

    def set_company_name(self, value: str) -> None:
        raise NotImplementedError

    def set_bundle_identifier(self, value: str) -> None:
        raise NotImplementedError

    def scenes(self) -> list[SceneEntry]:
        raise NotImplementedError


@dataclass
class InMemoryProject(ProjectStore):
    metadata: ProjectMetadata = field(default_factory=ProjectMetadata)
    scene_entries: list[SceneEntry] = field(default_factory=list)

    def read_metadata(self) -> ProjectMetadata:
        return self.metadata.model_copy()

    def set_company_name(self, value: str) -> None:
        self.metadata = self.metadata.model_copy(update={"company_name": value})

    def set_bundle_identifier(self, value: str) -> None:
        self.metadata = self.metadata.model_copy(update={"bundle_identifier": value})

    def scenes(self) -> list[SceneEntry]:
        return list(self.scene_entries)


_DIRECTIVE_LINE = re.compile(r"^%.*$", re.MULTILINE)
_DOCUMENT_TAG = re.compile(r"^--- !u!\d+ &\d+.*$", re.MULTILINE)

PLAYER_SETTINGS_FILE = "ProjectSettings/ProjectSettings.asset"
EDITOR_BUILD_SETTINGS_FILE = "ProjectSettings/EditorBuildSettings.asset"
BUNDLE_IDENTIFIER_KEYS = ("bundleIdentifier", "iPhoneBundleIdentifier")


def _load_unity_asset(path: Path, root_key: str) -> dict[str, Any]:
    """Load a Unity text-serialized asset, dropping the ``!u!`` tag directives."""
    if not path.exists():
        raise ProjectStoreError(f"unity asset not found: {path}")
    text = path.read_text(encoding="utf-8")
    text = _DIRECTIVE_LINE.sub("", text)
    text = _DOCUMENT_TAG.sub("---", text)
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ProjectStoreError(f"unity asset is not valid YAML: {path}: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get(root_key), dict):
        raise ProjectStoreError(f"unity asset missing {root_key}: {path}")
    return data[root_key]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class UnityProject(ProjectStore):
    """Reads and repairs the text-serialized settings of a Unity project folder.

    Corrections are written back by replacing the single ``key: value`` line so
    the rest of the asset (and Unity's tag directives) stays untouched.
    """

    def __init__(self, project_root: Path) -> None:
        self.project_root = Path(project_root)
        self.player_settings_path = self.project_root / PLAYER_SETTINGS_FILE
        self.build_settings_path = self.project_root / EDITOR_BUILD_SETTINGS_FILE

    def _player_settings(self) -> dict[str, Any]:
        return _load_unity_asset(self.player_settings_path, "PlayerSettings")

    def _bundle_key(self, settings: dict[str, Any]) -> str:
        for key in BUNDLE_IDENTIFIER_KEYS:
            if key in settings:
                return key
        raise ProjectStoreError(f"no bundle identifier key in {self.player_settings_path}")

    def read_metadata(self) -> ProjectMetadata:
        settings = self._player_settings()
        return ProjectMetadata(
            company_name=_as_text(settings.get("companyName")),
            product_name=_as_text(settings.get("productName")),
            bundle_identifier=_as_text(settings.get(self._bundle_key(settings))),
        )

    def set_company_name(self, value: str) -> None:
        self._replace_setting("companyName", value)

    def set_bundle_identifier(self, value: str) -> None:
        self._replace_setting(self._bundle_key(self._player_settings()), value)

    def _replace_setting(self, key: str, value: str) -> None:
        text = self.player_settings_path.read_text(encoding="utf-8")
        # Let PyYAML decide on quoting so values like "Acme #1" survive a reload.
        entry = yaml.safe_dump({key: value}, allow_unicode=True, width=4096).strip()
        pattern = re.compile(rf"^(?P<indent>[ ]+){re.escape(key)}:.*$", re.MULTILINE)
        updated, count = pattern.subn(lambda match: f"{match.group('indent')}{entry}", text, count=1)
        if count == 0:
            raise ProjectStoreError(f"setting {key} not found in {self.player_settings_path}")
        self.player_settings_path.write_text(updated, encoding="utf-8")

    def scenes(self) -> list[SceneEntry]:
        settings = _load_unity_asset(self.build_settings_path, "EditorBuildSettings")
        entries = settings.get("m_Scenes") or []
        scenes: list[SceneEntry] = []
        for entry in entries:
            if not isinstance(entry, dict) or not entry.get("path"):
                continue
            scenes.append(SceneEntry(path=str(entry["path"]), enabled=bool(int(entry.get("enabled") or 0))))
        return scenes
