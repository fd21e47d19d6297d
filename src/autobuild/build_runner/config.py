"""Configuration loader for AutoBuild profiles."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from .checks import (
    DEFAULT_BUNDLE_VENDOR_PREFIX,
    DEFAULT_DISALLOWED_BUNDLE_PREFIXES,
    DEFAULT_FALLBACK_COMPANY_NAME,
    DEFAULT_PLACEHOLDER_BUNDLE_IDENTIFIERS,
    DEFAULT_PLACEHOLDER_COMPANY_NAMES,
)
from .runlog import AB_LOG_FILE

_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


class AutoBuildConfigError(ValueError):
    """Raised when an AutoBuild profile cannot be loaded."""


class AutoBuildProfile(BaseModel):
    profile_id: str = "local"
    project_root: str | None = None
    builds_dir_name: str = "Builds"
    log_file_name: str = AB_LOG_FILE
    fallback_company_name: str = DEFAULT_FALLBACK_COMPANY_NAME
    bundle_vendor_prefix: str = DEFAULT_BUNDLE_VENDOR_PREFIX
    placeholder_company_names: list[str] = list(DEFAULT_PLACEHOLDER_COMPANY_NAMES)
    placeholder_bundle_identifiers: list[str] = list(DEFAULT_PLACEHOLDER_BUNDLE_IDENTIFIERS)
    disallowed_bundle_prefixes: list[str] = list(DEFAULT_DISALLOWED_BUNDLE_PREFIXES)
    build_options: list[str] = []
    pipeline_command: list[str] | None = None
    pipeline_command_cwd: str | None = None
    pipeline_command_timeout_seconds: int | None = None

    def resolved_project_root(self) -> Path:
        if self.project_root:
            return Path(self.project_root).resolve()
        return Path.cwd()


def _expand_str(value: str) -> str:
    def replacer(match: re.Match[str]) -> str:
        token = match.group(1)
        if ":-" in token:
            key, default = token.split(":-", 1)
            actual = os.getenv(key, "")
            return actual if actual.strip() else default
        actual = os.getenv(token, "")
        if not actual.strip():
            raise AutoBuildConfigError(f"missing environment variable: {token}")
        return actual

    return _VAR_PATTERN.sub(replacer, value)


def _expand_payload(value: Any) -> Any:
    if isinstance(value, str):
        return _expand_str(value)
    if isinstance(value, list):
        return [_expand_payload(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _expand_payload(item) for key, item in value.items()}
    return value


def load_profile(path: Path) -> AutoBuildProfile:
    if not path.exists():
        raise AutoBuildConfigError(f"profile not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise AutoBuildConfigError(f"profile is not valid YAML: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise AutoBuildConfigError(f"profile must be a mapping: {path}")
    expanded = _expand_payload(data)
    try:
        return AutoBuildProfile(**expanded)
    except ValidationError as exc:
        raise AutoBuildConfigError(f"invalid profile {path}: {exc}") from exc
