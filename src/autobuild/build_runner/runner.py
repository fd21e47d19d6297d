"""AutoBuild orchestration: one linear build per platform invocation."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from .checks import bundle_identifier_is_proper, company_name_is_proper, default_bundle_identifier
from .config import AutoBuildProfile
from .models import BuildPlatform, BuildResult, BuildTargetSpec, ProjectMetadata
from .pipeline import BuildPipeline, BuildPipelineError
from .platforms import MAC_ALL_ARCHITECTURES, PC_ALL_ARCHITECTURES, platform_folder, resolve_target
from .project import ProjectStore, ProjectStoreError
from .runlog import RunLog

NO_SCENES_ADDED = "NO_SCENES_ADDED"
NO_SCENES_SELECTED = "NO_SCENES_SELECTED"
BUILD_DIRECTORY_ERROR = "BUILD_DIRECTORY_ERROR"
BUILD_PIPELINE_FAILED = "BUILD_PIPELINE_FAILED"
PROJECT_SETTINGS_ERROR = "PROJECT_SETTINGS_ERROR"


class BuildDirectoryError(RuntimeError):
    """Raised when a build output directory cannot be found or created."""


class BuildRunner:
    def __init__(
        self,
        profile: AutoBuildProfile,
        project: ProjectStore,
        pipeline: BuildPipeline,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.logger = logging.getLogger(__name__)
        self.profile = profile
        self.project = project
        self.pipeline = pipeline
        self.clock = clock

    def run_build(self, platform: BuildPlatform) -> BuildResult:
        log = RunLog(clock=self.clock)
        log.info(f"AutoBuild: TASK: Starting to build for platform: {platform}")

        project_root = self.profile.resolved_project_root()
        target: BuildTargetSpec | None = None
        try:
            target, reason = self._run_steps(log, platform, project_root)
        except ProjectStoreError as exc:
            log.error(f"AutoBuild: ERROR: Project settings could not be used: {exc}")
            reason = PROJECT_SETTINGS_ERROR

        if reason is None and target is not None:
            log.info(target.success_message)
            message = target.success_message
        else:
            message = f"AutoBuild: FAILED: Check error log file: {self.profile.log_file_name} for more info."
            log.error(message)

        log_path = log.save(project_root, self.profile.log_file_name)
        succeeded = reason is None
        return BuildResult(
            platform=platform,
            succeeded=succeeded,
            output_path=target.output_path if succeeded and target else None,
            reason_code=reason,
            message=message,
            log_path=log_path.as_posix(),
            lines=log.lines,
        )

    def _run_steps(
        self,
        log: RunLog,
        platform: BuildPlatform,
        project_root: Path,
    ) -> tuple[BuildTargetSpec | None, str | None]:
        metadata = self._check_build_settings(log)
        log.info(f"AutoBuild: INFO: Current Directory: {project_root.as_posix()}")

        try:
            builds_root = self._check_and_create_directory(log, project_root, self.profile.builds_dir_name)
            self._check_and_create_directory(log, builds_root, platform_folder(platform))
        except BuildDirectoryError as exc:
            log.error(f"AutoBuild: ERROR: {exc}")
            return None, BUILD_DIRECTORY_ERROR
        log.info(f"AutoBuild: INFO: All {platform} build directories initialized")

        scenes, reason = self._collect_scenes(log)
        if reason is not None:
            return None, reason
        target = resolve_target(
            platform,
            metadata.product_name,
            builds_root,
            options=self.profile.build_options,
        )
        return target, self._invoke_pipeline(log, scenes, target)

    def run_batch(self, platforms: Iterable[BuildPlatform]) -> list[BuildResult]:
        results = []
        for platform in platforms:
            result = self.run_build(platform)
            self.logger.info(
                "AutoBuild: batch step finished (platform=%s, succeeded=%s, reason=%s)",
                platform,
                result.succeeded,
                result.reason_code,
            )
            results.append(result)
        return results

    def build_all_pc(self) -> list[BuildResult]:
        return self.run_batch(PC_ALL_ARCHITECTURES)

    def build_all_mac(self) -> list[BuildResult]:
        return self.run_batch(MAC_ALL_ARCHITECTURES)

    def _check_build_settings(self, log: RunLog) -> ProjectMetadata:
        profile = self.profile
        metadata = self.project.read_metadata()

        if not company_name_is_proper(metadata.company_name, profile.placeholder_company_names):
            log.error(
                "AutoBuild: ERROR: Company Name is not specified correctly. Changing it to default company name."
            )
            self.project.set_company_name(profile.fallback_company_name)

        if not bundle_identifier_is_proper(
            metadata.bundle_identifier,
            profile.placeholder_bundle_identifiers,
            profile.disallowed_bundle_prefixes,
        ):
            log.error(
                "AutoBuild: ERROR: Bundle identfier is not in a PROPER format. Changing it into a VALID format."
            )
            self.project.set_bundle_identifier(
                default_bundle_identifier(metadata.product_name, profile.bundle_vendor_prefix)
            )

        metadata = self.project.read_metadata()
        log.info(f"AutoBuild: INFO: Company Name: {metadata.company_name}")
        log.info(f"AutoBuild: INFO: Bundle Identifier: {metadata.bundle_identifier}")
        return metadata

    def _check_and_create_directory(self, log: RunLog, parent: Path, name: str) -> Path:
        path = parent / name
        if path.is_dir():
            log.info(f"AutoBuild: INFO: {name} Directory FOUND ...")
            return path
        log.info(f"AutoBuild: INFO: Creating {name} Directory ...")
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise BuildDirectoryError(f"Could not create {name} Directory at {path.as_posix()}: {exc}") from exc
        return path

    def _collect_scenes(self, log: RunLog) -> tuple[list[str], str | None]:
        entries = self.project.scenes()
        if not entries:
            log.error(
                "AutoBuild: ERROR: No Scenes have been added for Build. Add atleast ONE scene in Build Settings."
            )
            return [], NO_SCENES_ADDED
        enabled = [entry.path for entry in entries if entry.enabled]
        if not enabled:
            log.error(
                "AutoBuild: ERROR: No Scenes have been selected for Build. "
                "Select atleast ONE scene to build in Build Settings."
            )
            return [], NO_SCENES_SELECTED
        log.info(f"AutoBuild: INFO: Total Scenes Enabled = {len(enabled)}")
        return enabled, None

    def _invoke_pipeline(self, log: RunLog, scenes: list[str], target: BuildTargetSpec) -> str | None:
        log.info(f"AutoBuild: INFO: Building {target.target_id} into {target.output_path}")
        try:
            result = self.pipeline.build(scenes, target.output_path, target.target_id, target.options)
        except (BuildPipelineError, OSError) as exc:
            log.error(f"AutoBuild: ERROR: Build pipeline raised: {exc}")
            return BUILD_PIPELINE_FAILED
        if not result.succeeded:
            log.error(
                f"AutoBuild: ERROR: Build pipeline failed (reason={result.reason_code or 'UNKNOWN'}, "
                f"duration_ms={result.duration_ms})"
            )
            if result.stderr:
                log.error(f"AutoBuild: ERROR: Build pipeline stderr: {result.stderr.strip()}")
            return BUILD_PIPELINE_FAILED
        return None
