"""CLI for running AutoBuild against a Unity project folder."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from .config import AutoBuildConfigError, AutoBuildProfile, load_profile
from .logging_utils import configure_logging
from .models import BuildPlatform
from .pipeline import BuildPipeline, BuildPipelineError, NullBuildPipeline, SubprocessBuildPipeline
from .platforms import MAC_ALL_ARCHITECTURES, PC_ALL_ARCHITECTURES
from .project import UnityProject
from .runner import BuildRunner

# command -> (menu label, platforms built in order)
MENU_COMMANDS: dict[str, tuple[str, tuple[BuildPlatform, ...]]] = {
    "ios": ("AutoBuild/iOS", (BuildPlatform.IOS,)),
    "android": ("AutoBuild/Android/Google Play", (BuildPlatform.ANDROID,)),
    "pc-x86": ("AutoBuild/PC/x86 (32-bit)", (BuildPlatform.PC_X86,)),
    "pc-x64": ("AutoBuild/PC/x64 (64-bit)", (BuildPlatform.PC_X64,)),
    "pc-all": ("AutoBuild/PC/All architectures", PC_ALL_ARCHITECTURES),
    "mac-intel-32": ("AutoBuild/Mac/Intel (32-bit)", (BuildPlatform.MAC_INTEL,)),
    "mac-intel-64": ("AutoBuild/Mac/Intel (64-bit)", (BuildPlatform.MAC_INTEL_64,)),
    "mac-universal": ("AutoBuild/Mac/Universal", (BuildPlatform.MAC_UNIVERSAL,)),
    "mac-all": ("AutoBuild/Mac/All architectures", MAC_ALL_ARCHITECTURES),
}

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    base = argparse.ArgumentParser(add_help=False)
    base.add_argument("--profile", default=None, help="Path to AutoBuild profile YAML")
    base.add_argument("--project-root", default=None, help="Unity project folder (default: current directory)")
    base.add_argument("--dry-run", action="store_true", help="Run every check but skip the engine build")
    base.add_argument("--verbose", action="store_true")
    base.add_argument("--log-file", default=None, help="Also write process logging to this file")

    parser = argparse.ArgumentParser(prog="autobuild", description="AutoBuild CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for command, (label, _platforms) in MENU_COMMANDS.items():
        subparsers.add_parser(command, parents=[base], help=label)
    return parser.parse_args(argv)


def _load_profile(args: argparse.Namespace) -> AutoBuildProfile:
    profile = load_profile(Path(args.profile)) if args.profile else AutoBuildProfile()
    if args.project_root:
        profile = profile.model_copy(update={"project_root": args.project_root})
    return profile


def _build_pipeline(profile: AutoBuildProfile, dry_run: bool) -> BuildPipeline:
    if dry_run:
        return NullBuildPipeline()
    if not profile.pipeline_command:
        raise AutoBuildConfigError("pipeline_command is required unless --dry-run is given")
    return SubprocessBuildPipeline(
        profile.pipeline_command,
        cwd=profile.pipeline_command_cwd,
        timeout_seconds=profile.pipeline_command_timeout_seconds,
        project_root=profile.resolved_project_root().as_posix(),
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_path=args.log_file)
    try:
        profile = _load_profile(args)
        pipeline = _build_pipeline(profile, args.dry_run)
        project = UnityProject(profile.resolved_project_root())
        runner = BuildRunner(profile, project, pipeline)
        _label, platforms = MENU_COMMANDS[args.command]
        results = runner.run_batch(platforms)
    except (AutoBuildConfigError, BuildPipelineError) as exc:
        logger.error("AutoBuild: configuration error: %s", exc)
        return 2

    for result in results:
        print(result.model_dump_json(exclude={"lines"}))
    return 0 if all(result.succeeded for result in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
