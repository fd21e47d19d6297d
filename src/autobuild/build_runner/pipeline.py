"""Build pipeline adapters for AutoBuild."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
import subprocess
import time
from typing import Any, Sequence


class BuildPipelineError(RuntimeError):
    """Raised by a pipeline that cannot even attempt a build."""


@dataclass(frozen=True)
class PipelineResult:
    outcome: str
    reason_code: str | None
    invocation: dict[str, Any]
    duration_ms: int | None = None
    stdout: str | None = None
    stderr: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == "SUCCEEDED"


def invocation_payload(
    scenes: Sequence[str],
    output_path: str,
    target_id: str,
    options: Sequence[str],
) -> dict[str, Any]:
    return {
        "scenes": list(scenes),
        "output_path": output_path,
        "target_id": target_id,
        "options": list(options),
    }


def render_command(command: Sequence[str], placeholders: dict[str, str | None]) -> list[str]:
    """Substitute `{name}` tokens; tokens without a value are left as written."""
    rendered = []
    for token in command:
        for key, value in placeholders.items():
            if value is not None:
                token = token.replace(f"{{{key}}}", value)
        rendered.append(token)
    return rendered


class BuildPipeline:
    def build(
        self,
        scenes: Sequence[str],
        output_path: str,
        target_id: str,
        options: Sequence[str] = (),
    ) -> PipelineResult:
        raise NotImplementedError


class NullBuildPipeline(BuildPipeline):
    """Accepts every build without doing any work; used for dry runs."""

    def build(
        self,
        scenes: Sequence[str],
        output_path: str,
        target_id: str,
        options: Sequence[str] = (),
    ) -> PipelineResult:
        return PipelineResult(
            outcome="SUCCEEDED",
            reason_code=None,
            invocation=invocation_payload(scenes, output_path, target_id, options),
        )


class SubprocessBuildPipeline(BuildPipeline):
    def __init__(
        self,
        command: list[str],
        cwd: str | None = None,
        timeout_seconds: int | None = None,
        project_root: str | None = None,
    ) -> None:
        if not command:
            raise BuildPipelineError("pipeline command is empty")
        self.command = command
        self.cwd = cwd
        self.timeout_seconds = timeout_seconds
        self.project_root = project_root

    def build(
        self,
        scenes: Sequence[str],
        output_path: str,
        target_id: str,
        options: Sequence[str] = (),
    ) -> PipelineResult:
        invocation = invocation_payload(scenes, output_path, target_id, options)
        invocation_json = json.dumps(invocation, sort_keys=True, ensure_ascii=True, separators=(",", ":"))

        placeholders = {
            "output_path": output_path,
            "target_id": target_id,
            "scenes": ",".join(scenes),
            "options": ",".join(options),
            "project_root": self.project_root,
        }

        command = render_command(self.command, placeholders)
        env = os.environ.copy()
        env["AUTOBUILD_INVOCATION_JSON"] = invocation_json
        env["AUTOBUILD_OUTPUT_PATH"] = output_path
        env["AUTOBUILD_TARGET_ID"] = target_id

        started = time.monotonic()
        try:
            result = subprocess.run(
                command,
                cwd=self.cwd,
                env=env,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                check=False,
            )
            outcome = "SUCCEEDED" if result.returncode == 0 else "FAILED"
            reason = None if result.returncode == 0 else "PIPELINE_EXIT_NONZERO"
            stdout = result.stdout
            stderr = result.stderr
        except FileNotFoundError:
            outcome = "FAILED"
            reason = "PIPELINE_COMMAND_MISSING"
            stdout = None
            stderr = None
        except subprocess.TimeoutExpired as exc:
            outcome = "FAILED"
            reason = "PIPELINE_TIMEOUT"
            stdout = exc.stdout if isinstance(exc.stdout, str) else None
            stderr = exc.stderr if isinstance(exc.stderr, str) else None
        duration_ms = int((time.monotonic() - started) * 1000)

        return PipelineResult(
            outcome=outcome,
            reason_code=reason,
            invocation=invocation,
            duration_ms=duration_ms,
            stdout=stdout,
            stderr=stderr,
        )
