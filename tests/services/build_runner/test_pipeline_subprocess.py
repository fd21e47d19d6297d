from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from autobuild.build_runner.pipeline import (
    BuildPipelineError,
    NullBuildPipeline,
    SubprocessBuildPipeline,
    render_command,
)


def _write_stub_editor(script_path: Path) -> None:
    script_path.write_text(
        "\n".join(
            [
                "import json, os, sys",
                "from pathlib import Path",
                "payload = json.loads(os.environ.get('AUTOBUILD_INVOCATION_JSON', '{}'))",
                "if not payload.get('scenes'):",
                "    print('no scenes', file=sys.stderr)",
                "    sys.exit(3)",
                "out = Path(payload['output_path'])",
                "out.parent.mkdir(parents=True, exist_ok=True)",
                "out.write_text(json.dumps({'target': sys.argv[1], 'scenes': payload['scenes']}))",
                "print('build ok')",
                "sys.exit(0)",
            ]
        ),
        encoding="utf-8",
    )


def test_subprocess_pipeline_renders_placeholders(tmp_path: Path) -> None:
    script_path = tmp_path / "editor_stub.py"
    _write_stub_editor(script_path)
    output = tmp_path / "Builds" / "PC" / "x64" / "Game.exe"

    pipeline = SubprocessBuildPipeline([sys.executable, str(script_path), "{target_id}"])
    result = pipeline.build(["Assets/A.unity", "Assets/B.unity"], output.as_posix(), "StandaloneWindows64")

    assert result.succeeded
    assert result.stdout and "build ok" in result.stdout
    assert result.duration_ms is not None
    written = json.loads(output.read_text(encoding="utf-8"))
    assert written == {"target": "StandaloneWindows64", "scenes": ["Assets/A.unity", "Assets/B.unity"]}


def test_subprocess_pipeline_nonzero_exit(tmp_path: Path) -> None:
    script_path = tmp_path / "editor_stub.py"
    _write_stub_editor(script_path)

    pipeline = SubprocessBuildPipeline([sys.executable, str(script_path), "{target_id}"])
    result = pipeline.build([], (tmp_path / "out").as_posix(), "Android")

    assert result.outcome == "FAILED"
    assert result.reason_code == "PIPELINE_EXIT_NONZERO"
    assert result.stderr and "no scenes" in result.stderr


def test_subprocess_pipeline_missing_command(tmp_path: Path) -> None:
    pipeline = SubprocessBuildPipeline([str(tmp_path / "no-such-editor")])
    result = pipeline.build(["Assets/A.unity"], (tmp_path / "out").as_posix(), "iPhone")
    assert result.reason_code == "PIPELINE_COMMAND_MISSING"


def test_subprocess_pipeline_timeout(tmp_path: Path) -> None:
    pipeline = SubprocessBuildPipeline(
        [sys.executable, "-c", "import time; time.sleep(5)"],
        timeout_seconds=1,
    )
    result = pipeline.build(["Assets/A.unity"], (tmp_path / "out").as_posix(), "iPhone")
    assert result.reason_code == "PIPELINE_TIMEOUT"


def test_empty_command_is_rejected() -> None:
    with pytest.raises(BuildPipelineError):
        SubprocessBuildPipeline([])


def test_null_pipeline_always_succeeds() -> None:
    result = NullBuildPipeline().build(["Assets/A.unity"], "Builds/iOS/", "iPhone", ["Development"])
    assert result.succeeded
    assert result.invocation["options"] == ["Development"]


def test_render_command_leaves_unknown_and_unset_tokens() -> None:
    command = ["Unity", "-projectPath", "{project_root}", "-target={target_id}", "{invocation_json}"]
    rendered = render_command(command, {"target_id": "Android", "project_root": None})
    assert rendered == ["Unity", "-projectPath", "{project_root}", "-target=Android", "{invocation_json}"]
