"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

from baseline_harness.models.config import HarnessConfig
from baseline_harness.models.fixture import BaselineOptions


def _write_tree(root: Path, files: dict[str, str], suffix: str = "") -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root.joinpath(*rel.split("/"))
        path = path.with_name(path.name + suffix)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


# ============================================================================
# Tree Fixtures
# ============================================================================


GENERATED_FILES = {
    "package.json": '{\n  "name": "showcase"\n}\n',
    "src/index.ts": "export * from './v1';\n",
    "src/v1/echo_client.ts": "// client\nexport class EchoClient {}\n",
    "src/v1/echo_client_config.json": "{}\n",
    "protos/echo.proto": "syntax = \"proto3\";\n",
}


@pytest.fixture
def make_tree():
    """Return a helper that writes a {relative/path: content} mapping below a root.

    Pass suffix=".baseline" to lay the files out as a baseline tree.
    """
    return _write_tree


@pytest.fixture
def generated_files() -> dict[str, str]:
    return dict(GENERATED_FILES)


@pytest.fixture
def matching_trees(tmp_path: Path, generated_files) -> tuple[Path, Path]:
    """An output tree and a baseline tree that agree on every file."""
    actual = _write_tree(tmp_path / "out", generated_files)
    baseline = _write_tree(tmp_path / "baselines" / "showcase", generated_files, suffix=".baseline")
    return actual, baseline


# ============================================================================
# Generator Fixtures
# ============================================================================


FAKE_GENERATOR = '''\
import os
import sys
from pathlib import Path

args = sys.argv[1:]
out = Path(next(a for a in args if a.startswith("--output_dir=")).split("=", 1)[1])
if "--package-name=explode" in args:
    sys.stderr.write("generator exploded\\n")
    sys.exit(3)
if "--package-name=noisy" in args:
    sys.stdout.buffer.write(b"\\xff\\xfe not utf-8\\n")
(out / "src").mkdir(parents=True, exist_ok=True)
(out / "src" / "index.ts").write_text("export {};\\n")
if os.environ.get("FAKE_GENERATOR_ARGS"):
    Path(os.environ["FAKE_GENERATOR_ARGS"]).write_text("\\n".join(args))
'''


@pytest.fixture
def fake_generator(tmp_path: Path) -> Path:
    """A Python script standing in for the generator CLI."""
    script = tmp_path / "build" / "fake_generator.py"
    script.parent.mkdir(parents=True, exist_ok=True)
    script.write_text(FAKE_GENERATOR)
    return script


@pytest.fixture
def showcase_options() -> BaselineOptions:
    return BaselineOptions(
        output_dir=".baseline-test-out",
        proto_path="showcase/echo.proto",
        baseline_name="showcase",
    )


@pytest.fixture
def harness_config(tmp_path: Path, fake_generator: Path, showcase_options) -> HarnessConfig:
    """Config rooted at tmp_path that drives the fake generator.

    The showcase baseline matches what the fake generator writes.
    """
    protos = tmp_path / "test-fixtures" / "protos" / "showcase"
    protos.mkdir(parents=True)
    (protos / "echo.proto").write_text("syntax = \"proto3\";\n")
    _write_tree(tmp_path / "baselines" / "showcase", {"src/index.ts": "export {};\n"}, suffix=".baseline")
    return HarnessConfig(
        root_dir=str(tmp_path),
        include_dirs=[],
        generator_command=[sys.executable, str(fake_generator)],
        timeout_seconds=30,
        report_output_dir="reports",
        fixtures=[showcase_options],
    )
