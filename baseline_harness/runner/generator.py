"""Generator CLI invocation: command line assembly, plugin setup, and subprocess execution."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import stat
import subprocess
from pathlib import Path

from baseline_harness.errors import GeneratorError, SetupError
from baseline_harness.models.config import HarnessConfig
from baseline_harness.models.fixture import BaselineOptions

logger = logging.getLogger(__name__)


def build_command(config: HarnessConfig, options: BaselineOptions) -> list[str]:
    """Build the generator argv for one fixture.

    Arguments are passed without a shell, so template and bundle-config
    values need no quoting.
    """
    output_dir = config.resolve(options.output_dir)
    command = list(config.generator_command)
    command.append(f"--output_dir={output_dir}")
    command.append(f"-I{config.resolve(config.protos_root)}")
    for include_dir in config.include_dirs:
        command.append(f"-I{config.resolve(include_dir)}")
    command.append(str(config.resolve_proto(options.proto_path)))

    if options.use_common_proto:
        command.append(str(config.resolve_proto(config.common_proto)))
    if options.main_service_name:
        command.append(f"--main-service={options.main_service_name}")
    if options.grpc_service_config:
        command.append(f"--grpc-service-config={config.resolve_proto(options.grpc_service_config)}")
    if options.package_name:
        command.append(f"--package-name={options.package_name}")
    if options.template:
        command.append(f"--template={options.template}")
    if options.bundle_config:
        command.append(f"--bundle-config={config.resolve_proto(options.bundle_config)}")
    return command


def format_command(command: list[str]) -> str:
    """Shell-quoted rendering of a command, for logs and error messages."""
    return shlex.join(command)


def run_generator(command: list[str], timeout: float | None = None, cwd: str | Path | None = None) -> None:
    """Run the generator to completion.

    Raises SetupError if the executable cannot be started, and GeneratorError
    on a non-zero exit or a timeout.
    """
    logger.debug("Running generator: %s", format_command(command))
    try:
        completed = subprocess.run(
            command,
            cwd=cwd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise SetupError(f"Generator executable not found: {command[0]}") from e
    except PermissionError as e:
        raise SetupError(f"Generator executable is not runnable: {command[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise GeneratorError(
            f"Generator timed out after {timeout}s: {format_command(command)}"
        ) from e

    if completed.returncode != 0:
        raise GeneratorError(
            f"Generator exited with code {completed.returncode}: {format_command(command)}\n"
            f"{completed.stderr.strip()}",
            returncode=completed.returncode,
            stderr=completed.stderr,
        )
    if completed.stderr:
        logger.debug("Generator stderr:\n%s", completed.stderr.rstrip())


def _make_executable(path: Path) -> None:
    try:
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        logger.warning("Failed to chmod +x %s: %s. Ignoring...", path, e)


def prepare_plugin(config: HarnessConfig) -> Path | None:
    """Install the generator as a protoc plugin and put it on PATH.

    Copies the plugin source to the plugin name in the same directory,
    replacing any stale copy. Returns the plugin path, or None when no
    plugin is configured.
    """
    if config.plugin is None:
        return None

    source = config.resolve(config.plugin.source)
    if not source.is_file():
        raise SetupError(f"Plugin source not found: {source}")
    plugin_path = source.parent / config.plugin.name

    try:
        if plugin_path.exists():
            plugin_path.unlink()
        shutil.copyfile(source, plugin_path)
    except OSError as e:
        raise SetupError(f"Cannot install plugin at {plugin_path}: {e}") from e

    _make_executable(plugin_path)
    _make_executable(source)

    bin_dir = str(plugin_path.parent)
    path_entries = os.environ.get("PATH", "").split(os.pathsep)
    if bin_dir not in path_entries:
        os.environ["PATH"] = bin_dir + os.pathsep + os.environ.get("PATH", "")
    logger.info("Installed generator plugin %s", plugin_path)
    return plugin_path
