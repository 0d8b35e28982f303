"""Configuration models for the baseline harness."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from baseline_harness.models.fixture import BaselineOptions


def normalize_extensions(extensions) -> list[str]:
    """Give every non-empty extension a leading dot."""
    return [ext if ext.startswith(".") else f".{ext}" for ext in extensions if ext]


class PluginConfig(BaseModel):
    source: str  # generator entry script, relative to root_dir
    name: str = "protoc-gen-typescript_gapic"  # plugin copy created next to source


class HarnessConfig(BaseModel):
    # Layout
    root_dir: str = "."
    baseline_root: str = "baselines"
    protos_root: str = "test-fixtures/protos"
    include_dirs: list[str] = Field(
        default_factory=lambda: ["node_modules/google-gax/protos"]
    )
    common_proto: str = "google/cloud/common_resources.proto"

    # Generator
    generator_command: list[str] = Field(
        default_factory=lambda: ["node", "build/src/start-script.js"]
    )
    plugin: Optional[PluginConfig] = None
    timeout_seconds: float = 60.0

    # Comparison policy
    baseline_extension: str = ".baseline"
    volatile_extensions: list[str] = Field(default_factory=lambda: [".proto"])

    # Reporting
    report_formats: list[str] = Field(default_factory=lambda: ["json"])
    report_output_dir: str = "./baseline-reports"

    fixtures: list[BaselineOptions] = Field(default_factory=list)

    @field_validator("baseline_extension")
    @classmethod
    def check_baseline_extension(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError(f"baseline_extension must look like '.ext', got '{v}'")
        return v

    @field_validator("volatile_extensions")
    @classmethod
    def normalize_volatile_extensions(cls, v: list[str]) -> list[str]:
        return normalize_extensions(v)

    @field_validator("generator_command")
    @classmethod
    def check_generator_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("generator_command must name an executable")
        return v

    @model_validator(mode="after")
    def check_unique_fixtures(self) -> "HarnessConfig":
        seen = set()
        for fixture in self.fixtures:
            if fixture.baseline_name in seen:
                raise ValueError(f"Duplicate baseline_name: {fixture.baseline_name}")
            seen.add(fixture.baseline_name)
        return self

    def resolve(self, relative: str) -> Path:
        """Resolve a path from the config against root_dir."""
        return (Path(self.root_dir) / relative).resolve()

    def resolve_proto(self, slash_path: str) -> Path:
        """Resolve a slash-separated path under protos_root."""
        return self.resolve(self.protos_root).joinpath(*slash_path.split("/"))

    def get_fixture(self, baseline_name: str) -> BaselineOptions:
        for fixture in self.fixtures:
            if fixture.baseline_name == baseline_name:
                return fixture
        raise KeyError(baseline_name)

    @classmethod
    def load(cls, path: str | Path) -> "HarnessConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
