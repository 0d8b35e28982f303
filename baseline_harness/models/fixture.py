"""Fixture options describing one generator invocation under test."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class BaselineOptions(BaseModel):
    output_dir: str  # relative to the harness root_dir, cleared before each run
    proto_path: str  # slash-separated, relative to protos_root
    use_common_proto: bool = False
    baseline_name: str  # directory name under baseline_root
    main_service_name: Optional[str] = None
    grpc_service_config: Optional[str] = None  # slash-separated, relative to protos_root
    package_name: Optional[str] = None
    template: Optional[str] = None
    bundle_config: Optional[str] = None  # slash-separated, relative to protos_root
