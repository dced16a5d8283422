#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import os
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from pydantic import BaseModel, Field

CONFIG_PATH_ENV_VAR: Final = "SCOPE_IOPS_CONFIG"
DEFAULT_CONFIG_PATH: Final = Path("/etc/scope-iops/config.json")

# The socket gets its own sub-directory so that we have control over its permissions.
DEFAULT_SOCKET_PATH: Final = Path("/var/run/scope/plugins/iops/iops.sock")


class ServerConfig(BaseModel, frozen=True):
    unix_socket_path: Path = DEFAULT_SOCKET_PATH
    unix_socket_permissions: int = 0o600
    log_file: Path | None = None


class SamplerConfig(BaseModel, frozen=True):
    command: Sequence[str] = Field(default=("iostat", "-d"), min_length=1)
    timeout: float = Field(default=10.0, gt=0)


class PluginConfig(BaseModel, frozen=True):
    id: str = "iops"
    label: str = "iops"
    description: str = "Adds a IOPS details to Host"
    api_version: str = "1"


class Config(BaseModel, frozen=True):
    host_id: str | None = None
    server_config: ServerConfig = ServerConfig()
    sampler_config: SamplerConfig = SamplerConfig()
    plugin_config: PluginConfig = PluginConfig()


def default_config() -> Config:
    return Config()


def config_path_from_env() -> Path:
    return Path(os.environ.get(CONFIG_PATH_ENV_VAR, DEFAULT_CONFIG_PATH))


def config_from_disk_or_default_config(path: Path) -> Config:
    return Config.model_validate_json(path.read_text()) if path.exists() else default_config()
