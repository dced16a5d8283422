#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import shutil
import socket
from collections.abc import Generator
from contextlib import contextmanager, suppress
from pathlib import Path

from fastapi import FastAPI
from uvicorn import run as run_uvicorn_server

from ._config import ServerConfig
from ._log import LOGGER, uvicorn_log_config


def run(config: ServerConfig, app: FastAPI) -> None:
    with provide_unix_socket(
        path=config.unix_socket_path,
        permissions=config.unix_socket_permissions,
    ) as socket_file_descriptor:
        run_uvicorn_server(
            app,
            fd=socket_file_descriptor,
            log_config=uvicorn_log_config(config.log_file),
        )


@contextmanager
def provide_unix_socket(path: Path, permissions: int) -> Generator[int, None, None]:
    # The whole directory belongs to us, stale sockets of previous runs are removed with it.
    _remove_socket_directory(path.parent)
    path.parent.mkdir(mode=0o700, parents=True)
    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.bind(str(path))
            path.chmod(permissions)
            LOGGER.info("Listening on: unix://%s", path)
            yield sock.fileno()
    finally:
        _remove_socket_directory(path.parent)


def _remove_socket_directory(directory: Path) -> None:
    with suppress(FileNotFoundError):
        shutil.rmtree(directory)
