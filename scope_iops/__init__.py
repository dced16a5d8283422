#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

"""Launches the Weave Scope plugin reporting disk IOPS of this host."""

import functools
import signal
import socket
from types import FrameType

from setproctitle import setproctitle

from ._app import make_application
from ._config import config_from_disk_or_default_config, config_path_from_env
from ._iostat import IOPSError, sample
from ._log import configure_logger, LOGGER
from ._server import run as run_server


def main() -> int:
    try:
        setproctitle("scope-iops")
        config = config_from_disk_or_default_config(config_path_from_env())
        configure_logger(config.server_config.log_file)

        host_id = config.host_id or socket.gethostname()
        LOGGER.info("Starting on %s...", host_id)

        sampler = functools.partial(sample, config.sampler_config)
        try:
            sampler()
        except IOPSError as e:
            LOGGER.error("Cannot sample IOPS of this host: %s", e)
            return 1

        signal.signal(signal.SIGTERM, _raise_termination_signal)

        try:
            run_server(
                config.server_config,
                make_application(
                    host_id=host_id,
                    plugin_config=config.plugin_config,
                    sampler=sampler,
                ),
            )
        except (TerminationSignal, KeyboardInterrupt):
            LOGGER.info("Received termination signal, shutting down")

    except Exception:
        LOGGER.exception("Unhandled exception")
        return 1

    return 0


class TerminationSignal(Exception):
    def __init__(self, signum: int) -> None:
        super().__init__(f"Received signal {signum}")
        self.signum = signum


def _raise_termination_signal(signum: int, _frame: FrameType | None) -> None:
    raise TerminationSignal(signum)
