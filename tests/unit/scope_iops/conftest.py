#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
from collections.abc import Iterator

import pytest

IOSTAT_OUTPUT = """Linux 4.2.0-25-generic (a109563eab38)	04/01/16	_x86_64_	(4 CPU)

Device:            tps   kB_read/s    kB_wrtn/s    kB_read    kB_wrtn
sda               1.23       10.00        20.00     123456     234567
sdb               0.05        0.40         0.00       4711          0

"""


@pytest.fixture(name="iostat_output")
def fixture_iostat_output() -> str:
    return IOSTAT_OUTPUT


@pytest.fixture(name="restore_root_logger")
def fixture_restore_root_logger() -> Iterator[logging.Logger]:
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    try:
        yield root_logger
    finally:
        for handler in root_logger.handlers:
            if handler not in handlers:
                handler.close()
        root_logger.handlers[:] = handlers
        root_logger.setLevel(level)
