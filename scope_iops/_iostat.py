#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Sampling and parsing of per-device I/O statistics as printed by sysstat's iostat.

Typical output of `iostat -d`:

    Linux 4.2.0-25-generic (a109563eab38)	04/01/16	_x86_64_	(4 CPU)

    Device:            tps   kB_read/s    kB_wrtn/s    kB_read    kB_wrtn
    sda               1.23       10.00        20.00     123456     234567

With an interval and a count (`iostat -d 1 2`) several such device blocks are printed.
The first one always reports the averages since boot, so only the last block is used.
"""

import os
import subprocess
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from ._config import SamplerConfig


class IOPSError(Exception): ...


class SamplingError(IOPSError): ...


class ParseError(IOPSError): ...


@dataclass(frozen=True)
class DeviceStats:
    device: str
    tps: str
    readps: str
    writeps: str


def sample(config: SamplerConfig) -> Sequence[DeviceStats]:
    return parse_iostat(run_iostat(config))


def run_iostat(config: SamplerConfig) -> str:
    command = list(config.command)
    try:
        completed_process = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            close_fds=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=config.timeout,
            # we rely on "." as decimal separator
            env={**os.environ, "LC_ALL": "C"},
        )
    except FileNotFoundError as e:
        raise SamplingError(f"iops: command not found: {command[0]}") from e
    except OSError as e:
        raise SamplingError(f"iops: cannot run {command[0]}: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise SamplingError(
            f"iops: '{subprocess.list2cmdline(command)}' timed out after {config.timeout} seconds"
        ) from e

    if completed_process.returncode:
        raise SamplingError(
            f"iops: '{subprocess.list2cmdline(command)}' exited with status "
            f"{completed_process.returncode}: {completed_process.stderr.strip()}"
        )
    return completed_process.stdout


def parse_iostat(output: str) -> Sequence[DeviceStats]:
    lines = output.splitlines()
    # banner, empty line, column header
    if len(lines) < 3:
        raise ParseError(f"iops: unexpected output: {output!r}")

    blocks = list(_device_blocks(lines))
    if not blocks or not blocks[-1]:
        raise ParseError(f"iops: unexpected output: {output!r}")
    return blocks[-1]


def _device_blocks(lines: Sequence[str]) -> Iterator[Sequence[DeviceStats]]:
    line_iter = iter(lines)
    for line in line_iter:
        if not line.startswith("Device"):
            continue
        rows: list[DeviceStats] = []
        for row in line_iter:
            if not row.strip():
                break
            rows.append(_parse_row(row))
        yield rows


def _parse_row(line: str) -> DeviceStats:
    match line.split():
        case [device, tps, readps, writeps, *_rest]:
            return DeviceStats(device=device, tps=tps, readps=readps, writeps=writeps)
        case _:
            raise ParseError(f"iops: unexpected line: {line!r}")
