#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ._config import PluginConfig
from ._iostat import DeviceStats, IOPSError
from ._log import LOGGER
from ._report import make_report, Report

Sampler = Callable[[], Sequence[DeviceStats]]


@dataclass(frozen=True)
class _ApplicationDependencies:
    host_id: str
    plugin_config: PluginConfig
    sampler: Sampler
    clock: Callable[[], datetime]
    report_lock: asyncio.Lock


def make_application(
    *,
    host_id: str,
    plugin_config: PluginConfig,
    sampler: Sampler,
    clock: Callable[[], datetime] = lambda: datetime.now().astimezone(),
) -> FastAPI:
    app = FastAPI(
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )
    app.state.dependencies = _ApplicationDependencies(
        host_id=host_id,
        plugin_config=plugin_config,
        sampler=sampler,
        clock=clock,
        report_lock=asyncio.Lock(),
    )

    app.get("/report")(_report_endpoint)

    return app


async def _report_endpoint(request: Request) -> JSONResponse:
    dependencies: _ApplicationDependencies = request.app.state.dependencies
    async with dependencies.report_lock:
        LOGGER.info("[report] %s", request.url.path)
        report = await asyncio.to_thread(_build_report, dependencies)
        return JSONResponse(report.to_wire())


def _build_report(dependencies: _ApplicationDependencies) -> Report:
    timestamp = dependencies.clock()
    try:
        stats = dependencies.sampler()
    except IOPSError as e:
        # The host node is still reported, just without any IOPS values.
        LOGGER.error("[report] Sampling failed: %s", e)
        stats = ()
    return make_report(
        host_id=dependencies.host_id,
        plugin=dependencies.plugin_config,
        stats=stats,
        timestamp=timestamp,
    )
