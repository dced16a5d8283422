#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Models of the Weave Scope plugin report and the builder for the IOPS table.

Scope drops empty optional fields on the wire ("omitempty"), so every optional field
defaults to its empty value and `Report.to_wire` excludes defaults. Fields which must
always be present (e.g. `controls`) are declared without default.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Final

from pydantic import BaseModel, Field

from ._config import PluginConfig
from ._iostat import DeviceStats

IOPS_TABLE_PREFIX: Final = "iops-table-"


class _WireModel(BaseModel, frozen=True, populate_by_name=True): ...


class StringEntry(_WireModel):
    timestamp: datetime
    value: str


class ControlData(_WireModel):
    dead: bool


class ControlEntry(_WireModel):
    timestamp: datetime
    value: ControlData


class Control(_WireModel):
    id: str
    human: str
    icon: str
    rank: int


class Node(_WireModel):
    latest_controls: Mapping[str, ControlEntry] = Field(default={}, alias="latestControls")
    latest: Mapping[str, StringEntry] = {}


class MetadataTemplate(_WireModel):
    id: str
    label: str = ""
    truncate: int = 0
    data_type: str = Field(default="", alias="dataType")
    priority: float = 0
    from_: str = Field(default="", alias="from")


class Column(_WireModel):
    id: str
    label: str = ""
    data_type: str = Field(default="", alias="dataType")


class TableTemplate(_WireModel):
    id: str
    label: str
    prefix: str
    type: str
    columns: Sequence[Column]


class Topology(_WireModel):
    nodes: Mapping[str, Node]
    controls: Mapping[str, Control]
    metadata_templates: Mapping[str, MetadataTemplate] = {}
    table_templates: Mapping[str, TableTemplate] = {}


class PluginSpec(_WireModel):
    id: str
    label: str
    description: str = ""
    interfaces: Sequence[str]
    api_version: str = ""


class Report(_WireModel):
    host: Topology = Field(alias="Host")
    plugins: Sequence[PluginSpec] = Field(alias="Plugins")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)


IOPS_COLUMNS: Final = (
    Column(id="device", label="Device"),
    Column(id="tps", label="tps"),
    Column(id="readps", label="kB_read/s"),
    Column(id="writeps", label="kB_wrtn/s"),
)


def topology_host_id(host_id: str) -> str:
    return f"{host_id};<host>"


def make_latest(stats: Sequence[DeviceStats], timestamp: datetime) -> dict[str, StringEntry]:
    latest: dict[str, StringEntry] = {}
    for row_number, row in enumerate(stats, start=1):
        for column in IOPS_COLUMNS:
            latest[f"{IOPS_TABLE_PREFIX}{row_number}___{column.id}"] = StringEntry(
                timestamp=timestamp,
                value=getattr(row, column.id),
            )
    return latest


def make_metadata_templates() -> dict[str, MetadataTemplate]:
    return {
        column.id: MetadataTemplate(
            id=column.id,
            label=column.label,
            priority=1,
            from_="latest",
        )
        for column in IOPS_COLUMNS
    }


def make_table_templates() -> dict[str, TableTemplate]:
    return {
        IOPS_TABLE_PREFIX: TableTemplate(
            id=IOPS_TABLE_PREFIX,
            label="Iops",
            prefix=IOPS_TABLE_PREFIX,
            type="multicolumn-table",
            columns=IOPS_COLUMNS,
        )
    }


def make_plugin_spec(plugin: PluginConfig) -> PluginSpec:
    return PluginSpec(
        id=plugin.id,
        label=plugin.label,
        description=plugin.description,
        interfaces=["reporter"],
        api_version=plugin.api_version,
    )


def make_report(
    *,
    host_id: str,
    plugin: PluginConfig,
    stats: Sequence[DeviceStats],
    timestamp: datetime,
) -> Report:
    return Report(
        host=Topology(
            nodes={
                topology_host_id(host_id): Node(latest=make_latest(stats, timestamp)),
            },
            controls={},
            metadata_templates=make_metadata_templates(),
            table_templates=make_table_templates(),
        ),
        plugins=[make_plugin_spec(plugin)],
    )
