#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from setuptools import find_packages, setup

setup(
    name="scope-iops",
    version="1.0.0",
    description="Weave Scope plugin reporting the disk IOPS of a host",
    packages=find_packages(include=["scope_iops", "scope_iops.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.100",
        "pydantic>=2",
        "uvicorn>=0.23",
        "setproctitle",
    ],
    extras_require={
        "test": ["pytest", "httpx"],
    },
    entry_points={
        "console_scripts": ["scope-iops = scope_iops:main"],
    },
)
