#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Sequence
from pathlib import Path

import pytest

REPO_PATH = Path(__file__).resolve().parent.parent.parent


@pytest.fixture(name="repo_path")
def fixture_repo_path() -> Path:
    return REPO_PATH


@pytest.fixture
def python_files() -> Sequence[Path]:
    return sorted(
        [
            REPO_PATH / "setup.py",
            *(REPO_PATH / "scope_iops").rglob("*.py"),
            *(REPO_PATH / "tests").rglob("*.py"),
        ]
    )
