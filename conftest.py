#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

# This file initializes the pytest environment

from pathlib import Path

import pytest

#
# Each test is of one of the following types, derived from its location below tests/.
#
# The "-T TYPE" option selects a single type. Tests of the other types will then
# be skipped. Without the option all tests are executed.
#

test_types = [
    "unit",
    "code_quality",
]


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the -T option to pytest"""
    parser.addoption(
        "-T",
        action="store",
        metavar="TYPE",
        default=None,
        help="Run tests of the given TYPE. Available types are: %s" % ", ".join(test_types),
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "type(TYPE): Mark TYPE of test. Available: %s" % ", ".join(test_types)
    )


def pytest_collection_modifyitems(items: list[pytest.Item], config: pytest.Config) -> None:
    """Mark collected test types based on their location"""
    for item in items:
        file_path = Path("%s" % item.reportinfo()[0]).resolve()
        repo_rel_path = file_path.relative_to(Path(__file__).resolve().parent)
        ty = repo_rel_path.parts[1]
        if ty not in test_types:
            raise Exception(f"Test in {repo_rel_path} not TYPE marked: {item!r} ({ty!r})")

        item.add_marker(pytest.mark.type.with_args(ty))


def pytest_runtest_setup(item: pytest.Item) -> None:
    """Skip tests of unwanted types"""
    if (wanted := item.config.getoption("-T")) is None:
        return

    test_type = item.get_closest_marker("type")
    if test_type is None:
        raise Exception("Test is not TYPE marked: %s" % item)

    if test_type.args[0] != wanted:
        pytest.skip("Not testing type %r" % test_type.args[0])
