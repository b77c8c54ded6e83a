#!/usr/bin/env python3
#
# sonar-resources tests
# Copyright (C) 2025 Olivier Korach
# mailto:olivier.korach AT gmail DOT com
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 3 of the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program; if not, write to the Free Software Foundation,
# Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#

""" Test fixtures """

from collections.abc import Generator
from unittest.mock import patch
import pytest

import utilities as tutil
from sonar_resources import platform


@pytest.fixture(autouse=True)
def run_around_tests():
    tutil.start_logging()
    yield


@pytest.fixture
def fake_sonar() -> Generator[tutil.FakeSonar]:
    """Replaces the SonarQube Web API by an in memory fake for the duration of a test"""
    sonar = tutil.FakeSonar()
    with patch("requests.get", new=sonar.get), patch("requests.post", new=sonar.post):
        yield sonar


@pytest.fixture
def endpoint(fake_sonar: tutil.FakeSonar) -> platform.Platform:
    """Platform connected to the fake SonarQube"""
    return tutil.new_platform()


@pytest.fixture
def json_file() -> Generator[str]:
    """Provides a temporary JSON file name, deleted after the test"""
    tutil.clean(tutil.JSON_FILE)
    yield tutil.JSON_FILE
    tutil.clean(tutil.JSON_FILE)
