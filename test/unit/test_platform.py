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

"""platform tests"""

from unittest.mock import patch
import pytest

import utilities as tutil
from sonar_resources import platform, exceptions
from sonar_resources.util import constants as c


def test_str() -> None:
    """The token is redacted in the string representation"""
    endpoint = tutil.new_platform()
    assert str(endpoint) == f"squ_01***67@{tutil.SQ_URL}"
    assert tutil.SQ_TOKEN not in str(endpoint)


def test_url_trailing_slash() -> None:
    endpoint = platform.Platform(url=f"{tutil.SQ_URL}/", token=tutil.SQ_TOKEN, settings=tutil.TEST_SETTINGS)
    assert endpoint.url == tutil.SQ_URL
    assert not endpoint.is_sonarcloud()


def test_normalize_api() -> None:
    """All forms of an API path are equivalent"""
    for api in ("/api/views/show", "api/views/show", "/views/show", "views/show"):
        assert platform._normalize_api(api) == "/api/views/show"


def test_http_timeout() -> None:
    """Timeout comes from settings unless explicitly provided"""
    assert tutil.new_platform(settings={c.HTTP_TIMEOUT: 25}).http_timeout == 25
    assert tutil.new_platform(settings={}).http_timeout == c.DEFAULT_HTTP_TIMEOUT
    assert tutil.new_platform(http_timeout=3).http_timeout == 3


def test_settings() -> None:
    endpoint = tutil.new_platform(settings={c.DELETE_IGNORE_MISSING: False})
    assert endpoint.setting(c.DELETE_IGNORE_MISSING) is False
    assert endpoint.setting(c.HTTP_TIMEOUT) == c.DEFAULT_HTTP_TIMEOUT


def test_request_params() -> None:
    """Requests carry credentials, timeout and non null params"""
    sonar = tutil.FakeSonar()
    with patch("requests.get", side_effect=sonar.get) as mock_get:
        tutil.new_platform(http_timeout=7).get("views/show", params={"key": tutil.PARENT, "unused": None})
    kwargs = mock_get.call_args.kwargs
    assert kwargs["url"] == f"{tutil.SQ_URL}/api/views/show"
    assert kwargs["params"] == {"key": tutil.PARENT}
    assert kwargs["auth"] == (tutil.SQ_TOKEN, "")
    assert kwargs["timeout"] == 7
    assert "Authorization" not in kwargs["headers"]


def test_sonarcloud() -> None:
    """SonarQube Cloud requests use a bearer token and the organization"""
    sonar = tutil.FakeSonar()
    endpoint = platform.Platform(url="https://sonarcloud.io", token=tutil.SQ_TOKEN, org="okorach", settings=tutil.TEST_SETTINGS)
    assert endpoint.is_sonarcloud()
    with patch("requests.post", side_effect=sonar.post) as mock_post:
        endpoint.post("views/add_portfolio", params={"portfolio": tutil.PARENT, "reference": tutil.CHILD_A})
    kwargs = mock_post.call_args.kwargs
    assert kwargs["headers"]["Authorization"] == f"Bearer {tutil.SQ_TOKEN}"
    assert kwargs["params"]["organization"] == "okorach"


def test_expected_status(endpoint: platform.Platform, fake_sonar: tutil.FakeSonar) -> None:
    """Statuses not expected raise an error, even if 2xx"""
    with pytest.raises(exceptions.ObjectNotFound):
        endpoint.post("views/remove_portfolio", params={"portfolio": tutil.PARENT, "reference": tutil.CHILD_A})
    endpoint.post("views/add_portfolio", params={"portfolio": tutil.PARENT, "reference": tutil.CHILD_A})
    with pytest.raises(exceptions.UnexpectedStatusError) as e:
        endpoint.post("views/remove_portfolio", params={"portfolio": tutil.PARENT, "reference": tutil.CHILD_A}, expected=(200,))
    assert e.value.status == 204


def test_verify_connection(endpoint: platform.Platform, fake_sonar: tutil.FakeSonar) -> None:
    endpoint.verify_connection()
    assert fake_sonar.calls == [("GET", "/api/server/version", {})]
