#
# sonar-resources
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
"""

    Abstraction of the SonarQube platform or instance concept

"""

from http import HTTPStatus
from typing import Any, Optional
import time
import requests
from requests import RequestException

import sonar_resources.logging as log
import sonar_resources.utilities as util
from sonar_resources.util import types, conf_mgr, constants as c
from sonar_resources import errcodes, exceptions, version

_SONAR_RESOURCES_AGENT = f"sonar-resources {version.PACKAGE_VERSION}"
_APP_JSON = "application/json"

#: Statuses accepted for calls that succeed with or without a response body
OK_OR_NO_CONTENT = (HTTPStatus.OK, HTTPStatus.NO_CONTENT)


class Platform(object):
    """Abstraction of the SonarQube "platform" concept, the client of all API calls"""

    def __init__(
        self,
        url: str,
        token: str,
        org: Optional[str] = None,
        cert_file: Optional[str] = None,
        http_timeout: Optional[int] = None,
        settings: Optional[types.ConfigSettings] = None,
        **kwargs,
    ) -> None:
        """Creates a SonarQube platform object

        :param url: base URL of the SonarQube platform
        :param token: token to connect to the platform
        :param org: Organization, mandatory for SonarQube Cloud only
        :param cert_file: Client certificate, if any needed, defaults to None
        :param http_timeout: HTTP timeout in seconds, defaults to the http.timeout setting
        :param settings: sonar-resources settings, loaded from config files if not provided
        :return: the SonarQube object
        :rtype: Platform
        """
        self.url = url.rstrip("/")  #: SonarQube URL
        self.__token = token
        self.__cert_file = cert_file
        self.organization = org
        self.settings = conf_mgr.load() if settings is None else settings
        if http_timeout is None:
            http_timeout = conf_mgr.get(self.settings, c.HTTP_TIMEOUT)
        self.http_timeout = int(http_timeout)
        self._user_agent = _SONAR_RESOURCES_AGENT

    def __str__(self) -> str:
        """
        Returns the string representation of the SonarQube connection, with the token recognizable but largely redacted
        """
        return f"{util.redacted_token(self.__token)}@{self.url}"

    def __credentials(self) -> tuple[str, str]:
        return self.__token, ""

    def set_user_agent(self, user_agent: str) -> None:
        self._user_agent = user_agent

    def is_sonarcloud(self) -> bool:
        """
        Returns whether the target platform is SonarCloud
        """
        return util.is_sonarcloud_url(self.url)

    def setting(self, key: str) -> Any:
        """Returns a sonar-resources setting value"""
        return conf_mgr.get(self.settings, key)

    def verify_connection(self) -> None:
        """Verifies that the platform is reachable with the provided credentials"""
        log.info("Connecting to %s", self.url)
        self.get("server/version")

    def get(self, api: str, params: types.ApiParams = None, expected: tuple[int, ...] = (HTTPStatus.OK,), **kwargs) -> requests.Response:
        """Makes an HTTP GET request to SonarQube

        :param api: API to invoke (without the platform base URL)
        :param params: params to pass in the HTTP request, defaults to None
        :param expected: HTTP statuses considered as success, defaults to 200 only
        :return: the HTTP response
        """
        return self.__run_request(requests.get, api, params, expected, **kwargs)

    def post(self, api: str, params: types.ApiParams = None, expected: tuple[int, ...] = OK_OR_NO_CONTENT, **kwargs) -> requests.Response:
        """Makes an HTTP POST request to SonarQube

        :param api: API to invoke (without the platform base URL)
        :param params: params to pass in the HTTP request, defaults to None
        :param expected: HTTP statuses considered as success, defaults to 200 or 204
        :return: the HTTP response
        """
        return self.__run_request(requests.post, api, params, expected, **kwargs)

    def __run_request(self, request: callable, api: str, params: types.ApiParams, expected: tuple[int, ...], **kwargs) -> requests.Response:
        """Makes an HTTP request to SonarQube and checks the returned status

        :raises TransportError: if the request could not be sent or got no response
        :raises ObjectNotFound: if the API returned HTTP 404 and 404 is not an expected status
        :raises UnexpectedStatusError: for any other status not in the expected ones
        """
        mute = kwargs.pop("mute", ())
        api = _normalize_api(api)
        headers = {"user-agent": self._user_agent, "accept": _APP_JSON}
        params = {k: v for k, v in (params or {}).items() if v is not None}
        if self.is_sonarcloud():
            headers["Authorization"] = f"Bearer {self.__token}"
            params["organization"] = self.organization
        req_type = getattr(request, "__name__", repr(request)).upper()
        url = self.url + api
        log.debug("%s: %s", req_type, self.__urlstring(api, params))
        start = time.perf_counter_ns()
        try:
            r = request(
                url=url,
                auth=self.__credentials(),
                verify=self.__cert_file,
                params=params,
                headers=headers,
                timeout=self.http_timeout,
                **kwargs,
            )
        except requests.Timeout as e:
            log.error("%s %s timed out after %d s", req_type, url, self.http_timeout)
            raise exceptions.TransportError(f"{req_type} {url} timed out after {self.http_timeout} s", errcodes.HTTP_TIMEOUT) from e
        except (ConnectionError, RequestException) as e:
            log.error("%s while requesting %s %s", str(e), req_type, url)
            raise exceptions.TransportError(f"{req_type} {url} failed: {e}") from e
        log.debug("%s: %s took %d ms, status %d", req_type, url, (time.perf_counter_ns() - start) // 1000000, r.status_code)
        if r.status_code in expected:
            return r
        err = util.sonar_error(r)
        lvl = log.DEBUG if r.status_code in mute else log.ERROR
        log.log(lvl, "%s %s returned HTTP status %d: %s", req_type, url, r.status_code, err)
        if r.status_code == HTTPStatus.NOT_FOUND:
            raise exceptions.ObjectNotFound(api, f"{req_type} {url}: object not found: {err}")
        raise exceptions.UnexpectedStatusError(req_type, url, r.status_code, err)

    def __urlstring(self, api: str, params: types.ApiParams) -> str:
        """Returns a string corresponding to the URL and parameters, for logging"""
        url = f"{str(self)}{api}"
        params = util.redact_tokens(params or {})
        params_string = "&".join([f"{k}={requests.utils.quote(str(v))}" for k, v in params.items()])
        if len(params_string) > 0:
            url += "?" + params_string
        return url


def _normalize_api(api: str) -> str:
    """Normalizes an API based on its multiple original forms"""
    if api.startswith("/api/"):
        pass
    elif api.startswith("api/"):
        api = "/" + api
    elif api.startswith("/"):
        api = "/api" + api
    else:
        api = "/api/" + api
    return api
