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

"""
    test utilities
"""

import os
import sys
import re
import json
from http import HTTPStatus
from typing import Any, Optional
from urllib.parse import urlparse
from unittest.mock import patch
import pytest
import requests

from sonar_resources import logging, platform
from sonar_resources import utilities as util
from sonar_resources.util import constants as c
import cli.options as opt

TEST_LOGFILE = "pytest.log"
LOGGER_COUNT = 0

SQ_URL = "http://localhost:9000"
SQ_TOKEN = "squ_0123456789abcdef0123456789abcdef01234567"
SQS_OPTS = f"-{opt.URL_SHORT} {SQ_URL} -{opt.TOKEN_SHORT} {SQ_TOKEN}"

TEST_SETTINGS = {c.HTTP_TIMEOUT: 10, c.DELETE_IGNORE_MISSING: True}

PARENT = "CORP"
CHILD_A = "CORP-INSURANCE"
CHILD_B = "CORP-BANKING"
CHILD_C = "CORP-RETAIL"
CHILD_D = "CORP-HEALTH"
PORTFOLIOS = (PARENT, CHILD_A, CHILD_B, CHILD_C, CHILD_D)
NON_EXISTING_KEY = "non-existing"

ADO_KEY = "ADO"
ADO_URL = "https://dev.azure.com/okorach"
ADO_PAT = "ado-personal-access-token-1234"

JSON_FILE = f"temp.{os.getpid()}.json"

GET = "GET"
POST = "POST"


def _response(url: str, status: int, body: Any = None) -> requests.Response:
    """Builds an HTTP response"""
    r = requests.Response()
    r.status_code = int(status)
    r.url = url
    r.encoding = "utf-8"
    if body is None:
        r._content = b""
    elif isinstance(body, str):
        r._content = body.encode("utf-8")
    else:
        r._content = json.dumps(body).encode("utf-8")
    return r


def _error(url: str, status: int, msg: str) -> requests.Response:
    return _response(url, status, {"errors": [{"msg": msg}]})


class FakeSonar(object):
    """In memory SonarQube Web API for portfolio references and Azure DevOps ALM settings"""

    def __init__(self, portfolios: tuple[str, ...] = PORTFOLIOS) -> None:
        self.portfolios = list(portfolios)
        self.references: dict[str, list[str]] = {k: [] for k in portfolios}
        self.local_subportfolios: dict[str, list[str]] = {k: [] for k in portfolios}
        self.azure: dict[str, dict[str, str]] = {}
        self.calls: list[tuple[str, str, dict[str, str]]] = []
        self.failures: dict[tuple[str, str], int] = {}
        self.bodies: dict[str, str] = {}
        self.transport_error: Optional[Exception] = None

    def get(self, url: str, params: Optional[dict[str, str]] = None, **kwargs: Any) -> requests.Response:
        return self.__handle(GET, url, params or {})

    def post(self, url: str, params: Optional[dict[str, str]] = None, **kwargs: Any) -> requests.Response:
        return self.__handle(POST, url, params or {})

    def fail(self, api: str, reference: str, status: int = HTTPStatus.BAD_REQUEST) -> None:
        """Makes a call to an API for a given reference (or key) fail with a given status"""
        self.failures[(api, reference)] = status

    def mutations(self) -> list[tuple[str, str]]:
        """Returns the (API, reference) of all mutating calls, in order"""
        return [(api, params.get("reference", params.get("key"))) for method, api, params in self.calls if method == POST]

    def count(self, api: str) -> int:
        """Returns the number of calls to an API"""
        return sum(1 for _, called_api, _ in self.calls if called_api == api)

    def __handle(self, method: str, url: str, params: dict[str, str]) -> requests.Response:
        api = urlparse(url).path
        self.calls.append((method, api, dict(params)))
        if self.transport_error:
            raise self.transport_error
        status = self.failures.get((api, params.get("reference", params.get("key", params.get("portfolio")))))
        if status is not None:
            return _error(url, status, f"Injected failure on {api}")
        if api in self.bodies:
            return _response(url, HTTPStatus.OK, self.bodies[api])
        handler = {
            (GET, "/api/server/version"): self.__version,
            (GET, "/api/views/portfolios"): self.__portfolios,
            (GET, "/api/views/show"): self.__show,
            (POST, "/api/views/add_portfolio"): self.__add_portfolio,
            (POST, "/api/views/remove_portfolio"): self.__remove_portfolio,
            (GET, "/api/alm_settings/list_definitions"): self.__list_definitions,
            (POST, "/api/alm_settings/create_azure"): self.__create_azure,
            (POST, "/api/alm_settings/update_azure"): self.__update_azure,
            (POST, "/api/alm_settings/delete"): self.__delete_alm,
        }.get((method, api))
        if handler is None:
            return _error(url, HTTPStatus.NOT_FOUND, f"Unknown url : {api}")
        return handler(url, params)

    def __version(self, url: str, params: dict[str, str]) -> requests.Response:
        return _response(url, HTTPStatus.OK, "10.7.0.96327")

    def __portfolios(self, url: str, params: dict[str, str]) -> requests.Response:
        parent = params.get("portfolio")
        if parent not in self.portfolios:
            return _error(url, HTTPStatus.NOT_FOUND, f"Portfolio '{parent}' not found")
        return _response(url, HTTPStatus.OK, {"portfolios": [{"key": k, "name": k.title(), "disabled": False} for k in self.portfolios]})

    def __show(self, url: str, params: dict[str, str]) -> requests.Response:
        key = params.get("key")
        if key not in self.portfolios:
            return _error(url, HTTPStatus.NOT_FOUND, f"Portfolio '{key}' not found")
        sub_views = [{"key": f"{key}:{ref}", "originalKey": ref, "name": ref.title(), "qualifier": c.PORTFOLIO_QUALIFIER} for ref in self.references[key]]
        sub_views += [{"key": sub, "name": sub.title(), "qualifier": c.SUB_PORTFOLIO_QUALIFIER} for sub in self.local_subportfolios[key]]
        return _response(url, HTTPStatus.OK, {"key": key, "name": key.title(), "qualifier": c.PORTFOLIO_QUALIFIER, "subViews": sub_views})

    def __add_portfolio(self, url: str, params: dict[str, str]) -> requests.Response:
        parent, ref = params.get("portfolio"), params.get("reference")
        for k in parent, ref:
            if k not in self.portfolios:
                return _error(url, HTTPStatus.NOT_FOUND, f"Portfolio '{k}' not found")
        if ref in self.references[parent]:
            return _error(url, HTTPStatus.BAD_REQUEST, f"Portfolio '{parent}' already references portfolio '{ref}'")
        self.references[parent].append(ref)
        return _response(url, HTTPStatus.OK)

    def __remove_portfolio(self, url: str, params: dict[str, str]) -> requests.Response:
        parent, ref = params.get("portfolio"), params.get("reference")
        if parent not in self.portfolios or ref not in self.references[parent]:
            return _error(url, HTTPStatus.NOT_FOUND, f"Portfolio '{parent}' does not reference portfolio '{ref}'")
        self.references[parent].remove(ref)
        return _response(url, HTTPStatus.NO_CONTENT)

    def __list_definitions(self, url: str, params: dict[str, str]) -> requests.Response:
        azure = [{"key": k, "url": v["url"]} for k, v in self.azure.items()]
        return _response(url, HTTPStatus.OK, {"github": [], "gitlab": [], "azure": azure, "bitbucket": [], "bitbucketcloud": []})

    def __create_azure(self, url: str, params: dict[str, str]) -> requests.Response:
        if params["key"] in self.azure:
            return _error(url, HTTPStatus.BAD_REQUEST, f"An DevOps Platform setting with key '{params['key']}' already exists")
        self.azure[params["key"]] = {"url": params["url"], "pat": params["personalAccessToken"]}
        return _response(url, HTTPStatus.NO_CONTENT)

    def __update_azure(self, url: str, params: dict[str, str]) -> requests.Response:
        if params["key"] not in self.azure:
            return _error(url, HTTPStatus.NOT_FOUND, f"DevOps Platform setting with key '{params['key']}' cannot be found")
        data = self.azure.pop(params["key"])
        data["url"] = params.get("url", data["url"])
        data["pat"] = params.get("personalAccessToken", data["pat"])
        self.azure[params.get("newKey", params["key"])] = data
        return _response(url, HTTPStatus.NO_CONTENT)

    def __delete_alm(self, url: str, params: dict[str, str]) -> requests.Response:
        if params["key"] not in self.azure:
            return _error(url, HTTPStatus.NOT_FOUND, f"DevOps Platform setting with key '{params['key']}' cannot be found")
        self.azure.pop(params["key"])
        return _response(url, HTTPStatus.NO_CONTENT)


def new_platform(**kwargs: Any) -> platform.Platform:
    """Returns a platform object targeting the fake SonarQube"""
    return platform.Platform(url=SQ_URL, token=SQ_TOKEN, settings=kwargs.pop("settings", dict(TEST_SETTINGS)), **kwargs)


def clean(*files: Optional[str]) -> None:
    """Deletes a list of file if they exists"""
    for file in files:
        try:
            if file:
                os.remove(file)
        except FileNotFoundError:
            pass


def file_not_empty(file: str) -> bool:
    """Returns whether a file exists and is not empty"""
    if not os.path.isfile(file):
        return False
    return os.stat(file).st_size > 0


def __split_args(string_arguments: str) -> list[str]:
    return [s.strip('"') for s in re.findall(r'(?:[^\s\*"]|"(?:\\.|[^"])*")+', string_arguments)]


def __get_redacted_cmd(string_arguments: str) -> str:
    """Gets a cmd line and redacts the token"""
    args = __split_args(string_arguments)
    for option in (f"-{opt.TOKEN_SHORT}", f"--{opt.TOKEN}"):
        try:
            ndx = args.index(option) + 1
            args[ndx] = util.redacted_token(args[ndx])
        except ValueError:
            pass
    return " ".join(args)


def run_cmd(func: callable, arguments: str) -> int:
    """Runs a sonar-resources command, and returns its exit code"""
    logging.info("RUNNING: %s", __get_redacted_cmd(arguments))
    with pytest.raises(SystemExit) as e:
        with patch.object(sys, "argv", __split_args(arguments)):
            func()
    return int(str(e.value))


def start_logging(level: str = "DEBUG") -> None:
    """start_logging"""
    global LOGGER_COUNT
    if LOGGER_COUNT == 0:
        logging.set_logger(TEST_LOGFILE)
        logging.set_debug_level(level)
        LOGGER_COUNT = 1
