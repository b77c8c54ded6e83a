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

Abstraction of the SonarQube general object concept

"""

from __future__ import annotations
from typing import Any, Optional, TYPE_CHECKING

from http import HTTPStatus
import requests

import sonar_resources.logging as log
from sonar_resources.util import misc

if TYPE_CHECKING:
    from sonar_resources.platform import Platform
    from sonar_resources.util.types import ApiParams, ApiPayload


class SqObject(object):
    """Abstraction of Sonar objects"""

    API: dict[str, str] = {}  # Will be defined in the subclass

    def __init__(self, endpoint: Platform, key: str) -> None:
        self.key: str = key  #: Object unique key (unique in its class)
        self.endpoint: Platform = endpoint  #: Reference to the SonarQube platform
        self.sq_json: Optional[ApiPayload] = None

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.key, self.endpoint.url))

    def __eq__(self, another: object) -> bool:
        if type(self) is type(another):
            return hash(self) == hash(another)
        return NotImplemented

    def reload(self, data: ApiPayload) -> SqObject:
        """Loads a SonarQube API JSON payload in a SonarObject"""
        log.debug("%s: Reloading with %s", str(self), misc.json_dump(data))
        self.sq_json = data
        return self

    def get(self, api: str, params: Optional[ApiParams] = None, mute: tuple[HTTPStatus, ...] = (), **kwargs: Any) -> requests.Response:
        """Executes and HTTP GET against the SonarQube platform

        :param api: API to invoke (eg api/views/show)
        :param params: List of parameters to pass to the API
        :param mute: Tuple of HTTP Error codes to mute (ie not write an error log for), defaults to None.
                     Typically, Error 404 Not found may be expected sometimes so this can avoid logging an error for 404
        :return: The request response
        """
        return self.endpoint.get(api=api, params=params, mute=mute, **kwargs)

    def post(self, api: str, params: Optional[ApiParams] = None, mute: tuple[HTTPStatus, ...] = (), **kwargs: Any) -> requests.Response:
        """Executes and HTTP POST against the SonarQube platform

        :param api: API to invoke (eg api/views/add_portfolio)
        :param params: List of parameters to pass to the API
        :param mute: Tuple of HTTP Error codes to mute, defaults to None.
        :return: The request response
        """
        return self.endpoint.post(api=api, params=params, mute=mute, **kwargs)
