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

"""Abstraction of the SonarQube Azure DevOps ALM setting concept"""
from __future__ import annotations
from typing import Optional

from http import HTTPStatus

import sonar_resources.logging as log
import sonar_resources.platform as pf
import sonar_resources.sqobject as sq
import sonar_resources.utilities as util
from sonar_resources.util import types, constants as c
from sonar_resources import exceptions


class AzureAlmSetting(sq.SqObject):
    """
    Abstraction of the SonarQube Azure DevOps ALM setting
    """

    API = {
        c.CREATE: "alm_settings/create_azure",
        c.READ: "alm_settings/list_definitions",
        c.UPDATE: "alm_settings/update_azure",
        c.DELETE: "alm_settings/delete",
    }

    def __init__(self, endpoint: pf.Platform, key: str, url: Optional[str] = None, personal_access_token: Optional[str] = None) -> None:
        """Constructor, don't use - use class methods instead"""
        super().__init__(endpoint=endpoint, key=key)
        self.url: Optional[str] = url  #: Azure DevOps collection URL
        self.__pat = personal_access_token
        self.id: Optional[str] = None

    @classmethod
    def create(cls, endpoint: pf.Platform, key: str, url: str, personal_access_token: str) -> AzureAlmSetting:
        """Creates an Azure DevOps ALM setting, then reads it back"""
        o = cls(endpoint=endpoint, key=key, url=url, personal_access_token=personal_access_token)
        log.info("Creating %s with URL %s", str(o), url)
        o.post(AzureAlmSetting.API[c.CREATE], params={"key": key, "url": url, "personalAccessToken": personal_access_token})
        o.id = key
        return o.refresh()

    @classmethod
    def read(cls, endpoint: pf.Platform, key: str) -> AzureAlmSetting:
        """Reads an Azure DevOps ALM setting

        :raises ObjectNotFound: if no Azure DevOps ALM setting has this key
        """
        return cls(endpoint=endpoint, key=key).refresh()

    def __str__(self) -> str:
        return f"Azure DevOps ALM setting '{self.key}'"

    def refresh(self) -> AzureAlmSetting:
        """Reads the ALM setting from SonarQube"""
        data = util.json_payload(self.get(AzureAlmSetting.API[c.READ]))
        try:
            alm_data = next((d for d in data.get(c.ALM_AZURE, []) if d["key"] == self.key), None)
        except (KeyError, TypeError) as e:
            raise exceptions.DecodeError(f"Unexpected ALM definitions format: {e}") from e
        if alm_data is None:
            raise exceptions.ObjectNotFound(self.key, f"{str(self)} not found")
        self.reload(alm_data)
        self.url = alm_data.get("url")
        self.id = self.key
        return self

    def update(self, key: Optional[str] = None, url: Optional[str] = None, personal_access_token: Optional[str] = None) -> AzureAlmSetting:
        """Updates the ALM setting key, URL and/or personal access token, then reads it back"""
        new_key = key or self.key
        params = {
            "key": self.key,
            "newKey": new_key,
            "url": url or self.url,
            "personalAccessToken": personal_access_token or self.__pat,
        }
        log.info("Updating %s to key '%s' and URL %s", str(self), new_key, params["url"])
        self.post(AzureAlmSetting.API[c.UPDATE], params=params)
        self.key, self.url = new_key, params["url"]
        if personal_access_token:
            self.__pat = personal_access_token
        return self.refresh()

    def delete(self) -> bool:
        """Deletes the ALM setting"""
        log.info("Deleting %s", str(self))
        self.post(AzureAlmSetting.API[c.DELETE], params={"key": self.key}, mute=(HTTPStatus.NOT_FOUND,))
        self.id = None
        return True

    def to_json(self) -> types.ObjectJsonRepr:
        """Returns the ALM setting state, the personal access token is never exported"""
        return {"id": self.id, "key": self.key, "url": self.url}
