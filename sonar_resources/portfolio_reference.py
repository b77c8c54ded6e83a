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

Abstraction of the Sonar sub-portfolio by reference concept

"""

from __future__ import annotations

from http import HTTPStatus

import sonar_resources.logging as log
import sonar_resources.platform as pf
import sonar_resources.sqobject as sq
import sonar_resources.utilities as util
import sonar_resources.util.constants as c
from sonar_resources import exceptions
from sonar_resources.util import reference_helper, types


class PortfolioReference(sq.SqObject):
    """
    Abstraction of the Sonar portfolio reference concept: a portfolio included by reference in a parent portfolio
    """

    API = {c.ADD: "views/add_portfolio", c.REMOVE: "views/remove_portfolio", c.LIST: "views/portfolios"}

    def __init__(self, endpoint: pf.Platform, parent_key: str, reference_key: str) -> None:
        """Constructor, don't use - use class methods instead"""
        super().__init__(endpoint=endpoint, key=f"{parent_key}:{reference_key}")
        self.parent_key = parent_key
        self.reference_key = reference_key

    @classmethod
    def create(cls, endpoint: pf.Platform, parent_key: str, reference_key: str) -> PortfolioReference:
        """Adds an existing portfolio to the structure of a parent portfolio

        :raises ObjectNotFound: if the parent or referenced portfolio does not exist
        :raises UnexpectedStatusError: if SonarQube refuses the reference
        """
        o = cls(endpoint=endpoint, parent_key=parent_key, reference_key=reference_key)
        log.info("Creating %s", str(o))
        o.post(PortfolioReference.API[c.ADD], params=o.api_params())
        return o

    def __str__(self) -> str:
        return f"Portfolio reference '{self.key}'"

    def delete(self, ignore_missing: bool = False) -> bool:
        """Removes the reference from the parent portfolio

        :param ignore_missing: Whether a reference that is already absent (HTTP 404) is silently ignored
        :return: True if the reference was removed, False if it was already absent
        """
        log.info("Deleting %s", str(self))
        mute = (HTTPStatus.NOT_FOUND,) if ignore_missing else ()
        try:
            self.post(PortfolioReference.API[c.REMOVE], params=self.api_params(), mute=mute)
        except exceptions.ObjectNotFound:
            if not ignore_missing:
                raise
            log.warning("%s is already absent, nothing to remove", str(self))
            return False
        return True

    def api_params(self) -> types.ApiParams:
        """Returns the params to add or remove the reference"""
        return {"portfolio": self.parent_key, "reference": self.reference_key}


def candidate_references(endpoint: pf.Platform, parent_key: str) -> list[str]:
    """Returns the keys of portfolios that can be referenced by a parent portfolio, excluding the parent itself

    :raises ObjectNotFound: if the parent portfolio does not exist
    :raises DecodeError: if the API response is not as expected
    """
    log.debug("Getting portfolios that can be referenced by '%s'", parent_key)
    data = util.json_payload(endpoint.get(PortfolioReference.API[c.LIST], params={"portfolio": parent_key}), "portfolios")
    try:
        keys = [p["key"] for p in data["portfolios"]]
    except (KeyError, TypeError) as e:
        raise exceptions.DecodeError(f"Unexpected portfolio list format for '{parent_key}': {e}") from e
    return reference_helper.exclude(parent_key, keys)
