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

Abstraction of a portfolio hierarchy: a parent portfolio and the portfolios it includes by reference

The hierarchy has a declarative lifecycle: create, read, update and delete bring the references
of the parent portfolio in SonarQube in line with a desired list of portfolio keys.
Multi-reference operations stop at the first failing API call and do not undo the calls already made:
after such a failure the hierarchy in SonarQube may be partially updated, refresh() shows its real state.

"""

from __future__ import annotations
from typing import Iterable, Optional

from http import HTTPStatus

import sonar_resources.logging as log
import sonar_resources.platform as pf
import sonar_resources.sqobject as sq
import sonar_resources.utilities as util
import sonar_resources.util.constants as c
from sonar_resources import errcodes, exceptions
from sonar_resources.portfolio_reference import PortfolioReference, candidate_references
from sonar_resources.util import reference_helper, types


def resource_id(key: str) -> str:
    """Returns the id of the hierarchy resource of a parent portfolio"""
    return f"{key}{c.HIERARCHY_ID_SUFFIX}"


def key_from_id(res_id: str) -> str:
    """Returns the parent portfolio key from a hierarchy resource id, reverse of resource_id()"""
    if not res_id or not res_id.endswith(c.HIERARCHY_ID_SUFFIX) or res_id == c.HIERARCHY_ID_SUFFIX:
        raise exceptions.SonarException(f"'{res_id}' is not a portfolio hierarchy id", errcodes.ARGS_ERROR)
    return res_id[: -len(c.HIERARCHY_ID_SUFFIX)]


class PortfolioHierarchy(sq.SqObject):
    """
    Abstraction of the references of a parent portfolio
    """

    API = {c.READ: "views/show"}

    def __init__(self, endpoint: pf.Platform, key: str, references: Optional[Iterable[str]] = None) -> None:
        """Constructor, don't use - use class methods instead"""
        super().__init__(endpoint=endpoint, key=key)
        self.references: list[str] = reference_helper.normalize(references)  #: Keys of referenced portfolios
        self.id: Optional[str] = None  #: Resource id, None when the resource does not exist

    @classmethod
    def create(cls, endpoint: pf.Platform, key: str, references: Iterable[str]) -> PortfolioHierarchy:
        """Adds references to a parent portfolio

        :param endpoint: Reference to the SonarQube platform
        :param key: Parent portfolio key
        :param references: Keys of the portfolios to reference, added in that order
        :raises InvalidReferenceError: if a reference can't be added, no reference is added then
        :raises SonarException: if adding a reference failed, references added before are kept
        :return: The hierarchy, as read back from SonarQube after creation
        """
        o = cls(endpoint=endpoint, key=key, references=references)
        log.info("Creating %s with references %s", str(o), str(o.references))
        reference_helper.validate(o.references, candidate_references(endpoint, key), parent=key)
        _add_references(endpoint, key, o.references)
        o.id = resource_id(key)
        return o.refresh()

    @classmethod
    def read(cls, endpoint: pf.Platform, key: str) -> PortfolioHierarchy:
        """Reads the hierarchy of a parent portfolio

        :raises ObjectNotFound: if the parent portfolio does not exist
        """
        return cls(endpoint=endpoint, key=key).refresh()

    @classmethod
    def import_object(cls, endpoint: pf.Platform, res_id: str) -> PortfolioHierarchy:
        """Reads the hierarchy corresponding to a resource id"""
        return cls.read(endpoint=endpoint, key=key_from_id(res_id))

    def __str__(self) -> str:
        return f"portfolio hierarchy '{self.key}'"

    def refresh(self) -> PortfolioHierarchy:
        """Reads the current references of the portfolio from SonarQube

        :raises ObjectNotFound: if the parent portfolio does not exist
        """
        try:
            resp = self.get(PortfolioHierarchy.API[c.READ], params={"key": self.key}, mute=(HTTPStatus.NOT_FOUND,))
        except exceptions.ObjectNotFound as e:
            raise exceptions.ObjectNotFound(self.key, f"Portfolio '{self.key}' not found") from e
        data = util.json_payload(resp, "key")
        self.reload(data)
        self.key = data["key"]
        self.references = _references(data.get("subViews") or [])
        self.id = resource_id(self.key)
        return self

    def update(self, key: Optional[str] = None, references: Optional[Iterable[str]] = None) -> PortfolioHierarchy:
        """Updates the hierarchy to a new parent key and/or new references

        When the parent key changes, all references are removed from the former parent
        and the hierarchy is created again under the new parent.
        Otherwise removed references are removed first, then new references are added.

        :param key: New parent portfolio key, defaults to unchanged
        :param references: New references, defaults to unchanged
        :raises InvalidReferenceError: if a new reference can't be added, nothing is changed then
        :return: self, refreshed after the update
        """
        new_key = self.key if key is None else key
        new_refs = self.references if references is None else reference_helper.normalize(references)
        if new_key == self.key and set(new_refs) == set(self.references):
            log.debug("%s: No change to apply", str(self))
            self.id = resource_id(self.key)
            return self
        reference_helper.validate(new_refs, candidate_references(self.endpoint, new_key), parent=new_key)

        if new_key != self.key:
            log.info("Moving %s with references %s to portfolio '%s'", str(self), str(self.references), new_key)
            _remove_references(self.endpoint, self.key, self.references)
            new_hierarchy = PortfolioHierarchy.create(endpoint=self.endpoint, key=new_key, references=new_refs)
            self.key, self.references, self.id = new_hierarchy.key, new_hierarchy.references, new_hierarchy.id
            self.sq_json = new_hierarchy.sq_json
            return self

        to_add, to_remove = reference_helper.diff(self.references, new_refs)
        log.info("Updating %s: removing references %s, adding references %s", str(self), str(to_remove), str(to_add))
        _remove_references(self.endpoint, self.key, to_remove)
        _add_references(self.endpoint, self.key, to_add)
        return self.refresh()

    def delete(self) -> bool:
        """Removes all known references of the portfolio

        The last known references are removed, references added outside of this object are not.
        With the delete.ignoreMissing setting, references already absent are not an error.

        :return: True
        """
        log.info("Deleting %s, removing references %s", str(self), str(self.references))
        _remove_references(self.endpoint, self.key, self.references, ignore_missing=self.endpoint.setting(c.DELETE_IGNORE_MISSING))
        self.id = None
        return True

    def to_json(self) -> types.ObjectJsonRepr:
        """Returns the hierarchy state JSON representation"""
        return {"id": self.id, "key": self.key, "references": list(self.references)}


def _references(sub_views: list[types.ApiPayload]) -> list[str]:
    """Returns the keys of portfolios referenced in a list of sub views, local sub portfolios are not references"""
    if not isinstance(sub_views, list):
        raise exceptions.DecodeError(f"Unexpected sub views format {sub_views}")
    refs = []
    for data in sub_views:
        try:
            if data.get("qualifier", c.PORTFOLIO_QUALIFIER) == c.PORTFOLIO_QUALIFIER:
                refs.append(data.get("originalKey", data["key"]))
        except (KeyError, AttributeError) as e:
            raise exceptions.DecodeError(f"Unexpected sub view format {data}") from e
    return reference_helper.normalize(refs)


def _add_references(endpoint: pf.Platform, key: str, references: list[str]) -> None:
    """Adds references one by one, stops at first failure"""
    done = []
    for ref in references:
        try:
            PortfolioReference.create(endpoint=endpoint, parent_key=key, reference_key=ref)
        except exceptions.SonarException:
            if done:
                log.error("Adding references to '%s' aborted at '%s', references %s were already added", key, ref, str(done))
            raise
        done.append(ref)


def _remove_references(endpoint: pf.Platform, key: str, references: list[str], ignore_missing: bool = False) -> None:
    """Removes references one by one, stops at first failure"""
    done = []
    for ref in references:
        try:
            PortfolioReference(endpoint=endpoint, parent_key=key, reference_key=ref).delete(ignore_missing=ignore_missing)
        except exceptions.SonarException:
            if done:
                log.error("Removing references from '%s' aborted at '%s', references %s were already removed", key, ref, str(done))
            raise
        done.append(ref)
