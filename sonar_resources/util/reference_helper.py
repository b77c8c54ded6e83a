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

"""Helpers to compare and validate lists of portfolio references"""

from typing import Iterable, Optional

import sonar_resources.logging as log
from sonar_resources import exceptions
from sonar_resources.util import misc


def normalize(references: Optional[Iterable[str]]) -> list[str]:
    """Returns a list of references without blanks nor duplicates, in input order"""
    if isinstance(references, str):
        references = misc.csv_to_list(references)
    return misc.unique(r.strip() for r in references or [] if r and r.strip() != "")


def diff(old: Iterable[str], new: Iterable[str]) -> tuple[list[str], list[str]]:
    """Computes the references to add and to remove to go from an old to a new list of references

    :param old: Current references
    :param new: Desired references
    :return: references to add (in the order of new), references to remove (in the order of old)
    """
    old, new = misc.unique(old), misc.unique(new)
    old_set, new_set = set(old), set(new)
    to_add = [ref for ref in new if ref not in old_set]
    to_remove = [ref for ref in old if ref not in new_set]
    return to_add, to_remove


def exclude(parent: str, keys: Iterable[str]) -> list[str]:
    """Removes the parent portfolio from a list of portfolio keys, a portfolio can't reference itself"""
    return [k for k in keys if k != parent]


def validate(desired: Iterable[str], eligible: Iterable[str], parent: Optional[str] = None) -> None:
    """Verifies that all desired references are eligible

    :raises InvalidReferenceError: for the first desired reference that is not eligible
    """
    eligible_set = set(eligible)
    for ref in desired:
        if ref not in eligible_set:
            log.error("Portfolio '%s' is not among the portfolios that can be referenced by '%s'", ref, parent)
            raise exceptions.InvalidReferenceError(ref, parent)
