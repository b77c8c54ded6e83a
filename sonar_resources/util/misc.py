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

"""Miscellaneous utilities"""

from typing import Any, Iterable, Optional, Union
import datetime
import json
import re


def convert_string(value: str) -> Union[str, int, float, bool]:
    """Converts strings to corresponding types"""
    new_val: Any = value
    if not isinstance(value, str):
        return value
    if value.lower() in ("yes", "true", "on"):
        new_val = True
    elif value.lower() in ("no", "false", "off"):
        new_val = False
    else:
        try:
            new_val = int(value)
        except ValueError:
            try:
                new_val = float(value)
            except ValueError:
                pass
    return new_val


def convert_types(data: Any) -> Any:
    """Converts strings to corresponding types in a dictionary"""
    if isinstance(data, str):
        return convert_string(data)
    elif isinstance(data, dict):
        data = {k: convert_types(v) for k, v in data.items()}
    elif isinstance(data, list):
        data = [convert_types(elem) for elem in data]
    return data


def csv_to_list(string: Optional[str], separator: str = ",") -> list[str]:
    """Converts a csv string to a list"""
    if isinstance(string, (list, tuple, set)):
        return list(string)
    if not string or re.match(r"^\s*$", string):
        return []
    return [s.strip() for s in string.split(separator) if s.strip() != ""]


def unique(items: Optional[Iterable[str]]) -> list[str]:
    """Removes duplicates from a list, keeping the first occurrence order"""
    return list(dict.fromkeys(items or []))


def json_dump(jsondata: Union[list[Any], dict[str, Any]], indent: int = 3, sort_keys: bool = False) -> str:
    """JSON dump helper"""
    return json.dumps(jsondata, indent=indent, sort_keys=sort_keys, separators=(",", ": "))


def start_clock() -> datetime.datetime:
    """Returns the now timestamp"""
    return datetime.datetime.now()
