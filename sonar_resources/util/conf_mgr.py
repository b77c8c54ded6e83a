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
"""Utility to manage configuration files"""

import os
from pathlib import Path
from typing import Any, Optional, Union

import jprops

import sonar_resources.logging as log
from sonar_resources.util import misc
from sonar_resources.util import constants as c

CONFIG_NAME = "sonar-resources"

_DEFAULTS = {c.HTTP_TIMEOUT: c.DEFAULT_HTTP_TIMEOUT, c.DELETE_IGNORE_MISSING: True}


def _load_properties_file(file: Union[str, Path]) -> dict[str, Any]:
    """Loads a properties file"""
    with open(file, encoding="utf-8") as fp:
        log.info("Loading properties config file %s", file)
        return jprops.load_properties(fp) or {}


def config_files(filename: str = f"{CONFIG_NAME}.properties") -> tuple[Path, ...]:
    """Returns the config files, by increasing order of priority"""
    return (Path(__file__).parent / filename, Path.home() / f".{filename}", Path.cwd() / f".{filename}")


def load(filename: str = f"{CONFIG_NAME}.properties") -> dict[str, Any]:
    """Loads the configuration, packaged defaults first, then the user home file, then the current directory file"""
    settings = {}
    for file in config_files(filename):
        try:
            settings |= _load_properties_file(file)
        except FileNotFoundError:
            pass
        except PermissionError:
            log.warning("Insufficient permissions to open file %s, configuration will be skipped", file)
    return _DEFAULTS | misc.convert_types(settings)


def get(settings: Optional[dict[str, Any]], key: str) -> Any:
    """Gets a setting value, or its default if not set"""
    if settings is None:
        settings = load()
    return settings.get(key, _DEFAULTS.get(key))


def configure(config_name: str = CONFIG_NAME) -> None:
    """Writes the default config file in the user home directory, or to stdout if it already exists"""
    template_file = Path(__file__).parent / f"{config_name}.properties"
    with open(template_file, "r", encoding="utf-8") as fh:
        text = fh.read()

    config_file = Path.home() / f".{config_name}.properties"
    if os.path.isfile(config_file):
        log.info("Config file '%s' already exists, sending configuration to stdout", config_file)
        print(text)
    else:
        log.info("Creating file '%s'", config_file)
        with open(config_file, "w", encoding="utf-8") as fh:
            print(text, file=fh)
