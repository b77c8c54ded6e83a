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

"""Utilities for sonar-resources"""

from typing import Any, Optional
import sys
import re
import json
import datetime
import requests

import sonar_resources.logging as log
from sonar_resources import errcodes, exceptions


def token_type(token: str) -> str:
    """Returns the type of token"""
    if token[0:4] == "sqa_":
        return "global-analysis"
    if token[0:4] == "sqp_":
        return "project-analysis"
    return "user"


def check_token(token: Optional[str], is_sonarcloud: bool = False) -> None:
    """Verifies if a proper user token has been provided"""
    if token is None:
        raise exceptions.SonarException("Token is missing (Argument -t/--token)", errcodes.TOKEN_MISSING)
    if not is_sonarcloud and token_type(token) != "user":
        raise exceptions.SonarException(
            f"The provided token {redacted_token(token)} is a {token_type(token)} token, a user token is required",
            errcodes.SONAR_API_AUTHENTICATION,
        )


def redacted_token(token: Optional[str]) -> str:
    """Redacts a token for security (before printing)"""
    if token is None:
        return "-"
    if token[0:4] in ("squ_", "sqa_", "sqp_"):
        return re.sub(r"(......).*(..)", r"\1***\2", token)
    else:
        return re.sub(r"(..).*(..)", r"\1***\2", token)


def redact_tokens(data: dict[str, Any], keys: tuple[str, ...] = ("token", "pat", "personalAccessToken")) -> dict[str, Any]:
    """Redacts the values of token-like keys of a dict"""
    return {k: redacted_token(v) if k in keys and isinstance(v, str) else v for k, v in data.items()}


def sonar_error(response: requests.Response) -> str:
    """Formats the error returned in a Sonar HTTP response"""
    try:
        json_res = json.loads(response.text)
        if "errors" in json_res:
            return " | ".join([e["msg"] for e in json_res["errors"]])
        elif "message" in json_res:
            # API v2 format
            return json_res["message"]
    except (json.decoder.JSONDecodeError, TypeError, KeyError):
        pass
    return ""


def json_payload(response: requests.Response, *fields: str) -> dict[str, Any]:
    """Decodes a JSON API response and verifies the presence of mandatory fields

    :raises DecodeError: if the body is not JSON, not an object or misses a field
    """
    try:
        data = json.loads(response.text)
    except (json.decoder.JSONDecodeError, TypeError) as e:
        raise exceptions.DecodeError(f"Response of {response.url} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise exceptions.DecodeError(f"Response of {response.url} is not a JSON object")
    missing = [f for f in fields if f not in data]
    if missing:
        raise exceptions.DecodeError(f"Response of {response.url} misses field(s) {', '.join(missing)}")
    return data


def is_sonarcloud_url(url: str) -> bool:
    """Returns whether an URL is the SonarQube Cloud URL

    :param str url: The URL to examine
    :return: Whether the URL is the SonarQube Cloud URL (in any form)
    """
    return url.rstrip("/").lower().endswith("sonarcloud.io")


def final_exit(exit_code: int, err_msg: Optional[str] = None, start_time: Optional[datetime.datetime] = None) -> None:
    """Exits with an exit code and an error message if exit code is not OK"""
    if exit_code != errcodes.OK:
        log.critical(err_msg)
        print(f"FATAL: {err_msg}", file=sys.stderr)
    if start_time:
        log.info("Total execution time: %s", str(datetime.datetime.now() - start_time))
    sys.exit(exit_code)
