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

Exceptions raised by the sonar-resources APIs

"""
from http import HTTPStatus

from sonar_resources import errcodes


class SonarException(Exception):
    """
    sonar-resources exceptions
    """

    def __init__(self, message: str, errcode: int = errcodes.SONAR_API) -> None:
        super().__init__(message)
        self.message = message
        self.errcode = errcode

    def __str__(self) -> str:
        return f"ERROR {self.errcode}: {self.message}"


class TransportError(SonarException):
    """Network or transport failure reaching the SonarQube API"""

    def __init__(self, message: str, errcode: int = errcodes.CONNECTION_ERROR) -> None:
        super().__init__(message, errcode)


class UnexpectedStatusError(SonarException):
    """
    HTTP status of a response is not one of the statuses expected for the call
    """

    def __init__(self, method: str, url: str, status: int, message: str = "") -> None:
        if status == HTTPStatus.UNAUTHORIZED:
            errcode = errcodes.SONAR_API_AUTHENTICATION
        elif status == HTTPStatus.FORBIDDEN:
            errcode = errcodes.SONAR_API_AUTHORIZATION
        else:
            errcode = errcodes.SONAR_API
        super().__init__(f"{method} {url} returned HTTP status {status}: {message}", errcode)
        self.method = method
        self.url = url
        self.status = status


class ObjectNotFound(SonarException):
    """
    Object not found in SonarQube
    """

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message, errcodes.NO_SUCH_KEY)
        self.key = key


class DecodeError(SonarException):
    """API response body does not match the expected JSON shape"""

    def __init__(self, message: str) -> None:
        super().__init__(message, errcodes.DECODE_ERROR)


class InvalidReferenceError(SonarException):
    """
    A portfolio reference is not among the portfolios that can be referenced by a parent
    """

    def __init__(self, reference: str, parent: str = None) -> None:
        where = f" by portfolio '{parent}'" if parent else ""
        super().__init__(f"Portfolio '{reference}' can't be referenced{where}", errcodes.INVALID_REFERENCE)
        self.reference = reference
        self.parent = parent
