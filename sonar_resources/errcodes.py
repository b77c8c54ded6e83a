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

"""sonar-resources error codes, also used as CLI exit codes"""

OK = 0

# HTTP 401
SONAR_API_AUTHENTICATION = 1

# HTTP 403
SONAR_API_AUTHORIZATION = 2

# General Sonar Web API error
SONAR_API = 3

# Auth token not provided
TOKEN_MISSING = 4

# Portfolio or ALM setting key does not exist
NO_SUCH_KEY = 5

# Incorrect CLI argument
ARGS_ERROR = 10

# HTTP request timeout
HTTP_TIMEOUT = 12

# Connection error (host unreachable, DNS, TLS...)
CONNECTION_ERROR = 14

# Miscellaneous OS errors
OS_ERROR = 15

# API response body does not have the expected format
DECODE_ERROR = 17

# Portfolio reference that can't be added under a parent portfolio
INVALID_REFERENCE = 18
