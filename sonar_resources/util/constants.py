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

""" sonar-resources constants """

CREATE = "CREATE"
READ = "READ"
UPDATE = "UPDATE"
DELETE = "DELETE"
LIST = "LIST"
ADD = "ADD"
REMOVE = "REMOVE"

# Portfolio qualifiers in api/views/show subViews
PORTFOLIO_QUALIFIER = "VW"
SUB_PORTFOLIO_QUALIFIER = "SVW"

# Suffix of portfolio hierarchy resource ids
HIERARCHY_ID_SUFFIX = "-parent"

ALM_AZURE = "azure"

# Configuration settings keys
HTTP_TIMEOUT = "http.timeout"
DELETE_IGNORE_MISSING = "delete.ignoreMissing"
DEFAULT_HTTP_TIMEOUT = 10
