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

    Creates, reads, updates or deletes an Azure DevOps ALM setting

"""

import os
from typing import Any

from cli import options
import sonar_resources.utilities as util
from sonar_resources import errcodes, exceptions, platform, version
from sonar_resources.alm_azure import AzureAlmSetting
from sonar_resources.util import misc

TOOL_NAME = "sonar-alm-azure"


def __parse_args(desc: str) -> object:
    """Defines and parses the CLI arguments"""
    parser = options.set_common_args(desc)
    parser = options.add_operation_arg(parser, "an Azure DevOps ALM setting", (options.CREATE, options.READ, options.UPDATE, options.DELETE))
    parser = options.add_optional_arg(parser, f"-{options.KEY_SHORT}", f"--{options.KEY}", help="Key of the ALM setting")
    parser = options.add_optional_arg(parser, f"--{options.OLD_KEY}", help="Current key of the ALM setting, for --update")
    parser = options.add_optional_arg(parser, f"--{options.ALM_URL}", help="Azure DevOps collection URL")
    parser = options.add_optional_arg(
        parser, f"--{options.PAT}", default=os.getenv("AZURE_DEVOPS_PAT", None), help="Azure DevOps personal access token, default is environment variable $AZURE_DEVOPS_PAT"
    )
    parser = options.set_output_file_args(parser)
    return options.parse_and_check(parser=parser, logger_name=TOOL_NAME)


def __run(endpoint: platform.Platform, **kwargs: Any) -> dict[str, Any]:
    """Runs the requested lifecycle operation, returns the resulting ALM setting state"""
    op = kwargs[options.OPERATION]
    options.check_required(kwargs, options.KEY)
    key, url, pat = kwargs[options.KEY], kwargs[options.ALM_URL], kwargs[options.PAT]
    if op == options.CREATE:
        options.check_required(kwargs, options.ALM_URL, options.PAT)
        o = AzureAlmSetting.create(endpoint=endpoint, key=key, url=url, personal_access_token=pat)
    elif op == options.READ:
        o = AzureAlmSetting.read(endpoint=endpoint, key=key)
    elif op == options.UPDATE:
        o = AzureAlmSetting.read(endpoint=endpoint, key=kwargs[options.OLD_KEY] or key)
        o.update(key=key, url=url, personal_access_token=pat)
    else:
        o = AzureAlmSetting(endpoint=endpoint, key=key)
        o.delete()
    return o.to_json()


def main() -> None:
    """sonar-alm-azure entry point"""
    start_time = misc.start_clock()
    try:
        kwargs = options.convert_args(__parse_args("Manages an Azure DevOps ALM setting"))
        endpoint = platform.Platform(**kwargs)
        endpoint.set_user_agent(f"{TOOL_NAME} {version.PACKAGE_VERSION}")
        endpoint.verify_connection()
        options.write_json(__run(endpoint, **kwargs), kwargs[options.REPORT_FILE])
    except exceptions.SonarException as e:
        util.final_exit(e.errcode, e.message)
    except OSError as e:
        util.final_exit(errcodes.OS_ERROR, f"OS error while writing state file: {e}")

    util.final_exit(errcodes.OK, start_time=start_time)


if __name__ == "__main__":
    main()
