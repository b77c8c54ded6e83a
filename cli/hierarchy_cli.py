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

    Creates, reads, updates or deletes the references of a parent portfolio

"""

from typing import Any

from cli import options
import sonar_resources.logging as log
import sonar_resources.utilities as util
from sonar_resources import errcodes, exceptions, platform, version
from sonar_resources import portfolio_hierarchy as ph
from sonar_resources.util import misc

TOOL_NAME = "sonar-portfolio-hierarchy"

_OPERATIONS = (options.CREATE, options.READ, options.UPDATE, options.DELETE, options.IMPORT)


def __parse_args(desc: str) -> object:
    """Defines and parses the CLI arguments"""
    parser = options.set_common_args(desc)
    parser = options.add_operation_arg(parser, "a portfolio hierarchy", _OPERATIONS)
    parser = options.add_optional_arg(parser, f"-{options.KEY_SHORT}", f"--{options.KEY}", help="Key of the parent portfolio")
    parser = options.add_optional_arg(
        parser, f"-{options.REFERENCES_SHORT}", f"--{options.REFERENCES}", help="Comma separated keys of the portfolios to reference"
    )
    parser = options.add_optional_arg(parser, f"--{options.OLD_KEY}", help="Current key of the parent portfolio, for --update")
    parser = options.add_optional_arg(
        parser, f"--{options.OLD_REFERENCES}", help="Current comma separated references, for --update and --delete"
    )
    parser = options.add_optional_arg(parser, f"--{options.RESOURCE_ID}", help="Portfolio hierarchy id, for --import")
    parser = options.set_output_file_args(parser)
    return options.parse_and_check(parser=parser, logger_name=TOOL_NAME)


def __run(endpoint: platform.Platform, **kwargs: Any) -> dict[str, Any]:
    """Runs the requested lifecycle operation, returns the resulting hierarchy state"""
    op = kwargs[options.OPERATION]
    key, refs = kwargs[options.KEY], kwargs[options.REFERENCES]
    if op == options.IMPORT:
        options.check_required(kwargs, options.RESOURCE_ID)
        return ph.PortfolioHierarchy.import_object(endpoint, kwargs[options.RESOURCE_ID]).to_json()
    options.check_required(kwargs, options.KEY)
    if op == options.CREATE:
        options.check_required(kwargs, options.REFERENCES)
        o = ph.PortfolioHierarchy.create(endpoint=endpoint, key=key, references=refs)
    elif op == options.READ:
        o = ph.PortfolioHierarchy.read(endpoint=endpoint, key=key)
    elif op == options.UPDATE:
        options.check_required(kwargs, options.OLD_REFERENCES)
        o = ph.PortfolioHierarchy(endpoint=endpoint, key=kwargs[options.OLD_KEY] or key, references=kwargs[options.OLD_REFERENCES])
        o.update(key=key, references=refs)
    else:
        options.check_required(kwargs, options.OLD_REFERENCES if kwargs[options.OLD_REFERENCES] else options.REFERENCES)
        o = ph.PortfolioHierarchy(endpoint=endpoint, key=key, references=kwargs[options.OLD_REFERENCES] or refs)
        o.delete()
    return o.to_json()


def main() -> None:
    """sonar-portfolio-hierarchy entry point"""
    start_time = misc.start_clock()
    try:
        kwargs = options.convert_args(__parse_args("Manages the portfolios referenced by a parent portfolio"))
        endpoint = platform.Platform(**kwargs)
        endpoint.set_user_agent(f"{TOOL_NAME} {version.PACKAGE_VERSION}")
        endpoint.verify_connection()
        state = __run(endpoint, **kwargs)
        log.debug("Resulting state: %s", misc.json_dump(state))
        options.write_json(state, kwargs[options.REPORT_FILE])
    except exceptions.SonarException as e:
        util.final_exit(e.errcode, e.message)
    except OSError as e:
        util.final_exit(errcodes.OS_ERROR, f"OS error while writing state file: {e}")

    util.final_exit(errcodes.OK, start_time=start_time)


if __name__ == "__main__":
    main()
