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

Cmd line options

"""

import os
import sys
import json
from argparse import ArgumentParser
from typing import Optional, Any

import sonar_resources.logging as log
from sonar_resources import errcodes, version, exceptions
from sonar_resources.util import conf_mgr, misc
import sonar_resources.utilities as sutil

# Command line options

URL_SHORT = "u"
URL = "url"

TOKEN_SHORT = "t"
TOKEN = "token"

ORG_SHORT = "o"
ORG = "organization"

VERBOSE_SHORT = "v"
VERBOSE = "verbosity"

HTTP_TIMEOUT = "httpTimeout"
CERT_SHORT = "c"
CERT = "clientCert"

REPORT_FILE_SHORT = "f"
REPORT_FILE = "file"

LOGFILE_SHORT = "l"
LOGFILE = "logfile"

KEY_SHORT = "k"
KEY = "key"
OLD_KEY = "oldKey"

REFERENCES_SHORT = "r"
REFERENCES = "references"
OLD_REFERENCES = "oldReferences"

RESOURCE_ID = "id"

ALM_URL = "almUrl"
PAT = "pat"

CONFIG = "config"

OPERATION = "operation"
CREATE = "create"
READ = "read"
UPDATE = "update"
DELETE = "delete"
IMPORT = "import"

MULTI_VALUED_OPTS = (REFERENCES, OLD_REFERENCES)


class ArgumentsError(exceptions.SonarException):
    """
    Arguments error
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, errcodes.ARGS_ERROR)


def __convert_args_to_lists(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Converts arguments that may be CSV into lists"""
    for argname in MULTI_VALUED_OPTS:
        if kwargs.get(argname) is not None:
            kwargs[argname] = misc.csv_to_list(kwargs[argname])
    return kwargs


def parse_and_check(parser: ArgumentParser, logger_name: Optional[str] = None, verify_token: bool = True) -> object:
    """Parses arguments, applies default settings and perform common environment checks"""
    try:
        args = parser.parse_args()
    except SystemExit:
        sys.exit(errcodes.ARGS_ERROR)

    kwargs = vars(args)
    log.set_logger(filename=kwargs[LOGFILE], logger_name=logger_name)
    log.set_debug_level(kwargs.pop(VERBOSE))
    log.info("sonar-resources version %s", version.PACKAGE_VERSION)

    if kwargs.pop(CONFIG, False):
        conf_mgr.configure()
        sys.exit(errcodes.OK)
    if OPERATION in kwargs and kwargs[OPERATION] is None:
        raise ArgumentsError("An operation option (--create, --read, --update, --delete...) is required")
    kwargs = __convert_args_to_lists(kwargs=kwargs)
    log.debug("CLI arguments = %s", misc.json_dump(sutil.redact_tokens(kwargs)))
    if sutil.is_sonarcloud_url(kwargs[URL]) and kwargs[ORG] is None:
        raise ArgumentsError(f"Organization (-{ORG_SHORT}) option is mandatory for SonarQube Cloud")
    if verify_token:
        sutil.check_token(args.token, sutil.is_sonarcloud_url(kwargs[URL]))
    return args


def add_optional_arg(parser: ArgumentParser, *args: Any, **kwargs: Any) -> ArgumentParser:
    """Adds an optional argument to the parser"""
    kwargs = {"required": False, "default": None} | kwargs
    if kwargs.get("action") == "store_true":
        kwargs["default"] = False
    parser.add_argument(*args, **kwargs)
    return parser


def add_operation_arg(parser: ArgumentParser, topic: str, operations: tuple[str, ...]) -> ArgumentParser:
    """Adds the mutually exclusive lifecycle operation options"""
    group = parser.add_mutually_exclusive_group()
    for op in operations:
        group.add_argument(f"--{op}", dest=OPERATION, action="store_const", const=op, help=f"{op.capitalize()} {topic}")
    return parser


def set_common_args(desc: str) -> ArgumentParser:
    """Parses options common to all sonar-resources scripts"""
    parser = ArgumentParser(description=desc)
    args = [f"-{TOKEN_SHORT}", f"--{TOKEN}"]
    help_str = """Token to authenticate to SonarQube, default is environment variable $SONAR_TOKEN
        - Unauthenticated usage is not possible"""
    parser = add_optional_arg(parser, *args, default=os.getenv("SONAR_TOKEN", None), help=help_str)

    args = [f"-{URL_SHORT}", f"--{URL}"]
    help_str = """Root URL of the SonarQube Server or Cloud platform,
        default is environment variable $SONAR_HOST_URL or http://localhost:9000 if not set"""
    parser = add_optional_arg(parser, *args, help=help_str, default=os.getenv("SONAR_HOST_URL", "http://localhost:9000"))

    args = [f"-{ORG_SHORT}", f"--{ORG}"]
    parser = add_optional_arg(parser, *args, help="Organization when using SonarQube Cloud")

    args = [f"-{VERBOSE_SHORT}", f"--{VERBOSE}"]
    parser = add_optional_arg(parser, *args, choices=["WARN", "INFO", "DEBUG"], default="INFO", help="Logging verbosity level")

    args = [f"-{CERT_SHORT}", f"--{CERT}"]
    parser = add_optional_arg(parser, *args, help="Optional client certificate file (as .pem file)")

    args = [f"--{HTTP_TIMEOUT}"]
    parser = add_optional_arg(parser, *args, type=int, help="HTTP timeout for requests to SonarQube (in seconds), http.timeout setting by default")

    args = [f"-{LOGFILE_SHORT}", f"--{LOGFILE}"]
    parser = add_optional_arg(parser, *args, help="Define location of logfile, logs are only sent to stderr if not set")

    help_str = "Creates the $HOME/.sonar-resources.properties configuration file, or outputs it to stdout if it already exists"
    parser = add_optional_arg(parser, f"--{CONFIG}", action="store_true", help=help_str)
    return parser


def set_output_file_args(parser: ArgumentParser) -> ArgumentParser:
    """Sets the output file CLI options"""
    parser.add_argument(f"-{REPORT_FILE_SHORT}", f"--{REPORT_FILE}", required=False, default=None, help="JSON state file, stdout by default")
    return parser


def convert_args(args: object) -> dict[str, Any]:
    """Converts CLI args into kwargs compatible with a platform"""
    kwargs = vars(args).copy()
    kwargs["org"] = kwargs.pop(ORG, None)
    kwargs["cert_file"] = kwargs.pop(CERT, None)
    kwargs["http_timeout"] = kwargs.pop(HTTP_TIMEOUT, None)
    return kwargs


def check_required(kwargs: dict[str, Any], *required: str) -> None:
    """Verifies that options required by the requested operation are present"""
    missing = [opt for opt in required if kwargs.get(opt) in (None, "")]
    if missing:
        raise ArgumentsError(f"Option(s) {', '.join('--' + m for m in missing)} required for --{kwargs[OPERATION]}")


def write_json(data: dict[str, Any], file: Optional[str] = None) -> None:
    """Writes JSON data to a file or to stdout"""
    text = json.dumps(data, indent=3, separators=(",", ": "))
    if file is None or file == "-":
        print(text)
        return
    log.info("Writing state to file '%s'", file)
    with open(file, mode="w", encoding="utf-8") as fd:
        print(text, file=fd)
