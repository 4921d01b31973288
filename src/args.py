"""Argument parsing functionality for pfcheck."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="pfcheck",
        description=(
            "pfcheck - list the direct dependencies of every module in a Puppetfile"
        ),
        add_help=True,
    )

    parser.add_argument("-c", "--credentials-file",
                        dest="CREDENTIALS_FILE",
                        help="Credentials file with 'user:' and 'pass:' lines "
                             f"(default: '{Constants.CREDENTIALS_FILE}' in the current directory)",
                        action="store", type=str,
                        default=Constants.CREDENTIALS_FILE)
    parser.add_argument("-p", "--puppetfile",
                        dest="PUPPETFILE",
                        help=f"Puppetfile to check (default: '{Constants.PUPPETFILE}' in the current directory)",
                        action="store", type=str,
                        default=Constants.PUPPETFILE)
    parser.add_argument("--forge",
                        dest="FORGE",
                        help="Default forge location, overridden by a 'forge' line in the Puppetfile",
                        action="store", type=str)

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (JSON or CSV)",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or csv). If not specified, inferred from --output extension; defaults to json.",
                        action="store",
                        type=str.lower,
                        choices=['json', 'csv'])

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help=f"HTTP request timeout in seconds (default: {Constants.REQUEST_TIMEOUT})",
                        action="store",
                        type=int)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not print the dependency report to the console.",
                        action="store_true")

    parser.add_argument("--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
