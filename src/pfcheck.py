"""pfcheck - direct dependency report for the modules in a Puppetfile.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from constants import Constants, ExitCodes
from common.credentials import load_credentials
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from puppetfile.errors import CredentialsError, PuppetfileError, PuppetfileUnreadableError
from puppetfile.loader import Puppetfile
from args import parse_args
from cli_config import apply_cli_overrides
import report


def _output_format(args):
    """Explicit --format wins, then the --output extension, then json."""
    if getattr(args, "OUTPUT_FORMAT", None):
        return args.OUTPUT_FORMAT.lower()
    if args.OUTPUT.lower().endswith(".csv"):
        return "csv"
    return "json"


def _setup_logging(args):
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging(getattr(args, "LOG_FILE", None))


def run(args):
    """Load credentials and Puppetfile, resolve all modules and emit output.

    Returns:
        list: Resolved ModuleRecord instances.
    """
    puppetfile_path = os.path.abspath(os.path.expanduser(args.PUPPETFILE))
    credentials_path = os.path.abspath(os.path.expanduser(args.CREDENTIALS_FILE))

    credentials = load_credentials(credentials_path)
    pf = Puppetfile(puppetfile_path, credentials)
    modules = pf.load()

    if not args.QUIET:
        sys.stdout.write(report.render_text(modules))

    if getattr(args, "OUTPUT", None):
        if _output_format(args) == "csv":
            report.export_csv(modules, args.OUTPUT)
        else:
            report.export_json(modules, args.OUTPUT)
    return modules


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    _setup_logging(args)
    apply_cli_overrides(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        run(args)
    except (CredentialsError, PuppetfileUnreadableError) as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except PuppetfileError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.VALIDATION_ERROR.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
