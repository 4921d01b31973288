"""Constants used in the project."""

import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    VALIDATION_ERROR = 3


class ModuleSources(Enum):
    """Sources a Puppetfile module can be resolved from.

    Args:
        Enum (string): Source tags used in logs and exports.
    """

    FORGE = "forge"
    GIT = "git"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEFAULT_FORGE = "forgeapi.puppetlabs.com"
    FORGE_RELEASES_PATH = "/v3/releases/"
    FORGE_MODULES_PATH = "/v3/modules/"
    LATEST = "latest"
    DEFAULT_REF = "master"
    METADATA_FILE = "metadata.json"
    FIXTURES_FILE = ".fixtures.yml"
    PUPPETFILE = "Puppetfile"
    CREDENTIALS_FILE = "options"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    USER_AGENT = "pfcheck/0.1.0"
    TITLE_PADDING = 5
    SEPARATOR = "-------------------------------------------------"

    ENV_LOG_LEVEL = "PFCHECK_LOG_LEVEL"
    ENV_CONFIG = "PFCHECK_CONFIG"
    CONFIG_LOCATIONS = [
        "pfcheck.yml",
        os.path.join("~", ".config", "pfcheck", "pfcheck.yml"),
    ]


def _config_candidates(path=None):
    """Yield config file locations in precedence order."""
    if path:
        yield path
        return
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        yield env_path
    for location in Constants.CONFIG_LOCATIONS:
        yield os.path.expanduser(location)


def _load_yaml_config(path=None):
    """Load the first readable YAML config file.

    Args:
        path (str, optional): Explicit config path; disables the default search.

    Returns:
        dict: Parsed config mapping, or {} when nothing was found.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    for candidate in _config_candidates(path):
        if not os.path.isfile(candidate):
            if path:
                logger.warning("Config file not found: %s", candidate)
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Failed to load config %s: %s", candidate, exc)
            continue
        if isinstance(data, dict):
            logger.debug("Loaded config from %s", candidate)
            return data
    return {}


def apply_config(cfg):
    """Apply a parsed config mapping onto Constants.

    Recognised keys: forge.default, http.request_timeout, http.user_agent.
    Unknown keys are ignored.
    """
    if not isinstance(cfg, dict):
        return
    forge_cfg = cfg.get("forge")
    if isinstance(forge_cfg, dict) and forge_cfg.get("default"):
        Constants.DEFAULT_FORGE = str(forge_cfg["default"])
    http_cfg = cfg.get("http")
    if isinstance(http_cfg, dict):
        timeout = http_cfg.get("request_timeout")
        if timeout is not None:
            try:
                Constants.REQUEST_TIMEOUT = int(timeout)
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid http.request_timeout: %r", timeout)
        if http_cfg.get("user_agent"):
            Constants.USER_AGENT = str(http_cfg["user_agent"])
