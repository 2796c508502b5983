"""Constants used in the project."""

from enum import Enum


class DedupModes(Enum):
    """Duplicate handling when checksumming a revision set.

    Args:
        Enum (string): Duplicate handling modes.
    """

    IDENTITY = "identity"
    VALUE = "value"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    DEFAULT_LOG_LEVEL = "INFO"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

    ENV_LOG_LEVEL = "REVLIB_LOG_LEVEL"
    ENV_CONFIG = "REVLIB_CONFIG"
    CONFIG_SECTION = "revlib"

    DEFAULT_STRATEGY = "highest"
    DEFAULT_DEDUP = DedupModes.IDENTITY.value

    # Digest used for multi-member revision sets
    CHECKSUM_ALGORITHM = "sha1"
