"""Constants used throughout dockerfixture."""

from ipaddress import IPv4Address


# Address handed out when no address was (or could be) queried
UNSPECIFIED_IP = IPv4Address("0.0.0.0")

# Readiness polling defaults
DEFAULT_CHECK_INTERVAL = 1.0  # seconds
DEFAULT_MAX_CHECKS = 10
DEFAULT_MESSAGE_TIMEOUT = 30.0  # seconds
DEFAULT_MESSAGE_CHECK_INTERVAL = 0.5  # seconds

# Container states reported by the daemon that can never become ready again
TERMINAL_STATES = ("exited", "dead")

# Container labelling
FIXTURE_LABEL = "dockerfixture"
CONTAINER_PREFIX = "dockerfixture"

# Configuration
DATA_DIR_NAME = ".dockerfixture"
CONFIG_FILE_NAME = "fixture_config.json"
ENV_PREFIX = "DOCKERFIXTURE_"
