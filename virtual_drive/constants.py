from dataclasses import dataclass


@dataclass
class Constants:
    DEBUG = False

    ROOT_NAME = "root"
    PATH_SEPARATOR = "/"

    HEAP_CAPACITY = 100
    METADATA_BUCKETS = 100
    RECENT_CAPACITY = 5
    MAX_SHARES_PER_USER = 100

    MIN_PRIORITY = 0
    MAX_PRIORITY = 100

    RECYCLE_BIN_TTL_SEC = 7 * 24 * 60 * 60  # a week in seconds

    ROLES = ("admin", "editor", "viewer")
    PERMISSIONS = ("read", "write", "execute")

    PASSWORD_SALT_BYTES = 16
    LOG_FILENAME = "virtual_drive.log"
