import argparse
import logging
from sys import stdout

from virtual_drive.constants import Constants
from virtual_drive.dictionaries import DeletedEntry, MetadataRecord, ShareGrant
from virtual_drive.drive import Drive


def handle_terminal(argv: list[str] | None = None) -> tuple[bool, dict]:
    """
    Parses the command line.
    :param argv: Arguments to parse, defaults to sys.argv.
    :return: verbose, and the keyword arguments to build the Drive with.
    """
    parser = argparse.ArgumentParser(description="In-memory drive with versions, recycle bin and sharing.")
    parser.add_argument("--heap-capacity", type=int, required=False, default=Constants.HEAP_CAPACITY,
                        help="How many files the priority heap can hold.")
    parser.add_argument("--recent-capacity", type=int, required=False, default=Constants.RECENT_CAPACITY,
                        help="How many recently used files are remembered.")
    parser.add_argument("--recycle-ttl-days", type=float, required=False,
                        default=Constants.RECYCLE_BIN_TTL_SEC / (24 * 60 * 60),
                        help="Days a deleted file stays in the recycle bin.")
    parser.add_argument("--verbose", action="store_true", required=False, default=False,
                        help="If logs should be verbose.")
    parser.add_argument("-v", action="store_true", required=False, default=False,
                        help="If logs should be verbose.")

    args = parser.parse_args(argv)

    if args.heap_capacity < 1 or args.recent_capacity < 1:
        parser.error("Capacities must be at least 1.")
    if args.recycle_ttl_days < 0:
        parser.error("--recycle-ttl-days cannot be negative.")

    VERBOSE: bool = args.v or args.verbose
    drive_settings = {
        "heap_capacity": args.heap_capacity,
        "recent_capacity": args.recent_capacity,
        "recycle_ttl_sec": int(args.recycle_ttl_days * 24 * 60 * 60),
    }
    return VERBOSE, drive_settings


def create_logger(verbose: bool, filename: str = Constants.LOG_FILENAME) -> logging.Logger:
    """
    Logs to the console and to a fresh log file, at DEBUG when verbose or Constants.DEBUG is set.
    :param verbose:
    :param filename: Truncated before logging starts.
    :return: The "__main__" logger every module writes to.
    """
    level = logging.DEBUG if verbose or Constants.DEBUG else logging.INFO
    open(filename, "w").close()
    logging.basicConfig(filename=filename, level=level, format="%(asctime)s [%(levelname)s] %(message)s")

    console = logging.StreamHandler(stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"))

    logger = logging.getLogger("__main__")
    logger.addHandler(console)
    return logger


def initialise_drive(drive_settings: dict, logger=None) -> Drive:
    if logger:
        logger.info(f"Initialising drive with {drive_settings}.")
    return Drive(**drive_settings)


def format_metadata(record: MetadataRecord) -> list[str]:
    return [
        f"Name: {record['name']}",
        f"Type: {record['type']}",
        f"Owner: {record['owner']}",
        f"Size: {record['size']}",
        f"Date: {record['date']}",
    ]


def format_deleted(entry: DeletedEntry) -> str:
    return f"{entry['name']} - {entry['content']} (deleted {entry['deleted_at']} from {entry['path']})"


def format_grant(grant: ShareGrant) -> str:
    return f"{grant['grantor']} -> {grant['recipient']}: {grant['file']} ({grant['permission']})"
