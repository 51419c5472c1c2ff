import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from virtual_drive.constants import Constants
from virtual_drive.dictionaries import DeletedEntry
from virtual_drive.errors import EmptyError

logger = logging.getLogger("__main__")


class RecycleBin:

    def __init__(self,
                 ttl_sec: int = Constants.RECYCLE_BIN_TTL_SEC,
                 clock: Callable[[], datetime] = datetime.now):
        """
        Stack of soft-deleted files. Entries expire ttl_sec after deletion and are swept
        whenever something new is pushed.

        :param ttl_sec: Seconds a deleted file is kept for.
        :param clock: Returns the current time, swapped out in tests.
        """
        self.ttl_sec: int = ttl_sec
        self.clock: Callable[[], datetime] = clock
        self.__stack: list[DeletedEntry] = []  # top of the stack is the end of the list

    def now(self) -> datetime:
        return self.clock()

    def push(self, name: str, content: str, **details) -> DeletedEntry:
        """
        Pushes a deleted file. Extra DeletedEntry fields (type, owner, priority, path) may be given
        as keywords.
        :param name:
        :param content:
        :return: The entry that was pushed.
        """
        entry = DeletedEntry(name=name,
                             content=content,
                             deleted_at=self.now().isoformat(),
                             type=details.get("type", ""),
                             owner=details.get("owner", ""),
                             priority=details.get("priority", 0),
                             path=details.get("path", ""))
        self.push_entry(entry)
        return entry

    def push_entry(self, entry: DeletedEntry) -> None:
        self.sweep_expired()
        self.__stack.append(entry)
        logger.debug(f"{entry['name']} moved to the recycle bin.")

    def peek_top(self) -> DeletedEntry:
        if self.is_empty():
            raise EmptyError("Recycle bin is empty.")
        return self.__stack[-1]

    def pop(self) -> DeletedEntry:
        """
        Removes and returns the most recently deleted entry, the caller decides whether to restore it.
        :return:
        """
        if self.is_empty():
            raise EmptyError("Recycle bin is empty.")
        return self.__stack.pop()

    def get_timestamp(self, entry: DeletedEntry) -> datetime:
        return datetime.fromisoformat(entry["deleted_at"])

    def sweep_expired(self, now: Optional[datetime] = None, ttl_sec: Optional[int] = None) -> list[DeletedEntry]:
        """
        Removes every entry older than ttl_sec from anywhere in the stack, keeping the order of the rest.
        :param now: Defaults to the bin's clock.
        :param ttl_sec: Defaults to the bin's TTL.
        :return: The expired entries.
        """
        now = now if now is not None else self.now()
        ttl = timedelta(seconds=ttl_sec if ttl_sec is not None else self.ttl_sec)

        expired = [entry for entry in self.__stack if (now - self.get_timestamp(entry)) > ttl]
        if expired:
            self.__stack = [entry for entry in self.__stack if (now - self.get_timestamp(entry)) <= ttl]
            for entry in expired:
                logger.info(f"{entry['name']} expired from the recycle bin.")
        return expired

    def entries(self) -> list[DeletedEntry]:
        """
        Returns every entry, most recently deleted first.
        :return:
        """
        return list(reversed(self.__stack))

    def is_empty(self) -> bool:
        return len(self.__stack) == 0

    def __len__(self) -> int:
        return len(self.__stack)
