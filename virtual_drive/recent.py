import logging

from virtual_drive.constants import Constants
from virtual_drive.interfaces import IFileIndex

logger = logging.getLogger("__main__")


class RecentFilesQueue(IFileIndex):

    def __init__(self, queue_size: int = Constants.RECENT_CAPACITY):
        """
        Initialises the queue with a given maximum size.
        Items are file names, the front of the queue is the least recently used one.
        :param queue_size:
        """
        if queue_size < 1:
            raise ValueError("Recent files queue size must be at least 1.")
        self.__items: list[str] = []
        self.__max_size = queue_size

    def touch(self, name: str) -> None:
        """
        Moves the name to the rear of the queue, adding it if it is not there.
        When a new name is added to a full queue, the front item is evicted first.
        :param name:
        :return:
        """
        if name in self.__items:
            self.__items.remove(name)
        elif self.is_full():
            evicted = self.dequeue()
            logger.debug(f"{evicted} evicted from recent files.")
        self.__items.append(name)

    def dequeue(self) -> str | None:
        """
        Removes an item from the front of the queue and returns it. Returns None if the queue is empty.
        :return:
        """
        if self.is_empty():
            return None
        return self.__items.pop(0)

    def list(self) -> list[str]:
        """
        Returns names from least to most recently used.
        :return:
        """
        return list(self.__items)

    def purge(self, file) -> None:
        if file.name in self.__items:
            self.__items.remove(file.name)

    def is_full(self) -> bool:
        return len(self.__items) >= self.__max_size

    def is_empty(self) -> bool:
        return len(self.__items) == 0

    def __len__(self) -> int:
        return len(self.__items)

    def __str__(self):
        """
        Prints each element of the queue separated by whitespace.
        :return:
        """
        return " ".join(self.__items)
