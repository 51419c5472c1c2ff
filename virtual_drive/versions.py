import logging
import weakref
from typing import Iterator, Optional

from virtual_drive.errors import NoOlderVersionError

logger = logging.getLogger("__main__")


class Version:

    def __init__(self, content: str, prev: Optional["Version"] = None):
        """
        One content snapshot in a file's history.

        The next version is owned through a normal reference, the previous one is only
        held weakly so the chain has a single owning direction (head to tail).
        """
        self.content: str = content
        self.next: Optional[Version] = None
        self._prev_ref = weakref.ref(prev) if prev is not None else None

    @property
    def prev(self) -> Optional["Version"]:
        if self._prev_ref is None:
            return None
        return self._prev_ref()

    def __repr__(self):
        return f"Version({self.content!r})"


class VersionChain:

    def __init__(self, content: str):
        """
        Doubly linked history of a file's contents, oldest at the head and latest at
        the tail. A chain is never empty.
        :param content: Content of the first version.
        """
        self.head: Version = Version(content)
        self._tail: Version = self.head
        self._length: int = 1

    def latest(self) -> Version:
        return self._tail

    def append_version(self, content: str) -> Version:
        """
        Adds a new version after the current latest one and returns it.
        :param content:
        :return:
        """
        version = Version(content, prev=self._tail)
        self._tail.next = version
        self._tail = version
        self._length += 1
        return version

    def rollback(self) -> None:
        """
        Discards the latest version, exposing the one before it.
        Raises NoOlderVersionError, leaving the chain as it was, if only one version remains.
        :return:
        """
        if self._length == 1:
            raise NoOlderVersionError("No older version to rollback to.")

        previous = self._tail.prev
        previous.next = None  # drops the only strong reference to the old tail
        self._tail = previous
        self._length -= 1

    def contents(self) -> list[str]:
        """
        Returns every version's content, oldest first.
        :return:
        """
        return [version.content for version in self]

    def __iter__(self) -> Iterator[Version]:
        version = self.head
        while version is not None:
            yield version
            version = version.next

    def __len__(self) -> int:
        return self._length
