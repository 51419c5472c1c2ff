import logging
from typing import Optional

from virtual_drive.constants import Constants
from virtual_drive.dictionaries import MetadataRecord
from virtual_drive.errors import NotFoundError
from virtual_drive.interfaces import IFileIndex

logger = logging.getLogger("__main__")


class MetadataTable(IFileIndex):
    """
    Fixed-bucket hash table from file name to a metadata snapshot, collisions are chained.
    """

    def __init__(self, buckets: int = Constants.METADATA_BUCKETS):
        if buckets < 1:
            raise ValueError("Metadata table needs at least one bucket.")
        self.buckets: int = buckets
        self.__table: list[list[MetadataRecord]] = [[] for _ in range(buckets)]

    def hash(self, key: str) -> int:
        """
        Sum of the key's UTF-8 byte values, modulo the number of buckets.
        :param key:
        :return:
        """
        return sum(key.encode("utf-8")) % self.buckets

    def insert(self, name: str, type: str, size: int, owner: str, date: str) -> None:
        """
        Stores a metadata record, overwriting the fields of an existing record with the same name.
        :param name:
        :param type:
        :param size:
        :param owner:
        :param date:
        :return:
        """
        chain = self.__table[self.hash(name)]
        for record in chain:
            if record["name"] == name:
                record.update(type=type, size=size, owner=owner, date=date)
                logger.debug(f"Metadata for {name} refreshed.")
                return
        chain.append(MetadataRecord(name=name, type=type, owner=owner, date=date, size=size))

    def search(self, name: str) -> Optional[MetadataRecord]:
        for record in self.__table[self.hash(name)]:
            if record["name"] == name:
                return record
        return None

    def contains(self, name: str) -> bool:
        return self.search(name) is not None

    def remove(self, name: str) -> None:
        chain = self.__table[self.hash(name)]
        for index, record in enumerate(chain):
            if record["name"] == name:
                chain.pop(index)
                return
        raise NotFoundError(f"Metadata for \"{name}\" not found.")

    def purge(self, file) -> None:
        if self.contains(file.name):
            self.remove(file.name)

    def names(self) -> list[str]:
        return [record["name"] for chain in self.__table for record in chain]

    def chain_length(self, name: str) -> int:
        """Returns how many records share the bucket the name hashes to."""
        return len(self.__table[self.hash(name)])

    def __len__(self) -> int:
        return sum(len(chain) for chain in self.__table)
