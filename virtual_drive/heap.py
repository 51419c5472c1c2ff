import logging

from virtual_drive.constants import Constants
from virtual_drive.dictionaries import PriorityEntry
from virtual_drive.errors import CapacityExceededError, EmptyError
from virtual_drive.interfaces import IFileIndex

logger = logging.getLogger("__main__")


class FilePriorityHeap(IFileIndex):

    def __init__(self, capacity: int = Constants.HEAP_CAPACITY):
        """
        Bounded binary max-heap of files keyed by priority.
        Files are referenced, not owned. Order between equal priorities is unspecified.
        """
        if capacity < 1:
            raise ValueError("Heap capacity must be at least 1.")
        self.capacity: int = capacity
        self.__heap: list = []  # list of (priority, file)

    def is_full(self) -> bool:
        """
        This INCLUDES capacity, so if there are capacity entries inside, no more can be added.
        :return:
        """
        return len(self.__heap) >= self.capacity

    def is_empty(self) -> bool:
        return len(self.__heap) == 0

    def insert(self, file, priority: int) -> None:
        if self.is_full():
            raise CapacityExceededError(
                f"Heap is full - (length is {len(self.__heap)}). Cannot insert {file.name}.")
        self.__heap.append((priority, file))
        self.__sift_up(len(self.__heap) - 1)

    def extract_max(self):
        """
        Removes and returns the file with the highest priority.
        :return:
        """
        if self.is_empty():
            raise EmptyError("Heap is empty.")
        top = self.__heap[0]
        last = self.__heap.pop()
        if self.__heap:
            self.__heap[0] = last
            self.__sift_down(0)
        return top[1]

    def peek_max(self):
        if self.is_empty():
            raise EmptyError("Heap is empty.")
        return self.__heap[0][1]

    def peek_all(self) -> list[PriorityEntry]:
        """
        Returns the entries in raw heap-array order (not sorted), for display.
        :return:
        """
        return [PriorityEntry(name=file.name, priority=priority) for priority, file in self.__heap]

    def contains(self, file) -> bool:
        return any(entry_file is file for _, entry_file in self.__heap)

    def purge(self, file) -> None:
        for index, (_, entry_file) in enumerate(self.__heap):
            if entry_file is file:
                self.__remove_at(index)
                logger.debug(f"Purged {file.name} from the priority heap.")
                return

    def __remove_at(self, index: int) -> None:
        last = self.__heap.pop()
        if index == len(self.__heap):
            return
        self.__heap[index] = last
        # the moved entry may belong above or below its new slot
        self.__sift_up(index)
        self.__sift_down(index)

    def __sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if self.__heap[index][0] <= self.__heap[parent][0]:
                break
            self.__heap[index], self.__heap[parent] = self.__heap[parent], self.__heap[index]
            index = parent

    def __sift_down(self, index: int) -> None:
        size = len(self.__heap)
        while True:
            left = 2 * index + 1
            right = 2 * index + 2
            largest = index

            if left < size and self.__heap[left][0] > self.__heap[largest][0]:
                largest = left
            if right < size and self.__heap[right][0] > self.__heap[largest][0]:
                largest = right

            if largest == index:
                break

            self.__heap[index], self.__heap[largest] = self.__heap[largest], self.__heap[index]
            index = largest

    def __len__(self) -> int:
        return len(self.__heap)
