from abc import abstractmethod


class IFileIndex:
    """
    Interface for every index built over the folder tree's files.

    Indexes never own the files they point at, so the drive purges a file from each
    of them when the file is destroyed.
    """

    @abstractmethod
    def purge(self, file) -> None:
        """
        Forgets everything the index knows about the given file, does nothing if it
        knows nothing.
        :param file: File being destroyed.
        :return:
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        """
        Returns the number of entries held by the index.
        :return:
        """
        pass
