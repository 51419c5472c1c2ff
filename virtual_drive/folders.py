import logging
from datetime import datetime
from typing import Optional

from virtual_drive.constants import Constants
from virtual_drive.dictionaries import DeletedEntry
from virtual_drive.errors import (DuplicateNameError, InvalidNameError, InvalidPriorityError,
                                  NotFoundError)
from virtual_drive.versions import VersionChain

logger = logging.getLogger("__main__")


def validate_name(name: str) -> None:
    if not name or not name.strip():
        raise InvalidNameError("Name must not be empty.")
    if Constants.PATH_SEPARATOR in name or name in (".", ".."):
        raise InvalidNameError(f"\"{name}\" is not a valid name.")


def validate_priority(priority: int) -> None:
    if not isinstance(priority, int) or isinstance(priority, bool):
        raise InvalidPriorityError(f"Priority must be an integer, got {type(priority).__name__}.")
    if not Constants.MIN_PRIORITY <= priority <= Constants.MAX_PRIORITY:
        raise InvalidPriorityError(
            f"Priority {priority} is out of range - must be between "
            f"{Constants.MIN_PRIORITY} and {Constants.MAX_PRIORITY}."
        )


class File:

    def __init__(self, name: str, type: str, owner: str, content: str, priority: int = 0):
        self.name: str = name
        self.type: str = type
        self.owner: str = owner
        self.priority: int = priority
        self.versions: VersionChain = VersionChain(content)
        self.folder: Optional[Folder] = None  # set by the folder that takes ownership

    def content(self) -> str:
        """Returns the content of the latest version."""
        return self.versions.latest().content

    def __repr__(self):
        return f"File({self.name!r}, type={self.type!r}, owner={self.owner!r}, priority={self.priority})"


class Folder:

    def __init__(self, name: str, parent: Optional["Folder"] = None):
        self.name: str = name
        self.parent: Optional[Folder] = parent
        self.children: list[Folder] = []
        self.files: list[File] = []

    def is_root(self) -> bool:
        return self.parent is None

    def get_child(self, name: str) -> "Folder":
        for child in self.children:
            if child.name == name:
                return child
        raise NotFoundError(f"Folder \"{name}\" not found in {self.path()}.")

    def has_child(self, name: str) -> bool:
        return any(child.name == name for child in self.children)

    def get_file(self, name: str) -> File:
        for file in self.files:
            if file.name == name:
                return file
        raise NotFoundError(f"File \"{name}\" not found in {self.path()}.")

    def has_file(self, name: str) -> bool:
        return any(file.name == name for file in self.files)

    def path(self) -> str:
        """
        Returns the absolute path of the folder, e.g. "/root/docs".
        :return:
        """
        names = []
        folder = self
        while folder is not None:
            names.append(folder.name)
            folder = folder.parent
        return Constants.PATH_SEPARATOR + Constants.PATH_SEPARATOR.join(reversed(names))

    def walk_files(self) -> list[File]:
        """
        Returns every file owned by this folder and its descendants, depth first.
        :return:
        """
        files = list(self.files)
        for child in self.children:
            files.extend(child.walk_files())
        return files

    def __repr__(self):
        return f"Folder({self.path()!r})"


class FolderTree:

    def __init__(self, root_name: str = Constants.ROOT_NAME):
        """
        Owns every folder, every file and, through the files, every version chain.
        """
        self.root: Folder = Folder(root_name)

    def create_folder(self, parent: Folder, name: str) -> Folder:
        validate_name(name)
        if parent.has_child(name):
            raise DuplicateNameError(f"Folder \"{name}\" already exists in {parent.path()}.")

        folder = Folder(name, parent=parent)
        parent.children.append(folder)
        logger.info(f"Folder created: {folder.path()}")
        return folder

    def create_file(self,
                    folder: Folder,
                    name: str,
                    type: str,
                    content: str,
                    priority: int = 0,
                    owner: str = "") -> tuple[File, bool]:
        """
        Creates a file in the folder, or appends a version if the name already exists there.
        The type, owner and priority of an existing file are left as they were.

        :return: The file, and True if it was newly created (False if a version was added).
        """
        validate_name(name)
        validate_priority(priority)

        if folder.has_file(name):
            file = folder.get_file(name)
            file.versions.append_version(content)
            logger.info(f"New version of {name} added ({len(file.versions)} versions).")
            return file, False

        file = File(name, type, owner, content, priority)
        file.folder = folder
        folder.files.append(file)
        logger.info(f"File created: {folder.path()}/{name}")
        return file, True

    @staticmethod
    def change_directory(current: Folder, name: str) -> Folder:
        if name == "..":
            if current.parent is None:
                raise NotFoundError("Already at the root folder.")
            return current.parent
        return current.get_child(name)

    def resolve(self, path: str) -> Folder:
        """
        Resolves an absolute path such as "/root/docs" to a folder.
        :param path:
        :return:
        """
        parts = [part for part in path.split(Constants.PATH_SEPARATOR) if part]
        if not parts or parts[0] != self.root.name:
            raise NotFoundError(f"Path {path} is not inside {self.root.path()}.")
        folder = self.root
        for part in parts[1:]:
            folder = folder.get_child(part)
        return folder

    @staticmethod
    def list_folders(folder: Folder) -> list[Folder]:
        return list(folder.children)

    @staticmethod
    def list_files(folder: Folder) -> list[File]:
        return list(folder.files)

    @staticmethod
    def delete_file(folder: Folder,
                    name: str,
                    deleted_at: Optional[datetime] = None) -> tuple[File, DeletedEntry]:
        """
        Unlinks the file from its folder and copies its latest content into a DeletedEntry.
        The caller hands the entry to the recycle bin and purges the returned file from any index.
        """
        file = folder.get_file(name)
        folder.files.remove(file)
        file.folder = None

        entry = DeletedEntry(name=file.name,
                             content=file.content(),
                             deleted_at=(deleted_at or datetime.now()).isoformat(),
                             type=file.type,
                             owner=file.owner,
                             priority=file.priority,
                             path=folder.path())
        logger.info(f"File deleted: {folder.path()}/{name}")
        return file, entry

    @staticmethod
    def delete_folder(parent: Folder, name: str) -> list[File]:
        """
        Removes a child folder and everything under it.
        :return: Every file that was destroyed, so the caller can purge them from the indexes.
        """
        folder = parent.get_child(name)
        destroyed = folder.walk_files()
        parent.children.remove(folder)
        folder.parent = None
        logger.info(f"Folder deleted: {parent.path()}/{name} ({len(destroyed)} files)")
        return destroyed
