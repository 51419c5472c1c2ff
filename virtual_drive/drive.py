import logging
from datetime import datetime
from typing import Callable, Optional

from virtual_drive.constants import Constants
from virtual_drive.dictionaries import DeletedEntry, MetadataRecord, PriorityEntry, ShareGrant
from virtual_drive.errors import (CapacityExceededError, DuplicateNameError, NotFoundError,
                                  NotLoggedInError, PermissionDeniedError)
from virtual_drive.folders import File, Folder, FolderTree
from virtual_drive.heap import FilePriorityHeap
from virtual_drive.interfaces import IFileIndex
from virtual_drive.metadata import MetadataTable
from virtual_drive.recent import RecentFilesQueue
from virtual_drive.recycle_bin import RecycleBin
from virtual_drive.sharing import UserGraph, check_access, validate_role

logger = logging.getLogger("__main__")


class Drive:

    def __init__(self,
                 heap_capacity: int = Constants.HEAP_CAPACITY,
                 recent_capacity: int = Constants.RECENT_CAPACITY,
                 recycle_ttl_sec: int = Constants.RECYCLE_BIN_TTL_SEC,
                 metadata_buckets: int = Constants.METADATA_BUCKETS,
                 clock: Callable[[], datetime] = datetime.now):
        """
        One drive: the folder tree plus every index kept over it, and the identity of whoever
        is logged in. Operations act on the current folder.
        """
        self.tree: FolderTree = FolderTree()
        self.current: Folder = self.tree.root

        self.priority_heap: FilePriorityHeap = FilePriorityHeap(heap_capacity)
        self.metadata: MetadataTable = MetadataTable(metadata_buckets)
        self.recent: RecentFilesQueue = RecentFilesQueue(recent_capacity)
        self.recycle_bin: RecycleBin = RecycleBin(recycle_ttl_sec, clock=clock)
        self.user_graph: UserGraph = UserGraph()

        # every index purged when a file is destroyed
        self.indexes: list[IFileIndex] = [self.priority_heap, self.metadata, self.recent]

        self.user: Optional[str] = None
        self.role: Optional[str] = None

    # Session

    def login(self, username: str, role: str) -> None:
        validate_role(role)
        self.user = username
        self.role = role
        logger.info(f"Logged in as {username} ({role}).")

    def logout(self) -> None:
        logger.info(f"{self.user} logged out.")
        self.user = None
        self.role = None

    def is_logged_in(self) -> bool:
        return self.user is not None

    def register_user(self, username: str) -> None:
        self.user_graph.add_user(username)

    def _require_login(self) -> str:
        if not self.is_logged_in():
            raise NotLoggedInError("Please login first.")
        return self.user

    def _require_access(self, file: File, permission: str) -> None:
        user = self._require_login()
        if not check_access(user, file.owner, self.role, permission):
            raise PermissionDeniedError(
                f"{user} ({self.role}) does not have {permission} permission on {file.name}.")

    # Folders

    def create_folder(self, name: str) -> Folder:
        self._require_login()
        return self.tree.create_folder(self.current, name)

    def list_folders(self) -> list[Folder]:
        return self.tree.list_folders(self.current)

    def change_directory(self, name: str) -> Folder:
        if name == Constants.PATH_SEPARATOR:
            self.current = self.tree.root
        else:
            self.current = self.tree.change_directory(self.current, name)
        logger.debug(f"Current folder is now {self.current.path()}")
        return self.current

    def current_path(self) -> str:
        return self.current.path()

    def delete_folder(self, name: str) -> list[File]:
        """
        Destroys a child folder of the current folder with everything in it.
        Nothing is destroyed unless the current user has write access to every file inside.
        :param name:
        :return: The destroyed files.
        """
        self._require_login()
        folder = self.current.get_child(name)
        for file in folder.walk_files():
            self._require_access(file, "write")

        destroyed = self.tree.delete_folder(self.current, name)
        for file in destroyed:
            self._purge(file)
        return destroyed

    # Files

    def _target_folder(self, folder: Optional[str]) -> Folder:
        if not folder:
            return self.current
        return self.current.get_child(folder)

    def create_file(self,
                    name: str,
                    type: str,
                    content: str,
                    priority: int = 0,
                    folder: Optional[str] = None) -> File:
        """
        Creates a file owned by the current user, or adds a version if a file with that name
        already exists in the target folder.

        :param folder: Name of a child folder of the current folder, defaults to the current folder.
        :return:
        """
        user = self._require_login()
        target = self._target_folder(folder)
        if target.has_file(name):
            self._require_access(target.get_file(name), "write")

        file, created = self.tree.create_file(target, name, type, content, priority, owner=user)
        if created:
            try:
                self.priority_heap.insert(file, file.priority)
            except CapacityExceededError as error:
                logger.warning(f"{error} The file was still created.")
        self._refresh_metadata(file)
        self.recent.touch(file.name)
        return file

    def list_files(self) -> list[File]:
        return self.tree.list_files(self.current)

    def get_file(self, name: str) -> File:
        return self.current.get_file(name)

    def read_file(self, name: str) -> str:
        file = self.get_file(name)
        self._require_access(file, "read")
        self.recent.touch(file.name)
        return file.content()

    def file_history(self, name: str) -> list[str]:
        file = self.get_file(name)
        self._require_access(file, "read")
        self.recent.touch(file.name)
        return file.versions.contents()

    def update_file(self, name: str, content: str) -> File:
        file = self.get_file(name)
        self._require_access(file, "write")
        file.versions.append_version(content)
        logger.info(f"{name} updated with new version.")
        self._refresh_metadata(file)
        self.recent.touch(file.name)
        return file

    def rollback_file(self, name: str) -> str:
        """
        Discards the latest version of the file.
        :return: The content that is now the latest.
        """
        file = self.get_file(name)
        self._require_access(file, "write")
        file.versions.rollback()
        logger.info(f"{name} rolled back to previous version.")
        self._refresh_metadata(file)
        self.recent.touch(file.name)
        return file.content()

    def delete_file(self, name: str) -> DeletedEntry:
        file = self.get_file(name)
        self._require_access(file, "write")
        file, entry = self.tree.delete_file(self.current, name, deleted_at=self.recycle_bin.now())
        self.recycle_bin.push_entry(entry)
        self._purge(file)
        return entry

    def restore_file(self) -> File:
        """
        Pops the most recently deleted file and puts it back in the folder it was deleted from,
        or in the current folder if that folder no longer exists.
        A live file with the same name blocks the restore and the entry stays in the bin.
        :return:
        """
        self._require_login()
        entry = self.recycle_bin.pop()
        try:
            target = self.tree.resolve(entry["path"])
        except NotFoundError:
            logger.warning(f"{entry['path']} no longer exists, restoring {entry['name']} to {self.current_path()}.")
            target = self.current

        if target.has_file(entry["name"]):
            self.recycle_bin.push_entry(entry)
            raise DuplicateNameError(f"{target.path()} already has a file called {entry['name']}, "
                                     f"delete or rename it before restoring.")

        file, _ = self.tree.create_file(target, entry["name"], entry["type"], entry["content"],
                                        entry["priority"], owner=entry["owner"])
        try:
            self.priority_heap.insert(file, file.priority)
        except CapacityExceededError as error:
            logger.warning(f"{error} The file was still restored.")
        self._refresh_metadata(file)
        self.recent.touch(file.name)
        logger.info(f"{entry['name']} restored to {target.path()}.")
        return file

    def _refresh_metadata(self, file: File) -> None:
        self.metadata.insert(file.name, file.type, len(file.content()), file.owner,
                             self.recycle_bin.now().isoformat())

    def _purge(self, file: File) -> None:
        # metadata and recent files are keyed by name, another live file may still own the entry
        namesake = next((live for live in self.tree.root.walk_files() if live.name == file.name), None)
        if namesake is None:
            for index in self.indexes:
                index.purge(file)
            return
        self.priority_heap.purge(file)
        self._refresh_metadata(namesake)

    # Indexes

    def view_metadata(self, name: str) -> MetadataRecord:
        record = self.metadata.search(name)
        if record is None:
            raise NotFoundError(f"Metadata for \"{name}\" not found.")
        return record

    def files_by_priority(self) -> list[PriorityEntry]:
        return self.priority_heap.peek_all()

    def extract_top_priority(self) -> File:
        return self.priority_heap.extract_max()

    def recent_files(self) -> list[str]:
        return self.recent.list()

    def peek_recycle_bin(self) -> DeletedEntry:
        return self.recycle_bin.peek_top()

    # Sharing

    def share_file(self, recipient: str, file: str, permission: str) -> ShareGrant:
        user = self._require_login()
        return self.user_graph.share_file(user, recipient, file, permission)

    def shared_by_me(self) -> list[ShareGrant]:
        return self.user_graph.grants_issued_by(self._require_login())

    def shared_with_me(self) -> list[ShareGrant]:
        return self.user_graph.grants_received_by(self._require_login())
