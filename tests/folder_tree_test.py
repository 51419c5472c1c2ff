import unittest

from virtual_drive.errors import (DuplicateNameError, InvalidNameError, InvalidPriorityError,
                                  NotFoundError)
from virtual_drive.folders import FolderTree


class FolderTreeTest(unittest.TestCase):

    def setUp(self):
        self.tree = FolderTree()
        self.root = self.tree.root

    def test_create_folders_in_insertion_order(self):
        for name in ["b", "a", "c"]:
            self.tree.create_folder(self.root, name)
        self.assertEqual([folder.name for folder in self.tree.list_folders(self.root)], ["b", "a", "c"])

    def test_duplicate_folder_name(self):
        self.tree.create_folder(self.root, "docs")
        with self.assertRaises(DuplicateNameError):
            self.tree.create_folder(self.root, "docs")

    def test_same_folder_name_under_different_parents(self):
        docs = self.tree.create_folder(self.root, "docs")
        self.tree.create_folder(docs, "docs")
        self.assertEqual(docs.get_child("docs").path(), "/root/docs/docs")

    def test_invalid_names(self):
        for name in ["", "   ", "a/b", "..", "."]:
            with self.assertRaises(InvalidNameError):
                self.tree.create_folder(self.root, name)

    def test_create_file_twice_adds_version(self):
        """
        Description
        Creating a file with a name that already exists in the folder.

        Expected
        No error; the existing file gains a version and keeps its original type, owner and priority.
        :return:
        """
        file, created = self.tree.create_file(self.root, "a.txt", "txt", "v1", 10, owner="alice")
        self.assertTrue(created)
        again, created = self.tree.create_file(self.root, "a.txt", "md", "v2", 50, owner="bob")
        self.assertFalse(created)
        self.assertIs(file, again)
        self.assertEqual(len(file.versions), 2)
        self.assertEqual(file.content(), "v2")
        self.assertEqual((file.type, file.owner, file.priority), ("txt", "alice", 10))
        self.assertEqual(len(self.tree.list_files(self.root)), 1)

    def test_priority_range(self):
        with self.assertRaises(InvalidPriorityError):
            self.tree.create_file(self.root, "a.txt", "txt", "v1", -1)
        with self.assertRaises(InvalidPriorityError):
            self.tree.create_file(self.root, "a.txt", "txt", "v1", 101)
        self.assertEqual(self.tree.list_files(self.root), [])

    def test_change_directory(self):
        docs = self.tree.create_folder(self.root, "docs")
        self.assertIs(self.tree.change_directory(self.root, "docs"), docs)
        self.assertIs(self.tree.change_directory(docs, ".."), self.root)
        with self.assertRaises(NotFoundError):
            self.tree.change_directory(self.root, "..")
        with self.assertRaises(NotFoundError):
            self.tree.change_directory(self.root, "missing")

    def test_resolve(self):
        docs = self.tree.create_folder(self.root, "docs")
        work = self.tree.create_folder(docs, "work")
        self.assertIs(self.tree.resolve("/root/docs/work"), work)
        self.assertIs(self.tree.resolve("/root"), self.root)
        with self.assertRaises(NotFoundError):
            self.tree.resolve("/root/nope")

    def test_delete_file(self):
        self.tree.create_file(self.root, "a.txt", "txt", "v1")
        self.tree.create_file(self.root, "a.txt", "txt", "v2")
        self.tree.create_file(self.root, "b.txt", "txt", "b")

        file, entry = self.tree.delete_file(self.root, "a.txt")

        self.assertEqual(entry["name"], "a.txt")
        self.assertEqual(entry["content"], "v2")
        self.assertEqual(entry["path"], "/root")
        self.assertIsNone(file.folder)
        self.assertEqual([f.name for f in self.tree.list_files(self.root)], ["b.txt"])
        with self.assertRaises(NotFoundError):
            self.tree.delete_file(self.root, "a.txt")

    def test_delete_folder_returns_every_nested_file(self):
        docs = self.tree.create_folder(self.root, "docs")
        work = self.tree.create_folder(docs, "work")
        self.tree.create_file(docs, "a.txt", "txt", "a")
        self.tree.create_file(work, "b.txt", "txt", "b")
        self.tree.create_folder(self.root, "other")

        destroyed = self.tree.delete_folder(self.root, "docs")

        self.assertEqual(sorted(file.name for file in destroyed), ["a.txt", "b.txt"])
        self.assertEqual([folder.name for folder in self.tree.list_folders(self.root)], ["other"])
        with self.assertRaises(NotFoundError):
            self.tree.delete_folder(self.root, "docs")


if __name__ == '__main__':
    unittest.main()
