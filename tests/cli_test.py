import logging
import os
import tempfile
import unittest
from unittest.mock import call, patch

import ui_helpers
from cli import DriveMenu, GenericMenu, StartMenu
from virtual_drive.accounts import UserAccounts
from virtual_drive.constants import Constants
from virtual_drive.drive import Drive


class HandleTerminalTest(unittest.TestCase):

    def test_defaults(self):
        verbose, settings = ui_helpers.handle_terminal([])
        self.assertFalse(verbose)
        self.assertEqual(settings, {
            "heap_capacity": Constants.HEAP_CAPACITY,
            "recent_capacity": Constants.RECENT_CAPACITY,
            "recycle_ttl_sec": Constants.RECYCLE_BIN_TTL_SEC,
        })

    def test_overrides(self):
        verbose, settings = ui_helpers.handle_terminal(
            ["-v", "--heap-capacity", "10", "--recent-capacity", "3", "--recycle-ttl-days", "1"])
        self.assertTrue(verbose)
        self.assertEqual(settings["heap_capacity"], 10)
        self.assertEqual(settings["recent_capacity"], 3)
        self.assertEqual(settings["recycle_ttl_sec"], 24 * 60 * 60)

    def test_rejects_zero_capacity(self):
        with patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                ui_helpers.handle_terminal(["--recent-capacity", "0"])


class CreateLoggerTest(unittest.TestCase):

    def setUp(self):
        self.root_handlers = list(logging.root.handlers)
        self.root_level = logging.root.level
        self.directory = tempfile.TemporaryDirectory()
        self.filename = os.path.join(self.directory.name, "drive.log")
        with open(self.filename, "w") as file:
            file.write("previous run\n")

    def tearDown(self):
        for handler in logging.root.handlers[len(self.root_handlers):]:
            logging.root.removeHandler(handler)
            handler.close()
        logging.root.setLevel(self.root_level)
        self.directory.cleanup()

    def console_level(self, verbose: bool) -> int:
        logger = ui_helpers.create_logger(verbose, filename=self.filename)
        console = logger.handlers[-1]
        logger.removeHandler(console)
        return console.level

    def test_level_follows_verbose(self):
        """
        Description
        Builds the logger quiet, verbose, and quiet with Constants.DEBUG switched on.

        Expected
        The console handler logs at INFO only in the first case, and the old log file is emptied.
        :return:
        """
        self.assertEqual(self.console_level(False), logging.INFO)
        self.assertEqual(self.console_level(True), logging.DEBUG)
        with patch.object(Constants, "DEBUG", True):
            self.assertEqual(self.console_level(False), logging.DEBUG)
        with open(self.filename) as file:
            self.assertNotIn("previous run", file.read())


class GenericMenuTest(unittest.TestCase):

    def test_sub_menu_shares_drive_and_accounts(self):
        drive, accounts = Drive(), UserAccounts()
        child = GenericMenu(parent=GenericMenu(drive=drive, accounts=accounts))
        self.assertIs(child.drive, drive)
        self.assertIs(child.accounts, accounts)

    def test_choice_retries_until_in_range(self):
        menu = GenericMenu()
        chosen = []
        menu.add_option("Pick", lambda: chosen.append("pick"))
        menu.add_option("Back", menu.close)
        with patch("builtins.input", side_effect=["x", "9", "1", "2"]), patch("builtins.print"):
            menu.display_all()
        self.assertEqual(chosen, ["pick"])

    def test_duplicate_option(self):
        menu = GenericMenu()
        menu.add_option("Back", menu.close)
        with self.assertRaises(ValueError):
            menu.add_option("Back", menu.close)

    def test_get_input_retries_until_valid(self):
        menu = GenericMenu()
        with patch("builtins.input", side_effect=["maybe", "y"]):
            self.assertEqual(menu.get_input("? ", regex=r"[yn]"), "y")


class SessionTest(unittest.TestCase):

    def test_scripted_session(self):
        """
        Description
        A whole session typed into the menus: signup, login, the docs example, a failing read, logout, exit.

        Expected
        The failing read is reported without ending the session, and the deleted file ends up in the
        recycle bin with its rolled back content.
        :return:
        """
        drive = Drive()
        accounts = UserAccounts()
        inputs = [
            "1", "alice", "pw", "editor", "blue",           # signup
            "2", "alice", "pw",                             # login
            "1", "docs",                                    # create folder
            "2", "docs", "a.txt", "txt", "v1", "10",        # create file in docs
            "5", "docs",                                    # change directory
            "9", "a.txt", "v2",                             # update
            "10", "a.txt",                                  # rollback
            "7", "a.txt",                                   # read
            "7", "missing",                                 # read a file that is not there
            "11", "a.txt",                                  # delete
            "20",                                           # logout
            "4",                                            # exit
        ]
        with patch("builtins.input", side_effect=inputs), patch("builtins.print") as printed:
            StartMenu(drive, accounts).display_all()

        self.assertIn(call("Latest Content: v1"), printed.call_args_list)
        entry = drive.peek_recycle_bin()
        self.assertEqual((entry["name"], entry["content"], entry["path"]), ("a.txt", "v1", "/root/docs"))
        self.assertFalse(drive.is_logged_in())
        self.assertIsNotNone(accounts.get("alice").last_logout)

    def test_delete_folder_needs_confirmation(self):
        drive = Drive()
        drive.login("alice", "admin")
        drive.create_folder("docs")
        menu = DriveMenu(parent=StartMenu(drive, UserAccounts()))

        with patch("builtins.input", side_effect=["docs", "n"]), patch("builtins.print"):
            menu.delete_folder()
        self.assertEqual(len(drive.list_folders()), 1)

        with patch("builtins.input", side_effect=["docs", "y"]), patch("builtins.print"):
            menu.delete_folder()
        self.assertEqual(drive.list_folders(), [])


if __name__ == '__main__':
    unittest.main()
