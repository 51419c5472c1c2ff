import logging
import re
from typing import Callable

import ui_helpers
from virtual_drive.accounts import UserAccounts
from virtual_drive.constants import Constants
from virtual_drive.drive import Drive
from virtual_drive.errors import DriveError

logger = logging.getLogger("__main__")


class GenericMenu:
    def __init__(self, title: str = "Menu", parent=None, drive: Drive | None = None,
                 accounts: UserAccounts | None = None):
        """
        A numbered text menu. Sub-menus share the drive and accounts of their parent
        unless they are given their own.
        """
        self.parent: GenericMenu | None = parent
        self.title = title
        self.__options: list[tuple[str, Callable, str]] = []
        self.__info: list[str] = []
        self.closed = False
        self.drive: Drive | None = drive if drive is not None else getattr(parent, "drive", None)
        self.accounts: UserAccounts | None = accounts if accounts is not None else getattr(parent, "accounts", None)

    def close(self):
        self.closed = True

    def add_option(self, name: str, command: Callable, description: str = "") -> None:
        if any(existing == name for existing, _, _ in self.__options):
            raise ValueError(f"Option \"{name}\" is already in the option menu.")
        self.__options.append((name, command, description))

    def add_info(self, info: str):
        self.__info.append(info)

    def clear_info(self):
        self.__info = []

    def get_input(self, prompt: str = ">> ", regex: str | None = None) -> str:
        """
        Asks until the answer matches regex, when one is given.
        """
        while True:
            user_input = input(prompt)
            if regex is None or re.fullmatch(regex, user_input):
                return user_input
            logger.warning("Input was not valid, please try again.")

    def display(self) -> None:
        if not (self.__info or self.__options):
            return
        print(f"\n\n-------- {self.title} --------\n")
        for line in self.__info:
            print(line)
        if self.__info and self.__options:
            print()
        for number, (name, _, description) in enumerate(self.__options, start=1):
            print(f"{number}) {name}")
            if description:
                print(f"    {description}")

    def __get_choice(self) -> int:
        while True:
            choice = input("Choice: ")
            if not choice.isnumeric():
                print("Choice was not a number, please try again.")
            elif not 1 <= int(choice) <= len(self.__options):
                print("Choice out of range, please try again.")
            else:
                return int(choice)

    def __call_choice(self, choice: int) -> None:
        _, command, _ = self.__options[choice - 1]
        try:
            command()
        except DriveError as error:
            logger.error(str(error))

    def display_all(self) -> None:
        """
        Shows the menu and runs the chosen options until the menu is closed.
        """
        self.closed = False
        while not self.closed:
            self.display()
            if not self.__options:
                return
            self.__call_choice(self.__get_choice())


class StartMenu(GenericMenu):
    def __init__(self, drive: Drive, accounts: UserAccounts):
        GenericMenu.__init__(self, title="Virtual Drive", drive=drive, accounts=accounts)
        self.add_option("Signup", self.signup)
        self.add_option("Login", self.login)
        self.add_option("Forgot Password", self.forgot_password)
        self.add_option("Exit", self.close)

    def signup(self):
        username = self.get_input("Username: ")
        password = self.get_input("Password: ")
        role = self.get_input(f"Enter your role ({', '.join(Constants.ROLES)}): ",
                              regex="|".join(Constants.ROLES))
        answer = self.get_input("Enter your recovery code: ")
        self.accounts.signup(username, password, role, answer)
        self.drive.register_user(username)
        logger.info("Signup successful!")

    def login(self):
        username = self.get_input("Username: ")
        password = self.get_input("Password: ")
        user = self.accounts.login(username, password)
        self.drive.login(user.username, user.role)
        logger.info(f"Welcome, {user.username}!")
        menu = DriveMenu(parent=self)
        menu.display_all()

    def forgot_password(self):
        username = self.get_input("Username: ")
        answer = self.get_input("Recovery code: ")
        new_password = self.get_input("New password: ")
        self.accounts.recover(username, answer, new_password)
        logger.info("Password reset, you can now login.")


class DriveMenu(GenericMenu):
    def __init__(self, parent: GenericMenu):
        GenericMenu.__init__(self, title="Drive", parent=parent)

        self.add_option(name="Create Folder", command=self.create_folder)
        self.add_option(name="Create File", command=self.create_file)
        self.add_option(name="List Folders", command=self.list_folders)
        self.add_option(name="List Files", command=self.list_files)
        self.add_option(name="Change Directory", command=self.change_directory)
        self.add_option(name="Show Path", command=self.show_path)
        self.add_option(name="Read File", command=self.read_file)
        self.add_option(name="File History", command=self.file_history)
        self.add_option(name="Update File", command=self.update_file)
        self.add_option(name="Rollback File", command=self.rollback_file)
        self.add_option(name="Delete File", command=self.delete_file)
        self.add_option(name="Delete Folder", command=self.delete_folder,
                        description="Deletes the folder and everything in it, this cannot be undone.")
        self.add_option(name="View Metadata", command=self.view_metadata)
        self.add_option(name="Recycle Bin", command=self.recycle_bin)
        self.add_option(name="Restore Last Deleted File", command=self.restore_file)
        self.add_option(name="Recent Files", command=self.recent_files)
        self.add_option(name="Share File", command=self.share_file)
        self.add_option(name="View Shared Files", command=self.shared_files)
        self.add_option(name="Display Files by Priority", command=self.files_by_priority)
        self.add_option(name="Logout", command=self.logout)

    def display(self) -> None:
        self.clear_info()
        self.add_info(f"Logged in as {self.drive.user} ({self.drive.role})")
        self.add_info(f"Current Path: {self.drive.current_path()}")
        GenericMenu.display(self)

    def create_folder(self):
        name = self.get_input("Folder name: ")
        folder = self.drive.create_folder(name)
        print(f"Folder created: {folder.path()}")

    def create_file(self):
        folder = None
        folders = self.drive.list_folders()
        if folders:
            print("Available folders:")
            for i, child in enumerate(folders):
                print(f"{i + 1}. {child.name}")
            folder = self.get_input("Enter folder name to create the file in or press Enter to use current directory: ")
            if folder and not self.drive.current.has_child(folder):
                logger.error("Folder not found. File will be created in the current directory.")
                folder = None

        name = self.get_input("File name: ")
        type = self.get_input("File type: ")
        content = self.get_input("File content: ")
        priority = int(self.get_input(f"File priority ({Constants.MIN_PRIORITY}-{Constants.MAX_PRIORITY}): ",
                                      regex=r"\d+"))
        file = self.drive.create_file(name, type, content, priority, folder=folder)
        if len(file.versions) > 1:
            print("New version added.")
        else:
            print(f"File created: {file.name}")

    def list_folders(self):
        folders = self.drive.list_folders()
        if not folders:
            print("No folders.")
        else:
            print("Folders:")
            for folder in folders:
                print(folder.name)

    def list_files(self):
        files = self.drive.list_files()
        if not files:
            print("No files.")
        else:
            print("Files:")
            for file in files:
                print(f"{file.name} ({file.type})")

    def change_directory(self):
        name = self.get_input("Folder name (.. to go back, / for root): ")
        self.drive.change_directory(name)
        self.show_path()

    def show_path(self):
        print(f"Current Path: {self.drive.current_path()}")

    def read_file(self):
        name = self.get_input("File name: ")
        print(f"Latest Content: {self.drive.read_file(name)}")

    def file_history(self):
        name = self.get_input("File name: ")
        for i, content in enumerate(self.drive.file_history(name)):
            print(f"v{i + 1}: {content}")

    def update_file(self):
        name = self.get_input("File name: ")
        content = self.get_input("New content: ")
        self.drive.update_file(name, content)
        print("File updated with new version.")

    def rollback_file(self):
        name = self.get_input("File name: ")
        content = self.drive.rollback_file(name)
        print(f"Rolled back to previous version: {content}")

    def delete_file(self):
        name = self.get_input("File name: ")
        self.drive.delete_file(name)
        print("File deleted.")

    def delete_folder(self):
        name = self.get_input("Folder name: ")
        confirm = self.get_input(f"Delete \"{name}\" and everything in it? (y/n): ", regex=r"[yYnN]")
        if confirm.lower() != "y":
            print("Folder kept.")
            return
        destroyed = self.drive.delete_folder(name)
        print(f"Folder deleted ({len(destroyed)} files removed).")

    def view_metadata(self):
        name = self.get_input("File name: ")
        for line in ui_helpers.format_metadata(self.drive.view_metadata(name)):
            print(line)

    def recycle_bin(self):
        print(f"Last Deleted File: {ui_helpers.format_deleted(self.drive.peek_recycle_bin())}")

    def restore_file(self):
        file = self.drive.restore_file()
        print(f"Restored {file.name} to {file.folder.path()}.")

    def recent_files(self):
        recent = self.drive.recent_files()
        if not recent:
            print("No recent files.")
        else:
            print("Recent Files:")
            for name in recent:
                print(name)

    def share_file(self):
        recipient = self.get_input("Receiver Username: ")
        name = self.get_input("File name: ")
        permission = self.get_input(f"Permission ({'/'.join(Constants.PERMISSIONS)}): ")
        self.drive.share_file(recipient, name, permission)
        print("File shared successfully.")

    def shared_files(self):
        print("Shared by me:")
        for grant in self.drive.shared_by_me():
            print(ui_helpers.format_grant(grant))
        print("Shared with me:")
        for grant in self.drive.shared_with_me():
            print(ui_helpers.format_grant(grant))

    def files_by_priority(self):
        entries = self.drive.files_by_priority()
        if not entries:
            print("Heap is empty.")
        else:
            print("Files in Heap by Priority:")
            for entry in entries:
                print(f"{entry['name']} (Priority: {entry['priority']})")

    def logout(self):
        self.accounts.logout(self.drive.user)
        self.drive.logout()
        print("You have been logged out.")
        self.close()


def main(argv: list[str] | None = None) -> None:
    verbose, drive_settings = ui_helpers.handle_terminal(argv)
    logger = ui_helpers.create_logger(verbose)
    drive = ui_helpers.initialise_drive(drive_settings, logger=logger)
    menu = StartMenu(drive, UserAccounts())
    menu.display_all()
    logger.info("Exiting...")


if __name__ == "__main__":
    main()
