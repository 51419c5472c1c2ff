import logging

from virtual_drive.constants import Constants
from virtual_drive.dictionaries import ShareGrant
from virtual_drive.errors import (CapacityExceededError, DuplicateNameError, InvalidPermissionError,
                                  InvalidRoleError, UnknownUserError)

logger = logging.getLogger("__main__")

# Permissions each role holds over files it does not own.
ROLE_PERMISSIONS: dict[str, tuple[str, ...]] = {
    "admin": Constants.PERMISSIONS,
    "editor": ("read", "write"),
    "viewer": ("read",),
}


def validate_permission(permission: str) -> None:
    if permission not in Constants.PERMISSIONS:
        raise InvalidPermissionError(
            f"Permission \"{permission}\" is not valid - must be one of {', '.join(Constants.PERMISSIONS)}.")


def validate_role(role: str) -> None:
    if role not in Constants.ROLES:
        raise InvalidRoleError(f"Role \"{role}\" is not valid - must be one of {', '.join(Constants.ROLES)}.")


def check_access(identity: str, owner: str, role: str, permission: str) -> bool:
    """
    Decides whether identity, acting with role, may use permission on a file owned by owner.

    The owner may do anything, so may an admin. Editors may read and write, viewers may only read.
    :param identity: User requesting access.
    :param owner: Owner of the file.
    :param role: Role of the requesting user.
    :param permission: One of Constants.PERMISSIONS.
    :return: True if access is allowed.
    """
    validate_permission(permission)
    validate_role(role)

    if identity and identity == owner:
        return True
    return permission in ROLE_PERMISSIONS.get(role, ())


class UserGraph:

    def __init__(self, max_shares_per_user: int = Constants.MAX_SHARES_PER_USER):
        """
        Adjacency list from each user to the grants they have issued, in the order issued.
        Grants are never removed, and may outlive the file they name.
        """
        self.max_shares_per_user: int = max_shares_per_user
        self.__adjacency: dict[str, list[ShareGrant]] = {}

    def add_user(self, username: str) -> None:
        if username in self.__adjacency:
            raise DuplicateNameError(f"User \"{username}\" is already in the sharing graph.")
        self.__adjacency[username] = []

    def has_user(self, username: str) -> bool:
        return username in self.__adjacency

    def users(self) -> list[str]:
        return list(self.__adjacency.keys())

    def share_file(self, grantor: str, recipient: str, file: str, permission: str) -> ShareGrant:
        if grantor not in self.__adjacency:
            raise UnknownUserError(f"User \"{grantor}\" not found.")
        if recipient not in self.__adjacency:
            raise UnknownUserError(f"User \"{recipient}\" not found.")
        validate_permission(permission)

        issued = self.__adjacency[grantor]
        if len(issued) >= self.max_shares_per_user:
            raise CapacityExceededError(f"{grantor} cannot share more files (limit {self.max_shares_per_user}).")

        grant = ShareGrant(grantor=grantor, recipient=recipient, file=file, permission=permission)
        issued.append(grant)
        logger.info(f"{grantor} shared {file} with {recipient} ({permission}).")
        return grant

    def grants_issued_by(self, username: str) -> list[ShareGrant]:
        if username not in self.__adjacency:
            raise UnknownUserError(f"User \"{username}\" not found.")
        return list(self.__adjacency[username])

    def grants_received_by(self, username: str) -> list[ShareGrant]:
        """
        Scans every user's issued grants for the ones naming username as recipient.
        :param username:
        :return:
        """
        if username not in self.__adjacency:
            raise UnknownUserError(f"User \"{username}\" not found.")
        return [
            grant
            for issued in self.__adjacency.values()
            for grant in issued
            if grant["recipient"] == username
        ]

    def __len__(self) -> int:
        return sum(len(issued) for issued in self.__adjacency.values())
