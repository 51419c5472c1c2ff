import logging

logger = logging.getLogger("__main__")


class DriveError(Exception):
    pass


class DuplicateNameError(DriveError):
    """Raised when a folder, file or user name is already taken."""
    pass


class NotFoundError(DriveError):
    """Raised when a folder, file, user or record lookup misses."""
    pass


class CapacityExceededError(DriveError):
    """Raised when an item is added to a full, fixed-size structure."""
    pass


class EmptyError(DriveError):
    """Raised when extracting from an empty heap or recycle bin."""
    pass


class NoOlderVersionError(DriveError):
    """Raised when a file with a single version is rolled back."""


class PermissionDeniedError(DriveError):
    """Raised when the current identity fails the access-control rule."""


class InvalidPermissionError(DriveError):
    """Raised when a permission is not one of read, write or execute."""


class InvalidRoleError(DriveError):
    """Raised when a role is not one of admin, editor or viewer."""


class UnknownUserError(DriveError):
    """Raised when a file is shared from or to an unregistered user."""


class InvalidNameError(DriveError):
    pass


class InvalidPriorityError(DriveError):
    pass


class NotLoggedInError(DriveError):
    """Raised when an operation needs an identity but nobody is logged in."""


class AuthenticationError(DriveError):
    """
    Raised on a wrong password or recovery answer.
    The message never says which half of the credentials was wrong.
    """
