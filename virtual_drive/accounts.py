import hashlib
import hmac
import logging
import os
from datetime import datetime
from typing import Optional

from virtual_drive.constants import Constants
from virtual_drive.errors import AuthenticationError, DuplicateNameError, NotFoundError
from virtual_drive.sharing import validate_role

logger = logging.getLogger("__main__")


def digest(secret: str, salt: bytes) -> str:
    return hashlib.sha256(salt + secret.encode("utf-8")).hexdigest()


class User:

    def __init__(self, username: str, password: str, role: str, security_answer: str):
        validate_role(role)
        self.username: str = username
        self.role: str = role
        self.__salt: bytes = os.urandom(Constants.PASSWORD_SALT_BYTES)
        self.__password_digest: str = digest(password, self.__salt)
        self.__answer_digest: str = digest(security_answer, self.__salt)
        self.last_logout: Optional[datetime] = None

    def check_password(self, password: str) -> bool:
        return hmac.compare_digest(self.__password_digest, digest(password, self.__salt))

    def check_answer(self, security_answer: str) -> bool:
        return hmac.compare_digest(self.__answer_digest, digest(security_answer, self.__salt))

    def set_password(self, password: str) -> None:
        self.__password_digest = digest(password, self.__salt)

    def touch_logout(self) -> None:
        """Updates the last time the user logged out."""
        self.last_logout = datetime.now()


class UserAccounts:
    """
    Registered users with their role and recovery answer.
    """

    def __init__(self):
        self.__users: dict[str, User] = {}

    def signup(self, username: str, password: str, role: str, security_answer: str) -> User:
        if not username:
            raise AuthenticationError("Username must not be empty.")
        if username in self.__users:
            raise DuplicateNameError("Username already exists.")

        user = User(username, password, role, security_answer)
        self.__users[username] = user
        logger.info(f"Signed up {username} as {role}.")
        return user

    def login(self, username: str, password: str) -> User:
        user = self.__users.get(username)
        if user is None or not user.check_password(password):
            raise AuthenticationError("Invalid username or password.")
        return user

    def recover(self, username: str, security_answer: str, new_password: str) -> None:
        """
        Resets the password of a user who gives the right recovery answer.
        :param username:
        :param security_answer:
        :param new_password:
        :return:
        """
        user = self.__users.get(username)
        if user is None or not user.check_answer(security_answer):
            raise AuthenticationError("Invalid username or answer.")
        user.set_password(new_password)
        logger.info(f"Password reset for {username}.")

    def logout(self, username: str) -> None:
        self.get(username).touch_logout()

    def get(self, username: str) -> User:
        if username not in self.__users:
            raise NotFoundError(f"User \"{username}\" not found.")
        return self.__users[username]

    def contains(self, username: str) -> bool:
        return username in self.__users

    def __len__(self) -> int:
        return len(self.__users)
