from typing import TypedDict


class MetadataRecord(TypedDict):
    """
    Has attributes:

    name: str

    type: str

    owner: str

    date: str (ISO timestamp of the insert)

    size: int (length of the content)
    """
    name: str
    type: str
    owner: str
    date: str
    size: int


class DeletedEntry(TypedDict):
    """
    A soft-deleted file, owned by the recycle bin until it is restored or expires.

    deleted_at is an ISO timestamp, path is the folder path the file was deleted from.
    """
    name: str
    content: str
    deleted_at: str
    type: str
    owner: str
    priority: int
    path: str


class ShareGrant(TypedDict):
    grantor: str
    recipient: str
    file: str
    permission: str


class PriorityEntry(TypedDict):
    name: str
    priority: int
