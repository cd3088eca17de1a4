"""Commands clerc can run, and the classifier that picks one."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Union

from clerc.errors import ArgumentError

ALL_BUCKETS = "/"


@dataclass(frozen=True)
class ListBuckets:
    pass


@dataclass(frozen=True)
class ListKeys:
    bucket: str


@dataclass(frozen=True)
class ShowAllObjects:
    bucket: str


@dataclass(frozen=True)
class ShowObject:
    bucket: str
    key: str


@dataclass(frozen=True)
class PutObject:
    bucket: str
    key: str
    body: bytes


@dataclass(frozen=True)
class DeleteObject:
    bucket: str
    key: str


Command = Union[ListBuckets, ListKeys, ShowAllObjects, ShowObject, PutObject, DeleteObject]


def classify(
    bucket: str | None,
    key: str | None = None,
    put: bool = False,
    delete: bool = False,
    show_objects: bool = False,
    stdin: BinaryIO | None = None,
) -> Command:
    """Map parsed arguments onto exactly one command.

    A bucket of ``/`` always lists buckets. Otherwise a bucket lists its keys
    (or its objects when *show_objects* is set), a key shows that object, and
    ``put``/``delete`` act on it. Standard input is read, in full, only for
    ``put``.

    Args:
        bucket: The BUCKET argument.
        key: The KEY argument, if given.
        put: ``--put`` was given.
        delete: ``--delete`` was given.
        show_objects: Effective show-objects setting.
        stdin: Binary stream holding the object body for ``put``.

    Returns:
        The selected command.

    Raises:
        ArgumentError: If the arguments do not form a valid command.
    """
    if bucket == ALL_BUCKETS:
        return ListBuckets()
    if bucket is None:
        raise ArgumentError("BUCKET is required")
    if put and delete:
        raise ArgumentError("--put and --delete are mutually exclusive")
    if key is None:
        if put or delete:
            raise ArgumentError("--put and --delete require a KEY")
        if show_objects:
            return ShowAllObjects(bucket)
        return ListKeys(bucket)

    if put:
        if stdin is None:
            raise ArgumentError("--put requires an object on standard input")
        return PutObject(bucket, key, stdin.read())
    if delete:
        return DeleteObject(bucket, key)
    return ShowObject(bucket, key)
