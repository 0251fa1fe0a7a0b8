"""Find an export target in the account/folder forest."""

from collections import deque
from collections.abc import Sequence

from loguru import logger

from apple_notes_exporter.errors import FolderNotFoundError
from apple_notes_exporter.models.folder import Account, FolderNode, FolderTarget


def parse_target(spec: str) -> FolderTarget:
    """Parse `[Account:]Folder`.

    Only the first colon separates the account, so folder names may contain
    colons when an account is given. An empty account part means no account.
    """
    account, sep, folder = spec.partition(":")
    if not sep:
        return FolderTarget(folder=spec)
    if not folder:
        msg = f"Missing folder name in target {spec!r}"
        raise ValueError(msg)
    return FolderTarget(folder=folder, account=account or None)


def resolve_folder(accounts: Sequence[Account], target: FolderTarget) -> FolderNode:
    """Breadth-first search for the target folder.

    Top-level folders of every account (or only the named account) are queued
    in listing order; children go to the back of the queue. The first folder
    whose name equals the target wins, so a shallower folder beats a deeper one
    and, at equal depth, the earlier account wins.

    Raises:
        FolderNotFoundError: When the queue runs empty.
    """
    todo: deque[FolderNode] = deque()
    for account in accounts:
        if target.account is None or account.name == target.account:
            todo.extend(account.folders)

    visited = 0
    while todo:
        folder = todo.popleft()
        visited += 1
        if folder.name == target.folder:
            logger.debug(
                "Resolved {} to {} after {} folder(s)", target, folder.qualified_name, visited
            )
            return folder
        todo.extend(folder.children)

    raise FolderNotFoundError(str(target))
