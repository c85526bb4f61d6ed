"""Error taxonomy for listing, navigation and file operations."""

from __future__ import annotations


class TinyCommanderError(Exception):
    """Base class for recoverable application errors."""


class FileOperationError(TinyCommanderError):
    """A filesystem operation failed; carries the offending path."""

    reason = "operation_failed"
    default_message = "Operation failed"

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        self.message = message or self.default_message
        super().__init__(f"{self.message}: {path}")


class DirectoryUnreadable(FileOperationError):
    reason = "directory_unreadable"
    default_message = "Cannot open directory"


class DirectoryUnreachable(FileOperationError):
    reason = "directory_unreachable"
    default_message = "Directory not accessible"


class SourceUnreadable(FileOperationError):
    reason = "source_unreadable"
    default_message = "Cannot open source file"


class DestinationUnwritable(FileOperationError):
    reason = "destination_unwritable"
    default_message = "Cannot create destination file"


class DirectoryNotEmpty(FileOperationError):
    reason = "directory_not_empty"
    default_message = "Directory is not empty"


class DeleteFailed(FileOperationError):
    reason = "delete_failed"
    default_message = "Cannot delete"
