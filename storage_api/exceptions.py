"""Custom exception classes for the Storage API."""


class StorageAPIException(Exception):
    """
    Base exception class for all storage-related errors.
    """
    pass


class RecordNotFoundError(StorageAPIException):
    """
    Raised when a requested question record does not exist.
    """
    pass


class RecordAlreadyExistsError(StorageAPIException):
    """
    Raised when creating a record whose identifier is already taken.
    """
    pass


class CorruptRecordError(StorageAPIException):
    """
    Raised when a stored record file cannot be parsed.
    """
    pass


class StorageError(StorageAPIException):
    """
    Raised when an unexpected filesystem error occurs.
    """
    pass


class BlobNotFoundError(StorageAPIException):
    """
    Raised when a requested uploaded file does not exist.
    """
    pass


class InvalidBucketError(StorageAPIException):
    """
    Raised when a folder name is not one of the allowed upload folders.
    """
    pass


class UnsupportedContentTypeError(StorageAPIException):
    """
    Raised when an upload's mimetype is not accepted by the target folder.
    """
    pass


class FileTooLargeError(StorageAPIException):
    """
    Raised when an upload exceeds the configured size ceiling.
    """
    pass


class BadRequestError(StorageAPIException):
    """
    Raised when a request payload is malformed.
    """
    pass


class InvalidIdentifierError(BadRequestError):
    """
    Raised when a record identifier is unsafe to use as a filename.
    """
    pass


class InvalidAPIKeyError(StorageAPIException):
    """
    Raised when the API key is missing or does not match.
    """
    pass
