"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidTransactionDataError(DomainException):
    """Stored transaction data is malformed or invalid"""

    pass


class InvalidImportFileError(DomainException):
    """Uploaded backup file does not have the expected shape"""

    pass


class InvalidCategoryError(DomainException):
    """Category name is empty or otherwise unusable"""

    pass


class CategoryNotFoundError(DomainException):
    """No category with the requested id"""

    pass


class StorageError(DomainException):
    """Key-value store could not be read or written"""

    pass
