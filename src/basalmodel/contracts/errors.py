"""Exception taxonomy for basalmodel.

Every exception raised by the entity and mapper layers derives from
BasalModelError and from the builtin exception a caller would naturally
expect (LookupError for bad field names, AttributeError for unknown
operations, TypeError for unsupported records, ValueError for bad config).
None of them is caught inside the library.
"""


class BasalModelError(Exception):
    """Base class for all basalmodel errors."""

    pass


class InvalidFieldError(BasalModelError, LookupError):
    """Raised when a field name is private or not declared on the record type.

    Attributes:
        field: The offending field name
        record_type: Name of the record class the access was made on
    """

    def __init__(self, field: str, record_type: str, message: str) -> None:
        self.field = field
        self.record_type = record_type
        super().__init__(message)

    @classmethod
    def private(cls, field: str, record_type: str) -> "InvalidFieldError":
        return cls(field, record_type, f"No access to protected field '{field}' in class '{record_type}'")

    @classmethod
    def undeclared(cls, field: str, record_type: str) -> "InvalidFieldError":
        return cls(field, record_type, f"No field with name '{field}' exists in class '{record_type}'")


class UnknownOperationError(BasalModelError, AttributeError):
    """Raised when a dynamically dispatched attribute is not a get_/set_ accessor.

    Subclasses AttributeError so hasattr() and getattr(obj, name, default)
    keep working on entities.
    """

    def __init__(self, record_type: str, operation: str) -> None:
        self.record_type = record_type
        self.operation = operation
        super().__init__(f"No method like '{record_type}.{operation}()' exists")


class InvalidRecordError(BasalModelError, TypeError):
    """Raised when FieldMapper is given something that is not a record.

    A record is a mapping or an object with named fields.

    Attributes:
        role: Which argument was rejected ("primary" or "other")
        record_type: Type name of the rejected value
    """

    def __init__(self, role: str, record_type: str) -> None:
        self.role = role
        self.record_type = record_type
        super().__init__(f"'{role}' record is neither a mapping nor an object with fields, got {record_type}")


class MapperConfigError(BasalModelError, ValueError):
    """Raised when a mapping table, transformation registry or mapper settings are invalid."""

    pass
