class DiarioError(Exception):
    """Base exception for all Diario errors."""
    pass

class RecoverableError(DiarioError):
    """An error that can be recovered from without data loss."""
    pass

class FatalError(DiarioError):
    """An error the current operation cannot recover from."""
    pass

class ValidationError(RecoverableError):
    """A required name or title was empty; the entity was not created."""
    pass

class NotFoundError(RecoverableError):
    """A mutation referenced an id that is no longer present."""
    pass

class FileOperationError(RecoverableError):
    """File operation failed but can be retried."""
    pass

class CorruptionError(FatalError):
    """Corrupted Data Error - from syntax errors in data formats, to just unknown data"""
    pass

class DecodeError(CorruptionError):
    """Stored text does not match the expected record shape."""
    pass
