"""Failures of a synchronisation run.

Every failure is fatal to the run it happens in and is raised to the caller
of the run, chained to the original exception.
"""


class SyncError(Exception):
    """Base class of all synchronisation failures."""


class FetchFailure(SyncError):
    """The document store could not be queried."""


class ClassifierFailure(SyncError):
    """The visibility predicate raised for a document."""

    def __init__(self, document_id: str, message: str):
        super().__init__(f"Visibility check failed for document '{document_id}': {message}")
        self.document_id = document_id


class SerializationFailure(SyncError):
    """The serializer raised for a document or produced an invalid record."""

    def __init__(self, document_id: str, message: str):
        super().__init__(f"Serialization failed for document '{document_id}': {message}")
        self.document_id = document_id


class IndexWriteFailure(SyncError):
    """A save or delete call to one index failed. Other indices are not rolled back."""

    def __init__(self, index_name: str, operation: str, message: str):
        super().__init__(f"{operation.capitalize()} on index '{index_name}' failed: {message}")
        self.index_name = index_name
        self.operation = operation
