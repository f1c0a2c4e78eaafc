"""Errors raised by the record store.

Every failure of an invocation is one of these (or an OSError from the
backing file). The CLI turns them into a non-zero exit.
"""


class RecordStoreError(Exception):
    """Base class for record store failures."""


class MissingFileNameError(RecordStoreError):
    def __init__(self):
        super().__init__("--fileName flag has to be specified")


class MissingOperationError(RecordStoreError):
    def __init__(self):
        super().__init__("--operation flag has to be specified")


class UnknownOperationError(RecordStoreError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__("--operation flag does not exist")


class MissingItemError(RecordStoreError):
    def __init__(self):
        super().__init__("--item flag has to be specified")


class MissingIdError(RecordStoreError):
    def __init__(self):
        super().__init__("--id flag has to be specified")


class DecodeError(RecordStoreError):
    """Content or payload is not valid JSON of the expected shape."""


class EncodeError(RecordStoreError):
    """Records could not be serialized. Not expected for decoded data."""


class NotFoundError(RecordStoreError):
    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Item with id {record_id} not found")
