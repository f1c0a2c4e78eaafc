"""Record store: the four operations over a backing store.

Each invocation is one read -> decode -> apply -> encode -> write cycle:

    add       append the decoded item, rewrite the file
    list      copy the raw file content to the sink
    findById  write the last record with the id (or an all-default record)
    remove    drop every record with the id, rewrite the file

Nothing is kept between invocations. run() opens the record file, performs
the operation and closes the file on every exit path.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from .backing import BackingStore, FileBackingStore
from .config import OP_ADD, OP_FIND_BY_ID, OP_LIST, OP_REMOVE
from .errors import (
    DecodeError,
    MissingFileNameError,
    MissingIdError,
    MissingItemError,
    MissingOperationError,
    NotFoundError,
    UnknownOperationError,
)
from .records import Record, decode_record, decode_records, encode_record, encode_records

log = logging.getLogger(__name__)


@dataclass
class Arguments:
    """Inputs for one invocation, built once at process entry."""
    operation: str = ""
    id: str = ""
    item: str = ""
    file_name: str = ""


def add(item: str, backing: BackingStore) -> None:
    """Append the record in item to the store. Duplicate ids are allowed."""
    if not item:
        raise MissingItemError()

    content = backing.read_all()
    records = decode_records(content) if content else []

    try:
        record = decode_record(item)
    except DecodeError as e:
        raise DecodeError(f"error during item parsing: {e}") from e

    records.append(record)
    backing.overwrite(encode_records(records))
    log.info(f"Added record id={record.id!r} ({len(records)} total)")


def list_records(backing: BackingStore, sink: BinaryIO) -> None:
    """Write the raw store content to sink, unvalidated."""
    sink.write(backing.read_all())


def find_by_id(record_id: str, backing: BackingStore, sink: BinaryIO) -> Record:
    """Write the last record with record_id to sink and return it.

    An empty store is a decode error here, unlike add. When nothing matches,
    an all-default Record is written; callers cannot tell that apart from a
    stored record whose fields are all empty.
    """
    if not record_id:
        raise MissingIdError()

    records = decode_records(backing.read_all())

    found = Record()
    for record in records:
        if record.id == record_id:
            found = record

    sink.write(encode_record(found))
    return found


def remove(record_id: str, backing: BackingStore) -> int:
    """Remove every record with record_id. Returns how many were removed."""
    if not record_id:
        raise MissingIdError()

    records = decode_records(backing.read_all())
    kept = [r for r in records if r.id != record_id]

    if len(kept) == len(records):
        raise NotFoundError(record_id)

    backing.overwrite(encode_records(kept))
    removed = len(records) - len(kept)
    log.info(f"Removed {removed} record(s) with id={record_id!r}")
    return removed


def perform(args: Arguments, backing: BackingStore, sink: BinaryIO) -> None:
    """Dispatch args.operation against an already-open backing store."""
    log.debug(f"Performing {args.operation!r}")
    if args.operation == OP_ADD:
        add(args.item, backing)
    elif args.operation == OP_LIST:
        list_records(backing, sink)
    elif args.operation == OP_FIND_BY_ID:
        find_by_id(args.id, backing, sink)
    elif args.operation == OP_REMOVE:
        remove(args.id, backing)
    else:
        raise UnknownOperationError(args.operation)


def run(args: Arguments, sink: BinaryIO, lock: bool = False) -> None:
    """Open args.file_name (creating it if needed) and perform the operation.

    The file is created before the operation name is checked, so an unknown
    operation still leaves an empty file behind.
    """
    if not args.file_name:
        raise MissingFileNameError()
    if not args.operation:
        raise MissingOperationError()

    with FileBackingStore(Path(args.file_name), lock=lock) as backing:
        perform(args, backing, sink)
