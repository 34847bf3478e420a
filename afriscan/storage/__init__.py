from .base import ListingStore, StorageError
from .json_store import JsonDocumentStore
from .memory import MemoryStore
from .rows import (
    SHEET_HEADERS,
    format_source_cell,
    listing_to_record,
    listing_to_row,
    parse_source_cell,
    row_to_listing,
    row_to_record,
    split_flags,
)
from .sheet_store import RUN_HEADERS, SpreadsheetStore

__all__ = [
    "ListingStore",
    "StorageError",
    "MemoryStore",
    "JsonDocumentStore",
    "SpreadsheetStore",
    "SHEET_HEADERS",
    "RUN_HEADERS",
    "format_source_cell",
    "parse_source_cell",
    "split_flags",
    "listing_to_row",
    "row_to_record",
    "row_to_listing",
    "listing_to_record",
]
