"""Export of quiz blocks for an external renderer."""

from .build import ExportResult, export_document
from .manifest import BlockInfo, Manifest, SourceInfo, compute_sha256
from .records import block_to_record, write_records_ndjson

__all__ = [
    "export_document",
    "ExportResult",
    "Manifest",
    "BlockInfo",
    "SourceInfo",
    "compute_sha256",
    "block_to_record",
    "write_records_ndjson",
]
