"""
Record decoding for the source dictionary extract.

The extract is a comma separated file in a legacy encoding with no
quoting. Broken lines are common enough that they are counted and
skipped instead of aborting the run.
"""

import csv
import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Iterable, Iterator, List, Optional, Union

from shiritorius.settings import SOURCE_ENCODING

logger = logging.getLogger(__name__)

Record = List[str]


@dataclass
class RecordStats:
    """Counters reported while decoding a source stream."""
    skipped: int = 0
    invalid: int = 0
    parsed: int = 0


def is_record(value: Any) -> bool:
    """Check that a parsed value is a flat list of strings."""
    if not isinstance(value, list):
        return False
    return all(isinstance(field, str) for field in value)


def _parse_line(line: str) -> List[str]:
    reader = csv.reader([line], delimiter=',', quoting=csv.QUOTE_NONE, strict=True)
    fields = next(reader, [])
    return [field.strip() for field in fields]


def decode_records(
    stream: Union[BinaryIO, Iterable[bytes]],
    encoding: str = SOURCE_ENCODING,
    stats: Optional[RecordStats] = None,
) -> Iterator[Record]:
    """
    Lazily decode and parse records from a byte stream.

    Lines are decoded one at a time so the whole source never has to be
    held in memory. A line is skipped when it cannot be decoded, when the
    csv parser rejects it, or when its field count differs from the first
    record's. Blank lines are ignored.

    Args:
        stream: Binary file object (or any iterable of byte lines).
        encoding: Source encoding, EUC-JP by default.
        stats: Optional counters to update in place.

    Yields:
        Each valid record as a list of trimmed fields.
    """
    if stats is None:
        stats = RecordStats()

    expected_fields = None

    for line_number, raw in enumerate(stream, start=1):
        try:
            line = raw.decode(encoding)
        except UnicodeDecodeError as e:
            stats.skipped += 1
            logger.warning(f"Skipped line {line_number}: cannot decode as {encoding} ({e.reason})")
            continue

        line = line.rstrip('\r\n')
        if not line.strip():
            continue

        try:
            record = _parse_line(line)
        except csv.Error as e:
            stats.skipped += 1
            logger.warning(f"Skipped line {line_number}: {e}")
            continue

        if expected_fields is None:
            expected_fields = len(record)
        elif len(record) != expected_fields:
            stats.skipped += 1
            logger.warning(
                f"Skipped line {line_number}: expected {expected_fields} fields, got {len(record)}"
            )
            continue

        if not is_record(record):
            stats.invalid += 1
            logger.warning(f"Invalid record on line {line_number}: {record!r}")
            continue

        stats.parsed += 1
        yield record

    logger.info(f"Number of skipped records: {stats.skipped}")
    logger.info(f"Number of invalid type records: {stats.invalid}")
    logger.info(f"Number of parsed records: {stats.parsed}")
