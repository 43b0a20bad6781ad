"""
Ingestion pipeline for Shiritorius.

Downloads the dictionary archive, unpacks it, decodes the CSV extract and
writes the catalogue JSON. Stages run strictly in order and any stage
failure aborts the run with IngestionError; bad records only bump the
counters in IngestStats.
"""

import codecs
import logging
import os
import tarfile
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union
from urllib.parse import urlparse

from shiritorius.catalogue import IngestStats, build_catalogue, save_catalogue
from shiritorius.models import Word
from shiritorius.records import decode_records
from shiritorius.settings import (
    ABOUT_PATH, CATALOGUE_PATH, DATA_DIR, SOURCE_COPYING_NAME,
    SOURCE_CSV_NAME, SOURCE_ENCODING, SOURCE_URL,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class IngestionError(RuntimeError):
    """A pipeline stage failed; the run cannot continue."""


@dataclass
class IngestResult:
    words: List[Word]
    stats: IngestStats
    output: Optional[Path] = None


# ============================================================================
# Download Helpers
# ============================================================================

def archive_name(url: str) -> str:
    """File name of the archive a URL points to."""
    name = os.path.basename(urlparse(url).path)
    if not name:
        raise IngestionError(f"Cannot derive an archive name from URL: {url}")
    return name


def strip_archive_suffix(name: str) -> str:
    for suffix in ('.tar.gz', '.tgz', '.tar'):
        if name.endswith(suffix):
            return name[:-len(suffix)]
    return name


def _log_progress(block_count: int, block_size: int, total_size: int):
    if total_size <= 0 or block_count % 256:
        return
    transferred = min(block_count * block_size, total_size)
    logger.info(
        f"Transferred: {transferred / 1024 / 1024:.1f} MB of "
        f"{total_size / 1024 / 1024:.1f} MB, {transferred * 100 / total_size:.0f} %"
    )


def download_source(url: str = SOURCE_URL, target: Optional[PathLike] = None,
                    force: bool = False) -> Path:
    """
    Download the source archive unless it is already present.

    The file is written next to the target and renamed once complete,
    so an interrupted download is never mistaken for a finished one.

    Args:
        url: Archive URL.
        target: Where to save the archive. Defaults to DATA_DIR/<name>.
        force: Download even if the target exists.

    Raises:
        IngestionError: If the download fails.
    """
    target = Path(target) if target else DATA_DIR / archive_name(url)

    if target.exists() and not force:
        logger.info(f"Already exists: {target}")
        return target

    target.parent.mkdir(parents=True, exist_ok=True)
    partial = target.with_name(target.name + '.part')

    logger.info(f"Downloading: {url}")
    try:
        urllib.request.urlretrieve(url, partial, reporthook=_log_progress)
    except (urllib.error.URLError, OSError) as e:
        partial.unlink(missing_ok=True)
        raise IngestionError(f"Download failed: {url}: {e}") from e

    partial.replace(target)
    logger.info(f"Downloaded: {target}")
    return target


# ============================================================================
# Decompression
# ============================================================================

def _check_members(tar: tarfile.TarFile, target_dir: Path):
    root = target_dir.resolve()
    for member in tar.getmembers():
        destination = (root / member.name).resolve()
        if destination != root and root not in destination.parents:
            raise IngestionError(f"Archive member escapes target directory: {member.name}")


def extract_archive(archive: PathLike, target_dir: Optional[PathLike] = None) -> Path:
    """
    Gunzip and untar the archive.

    Args:
        archive: Path to a .tar.gz file.
        target_dir: Directory to extract into. Defaults to the archive
            path without its suffix.

    Raises:
        IngestionError: If the archive is missing or corrupt.
    """
    archive = Path(archive)
    if target_dir is None:
        target_dir = archive.with_name(strip_archive_suffix(archive.name))
    target_dir = Path(target_dir)

    logger.info(f"Decompressing: {archive}")
    try:
        with tarfile.open(archive, 'r:*') as tar:
            _check_members(tar, target_dir)
            target_dir.mkdir(parents=True, exist_ok=True)
            if hasattr(tarfile, 'data_filter'):
                tar.extractall(target_dir, filter='data')
            else:
                tar.extractall(target_dir)
    except (tarfile.TarError, EOFError, OSError) as e:
        raise IngestionError(f"Decompression failed: {archive}: {e}") from e

    logger.info(f"Decompressed: {target_dir}")
    return target_dir


def find_source_file(directory: PathLike, name: str) -> Optional[Path]:
    """Find a file by name anywhere under directory (shallowest first)."""
    matches = sorted(Path(directory).rglob(name), key=lambda p: len(p.parts))
    return matches[0] if matches else None


def write_about_file(path: PathLike, source_name: str,
                     copying_path: Optional[PathLike] = None) -> Path:
    """Write the dictionary name followed by its licence text."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Creating file: {path}")
    text = source_name
    if copying_path is not None:
        logger.info(f"Copying: {copying_path} to {path}")
        text += "\n\n" + Path(copying_path).read_text(encoding='utf-8', errors='replace')
    path.write_text(text, encoding='utf-8')
    return path


# ============================================================================
# Decoding and Building
# ============================================================================

def ingest_csv(csv_path: PathLike, encoding: str = SOURCE_ENCODING) -> Tuple[List[Word], IngestStats]:
    """
    Decode a source CSV and build the catalogue from it.

    Raises:
        IngestionError: If the encoding is unknown or the file cannot be read.
    """
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise IngestionError(f"Unknown source encoding: {encoding}") from e

    stats = IngestStats()
    logger.info(f"Parsing: {csv_path}")
    try:
        with open(csv_path, 'rb') as f:
            words = build_catalogue(decode_records(f, encoding=encoding, stats=stats), stats)
    except OSError as e:
        raise IngestionError(f"Cannot read source: {csv_path}: {e}") from e
    return words, stats


def run_ingestion(url: str = SOURCE_URL,
                  work_dir: PathLike = DATA_DIR,
                  output: PathLike = CATALOGUE_PATH,
                  about_path: Optional[PathLike] = ABOUT_PATH,
                  force: bool = False) -> IngestResult:
    """
    Run the whole pipeline: fetch, decompress, decode, build, serialize.

    Args:
        url: Source archive URL.
        work_dir: Directory for the archive and its extracted contents.
        output: Catalogue JSON path.
        about_path: Where to write the dictionary notice, or None to skip.
        force: Download again even if the archive is already present.

    Returns:
        IngestResult with the catalogue and run counters.

    Raises:
        IngestionError: If any stage fails.
    """
    work_dir = Path(work_dir)
    name = archive_name(url)

    archive = download_source(url, work_dir / name, force=force)
    extracted = extract_archive(archive, work_dir / strip_archive_suffix(name))

    csv_path = find_source_file(extracted, SOURCE_CSV_NAME)
    if csv_path is None:
        raise IngestionError(f"{SOURCE_CSV_NAME} not found in {archive}")

    if about_path is not None:
        write_about_file(about_path, strip_archive_suffix(name),
                         find_source_file(extracted, SOURCE_COPYING_NAME))

    words, stats = ingest_csv(csv_path)
    try:
        saved = save_catalogue(words, output)
    except OSError as e:
        raise IngestionError(f"Cannot write catalogue: {output}: {e}") from e

    return IngestResult(words=words, stats=stats, output=saved)
