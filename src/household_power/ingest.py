# file: src/household_power/ingest.py
"""
Household Power: Acquire the UCI archive

- Uses requests.Session with retries
- Streams the zip to disk (~20 MB), then extracts the semicolon file
- Idempotent: existing files are reused unless overwrite=True
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import PipelineConfig
from .io_utils import ensure_dir

logger = logging.getLogger(__name__)


def create_session() -> requests.Session:
    """Create session with retry logic"""
    session = requests.Session()
    retries = Retry(total=3, backoff_factor=0.5, status_forcelist=[500, 502, 503, 504])
    session.mount("https://", HTTPAdapter(max_retries=retries))
    return session


def download_archive(config: PipelineConfig, chunk_size: int = 1 << 20) -> Path:
    """
    Download the source zip into the data directory.

    Writes to a temp file first and renames on success, so an interrupted
    download never leaves a truncated archive behind.
    """
    archive = config.archive_path()
    ensure_dir(archive.parent)

    if archive.exists() and not config.overwrite:
        logger.info("[ingest] archive exists, skipping: %s", archive)
        return archive

    logger.info("[ingest] downloading %s", config.source_url)
    session = create_session()
    tmp = archive.with_suffix(archive.suffix + ".tmp")

    with session.get(config.source_url, stream=True, timeout=60) as response:
        response.raise_for_status()
        with open(tmp, "wb") as f:
            for chunk in response.iter_content(chunk_size=chunk_size):
                if chunk:
                    f.write(chunk)

    tmp.replace(archive)
    logger.info("[ingest] wrote archive: %s (%d bytes)", archive, archive.stat().st_size)
    return archive


def extract_archive(archive: Path, dest: Path, member: str) -> Path:
    """Extract a single member from the zip and return its path"""
    archive = Path(archive)
    dest = Path(dest)
    ensure_dir(dest)

    with zipfile.ZipFile(archive) as zf:
        names = zf.namelist()
        if member not in names:
            raise FileNotFoundError(f"{member} not found in {archive}; members: {names}")
        zf.extract(member, path=dest)

    out = dest / member
    logger.info("[ingest] extracted: %s", out)
    return out


def fetch_dataset(config: PipelineConfig) -> Path:
    """Download + extract. Returns the path the loader should read."""
    raw = config.raw_path()
    if raw.exists() and not config.overwrite:
        logger.info("[ingest] raw file exists, skipping: %s", raw)
        return raw

    archive = download_archive(config)
    return extract_archive(archive, config.data_path(), config.raw_name)
