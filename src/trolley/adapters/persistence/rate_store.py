# src/trolley/adapters/persistence/rate_store.py
"""
Rate Store - Durable Offline Rate Table

This module persists the offline currency rate table in a JSON file. The file
is a small key-value document; the table lives under a single fixed key
("OfflineRates"). Writes are atomic (temporary file + rename) so a crash never
leaves a half-written table behind.

Files that USE this module:
- trolley.application.currency_converter (loads, seeds and replaces the table)
- trolley.app (creates the store from settings)

Files that this module USES:
- trolley.domain.models (CurrencyRateTable)
- trolley.domain.errors (StorageCastError, StorageWriteError, InvalidRateError)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from trolley.domain.errors import InvalidRateError, StorageCastError, StorageWriteError
from trolley.domain.models import CurrencyRateTable

log = logging.getLogger(__name__)

OFFLINE_RATES_KEY = "OfflineRates"


class RateStore:
    """Load and save a CurrencyRateTable under a fixed key of a JSON file."""

    def __init__(self, path: Path, key: str = OFFLINE_RATES_KEY):
        """
        Initialize rate store.

        Args:
            path: Path to the JSON document
            key: Slot holding the rate table inside the document
        """
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> Optional[Dict[str, Any]]:
        """
        Read the whole JSON document.

        Returns:
            Parsed document, or None if the file does not exist

        Raises:
            StorageCastError: If the file is not a JSON object
        """
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            # Corrupt file - keep a copy for inspection and drop the file
            backup_path = self.path.with_suffix(".json.corrupt")
            try:
                shutil.copy2(self.path, backup_path)
                self.path.unlink()
                log.warning("Rate store corrupted, backed up to %s: %s", backup_path, e)
            except OSError as backup_error:
                log.error("Failed to back up corrupt rate store: %s", backup_error)
            raise StorageCastError(f"Rate store {self.path} is not valid JSON: {e}") from e
        except OSError as e:
            raise StorageCastError(f"Rate store {self.path} could not be read: {e}") from e

        if not isinstance(data, dict):
            raise StorageCastError(f"Rate store {self.path} does not hold a JSON object")
        return data

    def load(self) -> Optional[CurrencyRateTable]:
        """
        Load the rate table.

        Returns:
            CurrencyRateTable, or None if nothing has been stored yet

        Raises:
            StorageCastError: If stored data is present but not a valid rate table
        """
        doc = self._read_document()
        if doc is None or self.key not in doc:
            return None

        raw = doc[self.key]
        if not isinstance(raw, dict):
            raise StorageCastError(f"Stored {self.key} is {type(raw).__name__}, expected object")
        try:
            return CurrencyRateTable(raw)
        except InvalidRateError as e:
            raise StorageCastError(f"Stored {self.key} is not a rate table: {e}") from e

    def save(self, table: CurrencyRateTable) -> None:
        """
        Replace the stored rate table using an atomic write.

        Other keys of the document are preserved when it is readable.

        Args:
            table: Rate table to persist

        Raises:
            StorageWriteError: If the file cannot be written
        """
        try:
            doc = self._read_document() or {}
        except StorageCastError as e:
            log.warning("Overwriting unreadable rate store: %s", e)
            doc = {}
        doc[self.key] = table.to_json()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                suffix=".json.tmp",
                dir=str(self.path.parent),
                text=True,
            )
        except OSError as e:
            raise StorageWriteError(f"Failed to save rate store: {e}") from e

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, str(self.path))
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageWriteError(f"Failed to save rate store: {e}") from e

        log.debug("Saved %d offline rates to %s", len(table), self.path)
