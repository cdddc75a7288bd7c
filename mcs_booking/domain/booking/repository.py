"""Booking repository - whole-file JSON persistence for bookings"""

import json
import logging
import os
import tempfile
from datetime import tzinfo
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from .exceptions import StorageError
from .models import Booking
from .schemas import BookingRecord

logger = logging.getLogger(__name__)


class BookingRepository(Protocol):
    """Store accessor: read the whole collection, write the whole collection back."""

    def load(self) -> list[Booking]: ...

    def save(self, bookings: list[Booking]) -> None: ...


class JsonFileBookingRepository:
    """
    Stores bookings in a single JSON document: {"bookings": [...]}.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a failed save leaves the previous file intact.
    """

    def __init__(self, path: Path, zone: Optional[tzinfo] = None):
        self.path = Path(path)
        self.zone = zone

    def ensure_store(self) -> None:
        """Create the data directory and an empty store if missing"""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self._write({"bookings": []})
                logger.info(f"Created empty booking store at {self.path}")
        except OSError as e:
            raise StorageError(f"Could not initialise booking store: {e}") from e

    def load(self) -> list[Booking]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read booking store {self.path}: {e}")
            raise StorageError(f"Could not read booking store: {e}") from e

        try:
            records = [BookingRecord.model_validate(item) for item in data.get("bookings", [])]
            return [record.to_booking(self.zone) for record in records]
        except (AttributeError, ValidationError, ValueError) as e:
            logger.error(f"Booking store {self.path} is malformed: {e}")
            raise StorageError(f"Booking store is malformed: {e}") from e

    def save(self, bookings: list[Booking]) -> None:
        payload = {"bookings": [BookingRecord.from_booking(b).model_dump() for b in bookings]}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write(payload)
        except OSError as e:
            logger.error(f"Failed to write booking store {self.path}: {e}")
            raise StorageError(f"Could not write booking store: {e}") from e

    def _write(self, payload: dict) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
