"""
Data file persistence with tamper detection.

The whole store lives in one line-oriented text file, read once at session
start and rewritten at session end. A companion file holds the SHA-256 digest
of the data file. Any integrity or parse failure deletes both files: the
tracker refuses to run on a store it cannot fully trust.
"""

import logging
import os
from enum import Enum
from pathlib import Path

from pulse_tracker.infrastructure.parsers.record_parser import (
    FIELD_SEPARATOR,
    RecordParser,
    format_line,
)
from pulse_tracker.services.record_store import RecordStore
from pulse_tracker.utils import messages
from pulse_tracker.utils.exceptions import ErrorKind, TrackerError
from pulse_tracker.utils.hashing import compute_file_hash, hashes_match

logger = logging.getLogger(__name__)

NAME_LABEL = "name"


class LoadStatus(str, Enum):
    """Outcome of opening the data file."""

    CREATED = "created"
    LOADED = "loaded"


class DataFile:
    """
    Reader and writer for the data file and its hash file.

    Session states: a missing pair is created empty (CREATED); a present,
    matching pair is parsed into the store (LOADED). Every other state is fatal.
    """

    def __init__(
        self,
        data_path: str | Path,
        hash_path: str | Path,
        parser: RecordParser | None = None,
    ) -> None:
        """
        Initialize the data file.

        Args:
            data_path: Path to the data file.
            hash_path: Path to the hash file, co-located with the data file.
            parser: Record parser for stored lines.
        """
        self.data_path = Path(data_path)
        self.hash_path = Path(hash_path)
        self.parser = parser or RecordParser()

    def purge(self) -> None:
        """Delete both the data file and the hash file, if present."""
        for path in (self.data_path, self.hash_path):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not delete {path}: {e}")
        logger.info("Deleted data file and hash file")

    def _fail(self, kind: ErrorKind, message: str) -> TrackerError:
        logger.error(message)
        self.purge()
        return TrackerError(kind, message)

    def read_stored_hash(self) -> str:
        return self.hash_path.read_text(encoding="utf-8").strip()

    def verify_integrity(self) -> LoadStatus:
        """
        Check the data file against its stored hash.

        An empty data file is created when neither file exists.

        Returns:
            CREATED if neither file existed, LOADED if the hash matched.

        Raises:
            TrackerError: FILE_READ on mismatch or a missing counterpart file,
                FILE_CREATE if the data file cannot be created.
        """
        data_exists = self.data_path.exists()
        hash_exists = self.hash_path.exists()

        if not data_exists and not hash_exists:
            try:
                self.data_path.parent.mkdir(parents=True, exist_ok=True)
                self.data_path.touch()
            except OSError as e:
                raise self._fail(ErrorKind.FILE_CREATE, messages.CREATE_FILE_ERROR) from e
            logger.info(f"Created new data file {self.data_path}")
            return LoadStatus.CREATED

        if data_exists != hash_exists:
            raise self._fail(ErrorKind.FILE_READ, messages.MISSING_INTEGRITY_ERROR)

        try:
            actual = compute_file_hash(self.data_path)
            expected = self.read_stored_hash()
        except OSError as e:
            raise self._fail(ErrorKind.FILE_READ, messages.HASH_ERROR) from e

        if not hashes_match(expected, actual):
            raise self._fail(ErrorKind.FILE_READ, messages.DATA_INTEGRITY_ERROR)

        logger.info(f"Reading from existing data file {self.data_path}")
        return LoadStatus.LOADED

    def load(self, store: RecordStore) -> tuple[LoadStatus, str | None]:
        """
        Verify the data file and restore its records into the store.

        Args:
            store: Empty store to populate.

        Returns:
            Tuple of (status, user name). The name is None for a new file.

        Raises:
            TrackerError: FILE_READ or FILE_CREATE; both files are deleted first.
        """
        status = self.verify_integrity()
        if status == LoadStatus.CREATED:
            return status, None

        try:
            lines = self.data_path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise self._fail(ErrorKind.FILE_READ, messages.CORRUPT_ERROR) from e

        name = self._parse_name(lines[0] if lines else "")
        if name is None:
            raise self._fail(ErrorKind.FILE_READ, messages.LOAD_MISSING_NAME_ERROR)

        parsers = self.parser.line_parsers()
        for line_number, line in enumerate(lines[1:], start=2):
            tag = line.split(FIELD_SEPARATOR, 1)[0].strip()
            parse = parsers.get(tag)
            if parse is None:
                logger.error(f"Line {line_number}: unknown record type {tag!r}")
                raise self._fail(ErrorKind.FILE_READ, messages.CORRUPT_ERROR)
            try:
                store.add(parse(line), enforce_sequence=False)
            except TrackerError as e:
                logger.error(f"Line {line_number}: {e.message}")
                raise self._fail(ErrorKind.FILE_READ, messages.CORRUPT_ERROR) from e

        logger.info(f"Loaded {len(lines) - 1} records")
        return status, name

    @staticmethod
    def _parse_name(line: str) -> str | None:
        label, separator, value = line.partition(FIELD_SEPARATOR)
        if label.strip() != NAME_LABEL or not separator or not value.strip():
            return None
        return value.strip()

    def save(self, name: str, store: RecordStore) -> None:
        """
        Write the store to the data file, then write its hash.

        Lines are ordered: name, BMI, appointments, periods, workouts.

        Raises:
            TrackerError: FILE_WRITE if either file cannot be written.
        """
        records = [*store.bmis, *store.appointments, *store.periods, *store.workouts]
        lines = [f"{NAME_LABEL}{FIELD_SEPARATOR}{name.strip()}"]
        lines.extend(format_line(record) for record in records)

        try:
            with open(self.data_path, "w", encoding="utf-8", newline="") as f:
                for line in lines:
                    f.write(line + os.linesep)
        except OSError as e:
            raise self._fail(ErrorKind.FILE_WRITE, messages.SAVE_ERROR) from e
        logger.info(f"Wrote {len(records)} records to {self.data_path}")

        try:
            digest = compute_file_hash(self.data_path)
            self.hash_path.write_text(digest, encoding="utf-8")
        except OSError as e:
            raise self._fail(ErrorKind.FILE_WRITE, messages.HASH_WRITE_ERROR) from e
        logger.info(f"Wrote hash to {self.hash_path}")
