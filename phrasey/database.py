import csv
import logging
import random
import typing

from . import utils
from .classes import Phrase
from .exceptions import DatabaseError

logger = logging.getLogger("phrasey.database")


class PhraseStore(typing.Protocol):
    def sample(self, n: int) -> list[Phrase]:
        ...


class DatabaseManager:
    """
    Phrase store backed by a two-column CSV file.
    """
    conn_string: str
    records: list[Phrase]

    def __init__(self, conn_string: str):
        self.conn_string = conn_string
        self.records = []

    def connect(self):
        try:
            path = utils.strip_file_scheme(self.conn_string)
        except ValueError as e:
            raise DatabaseError(f"Failed to parse database connection string: {e}") from e
        logger.log(utils.TRACE, f"Database connection string parsed, loading from file: {path}")
        try:
            self.records = self.read_csv(path)
        except (OSError, csv.Error) as e:
            raise DatabaseError(f"Failed to load phrases from {path}: {e}") from e
        logger.debug(f"Database loaded from {self.conn_string} with {len(self.records)} records")

    def close(self):
        self.records = []

    def __enter__(self) -> 'DatabaseManager':
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __len__(self) -> int:
        return len(self.records)

    @staticmethod
    def read_csv(path: str) -> list[Phrase]:
        records = []
        with open(path, newline="", encoding="utf-8") as f:
            for row in csv.reader(f):
                if len(row) == 2:
                    records.append(Phrase(original=row[0], translation=row[1]))
                else:
                    logger.log(utils.TRACE, f"Row skipped: {row}")
        logger.log(utils.TRACE, f"Total records loaded from CSV: {len(records)}")
        return records

    def sample(self, n: int) -> list[Phrase]:
        if n <= 0:
            return []
        phrases = random.sample(self.records, min(n, len(self.records)))
        logger.log(utils.TRACE, f"Fetched {len(phrases)} random records from database")
        return phrases
