# services/swift_directory.py
"""
SWIFT/BIC reference index.

Holds the set of recognised bank identifier codes, loaded once at startup
from a JSON array of ``{"bic": "...", ...}`` records.

If the dataset cannot be loaded the directory is empty and every lookup
reports "not found". The service keeps running in that state; the failure is
logged at ERROR and visible through the health endpoint's code count.
"""
import json
import logging
import os
from typing import Any, Iterable, Mapping

from .errors import ValidationError

logger = logging.getLogger(__name__)


def normalize_swift_code(code: str) -> str:
     """Drop all whitespace and upper-case: ``" absa zaxxx "`` -> ``"ABSAZAXXX"``."""
     return "".join(code.split()).upper()


class SwiftDirectory:
     """Read-only lookup of valid SWIFT/BIC codes."""

     def __init__(self, codes: Iterable[str] = ()):
          self._codes = frozenset(
               normalize_swift_code(code) for code in codes if isinstance(code, str) and code.strip()
          )

     @classmethod
     def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "SwiftDirectory":
          """Build from dataset records, skipping any without a string ``bic``."""
          codes = []
          for record in records:
               if isinstance(record, Mapping) and isinstance(record.get("bic"), str):
                    codes.append(record["bic"])
          return cls(codes)

     @classmethod
     def from_file(cls, path: str) -> "SwiftDirectory":
          """
          Load the dataset file.

          Never raises: a missing file, invalid JSON or a payload that is not
          a list all yield an empty directory.
          """
          try:
               with open(path, "r", encoding="utf-8") as fh:
                    data = json.load(fh)
               if not isinstance(data, list):
                    raise ValueError(f"expected a JSON array, got {type(data).__name__}")
          except (OSError, ValueError) as exc:
               logger.error("Failed to load SWIFT dataset from %s: %s", path, exc)
               return cls()

          directory = cls.from_records(data)
          logger.info("Loaded %d SWIFT records from %s", len(directory), os.path.basename(path))
          return directory

     def is_valid(self, code: str) -> bool:
          """
          Check whether ``code`` is a recognised BIC.

          Raises:
               ValidationError: If ``code`` is missing or blank.
          """
          if not isinstance(code, str) or not code.strip():
               raise ValidationError("Missing SWIFT code in request body.")
          return normalize_swift_code(code) in self._codes

     def __contains__(self, code: object) -> bool:
          return isinstance(code, str) and normalize_swift_code(code) in self._codes

     def __len__(self) -> int:
          return len(self._codes)

     def __repr__(self):
          return f"<SwiftDirectory(codes={len(self._codes)})>"
