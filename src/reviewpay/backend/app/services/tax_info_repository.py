"""In-process storage for reviewer tax information."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Callable

from reviewpay.backend.app.models import TaxInfoResult
from reviewpay.backend.errors import DuplicateRegistrationError


@dataclass(frozen=True)
class TaxInfoRecord:
    """Persisted tax information for a single reviewer."""

    reviewer_id: str
    encrypted_rrn: str = field(repr=False)
    rrn_hash: str = field(repr=False)
    legal_name: str
    verification_method: str
    registered_at: datetime
    updated_at: datetime


class InMemoryTaxInfoRepository:
    """Thread-safe store keyed by reviewer with a unique index on the RRN hash."""

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._records: dict[str, TaxInfoRecord] = {}
        self._reviewer_by_hash: dict[str, str] = {}
        self._lock = Lock()

    def register(
        self,
        reviewer_id: str,
        result: TaxInfoResult,
        *,
        verification_method: str = "manual",
    ) -> tuple[TaxInfoRecord, bool]:
        """Store ``result`` for ``reviewer_id``.

        Returns the stored record and ``True`` when it replaced an earlier
        registration by the same reviewer. Raises
        :class:`DuplicateRegistrationError` when another reviewer already
        registered the same number.
        """

        now = self._clock()
        with self._lock:
            owner = self._reviewer_by_hash.get(result.rrn_hash)
            if owner is not None and owner != reviewer_id:
                raise DuplicateRegistrationError(
                    "This resident registration number is already registered"
                )

            previous = self._records.get(reviewer_id)
            if previous is not None:
                self._reviewer_by_hash.pop(previous.rrn_hash, None)

            record = TaxInfoRecord(
                reviewer_id=reviewer_id,
                encrypted_rrn=result.encrypted_rrn,
                rrn_hash=result.rrn_hash,
                legal_name=result.legal_name,
                verification_method=verification_method,
                registered_at=previous.registered_at if previous else now,
                updated_at=now,
            )
            self._records[reviewer_id] = record
            self._reviewer_by_hash[result.rrn_hash] = reviewer_id
            return record, previous is not None

    def find(self, reviewer_id: str) -> TaxInfoRecord | None:
        with self._lock:
            return self._records.get(reviewer_id)

    def get(self, reviewer_id: str) -> TaxInfoRecord:
        record = self.find(reviewer_id)
        if record is None:
            raise KeyError(reviewer_id)
        return record

    def find_by_hash(self, rrn_hash: str) -> TaxInfoRecord | None:
        with self._lock:
            reviewer_id = self._reviewer_by_hash.get(rrn_hash)
            return self._records.get(reviewer_id) if reviewer_id is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["InMemoryTaxInfoRepository", "TaxInfoRecord"]
