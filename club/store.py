"""
Record Store

The analytics engine never fetches anything itself; collaborators hand it
plain collections through this interface. Two stores ship here: an in-memory
one and a JSON document store for exported snapshots.
"""

import json
from pathlib import Path
from typing import List, Dict, Any, Optional, Type, TypeVar, Protocol, Sequence

from pydantic import BaseModel, ValidationError
from loguru import logger

from .models import Member, Event, Attendance, Contribution, FeePayment

T = TypeVar("T", bound=BaseModel)


class RecordStore(Protocol):
    """Source of raw club records"""

    def get_members(self) -> List[Member]: ...

    def get_events(self) -> List[Event]: ...

    def get_attendance(self) -> List[Attendance]: ...

    def get_contributions(self) -> List[Contribution]: ...

    def get_fee_payments(self) -> List[FeePayment]: ...


class InMemoryRecordStore:
    """Record store over already-built records"""

    def __init__(
        self,
        members: Sequence[Member] = (),
        events: Sequence[Event] = (),
        attendance: Sequence[Attendance] = (),
        contributions: Sequence[Contribution] = (),
        fee_payments: Sequence[FeePayment] = (),
    ):
        self._members = list(members)
        self._events = list(events)
        self._attendance = list(attendance)
        self._contributions = list(contributions)
        self._fee_payments = list(fee_payments)

    def get_members(self) -> List[Member]:
        return list(self._members)

    def get_events(self) -> List[Event]:
        return list(self._events)

    def get_attendance(self) -> List[Attendance]:
        return list(self._attendance)

    def get_contributions(self) -> List[Contribution]:
        return list(self._contributions)

    def get_fee_payments(self) -> List[FeePayment]:
        return list(self._fee_payments)


# Collection keys used by the document database export
COLLECTION_KEYS = {
    "members": ("members",),
    "events": ("events",),
    "attendance": ("attendance",),
    "contributions": ("contributions",),
    "fee_payments": ("feePayments", "fee_payments", "membershipFees"),
}


def parse_records(model: Type[T], raw_records: List[Dict[str, Any]], collection: str = "") -> List[T]:
    """Build records one by one, skipping (and logging) the ones that fail validation"""
    records: List[T] = []
    skipped = 0

    for raw in raw_records:
        try:
            records.append(model.model_validate(raw))
        except ValidationError as e:
            skipped += 1
            record_id = raw.get("id") if isinstance(raw, dict) else None
            logger.warning(
                f"Skipping invalid {collection or model.__name__} record {record_id}: "
                f"{e.error_count()} error(s), first: {e.errors()[0]['msg']}"
            )

    if skipped:
        logger.warning(f"{collection or model.__name__}: {skipped} of {len(raw_records)} records skipped")
    return records


class JsonRecordStore:
    """Record store backed by a JSON snapshot file.

    The file holds one object with the collections ``members``, ``events``,
    ``attendance``, ``contributions`` and ``feePayments``. A missing or
    unreadable file yields empty collections.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.error(f"Snapshot file not found: {self.path}")
            data = {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read snapshot {self.path}: {e}")
            data = {}

        if not isinstance(data, dict):
            logger.error(f"Snapshot {self.path} is not a JSON object")
            data = {}

        self._data = data
        return data

    def _collection(self, name: str) -> List[Dict[str, Any]]:
        data = self._load()
        for key in COLLECTION_KEYS[name]:
            if key in data:
                value = data[key]
                return value if isinstance(value, list) else []
        return []

    def get_members(self) -> List[Member]:
        return parse_records(Member, self._collection("members"), "members")

    def get_events(self) -> List[Event]:
        return parse_records(Event, self._collection("events"), "events")

    def get_attendance(self) -> List[Attendance]:
        return parse_records(Attendance, self._collection("attendance"), "attendance")

    def get_contributions(self) -> List[Contribution]:
        return parse_records(Contribution, self._collection("contributions"), "contributions")

    def get_fee_payments(self) -> List[FeePayment]:
        return parse_records(FeePayment, self._collection("fee_payments"), "fee_payments")
