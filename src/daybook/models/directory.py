"""Read-only directory records used to enrich entry search."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional


@dataclass(frozen=True, slots=True)
class Nurse:
    nurse_id: str
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nurse_reg_no: Optional[str] = None
    phone_number: Optional[str] = None

    def searchable_values(self) -> list[str]:
        return _values(self, exclude={"nurse_id"})


@dataclass(frozen=True, slots=True)
class Client:
    client_id: str
    patient_name: Optional[str] = None
    requestor_name: Optional[str] = None
    requestor_phone: Optional[str] = None
    patient_phone: Optional[str] = None
    requestor_email: Optional[str] = None
    service_required: Optional[str] = None
    patient_city: Optional[str] = None
    requestor_city: Optional[str] = None

    def searchable_values(self) -> list[str]:
        return _values(self, exclude={"client_id"})


def _values(record, *, exclude: set[str]) -> list[str]:
    out = []
    for f in fields(record):
        if f.name in exclude:
            continue
        value = getattr(record, f.name)
        if value:
            out.append(str(value))
    return out
