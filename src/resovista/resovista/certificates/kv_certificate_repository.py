from __future__ import annotations

from typing import Optional, Sequence

from ..storage.kv_store import KVStore
from .model import Certificate
from .repository import CertificateRepository


class KVCertificateRepository(CertificateRepository):
    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, certificate: Certificate) -> None:
        self._kv.set(certificate.id, certificate.to_dict())

    def get(self, certificate_id: str) -> Optional[Certificate]:
        if not certificate_id.startswith("certificate:"):
            return None
        data = self._kv.get(certificate_id)
        return Certificate.from_dict(data) if data else None

    def list_for_student(self, student_id: str) -> Sequence[Certificate]:
        return [Certificate.from_dict(d) for d in self._kv.get_by_prefix(f"certificate:{student_id}:")]

    def find_by_number(self, certificate_number: str) -> Optional[Certificate]:
        # No secondary index: full prefix scan.
        for data in self._kv.get_by_prefix("certificate:"):
            if data.get("certificateNumber") == certificate_number:
                return Certificate.from_dict(data)
        return None
