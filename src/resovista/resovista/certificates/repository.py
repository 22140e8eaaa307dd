from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Certificate


class CertificateRepository(Protocol):
    def save(self, certificate: Certificate) -> None:
        raise NotImplementedError

    def get(self, certificate_id: str) -> Optional[Certificate]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[Certificate]:
        raise NotImplementedError

    def find_by_number(self, certificate_number: str) -> Optional[Certificate]:
        raise NotImplementedError
