from __future__ import annotations

import io
import json
import logging
from typing import Any, Sequence

import qrcode

from ..common.datetime_utils import Clock, now_utc, to_iso, to_millis
from ..common.permissions import ensure_role
from ..common.validators import require_fields, require_iso_date, require_key_part, require_non_empty, require_number
from ..core.constants import CERTIFICATE_NUMBER_PREFIX
from ..core.enums import STAFF_ROLES
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import CurrentUser
from .model import Certificate
from .repository import CertificateRepository

logger = logging.getLogger(__name__)


class CertificateService:
    def __init__(self, certificates: CertificateRepository, *, clock: Clock = now_utc):
        self._certificates = certificates
        self._clock = clock

    def issue(
        self,
        actor: CurrentUser,
        *,
        student_id: Any,
        lab_name: Any,
        score: Any,
        completion_date: Any,
    ) -> Certificate:
        ensure_role(actor, STAFF_ROLES, "Only teachers or admins can issue certificates")
        require_fields(
            {"studentId": student_id, "labName": lab_name, "score": score, "completionDate": completion_date},
            "studentId", "labName", "score", "completionDate",
        )
        student_id = require_key_part(student_id, "studentId")
        value = require_number(score, "score")
        if value < 0:
            raise ValidationError("score must not be negative")

        now = self._clock()
        millis = to_millis(now)
        certificate = Certificate(
            id=f"certificate:{student_id}:{millis}",
            student_id=student_id,
            lab_name=require_non_empty(lab_name, "labName"),
            score=value,
            completion_date=require_iso_date(completion_date, "completionDate"),
            issued_by=actor.id,
            issued_at=to_iso(now),
            certificate_number=f"{CERTIFICATE_NUMBER_PREFIX}-{millis}",
        )
        self._certificates.save(certificate)
        logger.info("Issued %s to %s", certificate.certificate_number, student_id)
        return certificate

    def list_for_student(self, student_id: str) -> Sequence[Certificate]:
        return self._certificates.list_for_student(require_key_part(student_id, "studentId"))

    def verify(self, certificate_number: str) -> Certificate:
        certificate = self._certificates.find_by_number(certificate_number)
        if not certificate:
            raise NotFoundError("Certificate not found")
        return certificate

    def qr_png(self, certificate_id: str) -> bytes:
        """PNG QR code carrying the certificate number for offline verification."""
        certificate = self._certificates.get(certificate_id)
        if not certificate:
            raise NotFoundError("Certificate not found")

        data = {"certificateNumber": certificate.certificate_number, "studentId": certificate.student_id}
        img = qrcode.make(json.dumps(data))
        buf = io.BytesIO()
        img.save(buf)
        return buf.getvalue()
