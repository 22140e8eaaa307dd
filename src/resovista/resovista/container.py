from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .analytics.service import AnalyticsService
from .attendance.kv_attendance_repository import KVAttendanceRepository
from .attendance.service import AttendanceService
from .certificates.kv_certificate_repository import KVCertificateRepository
from .certificates.service import CertificateService
from .chat.kv_chat_repository import KVChatRepository
from .chat.service import ChatService
from .common.datetime_utils import Clock, now_utc
from .core.constants import DEFAULT_TOKEN_MAX_AGE, SIGNED_URL_TTL
from .database.connection import DBConfig, DatabaseConnection
from .documents.kv_document_repository import KVDocumentRepository
from .documents.service import DocumentService
from .exams.kv_exam_repository import KVExamRepository, KVProctorRepository, KVSubmissionRepository
from .exams.service import ExamService, ProctoringService
from .feedback.kv_feedback_repository import KVFeedbackRepository
from .feedback.service import FeedbackService
from .marks.kv_marks_repository import KVMarksRepository
from .marks.service import MarksService
from .notifications.kv_notification_repository import KVNotificationRepository
from .notifications.service import NotificationService
from .storage.blob_storage import BlobStorage
from .storage.kv_store import KVStore
from .storage.memory_kv_store import InMemoryKVStore
from .storage.mysql_kv_store import MySQLKVStore
from .todos.kv_todo_repository import KVTodoRepository
from .todos.service import TodoService
from .users.kv_profile_repository import KVProfileRepository
from .users.provider import KVAuthProvider
from .users.service import AuthService



@dataclass(frozen=True)
class Container:
    kv: KVStore
    blobs: BlobStorage

    auth_service: AuthService
    attendance_service: AttendanceService
    exam_service: ExamService
    proctoring_service: ProctoringService
    marks_service: MarksService
    todo_service: TodoService
    notification_service: NotificationService
    feedback_service: FeedbackService
    certificate_service: CertificateService
    chat_service: ChatService
    document_service: DocumentService
    analytics_service: AnalyticsService


def build_kv_store(*, backend: str, db_config: Mapping[str, Any] | None = None) -> KVStore:
    backend = (backend or "memory").lower()
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config or {}))
        return MySQLKVStore(conn)
    if backend == "memory":
        return InMemoryKVStore()
    raise ValueError(f"Unknown storage backend: {backend}")


def build_container(
    *,
    kv: KVStore,
    blobs: BlobStorage,
    secret_key: str,
    token_max_age: int = DEFAULT_TOKEN_MAX_AGE,
    signed_url_ttl: int = SIGNED_URL_TTL,
    clock: Clock = now_utc,
) -> Container:
    profiles = KVProfileRepository(kv)
    provider = KVAuthProvider(kv, secret_key=secret_key, token_max_age=token_max_age, clock=clock)

    auth_service = AuthService(provider, profiles, clock=clock)
    attendance_service = AttendanceService(KVAttendanceRepository(kv), clock=clock)
    exam_service = ExamService(KVExamRepository(kv), KVSubmissionRepository(kv), clock=clock)
    notification_service = NotificationService(KVNotificationRepository(kv), profiles, clock=clock)
    proctoring_service = ProctoringService(
        KVProctorRepository(kv),
        exam_service,
        notifications=notification_service,
        clock=clock,
    )
    marks_service = MarksService(KVMarksRepository(kv), clock=clock)
    certificate_service = CertificateService(KVCertificateRepository(kv), clock=clock)

    return Container(
        kv=kv,
        blobs=blobs,
        auth_service=auth_service,
        attendance_service=attendance_service,
        exam_service=exam_service,
        proctoring_service=proctoring_service,
        marks_service=marks_service,
        todo_service=TodoService(KVTodoRepository(kv), clock=clock),
        notification_service=notification_service,
        feedback_service=FeedbackService(KVFeedbackRepository(kv), clock=clock),
        certificate_service=certificate_service,
        chat_service=ChatService(KVChatRepository(kv), clock=clock),
        document_service=DocumentService(KVDocumentRepository(kv), blobs, clock=clock, url_ttl=signed_url_ttl),
        analytics_service=AnalyticsService(marks_service, attendance_service, certificate_service),
    )
