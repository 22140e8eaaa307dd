"""Example: drive the service layer directly (no Flask).

Controllers are thin; the rules live in the services, so the whole flow
below runs against the in-memory KV store.
"""

import tempfile

from src.resovista.resovista.container import build_container
from src.resovista.resovista.storage.blob_storage import LocalBlobStorage
from src.resovista.resovista.storage.memory_kv_store import InMemoryKVStore


def main():
    kv = InMemoryKVStore()
    blobs = LocalBlobStorage(
        tempfile.mkdtemp(), bucket="resovista-documents", secret_key="example", url_base="/api/documents/download"
    )
    container = build_container(kv=kv, blobs=blobs, secret_key="example")
    auth = container.auth_service

    auth.sign_up(email="teacher@example.com", password="secret1", name="Ada", role="teacher")
    auth.sign_up(email="student@example.com", password="secret1", name="Linus", role="student")
    teacher = auth.authenticate("Bearer " + auth.sign_in(email="teacher@example.com", password="secret1").access_token)
    student = auth.authenticate("Bearer " + auth.sign_in(email="student@example.com", password="secret1").access_token)

    exam = container.exam_service.create(
        teacher,
        {"title": "Quiz 1", "duration": 10, "questions": [{"id": "q1", "text": "2+2?", "correctAnswer": "4"}]},
    )

    container.proctoring_service.start_exam(student, exam.id)
    for _ in range(3):
        outcome = container.proctoring_service.report_exam_visibility(
            student, exam.id, hidden=True, answers={"q1": "4"}
        )
        print(outcome.decision.action.value, outcome.decision.remaining)

    print(container.exam_service.get_result(student, exam.id, student.id).to_dict())
    print(container.analytics_service.for_student(student.id).to_dict())


if __name__ == "__main__":
    main()
