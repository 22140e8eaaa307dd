"""Create demo accounts (admin, teacher, student) in the configured KV store.

Existing accounts are left untouched, so the script can be re-run.
"""

from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.resovista.resovista.container import build_kv_store
from src.resovista.resovista.core.exceptions import ValidationError
from src.resovista.resovista.users.kv_profile_repository import KVProfileRepository
from src.resovista.resovista.users.provider import KVAuthProvider
from src.resovista.resovista.users.service import AuthService

DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "resovista123")

DEMO_USERS = [
    ("admin@resovista.local", "Demo Admin", "admin"),
    ("teacher@resovista.local", "Demo Teacher", "teacher"),
    ("student@resovista.local", "Demo Student", "student"),
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    kv = build_kv_store(backend=settings.STORAGE_BACKEND, db_config=dict(settings.DB_CONFIG))
    auth = AuthService(KVAuthProvider(kv, secret_key=settings.SECRET_KEY), KVProfileRepository(kv))

    for email, name, role in DEMO_USERS:
        try:
            profile = auth.sign_up(email=email, password=DEMO_PASSWORD, name=name, role=role)
            print(f"created {role}: {email} ({profile.id})")
        except ValidationError as e:
            print(f"skipped {email}: {e}")

    print(f"OK: Seeded demo users -> storage={settings.STORAGE_BACKEND}")


if __name__ == "__main__":
    main()
