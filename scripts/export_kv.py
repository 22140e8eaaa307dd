"""Dump every KV record to a JSON file under ``backups/``."""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.resovista.resovista.container import build_kv_store


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--prefix", default="", help="only export keys starting with this prefix")
    parser.add_argument("--out", type=Path, default=None)
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    kv = build_kv_store(backend=settings.STORAGE_BACKEND, db_config=dict(settings.DB_CONFIG))

    out_file = args.out
    if out_file is None:
        out_dir = REPO_ROOT / "backups"
        out_dir.mkdir(parents=True, exist_ok=True)
        out_file = out_dir / f"kv_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"

    records = dict(kv.items_by_prefix(args.prefix))
    out_file.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"OK: Exported {len(records)} records -> {out_file}")


if __name__ == "__main__":
    main()
