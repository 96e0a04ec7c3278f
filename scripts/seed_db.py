from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.headcount_system.headcount_system.container import build_container, build_store


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    store = build_store(backend=str(settings.STORE_BACKEND), db_config=dict(settings.DB_CONFIG))
    container = build_container(store=store)

    if not container.user_service.needs_first_admin():
        print("OK: an admin already exists, nothing to seed")
        return

    username = os.getenv("SEED_ADMIN_USERNAME", "admin")
    password = os.getenv("SEED_ADMIN_PASSWORD", "admin123")
    container.user_service.create_first_admin(username=username, password=password)
    print(f"OK: Seeded admin {username!r} and {len(container.area_service.list_areas())} area(s)")


if __name__ == "__main__":
    main()
