from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .areas.document_area_repository import DocumentAreaRepository
from .areas.service import AreaService
from .attendance.document_attendance_repository import DocumentAttendanceRepository
from .attendance.service import AttendanceLedger
from .audit.service import AuditLog
from .backup.service import BackupService
from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .database.document_store import DocumentStore
from .database.memory_document_store import InMemoryDocumentStore
from .database.mysql_document_store import MySQLDocumentStore
from .database.storage import LedgerStorage
from .designations.document_designation_repository import DocumentDesignationHistoryRepository
from .designations.service import DesignationIndex
from .exports.service import ExportService
from .sessions.document_session_repository import DocumentSessionRepository
from .sessions.service import AuthService
from .settings.document_settings_repository import DocumentSettingsRepository
from .settings.service import SettingsService
from .users.document_user_repository import DocumentUserRepository
from .users.service import CredentialService, UserService


@dataclass(frozen=True)
class Container:
    storage: LedgerStorage

    users_repo: DocumentUserRepository
    sessions_repo: DocumentSessionRepository
    areas_repo: DocumentAreaRepository
    attendance_repo: DocumentAttendanceRepository
    designations_repo: DocumentDesignationHistoryRepository
    settings_repo: DocumentSettingsRepository

    credential_service: CredentialService
    user_service: UserService
    auth_service: AuthService
    designation_index: DesignationIndex
    audit_log: AuditLog
    ledger: AttendanceLedger
    area_service: AreaService
    settings_service: SettingsService
    backup_service: BackupService
    export_service: ExportService


def build_store(*, backend: str, db_config: dict | None = None) -> DocumentStore:
    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        return MySQLDocumentStore(conn)
    raise ValueError(f"Unknown store backend: {backend!r}")


def build_container(*, store: DocumentStore, clock: Callable[[], datetime] = now_local) -> Container:
    storage = LedgerStorage(store)

    users_repo = DocumentUserRepository(storage)
    sessions_repo = DocumentSessionRepository(storage)
    areas_repo = DocumentAreaRepository(storage)
    attendance_repo = DocumentAttendanceRepository(storage)
    designations_repo = DocumentDesignationHistoryRepository(storage)
    settings_repo = DocumentSettingsRepository(storage)

    credential_service = CredentialService(users_repo, clock=clock)
    user_service = UserService(users_repo, areas_repo, credential_service)
    auth_service = AuthService(sessions_repo, users_repo, clock=clock)
    designation_index = DesignationIndex(designations_repo)
    audit_log = AuditLog(attendance_repo, auth_service, clock=clock)
    ledger = AttendanceLedger(attendance_repo, auth_service, designation_index, audit_log, clock=clock)
    area_service = AreaService(areas_repo, users_repo, attendance_repo, designation_index)
    settings_service = SettingsService(settings_repo, attendance_repo, clock=clock)
    backup_service = BackupService(storage, clock=clock)
    export_service = ExportService(ledger)

    return Container(
        storage=storage,
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        areas_repo=areas_repo,
        attendance_repo=attendance_repo,
        designations_repo=designations_repo,
        settings_repo=settings_repo,
        credential_service=credential_service,
        user_service=user_service,
        auth_service=auth_service,
        designation_index=designation_index,
        audit_log=audit_log,
        ledger=ledger,
        area_service=area_service,
        settings_service=settings_service,
        backup_service=backup_service,
        export_service=export_service,
    )
