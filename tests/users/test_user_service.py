from __future__ import annotations

import pytest

from src.headcount_system.headcount_system.core.constants import DEFAULT_AREAS
from src.headcount_system.headcount_system.core.enums import Role
from src.headcount_system.headcount_system.core.exceptions import (
    AuthorizationError,
    UserNotFoundError,
    ValidationError,
)


def test_first_run_seeds_default_areas_and_creates_admin(container):
    users = container.user_service
    assert users.needs_first_admin()

    admin = users.create_first_admin(username="  boss ", password="secret1")

    assert admin.username == "boss"
    assert admin.role == Role.ADMIN
    assert not users.needs_first_admin()
    assert list(container.area_service.list_areas()) == list(DEFAULT_AREAS)


def test_first_admin_password_needs_six_characters(container):
    with pytest.raises(ValidationError):
        container.user_service.create_first_admin(username="boss", password="12345")
    assert container.users_repo.list_all() == []


def test_first_admin_only_once(container):
    container.user_service.create_first_admin(username="boss", password="secret1")
    with pytest.raises(AuthorizationError):
        container.user_service.create_first_admin(username="boss2", password="secret2")


def test_disabled_admin_means_setup_is_needed_again(container, admin):
    assert not container.user_service.needs_first_admin()
    container.user_service.toggle_disabled(current_role=Role.ADMIN, username="admin")
    assert container.user_service.needs_first_admin()


def test_admin_creates_account_with_temporary_password(container, areas):
    user, temp = container.user_service.create_account(
        current_role=Role.ADMIN,
        username="ravi",
        role=Role.USER,
        assigned_areas=["PWHT"],
    )

    assert user.assigned_areas == ("PWHT",)
    assert len(temp) == 12
    assert container.credential_service.verify("ravi", temp)
    assert temp not in str(container.users_repo.get_by_username("ravi").to_dict())


def test_create_account_rejects_unknown_area(container, areas):
    with pytest.raises(ValidationError):
        container.user_service.create_account(
            current_role=Role.ADMIN, username="ravi", role=Role.USER, assigned_areas=["Moon Base"]
        )


def test_non_admin_cannot_manage_users(container, areas):
    with pytest.raises(AuthorizationError):
        container.user_service.create_account(current_role=Role.USER, username="x", role=Role.USER)
    with pytest.raises(AuthorizationError):
        container.user_service.reset_password(current_role=Role.USER, username="x")


def test_reset_password_returns_new_temp_password(container, areas):
    container.user_service.create_account(current_role=Role.ADMIN, username="ravi", role=Role.USER)

    temp = container.user_service.reset_password(current_role=Role.ADMIN, username="ravi")

    assert container.credential_service.verify("ravi", temp)


def test_toggle_role_and_areas(container, areas):
    container.user_service.create_account(current_role=Role.ADMIN, username="ravi", role=Role.USER)
    svc = container.user_service

    assert svc.toggle_disabled(current_role=Role.ADMIN, username="ravi").disabled is True
    assert svc.toggle_disabled(current_role=Role.ADMIN, username="ravi").disabled is False
    assert svc.set_role(current_role=Role.ADMIN, username="ravi", role="admin").role == Role.ADMIN

    user = svc.set_assigned_areas(current_role=Role.ADMIN, username="ravi", areas=["PWHT", "Spool Yard"])
    assert user.assigned_areas == ("PWHT", "Spool Yard")

    with pytest.raises(ValidationError):
        svc.set_role(current_role=Role.ADMIN, username="ravi", role="owner")
    with pytest.raises(UserNotFoundError):
        svc.toggle_disabled(current_role=Role.ADMIN, username="ghost")
