"""Tests for users, roles and invitations."""

from datetime import datetime, timedelta, UTC

import pytest

from fundtrack.domain.entities import Role
from fundtrack.domain.errors import AuthorizationError, NotFoundError, StoreFailure, ValidationError
from fundtrack.domain.identity import SessionIdentityProvider, can_approve_purchases, has_role
from fundtrack.domain.payloads import NewUser, UserPatch


def _new_user(email="nuevo@example.org", role=Role.PURCHASE_MANAGER):
    return NewUser(email=email, first_name="Nuevo", last_name="Usuario", role=role)


async def test_register_user_with_explicit_id(app_for):
    app = app_for(None)

    user = await app.users.register_user(_new_user(), user_id=42)

    assert user.id == 42
    assert user.role == Role.PURCHASE_MANAGER
    assert user.active is True
    assert user.full_name == "Nuevo Usuario"


async def test_register_user_validates_email(app_for):
    with pytest.raises(ValidationError, match="email"):
        await app_for(None).users.register_user(_new_user(email="not-an-email"))


async def test_duplicate_email_is_a_store_failure(app_for, users):
    with pytest.raises(StoreFailure):
        await app_for(None).users.register_user(_new_user(email="ana@example.org"))


async def test_invitation_flow(app_for, users):
    admin = app_for(users.admin)
    invitation = await admin.users.create_invitation("invitee@example.org", Role.TREASURER)

    assert invitation.expires_at.replace(tzinfo=UTC) > datetime.now(UTC) + timedelta(days=6)
    assert len(invitation.token) >= 32
    assert [i.id for i in admin.users.pending_invitations()] == [invitation.id]

    newcomer = app_for(None)
    user = await newcomer.users.register_user(
        _new_user(email="Invitee@example.org", role=Role.PURCHASE_MANAGER),
        invitation_token=invitation.token,
    )

    assert user.role == Role.TREASURER
    assert await newcomer.users.verify_invitation(invitation.token) is None
    await admin.users.load_invitations()
    assert admin.users.pending_invitations() == []


async def test_invitation_for_other_email_is_refused(app_for, users):
    invitation = await app_for(users.admin).users.create_invitation("invitee@example.org", Role.TREASURER)

    with pytest.raises(ValidationError, match="different email"):
        await app_for(None).users.register_user(_new_user(email="intruder@example.org"), invitation_token=invitation.token)


async def test_unknown_invitation_token(app_for):
    with pytest.raises(ValidationError, match="invalid or has expired"):
        await app_for(None).users.register_user(_new_user(), invitation_token="nope")


async def test_only_administrators_manage_users(app_for, users):
    treasurer = app_for(users.treasurer)

    with pytest.raises(AuthorizationError):
        await treasurer.users.create_invitation("x@example.org", Role.TREASURER)
    with pytest.raises(AuthorizationError):
        await treasurer.users.change_role(users.manager.id, Role.ADMINISTRATOR)
    with pytest.raises(AuthorizationError):
        await app_for(None).users.deactivate_user(users.manager.id)


async def test_change_role_and_activation(app_for, users):
    admin = app_for(users.admin)
    await admin.users.load_users()

    promoted = await admin.users.change_role(users.manager.id, Role.TREASURER)
    assert promoted.role == Role.TREASURER
    assert can_approve_purchases(promoted)

    deactivated = await admin.users.deactivate_user(users.manager.id)
    assert deactivated.active is False
    assert not can_approve_purchases(deactivated)
    assert users.manager.id not in [u.id for u in admin.users.active_users()]

    reactivated = await admin.users.activate_user(users.manager.id)
    assert reactivated.active is True
    # Cached users stay ordered by first name: Lucia before Tomas
    assert [u.id for u in admin.users.users_by_role(Role.TREASURER)] == [users.manager.id, users.treasurer.id]


async def test_admin_cannot_deactivate_self(app_for, users):
    with pytest.raises(ValidationError, match="your own account"):
        await app_for(users.admin).users.deactivate_user(users.admin.id)


async def test_change_role_of_unknown_user(app_for, users):
    with pytest.raises(NotFoundError):
        await app_for(users.admin).users.change_role(999, Role.TREASURER)


async def test_update_profile(app_for, users):
    manager = app_for(users.manager)

    updated = await manager.users.update_profile(UserPatch(first_name="Lu", avatar_url="https://img/1.png"))

    assert updated.first_name == "Lu"
    assert updated.avatar_url == "https://img/1.png"
    with pytest.raises(AuthorizationError):
        await manager.users.update_profile(UserPatch(role=Role.ADMINISTRATOR))


async def test_revoke_invitation(app_for, users):
    admin = app_for(users.admin)
    invitation = await admin.users.create_invitation("invitee@example.org", Role.PURCHASE_MANAGER)

    await admin.users.delete_invitation(invitation.id)

    assert len(admin.users.invitations) == 0
    assert await admin.db.get_invitation_by_token(invitation.token) is None
    with pytest.raises(NotFoundError):
        await admin.users.delete_invitation(invitation.id)


def test_session_identity_provider_notifies_listeners():
    identity = SessionIdentityProvider()
    seen = []
    identity.on_change(seen.append)

    identity.sign_in(3)
    identity.sign_out()

    assert seen == [3, None]
    assert identity.current_identity() is None


async def test_has_role(users):
    assert has_role(users.admin, Role.ADMINISTRATOR)
    assert has_role(users.treasurer, [Role.ADMINISTRATOR, Role.TREASURER])
    assert not has_role(users.manager, Role.ADMINISTRATOR)
    assert not has_role(None, Role.ADMINISTRATOR)
