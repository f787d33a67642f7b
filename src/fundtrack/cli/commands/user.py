"""User and invitation commands."""

import click

from fundtrack.cli.runtime import get_app, run
from fundtrack.domain.entities import Role
from fundtrack.domain.payloads import NewUser

_ROLES = click.Choice([r.value for r in Role])


@click.group()
def user_group():
    """Manage users, roles and invitations."""
    pass


@user_group.command("register")
@click.option("--email", required=True, help="Email address")
@click.option("--first-name", required=True, help="First name")
@click.option("--last-name", default="", help="Last name")
@click.option("--role", type=_ROLES, default=Role.PURCHASE_MANAGER.value, show_default=True)
@click.option("--id", "user_id", type=int, help="Identity ID to register the profile under")
@click.option("--invitation", "token", help="Invitation token; its role takes precedence")
@click.pass_context
def register_user(ctx, email, first_name, last_name, role, user_id, token):
    """Create the profile for a new user.

    Examples:
        fundtrack user register --email ana@example.org --first-name Ana --role administrator
        fundtrack user register --email luis@example.org --first-name Luis --invitation TOKEN
    """
    app = get_app(ctx)
    form = NewUser(email=email, first_name=first_name, last_name=last_name, role=Role(role))

    async def _register():
        user = await app.users.register_user(form, user_id=user_id, invitation_token=token)
        click.echo(f"Registered {user.full_name} as {user.role.value} (ID: {user.id})")

    run(ctx, _register())


@user_group.command("list")
@click.option("--role", type=_ROLES, help="Only users with this role")
@click.pass_context
def list_users(ctx, role):
    """List users."""
    app = get_app(ctx)

    async def _list():
        users = await app.users.load_users()
        if role:
            users = app.users.users_by_role(Role(role))
        if not users:
            click.echo("No users found.")
            return
        for user in users:
            status = "" if user.active else " (inactive)"
            click.echo(f"ID: {user.id:3d} | {user.full_name:25s} | {user.email:30s} | {user.role.value}{status}")

    run(ctx, _list())


@user_group.command("role")
@click.argument("user_id", type=int)
@click.argument("role", type=_ROLES)
@click.pass_context
def change_role(ctx, user_id, role):
    """Change the role of a user (administrators only)."""
    app = get_app(ctx)

    async def _change():
        user = await app.users.change_role(user_id, Role(role))
        click.echo(f"{user.full_name} is now {user.role.value}")

    run(ctx, _change())


@user_group.command("activate")
@click.argument("user_id", type=int)
@click.pass_context
def activate_user(ctx, user_id):
    """Reactivate a user (administrators only)."""
    app = get_app(ctx)

    async def _activate():
        user = await app.users.activate_user(user_id)
        click.echo(f"{user.full_name} is active")

    run(ctx, _activate())


@user_group.command("deactivate")
@click.argument("user_id", type=int)
@click.pass_context
def deactivate_user(ctx, user_id):
    """Deactivate a user (administrators only)."""
    app = get_app(ctx)

    async def _deactivate():
        user = await app.users.deactivate_user(user_id)
        click.echo(f"{user.full_name} is inactive")

    run(ctx, _deactivate())


@user_group.command("invite")
@click.argument("email")
@click.option("--role", type=_ROLES, default=Role.PURCHASE_MANAGER.value, show_default=True)
@click.pass_context
def invite_user(ctx, email, role):
    """Invite someone to join with a role (administrators only)."""
    app = get_app(ctx)

    async def _invite():
        invitation = await app.users.create_invitation(email, Role(role))
        click.echo(f"Invited {invitation.email} as {invitation.role.value}")
        click.echo(f"Token: {invitation.token}")
        click.echo(f"Expires: {invitation.expires_at:%Y-%m-%d %H:%M}")

    run(ctx, _invite())


@user_group.command("invitations")
@click.pass_context
def list_invitations(ctx):
    """List invitations that are still waiting to be used."""
    app = get_app(ctx)

    async def _list():
        await app.users.load_invitations()
        invitations = app.users.pending_invitations()
        if not invitations:
            click.echo("No pending invitations.")
            return
        for inv in invitations:
            click.echo(f"ID: {inv.id:3d} | {inv.email:30s} | {inv.role.value:16s} | expires {inv.expires_at:%Y-%m-%d}")

    run(ctx, _list())


@user_group.command("revoke")
@click.argument("invitation_id", type=int)
@click.pass_context
def revoke_invitation(ctx, invitation_id):
    """Delete an invitation (administrators only)."""
    app = get_app(ctx)

    async def _revoke():
        await app.users.delete_invitation(invitation_id)
        click.echo(f"Revoked invitation {invitation_id}")

    run(ctx, _revoke())


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
