"""Category management commands."""

import click

from fundtrack.cli.runtime import get_app, run
from fundtrack.domain.entities import CategoryKind
from fundtrack.domain.payloads import CategoryPatch, NewCategory


def kind_option(func):
    """Add a --kind option selecting purchase or income categories."""
    return click.option(
        "--kind",
        type=click.Choice([k.value for k in CategoryKind]),
        default=CategoryKind.PURCHASE.value,
        show_default=True,
        help="Category family",
    )(func)


@click.group()
def category_group():
    """Manage purchase and income categories."""
    pass


@category_group.command("create")
@click.argument("name")
@kind_option
@click.option("--icon", default="pi pi-tag", show_default=True, help="Icon name")
@click.option("--color", default="#6B7280", show_default=True, help="Display color")
@click.option("--description", help="Description")
@click.pass_context
def create_category(ctx, name, kind, icon, color, description):
    """Create a category.

    Examples:
        fundtrack category create "Food"
        fundtrack category create "Donations" --kind income --color "#10B981"
    """
    app = get_app(ctx)
    form = NewCategory(name=name, icon=icon, color=color, description=description)

    async def _create():
        category = await app.categories.create_category(CategoryKind(kind), form)
        click.echo(f"Created {kind} category '{category.name}' (ID: {category.id})")

    run(ctx, _create())


@category_group.command("list")
@kind_option
@click.option("--all", "show_all", is_flag=True, help="Include inactive categories")
@click.pass_context
def list_categories(ctx, kind, show_all):
    """List categories of one kind."""
    app = get_app(ctx)
    category_kind = CategoryKind(kind)

    async def _list():
        categories = await app.categories.load_categories(category_kind)
        if not show_all:
            categories = app.categories.active_categories(category_kind)
        if not categories:
            click.echo(f"No {kind} categories found.")
            return

        click.echo(f"\n{kind.capitalize()} categories:")
        click.echo("-" * 60)
        for cat in categories:
            status = "" if cat.active else " (inactive)"
            click.echo(f"ID: {cat.id:3d} | {cat.name}{status}")
            if cat.description:
                click.echo(f"          {cat.description}")

    run(ctx, _list())


@category_group.command("update")
@click.argument("category_id", type=int)
@kind_option
@click.option("--name", help="New name")
@click.option("--icon", help="New icon")
@click.option("--color", help="New display color")
@click.option("--description", help="New description")
@click.pass_context
def update_category(ctx, category_id, kind, name, icon, color, description):
    """Update fields of a category."""
    app = get_app(ctx)
    patch = CategoryPatch(name=name, icon=icon, color=color, description=description)

    async def _update():
        category = await app.categories.update_category(CategoryKind(kind), category_id, patch)
        click.echo(f"Updated {kind} category '{category.name}' (ID: {category.id})")

    run(ctx, _update())


@category_group.command("toggle")
@click.argument("category_id", type=int)
@kind_option
@click.pass_context
def toggle_category(ctx, category_id, kind):
    """Switch a category between active and inactive."""
    app = get_app(ctx)

    async def _toggle():
        category = await app.categories.toggle_category(CategoryKind(kind), category_id)
        status = "active" if category.active else "inactive"
        click.echo(f"Category '{category.name}' is now {status}")

    run(ctx, _toggle())


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
