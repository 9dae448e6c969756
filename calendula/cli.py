"""CLI commands for inspecting calendar view templates."""

import logging
import sys

import click

from calendula.config import clear_settings_cache, get_settings, set_config_path
from calendula.lib.exceptions import ViewNotRegisteredError
from calendula.lib.locator import get_locator
from calendula.lib.template import Template
from calendula.lib.theme import discover_themes
from calendula.views import get_view, views


@click.group()
@click.version_option(package_name="calendula")
@click.option(
    "-f",
    "--config-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Load settings from this YAML file instead of app.yaml",
)
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Logging level",
)
def cli(config_file, log_level):
    """Calendula - calendar view template lookup."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    if config_file:
        set_config_path(config_file)
        clear_settings_cache()


@cli.command("views")
def list_views():
    """List registered views and what they inherit from."""
    for view in views:
        inheritance = ", ".join(ancestor.get_view_slug() for ancestor in view.get_inheritance())
        line = f"{view.get_view_slug():<12} {view.get_view_label()}"
        if inheritance:
            line += f" (inherits {inheritance})"
        click.echo(line)


@cli.command()
@click.option("--theme", default=None, help="Theme to use instead of the configured one")
def folders(theme):
    """List template lookup folders in search order."""
    locator = get_locator(get_settings(), theme_name=theme)
    for folder in locator.get_template_path_list():
        click.echo(f"{folder.priority:>4}  {folder.id:<24} {folder.path}")


@cli.command()
@click.argument("view_slug")
@click.argument("name", required=False)
@click.option("--theme", default=None, help="Theme to use instead of the configured one")
def locate(view_slug, name, theme):
    """Resolve the template VIEW_SLUG would use for NAME.

    NAME defaults to the view's own template, e.g. ``calendula locate summary``
    or ``calendula locate summary summary/event``.
    """
    try:
        view = get_view(view_slug)
    except ViewNotRegisteredError as exc:
        raise click.BadParameter(str(exc), param_hint="VIEW_SLUG") from None

    settings = get_settings()
    template = Template(view, locator=get_locator(settings, theme_name=theme), settings=settings)
    path = template.get_template_file(name)
    if path is None:
        click.echo("not found", err=True)
        sys.exit(1)
    click.echo(str(path))


@cli.command()
def themes():
    """List themes found in the themes directory."""
    settings = get_settings()
    found = discover_themes(settings.get_themes_dir())
    if not found:
        click.echo(f"No themes in {settings.get_themes_dir()}")
        return

    for theme in found:
        marker = "*" if theme.directory_name == settings.theme else " "
        line = f"{marker} {theme.directory_name:<20} {theme.name}"
        if theme.version:
            line += f" {theme.version}"
        if theme.parent:
            line += f" (child of {theme.parent})"
        click.echo(line)


if __name__ == "__main__":
    cli()
