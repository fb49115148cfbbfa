"""textguard CLI — check, clean and inspect text from the command line."""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from textguard import __version__

console = Console()


def _policy(ctx: click.Context):
    from textguard.moderation.config import ModerationConfigError
    from textguard.moderation.moderator import get_policy

    try:
        return get_policy(ctx.obj.get("preset"))
    except ModerationConfigError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__)
@click.option("--preset", "-p", default=None, help="Moderation preset (defaults to the configured one)")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, preset: str | None, verbose: bool):
    """textguard — moderation for profile and chat text.

    Checks user-generated text for inappropriate language, shared contact
    information and gibberish, and produces redacted versions of it.
    """
    ctx.ensure_object(dict)
    ctx.obj["preset"] = preset
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# ── Check ────────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.option("--field", "-f", default=None, help="Profile field whose default checks to run")
@click.option("--profanity/--no-profanity", default=True, help="Check for inappropriate language")
@click.option("--contact/--no-contact", default=False, help="Check for contact information")
@click.option("--gibberish/--no-gibberish", default=False, help="Check for non-meaningful text")
@click.pass_context
def check(ctx: click.Context, text: str, field: str | None, profanity: bool, contact: bool, gibberish: bool):
    """Validate TEXT and explain the verdict.

    With --field the field's configured checks are used and the other
    check flags are ignored. Exits with status 1 when the text is rejected.
    """
    from textguard.moderation.models import ValidationOptions

    policy = _policy(ctx)
    if field:
        outcome = policy.validate_field(field, text)
    else:
        outcome = policy.validate_content(
            text,
            ValidationOptions(
                check_profanity=profanity,
                check_contact_info=contact,
                check_gibberish=gibberish,
            ),
        )

    if outcome.is_valid:
        console.print(f"[green]v[/] Accepted under preset [cyan]{policy.name}[/]")
        return

    console.print(f"[red]x[/] Rejected under preset [cyan]{policy.name}[/]")
    console.print(f"  {outcome.error}")
    result = outcome.moderation_result
    if result and result.profane_words:
        categories = policy.categorize(result.profane_words)
        terms = ", ".join(f"{term} ({category.value})" for term, category in categories.items())
        console.print(f"  [dim]matched:[/] {terms}")
    ctx.exit(1)


# ── Clean ────────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.pass_context
def clean(ctx: click.Context, text: str):
    """Print TEXT with every deny-listed term masked."""
    click.echo(_policy(ctx).clean_text(text))


# ── Single detectors ─────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.pass_context
def contact(ctx: click.Context, text: str):
    """Report whether TEXT shares contact information."""
    policy = _policy(ctx)
    if not policy.config.contact_info_enabled:
        console.print(f"[yellow]![/] Contact-info checking is disabled in preset [cyan]{policy.name}[/]")
    found = policy.contains_contact_info(text)
    console.print("[red]contact information found[/]" if found else "[green]no contact information[/]")
    platforms = policy.matched_platforms(text)
    if platforms:
        console.print(f"  [dim]platforms:[/] {', '.join(platforms)}")


@main.command()
@click.argument("text")
@click.pass_context
def gibberish(ctx: click.Context, text: str):
    """Report whether TEXT looks like gibberish."""
    found = _policy(ctx).detect_gibberish(text)
    console.print("[red]gibberish[/]" if found else "[green]meaningful text[/]")


@main.command()
@click.argument("text")
def normalize(text: str):
    """Show the normalized views the detectors work on."""
    from textguard.moderation.normalizer import normalize as normalize_text

    views = normalize_text(text)
    table = Table(title="Normalized views")
    table.add_column("View", style="cyan")
    table.add_column("Value")
    table.add_row("digit expanded", views.digit_expanded)
    table.add_row("separator stripped", views.separator_stripped)
    table.add_row("homoglyph folded", views.homoglyph_folded)
    table.add_row("mixed digits", views.mixed_digits or "[dim](none)[/]")
    console.print(table)


# ── Presets ──────────────────────────────────────────────────────────


@main.command()
def presets():
    """List the available moderation presets."""
    from textguard.moderation.config import ModerationConfigError
    from textguard.moderation.moderator import get_catalog

    try:
        catalog = get_catalog()
    except ModerationConfigError as e:
        raise click.ClickException(str(e)) from e

    table = Table(title=f"Presets (default: {catalog.default})")
    table.add_column("Name", style="cyan")
    table.add_column("Deny list")
    table.add_column("Allow list")
    table.add_column("Contact info", justify="center")
    table.add_column("Gibberish", justify="center")

    for name, config in sorted(catalog.presets.items()):
        deny = config.deny_list
        if config.extra_deny_lists:
            deny += " + " + ", ".join(config.extra_deny_lists)
        table.add_row(
            name,
            deny,
            config.allow_list or "-",
            "on" if config.contact_info_enabled else "off",
            "on" if config.gibberish_enabled else "off",
        )

    console.print(table)
    for name, config in sorted(catalog.presets.items()):
        if config.description:
            console.print(Panel(config.description, title=name))


if __name__ == "__main__":
    main()
