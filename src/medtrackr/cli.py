"""
MedTrackr Command Line Interface

Main entry point for the medtrackr CLI.
"""

import asyncio
import json
import sys
from pathlib import Path

import click
from rich.console import Console

from medtrackr.onboarding.exceptions import MedTrackrError, get_error_code

console = Console()


def _load_or_exit():
    from medtrackr.config import load_config

    try:
        return load_config()
    except MedTrackrError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(get_error_code(e))


@click.group()
@click.version_option(package_name="medtrackr")
def main():
    """MedTrackr: study and clinical routine planner for medical students"""
    pass


@main.command()
@click.option("--template", type=click.Path(exists=True), help="Use an answers template for silent onboarding")
@click.option("--store", type=click.Path(), help="Account store file (default: from config)")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def onboard(template: str, store: str, verbose: bool):
    """Create an account and personalize MedTrackr.

    Examples:
        medtrackr onboard                          # Guided setup
        medtrackr onboard --template answers.yaml  # Silent setup
    """
    import logging

    from medtrackr.config import get_home
    from medtrackr.onboarding.local_store import LocalProfileStore
    from medtrackr.onboarding.logging_config import get_log_path, setup_logging

    config = _load_or_exit()
    if verbose or config.debug:
        setup_logging(
            level=logging.DEBUG if config.debug else logging.INFO,
            log_file=get_log_path(get_home()),
        )

    store_path = Path(store) if store else config.store_path
    account_store = LocalProfileStore(store_path)

    # Handle template-based silent onboarding
    if template:
        import yaml
        from medtrackr.onboarding.runner import onboard_from_template

        try:
            template_config = yaml.safe_load(Path(template).read_text())
        except (OSError, yaml.YAMLError) as e:
            console.print(f"[red]Error loading template:[/red] {e}")
            sys.exit(1)

        try:
            response = asyncio.run(
                onboard_from_template(template_config, account_store, config.smart_logic)
            )
        except MedTrackrError as e:
            console.print(f"[red]Error:[/red] {e}")
            sys.exit(get_error_code(e))

        console.print(f"[green]✓[/green] MedTrackr is ready for you! ({response.role.label})")
        if verbose:
            print(json.dumps(response.to_dict(), indent=2))
        sys.exit(0)

    from medtrackr.onboarding.runner import OnboardingRunner

    runner = OnboardingRunner(account_store, console=console, smart_logic=config.smart_logic)
    try:
        response = runner.run()
        sys.exit(0 if response is not None else 1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Onboarding interrupted. Nothing was saved.[/yellow]")
        sys.exit(130)
    except MedTrackrError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(get_error_code(e))


@main.group()
def profile():
    """Stored profile commands."""
    pass


@profile.command("show")
@click.argument("email")
@click.option("--store", type=click.Path(), help="Account store file (default: from config)")
@click.option("--password", prompt=True, hide_input=True, help="Account password (prompted when omitted)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def profile_show(email: str, store: str, password: str, json_output: bool):
    """Show the onboarding profile stored for EMAIL."""
    from medtrackr.onboarding.exceptions import InvalidCredentialsError
    from medtrackr.onboarding.local_store import LocalProfileStore

    config = _load_or_exit()
    account_store = LocalProfileStore(Path(store) if store else config.store_path)

    try:
        document = account_store.get_profile(email)
    except MedTrackrError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(get_error_code(e))

    if document is None:
        console.print(f"[red]No profile found for {email}.[/red] Run 'medtrackr onboard' first.")
        sys.exit(1)

    if not account_store.verify_login(email, password):
        error = InvalidCredentialsError(
            "Incorrect password", stage="read_profile", remediation="Use the password you signed up with"
        )
        console.print(f"[red]Error:[/red] {error}")
        sys.exit(get_error_code(error))

    if json_output:
        print(json.dumps(document, indent=2))
        return

    from medtrackr.onboarding.steps.summary import flatten_response
    from medtrackr.onboarding.ui import WizardUI

    console.print(f"[bold blue]MedTrackr Profile[/bold blue]: {document['full_name']} <{document['email']}>")
    console.print(f"  Onboarding completed: {'Yes' if document.get('onboarding_completed') else 'No'}")
    console.print(f"  Last updated: {document.get('updated_at', 'unknown')}")
    WizardUI(console).show_summary_table("Onboarding Answers", flatten_response(document["onboarding_responses"]))


@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command()
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def show(json_output: bool):
    """Show current configuration."""
    from medtrackr.config import get_config_path
    from medtrackr.onboarding.logging_config import ENV_VARS

    settings = _load_or_exit()

    if json_output:
        print(json.dumps(settings.to_dict(), indent=2))
        return

    config_path = get_config_path()
    console.print("[bold blue]MedTrackr Configuration[/bold blue]")
    source = str(config_path) if config_path.exists() else f"{config_path} (not found, using defaults)"
    console.print(f"  Config file: {source}")
    console.print(f"  Account store: {settings.store_path}")
    console.print(f"  Debug: {'on' if settings.debug else 'off'}")
    console.print()

    console.print("[bold]Smart logic:[/bold]")
    for key, value in settings.to_dict()["smart_logic"].items():
        console.print(f"  {key}: {value}")
    console.print()

    console.print("[bold]Environment:[/bold]")
    for name, info in ENV_VARS.items():
        console.print(f"  {name}: {info['description']} (default: {info['default']})")


if __name__ == "__main__":
    main()
