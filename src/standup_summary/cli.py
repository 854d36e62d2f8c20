"""Command-line interface for standup-summary."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from standup_summary import (
    AIService,
    AIServiceConfig,
    AIServiceError,
    Config,
    create_ai_service,
)
from standup_summary.ai_models import default_model_manager
from standup_summary.config import SUPPORTED_PROVIDERS

app = typer.Typer(
    name="standup-summary",
    help="Summarize git commit messages into a daily standup update using OpenAI or Gemini",
    no_args_is_help=True,
)

console = Console()

API_KEY_INSTRUCTIONS = {
    "openai": "You can get an API key from: [link]https://platform.openai.com/api-keys[/link]",
    "gemini": "You can get an API key from: [link]https://aistudio.google.com/app/apikey[/link]",
}


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug logging"
    ),
) -> None:
    """Summarize git commits into standup updates."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _validate_provider(provider: str) -> str:
    provider = provider.lower()
    if provider not in SUPPORTED_PROVIDERS:
        print(
            f"[red]Error: Unknown provider '{provider}'. Use: {', '.join(SUPPORTED_PROVIDERS)}[/red]"
        )
        raise typer.Exit(1)
    return provider


def _read_commits(commits: list[str] | None, file: Path | None) -> list[str]:
    """Collect commit lines from arguments, a file, or stdin.

    Blank lines are dropped.
    """
    if commits:
        lines = commits
    elif file is not None:
        try:
            lines = file.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            print(f"[red]Error: Cannot read {file}: {escape(str(e))}[/red]")
            raise typer.Exit(1)
    elif not sys.stdin.isatty():
        lines = sys.stdin.read().splitlines()
    else:
        lines = []

    return [line.strip() for line in lines if line.strip()]


def _build_service(
    provider: str,
    model: str | None,
    api_key: str | None,
    temperature: float,
    max_tokens: int,
) -> AIService:
    """Resolve the API key and build a service, exiting on configuration errors."""
    provider = _validate_provider(provider)
    key = api_key or Config().resolve_ai_api_key(provider)
    if not key:
        print(
            f"[red]Error: No {provider} API key found.[/red] "
            f"Pass --api-key or run [bold]standup-summary ai-auth {provider}[/bold]."
        )
        raise typer.Exit(1)

    try:
        config = AIServiceConfig(
            api_key=key,
            model=model,
            temperature=temperature,
            max_output_tokens=max_tokens,
        )
        return create_ai_service(provider, config)
    except ValueError as e:
        # pydantic ValidationError subclasses ValueError
        print(f"[red]Error: Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except AIServiceError as e:
        print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _display_cost_estimate(cost_info: dict[str, Any]) -> None:
    cost_content = (
        f"[white]Provider:[/white] [cyan]{cost_info['provider']}[/cyan]\n"
        f"[white]Model:[/white] [cyan]{cost_info['model']}[/cyan]\n"
        f"[white]Input tokens (est.):[/white] [green]{cost_info['estimated_input_tokens']:,}[/green]\n"
        f"[white]Output tokens (max):[/white] [green]{cost_info['estimated_output_tokens']:,}[/green]\n"
        f"[white]Estimated cost:[/white] [yellow]${cost_info['estimated_cost_usd']:.4f} {cost_info['currency']}[/yellow]"
    )
    console.print(Panel(cost_content, title="💰 Cost Estimate", border_style="yellow"))


def _save_summary_to_file(result: dict[str, Any], output_path: Path) -> None:
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
    except OSError as e:
        print(f"[red]Error: Cannot write {output_path}: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the version and exit."""
    from standup_summary import __version__

    print(f"standup-summary {__version__}")


@app.command()
def summarize(
    commits: list[str] | None = typer.Argument(
        None, help="Commit messages (reads --file or stdin when omitted)"
    ),
    file: Path | None = typer.Option(
        None, "--file", "-f", help="File with one commit message per line"
    ),
    provider: str = typer.Option(
        "openai", "--provider", "-p", help="AI provider (openai, gemini)"
    ),
    model: str | None = typer.Option(
        None, "--model", "-m", help="Model to use (provider default when omitted)"
    ),
    api_key: str | None = typer.Option(
        None, "--api-key", help="Provider API key (env var or stored key when omitted)"
    ),
    temperature: float = typer.Option(0.7, "--temperature", help="Sampling temperature"),
    max_tokens: int = typer.Option(1000, "--max-tokens", help="Maximum output tokens"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Save the summary as JSON to this file"
    ),
    estimate_cost: bool = typer.Option(
        False, "--estimate-cost", help="Show a cost estimate without calling the provider"
    ),
) -> None:
    """Generate a daily standup update from commit messages."""
    commit_lines = _read_commits(commits, file)
    if not commit_lines:
        print("[red]Error: No commit messages provided[/red]")
        raise typer.Exit(1)

    service = _build_service(provider, model, api_key, temperature, max_tokens)

    if estimate_cost:
        _display_cost_estimate(service.estimate_summary_cost(commit_lines))
        return

    try:
        with console.status(f"Summarizing {len(commit_lines)} commits with {service.model}..."):
            summary = asyncio.run(service.summarize_commits(commit_lines))
    except AIServiceError as e:
        print(f"[red]✗[/red] Summary failed: {escape(str(e))}")
        raise typer.Exit(1)

    console.print(Panel(escape(summary.strip()), title="📋 Standup Summary", border_style="green"))

    if output:
        _save_summary_to_file(
            {
                "summary": summary,
                "provider": service.provider,
                "model": service.model,
                "commits": commit_lines,
            },
            output,
        )
        print(f"[green]✓[/green] Summary saved to [cyan]{output}[/cyan]")


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="Prompt to send"),
    system: str | None = typer.Option(
        None, "--system", "-s", help="System instruction placed before the prompt"
    ),
    provider: str = typer.Option(
        "openai", "--provider", "-p", help="AI provider (openai, gemini)"
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="Model to use"),
    api_key: str | None = typer.Option(None, "--api-key", help="Provider API key"),
    temperature: float = typer.Option(0.7, "--temperature", help="Sampling temperature"),
    max_tokens: int = typer.Option(1000, "--max-tokens", help="Maximum output tokens"),
    show_usage: bool = typer.Option(
        False, "--show-usage", help="Print token usage after the response"
    ),
) -> None:
    """Generate a free-form response for a prompt."""
    service = _build_service(provider, model, api_key, temperature, max_tokens)

    try:
        response = asyncio.run(service.generate_response(prompt, system))
    except AIServiceError as e:
        print(f"[red]✗[/red] Generation failed: {escape(str(e))}")
        raise typer.Exit(1)

    console.print(response.content, markup=False)

    if show_usage and response.usage:
        usage = response.usage
        console.print(
            f"[dim]Tokens: {usage.prompt_tokens} prompt + "
            f"{usage.completion_tokens} completion = {usage.total_tokens} total[/dim]"
        )


@app.command("models")
def list_models(
    provider: str | None = typer.Option(
        None, "--provider", "-p", help="Only show models for this provider"
    ),
) -> None:
    """List known models for each provider."""
    manager = default_model_manager()
    if provider:
        provider = _validate_provider(provider)

    table = Table(title="Available Models", show_header=True, header_style="bold blue")
    table.add_column("Model", style="cyan")
    table.add_column("Name")
    table.add_column("Provider", style="yellow")
    table.add_column("Tier")
    table.add_column("Context", justify="right")
    table.add_column("Description", style="white")

    for model in manager.get_available_models(provider):
        default = manager.get_default_model(model.provider) == model.name
        name = f"{model.name} [green](default)[/green]" if default else model.name
        table.add_row(
            name,
            model.display_name,
            model.provider,
            model.tier.title(),
            f"{model.context_limit:,}",
            model.description,
        )

    console.print(table)

    for name in [provider] if provider else manager.get_providers():
        env_vars = manager.get_api_key_envs(name)
        if env_vars:
            sources = " or ".join(f"${env_var}" for env_var in env_vars)
            console.print(f"[dim]{name}: API key read from {sources}[/dim]")


@app.command("ai-auth")
def ai_auth(
    provider: str = typer.Argument(..., help="AI provider (openai, gemini)"),
) -> None:
    """Store an API key for a provider."""
    provider = _validate_provider(provider)
    config = Config()

    print(f"[bold cyan]AI API Key Setup - {provider.title()}[/bold cyan]")
    print()

    if config.get_ai_api_key(provider):
        print(f"[green]✓[/green] You already have a {provider} API key stored")
        if not Confirm.ask("Would you like to replace it with a new key?"):
            return

    print(API_KEY_INSTRUCTIONS[provider])
    print()

    api_key = Prompt.ask(f"[cyan]Enter your {provider.title()} API key", password=True)
    if not api_key:
        print("[red]No API key provided[/red]")
        return

    config.set_ai_api_key(provider, api_key)


@app.command("ai-auth-status")
def ai_auth_status() -> None:
    """Show which providers have an API key stored."""
    config = Config()
    info = config.get_config_info()

    table = Table(title="AI API Key Status")
    table.add_column("Provider", style="cyan")
    table.add_column("Status", style="green")

    for provider, has_key in info["ai_api_keys"].items():
        table.add_row(provider.title(), "✓ Configured" if has_key else "✗ Not configured")

    print(table)
    print(f"[dim]Config file: {info['config_file']}[/dim]")

    if not any(info["ai_api_keys"].values()):
        print()
        print(
            "[yellow]No AI API keys stored. Run [bold]standup-summary ai-auth <provider>[/bold] "
            "or set the provider's environment variable.[/yellow]"
        )


@app.command("ai-auth-remove")
def ai_auth_remove(
    provider: str = typer.Argument(..., help="AI provider (openai, gemini)"),
) -> None:
    """Remove the stored API key for a provider."""
    provider = _validate_provider(provider)
    config = Config()

    if not config.get_ai_api_key(provider):
        print(f"[yellow]No {provider} API key is currently stored[/yellow]")
        return

    if Confirm.ask(f"[red]Are you sure you want to remove the {provider} API key?[/red]"):
        config.remove_ai_api_key(provider)
    else:
        print("API key removal cancelled")


if __name__ == "__main__":
    app()
