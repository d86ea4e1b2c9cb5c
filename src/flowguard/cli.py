"""Command-line interface for FlowGuard."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from flowguard.analyzer import analyze_project, build_project_data
from flowguard.llm.narrative import build_narrator
from flowguard.logging_config import configure_logging
from flowguard.models import FinalResult, Priority, ProjectData, Settings
from flowguard.parsers import (
    load_workbook,
    parse_budget_sheet,
    parse_chat_export,
    parse_commit_csv,
    read_repository_commits,
)
from flowguard.sample import sample_project

app = typer.Typer(
    name="flowguard",
    help="Deadline risk and scope gating from project-health signals",
    add_completion=False,
)
console = Console()

PRIORITY_STYLES = {
    Priority.CRITICAL: "bold red",
    Priority.HIGH: "yellow",
    Priority.MEDIUM: "cyan",
    Priority.LOW: "dim",
}


@app.callback()
def setup() -> None:
    """Deadline risk and scope gating from project-health signals."""
    configure_logging(Settings().log_level)


def _load_project(project_file: Optional[Path], use_sample: bool) -> ProjectData:
    if project_file is None and not use_sample:
        raise ValueError("Provide a project JSON file or use --sample")

    payload = None
    if project_file is not None:
        with open(project_file, "r") as f:
            body = json.load(f)
        payload = body.get("project", body) if isinstance(body, dict) else body

    return build_project_data(payload, default=sample_project() if use_sample else None)


def _signal_style(score: int) -> str:
    if score >= 75:
        return "bold red"
    if score >= 50:
        return "yellow"
    return "green"


def _print_task_table(title: str, tasks) -> None:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Priority", width=9)
    table.add_column("Task", style="white")
    table.add_column("Owner", style="green")
    table.add_column("Status", style="blue")
    table.add_column("Idle", justify="right", style="yellow")
    table.add_column("Reason", style="dim")

    for task in tasks:
        style = PRIORITY_STYLES.get(task.priority, "white")
        table.add_row(
            f"[{style}]{task.priority.value}[/{style}]",
            task.title,
            task.assigned_to,
            task.status,
            f"{task.days_idle}d",
            task.reason,
        )
    console.print(table)


def _print_result(result: FinalResult) -> None:
    console.print(
        f"\n[bold]Deadline extension probability:[/bold] "
        f"[{_signal_style(result.probability)}]{result.probability}%[/] "
        f"[dim](confidence: {result.confidence.value})[/dim]"
    )
    console.print(f"[cyan]Time remaining:[/cyan] {result.time_remaining_percent}%")
    console.print(
        f"[cyan]Budget burn:[/cyan] {result.budget_burn_percent}% "
        f"[dim](financial risk: {result.financial_risk.value}, "
        f"wasted hours: {result.wasted_hours:g})[/dim]"
    )
    console.print(f"[cyan]Narrative:[/cyan] {'LLM' if result.ai_powered else 'heuristic'}")

    signals = Table(title="Signals", show_header=True, header_style="bold magenta")
    signals.add_column("Signal", style="cyan")
    signals.add_column("Score", justify="right")
    for name, score in result.signals.model_dump().items():
        style = _signal_style(score)
        signals.add_row(name.replace("_", " ").title(), f"[{style}]{score}[/{style}]")
    console.print(signals)

    if result.saturation.block_reason:
        colour = "red" if result.saturation.is_blocked else "yellow"
        console.print(f"\n[bold {colour}]Gate:[/bold {colour}] {result.saturation.block_reason}")

    _print_task_table("Active Tasks", result.prioritized_tasks)
    if result.held_tasks:
        _print_task_table("Held Tasks", result.held_tasks)

    if result.insights:
        console.print("\n[bold]Insights:[/bold]")
        for insight in result.insights:
            console.print(f"  • {insight}")
    if result.recommendations:
        console.print("\n[bold]Recommendations:[/bold]")
        for rec in result.recommendations:
            console.print(f"  • {rec}")


@app.command()
def analyze(
    project_file: Optional[Path] = typer.Argument(None, help="Project JSON file"),
    sample: bool = typer.Option(False, "--sample", help="Use the bundled sample project when no file is given"),
    commits: Optional[Path] = typer.Option(None, "--commits", help="Commit log CSV export"),
    repo: Optional[Path] = typer.Option(None, "--repo", help="Read commits from a local Git repository"),
    branch: str = typer.Option("HEAD", "--branch", "-b", help="Branch to read commits from (with --repo)"),
    chat: Optional[Path] = typer.Option(None, "--chat", help="Chat export text file"),
    budget: Optional[Path] = typer.Option(None, "--budget", help="Budget workbook (.xlsx or .csv)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the result as JSON"),
    no_llm: bool = typer.Option(False, "--no-llm", help="Skip the LLM narrative"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Analyse a project and print the deadline assessment and task list."""
    settings = Settings()
    if verbose:
        configure_logging("DEBUG")

    try:
        data = _load_project(project_file, sample)

        updates = {}
        if commits:
            updates["commits"] = parse_commit_csv(commits.read_text())
        elif repo:
            updates["commits"] = read_repository_commits(repo, branch=branch)
        if chat:
            updates["chat_messages"] = parse_chat_export(chat.read_text())
        if budget:
            updates["budget_items"] = parse_budget_sheet(load_workbook(budget))
        if updates:
            data = data.model_copy(update=updates)

        console.print(f"[bold green]Analysing:[/bold green] {data.project_name}")
        console.print(
            f"[bold blue]Sources:[/bold blue] {len(data.tasks)} tasks, "
            f"{len(data.commits)} commits, {len(data.chat_messages)} chat messages, "
            f"{len(data.budget_items)} budget items"
        )

        narrator = None if no_llm else build_narrator(settings)
        result = asyncio.run(analyze_project(data, narrator=narrator))

        _print_result(result)

        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            with open(output, "w") as f:
                json.dump(result.model_dump(mode="json"), f, indent=2)
            console.print(f"\n[bold green]✓[/bold green] Saved to {output}")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def parse_commits(
    csv_file: Path = typer.Argument(..., help="Commit log CSV export"),
    max_count: int = typer.Option(20, "--max", "-n", help="Maximum commits to show"),
) -> None:
    """Parse a commit log CSV and list the commits."""
    try:
        parsed = parse_commit_csv(csv_file.read_text())

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("SHA", style="cyan", width=10)
        table.add_column("Author", style="green")
        table.add_column("Date", style="blue")
        table.add_column("Message", style="white")

        for commit in parsed[:max_count]:
            table.add_row(commit.sha[:7], commit.author[:20], commit.date.isoformat(), commit.message[:60])

        console.print(table)
        console.print(f"\n[bold green]✓[/bold green] Parsed {len(parsed)} commits")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def parse_chat(
    chat_file: Path = typer.Argument(..., help="Chat export text file"),
    max_count: int = typer.Option(20, "--max", "-n", help="Maximum messages to show"),
) -> None:
    """Parse a chat export and list the messages."""
    try:
        parsed = parse_chat_export(chat_file.read_text())

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Date", style="blue")
        table.add_column("Author", style="green")
        table.add_column("Text", style="white")

        for message in parsed[:max_count]:
            table.add_row(message.date.isoformat(), message.author, message.text[:80])

        console.print(table)
        console.print(f"\n[bold green]✓[/bold green] Parsed {len(parsed)} messages")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def parse_budget(
    workbook_file: Path = typer.Argument(..., help="Budget workbook (.xlsx or .csv)"),
) -> None:
    """Parse a budget workbook and list the line items."""
    try:
        items = parse_budget_sheet(load_workbook(workbook_file))

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Item", style="cyan")
        table.add_column("Budgeted", justify="right")
        table.add_column("Spent", justify="right")
        table.add_column("Rate", justify="right")
        table.add_column("Status", style="green")

        for item in items:
            table.add_row(
                item.item,
                f"{item.budgeted_hours:g}h",
                f"{item.spent_hours:g}h",
                f"{item.cost_per_hour:g}",
                item.status.value,
            )

        console.print(table)
        console.print(f"\n[bold green]✓[/bold green] Parsed {len(items)} budget items")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command(name="sample")
def write_sample(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
) -> None:
    """Print the bundled sample project as JSON."""
    text = json.dumps(sample_project().model_dump(mode="json"), indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text)
        console.print(f"[bold green]✓[/bold green] Saved to {output}")
    else:
        typer.echo(text)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
