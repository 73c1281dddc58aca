"""
Presentation of compliance reports on the console.

The engine only returns structured messages; what gets shown is decided
here: INFO lines only in verbose mode, WARNING and CRITICAL always.
"""

from rich.markup import escape
from rich.table import Table

from hostguard.branding import console
from hostguard.compliance.models import Message, Severity
from hostguard.compliance.report import ComplianceReport


def should_render(message: Message, verbose: bool) -> bool:
    return verbose or message.severity is not Severity.INFO


def render_messages(messages: list[Message], verbose: bool = False) -> None:
    for message in messages:
        if not should_render(message, verbose):
            continue
        console.print(
            f"[{message.color}]{escape(message.text)}[/{message.color}]",
            end="\n" if message.newline else "",
        )


def render_report(report: ComplianceReport, verbose: bool = False) -> None:
    """Print the message log, a per-host table and the summary line."""
    render_messages(report.messages, verbose=verbose)

    if report.results:
        table = Table(title="Host compliance", show_header=True, header_style="bold cyan")
        table.add_column("Host")
        table.add_column("Status")
        table.add_column("Failed rules", style="dim")
        for result in report.results:
            status = "[green]compliant[/green]" if result.compliant else "[red]non-compliant[/red]"
            table.add_row(escape(result.host.name), status, escape(", ".join(result.failed_rules)))
        console.print()
        console.print(table)

    if report.skipped and verbose:
        console.print(f"[dim]Skipped (pending configuration): {', '.join(report.skipped)}[/dim]")

    console.print(
        f"\n[bold]Compliant hosts:[/bold] [green]{report.count_compliant}[/green]  "
        f"[bold]Non-compliant hosts:[/bold] [red]{report.count_non_compliant}[/red]"
    )
