"""Rich output formatting helpers for the DepWitness CLI.

Verification results render as a table of checked artifacts; violations
render in red with both digests for mismatches so a reviewer can decide
between updating the manifest and investigating the dependency.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from depwitness.core.verifier import VerificationResult
from depwitness.exceptions import DigestMismatchError, VerificationError

console = Console()


def print_verification_result(result: VerificationResult) -> None:
    """Print the outcome of a successful verification run.

    Args:
        result: Result returned by ``Verifier.verify``.
    """
    if not result.configured:
        console.print(
            Panel("[yellow]No integrity assertions configured; "
                  "verification not performed[/yellow]",
                  title="Dependency Verification")
        )
        return

    console.print(
        Panel(f"[bold green]{result.verified_count} artifact(s) verified[/bold green]",
              title="Dependency Verification")
    )
    if result.verified:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Artifact", style="bold")
        table.add_column("File", style="dim")
        table.add_column("Status", justify="center")
        for key in result.verified:
            table.add_row(
                Text(key.coordinates), Text(key.file_tag), Text("OK", style="green")
            )
        console.print(table)
    if result.inert:
        console.print(
            f"[dim]{len(result.inert)} assertion(s) match no resolved artifact[/dim]"
        )


def print_violations(violations: Sequence[VerificationError]) -> None:
    """Print integrity violations in canonical order.

    Args:
        violations: Violations raised by the verifier.
    """
    console.print(
        Panel(f"[bold red]{len(violations)} integrity violation(s)[/bold red]",
              title="Dependency Verification")
    )
    for v in violations:
        if isinstance(v, DigestMismatchError):
            console.print(Text.assemble("  ", (f"- Checksum failed for {v.key}", "red")))
            console.print(Text(f"      expected: {v.expected}"))
            console.print(Text(f"      actual:   {v.actual}"))
        else:
            console.print(
                Text.assemble("  ", (f"- No integrity assertion for {v.key}", "red"))
            )


def print_manifest_summary(count: int, path: Path) -> None:
    """Print where the regenerated manifest was written."""
    console.print(
        Text.assemble(
            "\n", (str(count), "bold"), f" artifact(s) pinned. Manifest written to: {path}"
        )
    )


def print_error(message: str) -> None:
    """Print an input error."""
    console.print(Text.assemble(("Error:", "bold red"), " ", message))
