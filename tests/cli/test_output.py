"""Tests for rich output rendering.

Paths and keys come from user input, so square brackets in them must be
printed literally rather than read as console markup.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from depwitness.cli import output
from depwitness.core.keys import DependencyKey
from depwitness.core.verifier import VerificationResult
from depwitness.exceptions import DigestMismatchError, MissingAssertionError


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> io.StringIO:
    """Route the CLI console into a buffer."""
    buffer = io.StringIO()
    monkeypatch.setattr(
        output, "console", Console(file=buffer, width=200, color_system=None)
    )
    return buffer


class TestLiteralRendering:
    """Bracketed text passes through unchanged."""

    def test_error_with_closing_tag(self, captured: io.StringIO) -> None:
        output.print_error("Cannot read listing /ci/[/x]/resolved.yaml")
        assert "Error: Cannot read listing /ci/[/x]/resolved.yaml" in captured.getvalue()

    def test_manifest_summary_path(self, captured: io.StringIO) -> None:
        output.print_manifest_summary(3, Path("/out/[bold]/hashes.gradle"))
        assert "Manifest written to: /out/[bold]/hashes.gradle" in captured.getvalue()

    def test_violation_keys(self, captured: io.StringIO) -> None:
        key = DependencyKey("acme", "w[red]x", "1.0", "w.jar")
        output.print_violations([
            MissingAssertionError(key),
            DigestMismatchError(key, "aa", "bb"),
        ])
        text = captured.getvalue()
        assert "No integrity assertion for acme:w[red]x:1.0:w.jar" in text
        assert "Checksum failed for acme:w[red]x:1.0:w.jar" in text
        assert "expected: aa" in text

    def test_verified_table(self, captured: io.StringIO) -> None:
        key = DependencyKey("acme", "w[/]", "1.0", "w.jar")
        output.print_verification_result(
            VerificationResult(verified=[key], configured=True)
        )
        assert "acme:w[/]:1.0" in captured.getvalue()
