#!/usr/bin/env python3
"""
Container Validation Script

Checks cgroup CPU detection against the expectations a container test run
passes in through the environment:

    EXPECTED_COUNT    - Expected CPU count (required)
    EXPECTED_LIMITED  - Expected limited() value: "true" or "false" (optional)
    EXPECTED_VERSION  - Expected cgroup version: "v1", "v2", or "none" (optional)

Example:
    docker run --cpus=2.5 -e EXPECTED_COUNT=2 -e EXPECTED_LIMITED=true image \\
        python validate_cgroup.py
"""
import math
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

import maxprocs  # noqa: E402
from maxprocs.cgroup import DEFAULT_CGROUP_PATHS  # noqa: E402

console = Console()

PREVIEW_LENGTH = 50


def print_header(text):
    """Print formatted header."""
    console.print(f"\n[blue]{'=' * 60}[/blue]")
    console.print(f"[bold]{text}[/bold]")
    console.print(f"[blue]{'=' * 60}[/blue]\n")


def preview_file(path: str) -> str:
    """First characters of a cgroup file on one line, or '(not found)'."""
    if not os.path.exists(path):
        return "(not found)"
    try:
        with open(path, 'r') as f:
            content = f.read().strip().replace("\n", "\\n")
    except OSError as e:
        return f"(unreadable: {e.strerror})"
    if len(content) > PREVIEW_LENGTH:
        content = content[:PREVIEW_LENGTH] + "..."
    return content


def print_environment():
    """Print detector results and the raw cgroup files they came from."""
    table = Table(title="Environment", show_header=False)
    table.add_column("Name", style="cyan")
    table.add_column("Value")
    table.add_row("host_processor_count", str(maxprocs.host_processor_count()))
    table.add_row("maxprocs.count", str(maxprocs.count()))
    table.add_row("maxprocs.quota", repr(maxprocs.quota()))
    table.add_row("maxprocs.limited", str(maxprocs.limited()))
    table.add_row("maxprocs.cgroup_version", maxprocs.cgroup_version().value)
    console.print(table)

    files = Table(title="cgroup files", show_header=False)
    files.add_column("Path", style="cyan")
    files.add_column("Content")
    for path in DEFAULT_CGROUP_PATHS.as_dict().values():
        files.add_row(path, preview_file(path))
    console.print(files)


def run_checks(expected_count, expected_limited=None, expected_version=None):
    """
    Compare detector output with expectations.

    Returns:
        List of failure descriptions (empty when everything passed)
    """
    failures = []
    console.print("[bold]Checks:[/bold]")

    actual_count = maxprocs.count()
    if actual_count == expected_count:
        console.print(f"  [green]PASS[/green] count: {actual_count} == {expected_count}")
    else:
        console.print(f"  [red]FAIL[/red] count: {actual_count} != {expected_count}")
        failures.append(f"count: expected {expected_count}, got {actual_count}")

    console.print(f"  [dim]INFO[/dim] count(ceil): {maxprocs.count('ceil')}")

    if expected_limited is not None:
        expected = expected_limited == "true"
        actual = maxprocs.limited()
        if actual == expected:
            console.print(f"  [green]PASS[/green] limited: {actual} == {expected}")
        else:
            console.print(f"  [red]FAIL[/red] limited: {actual} != {expected}")
            failures.append(f"limited: expected {expected}, got {actual}")

    if expected_version is not None:
        actual = maxprocs.cgroup_version().value
        if actual == expected_version:
            console.print(f"  [green]PASS[/green] cgroup_version: {actual} == {expected_version}")
        else:
            console.print(f"  [red]FAIL[/red] cgroup_version: {actual} != {expected_version}")
            failures.append(f"cgroup_version: expected {expected_version}, got {actual}")

    quota = maxprocs.quota()
    if quota is not None:
        expected_floor = max(math.floor(quota), 1)
        if actual_count == expected_floor:
            console.print(f"  [green]PASS[/green] count matches floor(quota) ({quota} -> {expected_floor})")
        else:
            console.print(
                f"  [red]FAIL[/red] count doesn't match floor(quota) "
                f"({quota} -> {expected_floor}, got {actual_count})"
            )
            failures.append("count doesn't match quota calculation")

    return failures


def main():
    """Run validation and report results."""
    raw_count = os.environ.get("EXPECTED_COUNT")
    if raw_count is None:
        console.print("[red]EXPECTED_COUNT is required[/red]")
        return False

    print_header("maxprocs container validation")
    print_environment()
    console.print()

    failures = run_checks(
        expected_count=int(raw_count),
        expected_limited=os.environ.get("EXPECTED_LIMITED"),
        expected_version=os.environ.get("EXPECTED_VERSION"),
    )

    print_header("VALIDATION SUMMARY")
    if not failures:
        console.print("[green]Result: ALL CHECKS PASSED[/green]")
        return True

    console.print(f"[red]Result: {len(failures)} CHECK(S) FAILED[/red]")
    for failure in failures:
        console.print(f"  - {failure}")
    return False


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
