"""Operation-specific Rich renderers for CommandResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from valparse.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from valparse.services.result import CommandResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: CommandResult, *, verbose: bool = False) -> str:
    """Render a CommandResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: CommandResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "atoms":
        return "\n".join(item["name"] for item in result.data.get("items", []))
    if result.op == "render":
        return str(result.data.get("rendered", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: CommandResult) -> None:
    console.print(Text("OK", style="vp.ok"), Text(f"  {result.op}", style="vp.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    style = "vp.value" if key in ("value", "rendered") else ""
    console.print(Text(f"  {key}: ", style="vp.key"), Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: CommandResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    """Render a span tree with color-coded timing."""
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"

    line = Text(" " * indent)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="vp.error"),
        Text(f"  {result.op}", style="vp.op"),
        Text(f" — {msg}"),
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}", markup=False)


def _render_check(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "value", result.data.get("value", ""))
    rules = result.data.get("rules", [])
    if rules:
        console.print(Text("  passed:", style="vp.key"))
        for label in rules:
            console.print(Text(f"    {label}", style="vp.label"))
    if verbose:
        _render_meta(console, result)


def _render_atoms(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Atom", style="vp.name", no_wrap=True)
    table.add_column("Label", style="vp.label")
    for item in result.data.get("items", []):
        table.add_row(item["name"], item["label"])
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_generic(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "check": _render_check,
    "atoms": _render_atoms,
}
