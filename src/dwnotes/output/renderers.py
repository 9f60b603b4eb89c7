"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from dwnotes.output.console import create_console, get_output, style_for_kind
from dwnotes.services.result import Op

if TYPE_CHECKING:
    from rich.console import Console

    from dwnotes.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Note commands print just the note path so the output can be piped.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    return result.note_path or f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="dw.ok")
    op = Text(f"  {result.op}", style="dw.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dw.key")
    if key == "path":
        v = Text(str(value), style="dw.path")
    elif key == "link":
        v = Text(str(value), style="dw.link")
    elif key == "kind":
        v = Text(str(value), style=style_for_kind(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations")
    if annotations:
        line += "  (" + ", ".join(f"{ak}={av}" for ak, av in annotations.items()) + ")"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dw.error")
    op = Text(f"  {result.op}", style="dw.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Note renderers ────────────────────────────────────────────────────


def _render_note(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create_daily_note / create_weekly_note results."""
    _status_line(console, result)
    d = result.data
    if "message" in d:
        console.print(Text(f"  {d['message']}"))
    for key in ("path", "kind", "action", "link"):
        if key in d:
            _field(console, key, d[key])
    if verbose:
        if "reference" in d:
            _field(console, "reference", d["reference"])
        _render_meta(console, result)


# ── Settings renderers ────────────────────────────────────────────────


def _settings_table(settings: dict[str, Any], previews: dict[str, str]) -> Table:
    """One row per setting: name, stored value, live preview."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Setting", style="dw.key", no_wrap=True)
    table.add_column("Value")
    table.add_column("Preview", style="dw.preview")

    for key, value in settings.items():
        preview = previews.get(key, "")
        style = "dw.invalid" if preview.endswith("Invalid format") else ""
        shown = repr(value) if value == "" else str(value)
        table.add_row(Text(key), Text(shown), Text(preview, style=style))
    return table


def _render_settings(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render show/set/reset/init results as a settings table."""
    _status_line(console, result)
    d = result.data
    if "key" in d:
        _field(console, "updated", d["key"])
    settings = d.get("settings") or {}
    if settings:
        console.print(_settings_table(settings, d.get("previews") or {}))
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Notes
    Op.CREATE_DAILY_NOTE: _render_note,
    Op.CREATE_WEEKLY_NOTE: _render_note,
    Op.WRITE_NOTE: _render_note,
    # Settings
    Op.SHOW_SETTINGS: _render_settings,
    Op.SET_SETTING: _render_settings,
    Op.RESET_SETTINGS: _render_settings,
    Op.INIT: _render_settings,
}
