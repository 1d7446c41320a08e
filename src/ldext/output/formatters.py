"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich text, colors) or
machines (--json). The formatter layer adapts ServiceResult to the
requested output mode.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.text import Text

from ldext.output.console import create_console, get_output

if TYPE_CHECKING:
    from ldext.services.result import ServiceResult


class OutputSettings(BaseModel):
    """How a result should be rendered."""

    model_config = {"frozen": True}

    json_output: bool = False
    verbose: bool = False
    no_color: bool = False


def _render_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON mode returns the whole result model. Human mode prints a status
    line followed by one ``key: value`` line per data item; error details
    are shown only with ``verbose``.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=settings.no_color)
    if result.ok:
        header = Text.assemble(("OK", "ldext.ok"), ": ", (result.op, "ldext.op"))
    else:
        error = result.error
        message = error.message if error else "Unknown error"
        code = error.code if error else "ERROR"
        header = Text.assemble(
            ("ERROR", "ldext.error"),
            ": ",
            (result.op, "ldext.op"),
            " ",
            (f"[{code}]", "ldext.code"),
            f" {message}",
        )
    console.print(header, soft_wrap=True)

    for key, value in result.data.items():
        line = Text.assemble(("  " + key, "ldext.key"), ": ", _render_value(value))
        console.print(line, soft_wrap=True)

    if not result.ok and settings.verbose and result.error and result.error.detail:
        for key, value in result.error.detail.items():
            line = Text.assemble(("  detail." + key, "ldext.key"), ": ", _render_value(value))
            console.print(line, soft_wrap=True)
    return get_output(console).rstrip("\n")
