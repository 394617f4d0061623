"""Human/JSON rendering of a ServiceResult.

The wrapper reports on stderr only; this module just builds the text.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from k8s_psl.output.console import create_console, get_output

if TYPE_CHECKING:
    from k8s_psl.services.result import ServiceResult


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def format_result(result: ServiceResult, *, json_output: bool = False, color: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise human-readable text.
        color: Emit ANSI styles in human mode.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=not color)
    if result.ok:
        console.print(Text.assemble(("OK", "psl.ok"), ": ", (result.op, "psl.op")))
        for key, value in result.data.items():
            console.print(Text.assemble("  ", (f"{key}:", "psl.key"), f" {_format_value(value)}"))
    else:
        error_msg = result.error.message if result.error else "Unknown error"
        console.print(
            Text.assemble(("ERROR", "psl.error"), ": ", (result.op, "psl.op"), f" — {error_msg}")
        )
    return get_output(console).rstrip("\n")
