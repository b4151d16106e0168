"""Select the output mode for a ServiceResult.

``--json`` dumps the full result (domain models included) as JSON;
``--quiet`` prints names only; otherwise Rich renderers are used.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from countryws.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from countryws.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings) -> str:
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result)
