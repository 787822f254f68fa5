"""
Report rendering for a diagnosed program (text, JSON or YAML).
"""

import json
from dataclasses import asdict
from typing import Any, Dict, Optional

import structlog
import yaml

from .repair.search import Diagnosis

logger = structlog.get_logger()

FORMATS = ("text", "json", "yaml")


def to_dict(diagnosis: Diagnosis) -> Dict[str, Any]:
    return asdict(diagnosis)


def format_text(diagnosis: Diagnosis) -> str:
    return "\n".join(
        [
            f"The accumulator before looping is {diagnosis.loop_accumulator}",
            f"The final result is {diagnosis.repaired_accumulator}",
            f"Flipped instruction {diagnosis.flipped_index}: "
            f"{diagnosis.original_instruction} -> {diagnosis.repaired_instruction}",
        ]
    ) + "\n"


def format_json(diagnosis: Diagnosis) -> str:
    return json.dumps(to_dict(diagnosis), indent=2) + "\n"


def format_yaml(diagnosis: Diagnosis) -> str:
    return yaml.dump(to_dict(diagnosis), default_flow_style=False, sort_keys=False)


def render(diagnosis: Diagnosis, output_format: str = "text") -> str:
    if output_format == "text":
        return format_text(diagnosis)
    elif output_format == "json":
        return format_json(diagnosis)
    elif output_format == "yaml":
        return format_yaml(diagnosis)
    raise ValueError(f"Unsupported output format: {output_format}")


def export_report(
    diagnosis: Diagnosis, output_format: str = "text", filename: Optional[str] = None
) -> str:
    """
    Render a diagnosis and, if `filename` is given, write it there.

    Returns:
        The rendered report.
    """
    report = render(diagnosis, output_format)
    if filename:
        with open(filename, "w", encoding="utf-8") as f:
            f.write(report)
        logger.info("Report exported", path=filename, format=output_format)
    return report
