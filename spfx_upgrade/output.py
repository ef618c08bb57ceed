"""Output rendering."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date

from spfx_upgrade.findings import FindingToReport
from spfx_upgrade.package_manager import (
    PackageLists,
    map_package_manager_command,
    reduce_package_manager_commands,
)
from spfx_upgrade.versions import AnalysisContext

OUTPUT_FORMATS = ("json", "md", "text")


@dataclass(frozen=True, slots=True)
class ReportDataModification:
    """One change to apply to a file."""

    description: str
    modification: str


@dataclass(slots=True)
class ReportData:
    """Findings grouped into the summary buckets of a report."""

    package_manager_commands: list[str] = field(default_factory=list)
    commands_to_execute: list[str] = field(default_factory=list)
    modification_per_file: dict[str, list[ReportDataModification]] = field(default_factory=dict)
    modification_type_per_file: dict[str, str] = field(default_factory=dict)

    def commands(self) -> list[str]:
        """Consolidated package commands followed by every other command."""
        return [*self.package_manager_commands, *self.commands_to_execute]


def build_report_data(rows: list[FindingToReport], package_manager: str) -> ReportData:
    """Bucket report rows into commands and per-file modifications."""
    data = ReportData()
    packages = PackageLists()
    for row in rows:
        if row.resolution_type == "cmd":
            if not map_package_manager_command(row.resolution, package_manager, packages):
                data.commands_to_execute.append(row.resolution)
            continue
        data.modification_per_file.setdefault(row.file, []).append(
            ReportDataModification(description=row.description, modification=row.resolution)
        )
        data.modification_type_per_file.setdefault(row.file, row.resolution_type)
    data.package_manager_commands = reduce_package_manager_commands(packages, package_manager)
    return data


def render_json(rows: list[FindingToReport]) -> str:
    """Render stable JSON output for CI and automation."""
    return json.dumps([row.to_dict() for row in rows], sort_keys=True)


def render_markdown(
    rows: list[FindingToReport],
    context: AnalysisContext,
    *,
    generated_on: date | None = None,
) -> str:
    """Render a Markdown report with per-finding steps and a summary."""
    data = build_report_data(rows, context.package_manager)
    day = (generated_on or date.today()).isoformat()
    lines: list[str] = [
        f"# Upgrade project {context.project_root.name} to v{context.to_version}",
        "",
        f"Date: {day}",
        "",
        "## Findings",
        "",
        (
            "Following is the list of steps required to upgrade your project to SharePoint "
            f"Framework version {context.to_version}. [Summary](#Summary) of the modifications "
            "is included at the end of the report."
        ),
        "",
    ]
    for row in rows:
        lines.extend(_markdown_finding(row))

    lines.extend(["## Summary", "", "### Execute script", "", "```sh", *data.commands(), "```", ""])
    lines.extend(["### Modify files", ""])
    for file, modifications in data.modification_per_file.items():
        fence = data.modification_type_per_file[file]
        lines.extend([f"#### [{file}]({file})", ""])
        for modification in modifications:
            lines.extend(
                [
                    f"{modification.description}:",
                    "",
                    f"```{fence}",
                    modification.modification,
                    "```",
                    "",
                ]
            )
    return "\n".join(lines).strip()


def render_text(rows: list[FindingToReport], package_manager: str) -> str:
    """Render a compact plain-text summary."""
    data = build_report_data(rows, package_manager)
    title = "Execute in command line"
    lines: list[str] = [title, "-" * len(title), *data.commands(), ""]
    for file, modifications in data.modification_per_file.items():
        lines.extend([file, "-" * len(file)])
        for modification in modifications:
            lines.extend([f"{modification.description}:", modification.modification, ""])
    return "\n".join(lines).strip()


def _markdown_finding(row: FindingToReport) -> list[str]:
    if row.resolution_type == "cmd":
        intro = "Execute the following command:"
        fence = "sh"
    else:
        intro = f"In file [{row.file}]({row.file}) update the code as follows:"
        fence = row.resolution_type
    location = row.file
    if row.position is not None:
        location = f"{row.file}:{row.position.line}:{row.position.character}"
    return [
        f"### {row.id} {row.title} | {row.severity}",
        "",
        row.description,
        "",
        intro,
        "",
        f"```{fence}",
        row.resolution,
        "```",
        "",
        f"File: [{location}]({row.file})",
        "",
    ]
