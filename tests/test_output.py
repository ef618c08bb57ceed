"""Report rendering tests."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from spfx_upgrade.findings import FindingToReport, Position
from spfx_upgrade.output import build_report_data, render_json, render_markdown, render_text
from spfx_upgrade.versions import AnalysisContext


def _row(
    finding_id: str,
    resolution: str,
    *,
    resolution_type: str = "cmd",
    file: str = "./package.json",
    description: str = "Upgrade package",
    position: Position | None = None,
) -> FindingToReport:
    return FindingToReport(
        id=finding_id,
        title=f"title {finding_id}",
        description=description,
        severity="Required",
        resolution_type=resolution_type,
        file=file,
        resolution=resolution,
        position=position,
    )


ROWS = [
    _row("FN001001", "npm i -SE @microsoft/sp-core-library@1.6.0"),
    _row("FN002001", "npm i -DE @microsoft/sp-build-web@1.6.0"),
    _row("FN001008", "npm i -SE react@16.3.2"),
    _row("FN001018", "npm un -S @microsoft/sp-client-base"),
    _row("FN015004", "rm ./config/tslint.json"),
    _row(
        "FN012011",
        '{\n  "compilerOptions": {\n    "outDir": "lib"\n  }\n}',
        resolution_type="json",
        file="./tsconfig.json",
        description="Update tsconfig.json outDir compiler option",
    ),
    _row(
        "FN016001",
        "import { MSGraphClient } from '@microsoft/sp-http';",
        resolution_type="ts",
        file="./src/a.ts",
        description="Update the package from which MSGraphClient is imported",
        position=Position(line=3, character=1),
    ),
    _row("FN017001", "npm dedupe", description="Run npm dedupe"),
]


def _context(tmp_path: Path) -> AnalysisContext:
    return AnalysisContext(
        project_root=tmp_path / "spfx-151",
        from_version="1.5.1",
        to_version="1.6.0",
        package_manager="npm",
    )


def test_report_data_puts_every_row_in_one_bucket() -> None:
    data = build_report_data(ROWS, "npm")

    assert data.package_manager_commands == [
        "npm i -SE @microsoft/sp-core-library@1.6.0 react@16.3.2",
        "npm i -DE @microsoft/sp-build-web@1.6.0",
        "npm un -S @microsoft/sp-client-base",
    ]
    assert data.commands_to_execute == ["rm ./config/tslint.json", "npm dedupe"]
    assert list(data.modification_per_file) == ["./tsconfig.json", "./src/a.ts"]
    assert data.modification_type_per_file == {"./tsconfig.json": "json", "./src/a.ts": "ts"}
    assert data.commands()[-1] == "npm dedupe"


def test_report_data_for_yarn_keeps_foreign_commands_verbatim() -> None:
    rows = [
        _row("FN001001", "yarn add -E @microsoft/sp-core-library@1.6.0"),
        _row("FN002001", "yarn add -DE gulp@~3.9.1"),
        _row("FN018001", "mkdir teams"),
    ]
    data = build_report_data(rows, "yarn")
    assert data.package_manager_commands == [
        "yarn add -E @microsoft/sp-core-library@1.6.0",
        "yarn add -DE gulp@~3.9.1",
    ]
    assert data.commands_to_execute == ["mkdir teams"]


def test_render_json_has_stable_keys() -> None:
    payload = json.loads(render_json(ROWS))
    assert len(payload) == len(ROWS)
    assert set(payload[0]) == {
        "id",
        "title",
        "description",
        "severity",
        "resolutionType",
        "file",
        "position",
        "resolution",
    }
    assert payload[6]["position"] == {"line": 3, "character": 1}
    assert json.loads(render_json([])) == []


def test_render_markdown_sections(tmp_path: Path) -> None:
    output = render_markdown(ROWS, _context(tmp_path), generated_on=date(2019, 4, 1))

    assert output.startswith("# Upgrade project spfx-151 to v1.6.0")
    assert "Date: 2019-04-01" in output
    assert "### FN001001 title FN001001 | Required" in output
    assert "```sh\nnpm i -SE @microsoft/sp-core-library@1.6.0\n```" in output
    assert "In file [./tsconfig.json](./tsconfig.json) update the code as follows:" in output
    assert "File: [./src/a.ts:3:1](./src/a.ts)" in output
    assert "## Summary" in output
    assert "### Execute script" in output
    assert "#### [./tsconfig.json](./tsconfig.json)" in output
    summary = output.split("## Summary", 1)[1]
    assert "npm i -SE @microsoft/sp-core-library@1.6.0 react@16.3.2\n" in summary
    assert summary.index("npm un -S") < summary.index("rm ./config/tslint.json")


def test_render_markdown_with_no_findings(tmp_path: Path) -> None:
    output = render_markdown([], _context(tmp_path), generated_on=date(2019, 4, 1))
    assert "## Findings" in output
    assert "### Modify files" in output
    assert "```sh\n```" in output


def test_render_text_lists_commands_then_files() -> None:
    output = render_text(ROWS, "npm")
    lines = output.splitlines()

    assert lines[0] == "Execute in command line"
    assert lines[1] == "-" * len("Execute in command line")
    assert lines[2] == "npm i -SE @microsoft/sp-core-library@1.6.0 react@16.3.2"
    assert "./tsconfig.json" in lines
    assert "Update tsconfig.json outDir compiler option:" in lines
    assert output.index("npm dedupe") < output.index("./tsconfig.json")
    assert "\x1b[" not in output


def test_render_text_with_no_findings() -> None:
    output = render_text([], "npm")
    assert output == "Execute in command line\n" + "-" * len("Execute in command line")
