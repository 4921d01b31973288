"""Tests for console and file rendering of resolved modules."""

import csv
import json

from puppetfile.models import DependenciesFound, DependencyEdge, ForgeModule, GitModule, NoDependencies
from report import export_csv, export_json, render_text

SEP = "-------------------------------------------------"


def _modules():
    stdlib = ForgeModule(
        title="puppetlabs-stdlib",
        owner="puppetlabs",
        name="stdlib",
        version_spec="6.0.0",
        slug="puppetlabs-stdlib-6.0.0",
        dependencies=NoDependencies('No dependencies found for "puppetlabs-stdlib-6.0.0"'),
    )
    thing = GitModule(
        title="myorg-thing",
        owner="myorg",
        name="thing",
        remote_url="https://github.com/myorg/thing",
        ref="master",
        uses_auth=True,
        dependencies=DependenciesFound((
            DependencyEdge("puppetlabs/stdlib", ">= 6.0.0"),
            DependencyEdge("puppetlabs/concat", ">= 4.0.0"),
        )),
    )
    return [stdlib, thing]


class TestRenderText:
    """Padded two-column output."""

    def test_layout(self):
        out = render_text(_modules())
        width = len("puppetlabs-stdlib") + 5
        assert out.splitlines() == [
            "puppetlabs-stdlib" + " " * 5 + ' No dependencies found for "puppetlabs-stdlib-6.0.0"',
            SEP,
            "myorg-thing" + " " * (width - len("myorg-thing")) + " puppetlabs/stdlib >= 6.0.0",
            " " * width + " puppetlabs/concat >= 4.0.0",
            SEP,
        ]

    def test_empty(self):
        assert render_text([]) == ""

    def test_unresolved_module_has_title_only(self):
        pending = ForgeModule(title="puppetlabs-stdlib", owner="puppetlabs", name="stdlib",
                              version_spec="6.0.0", slug="puppetlabs-stdlib-6.0.0")
        assert not pending.resolved
        assert render_text([pending]).splitlines() == ["puppetlabs-stdlib", SEP]


class TestExports:
    """JSON and CSV files."""

    def test_json(self, tmp_path):
        path = tmp_path / "out.json"
        export_json(_modules(), str(path))
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[0]["source"] == "forge"
        assert data[0]["found"] is False
        assert data[0]["reason"] == 'No dependencies found for "puppetlabs-stdlib-6.0.0"'
        assert data[1]["url"] == "https://github.com/myorg/thing"
        assert data[1]["dependencies"] == [
            {"name": "puppetlabs/stdlib", "requirement": ">= 6.0.0"},
            {"name": "puppetlabs/concat", "requirement": ">= 4.0.0"},
        ]

    def test_csv_one_row_per_entry(self, tmp_path):
        path = tmp_path / "out.csv"
        export_csv(_modules(), str(path))
        with open(path, newline="", encoding="utf-8") as fh:
            rows = list(csv.reader(fh))
        assert rows[0][0] == "Module"
        assert len(rows) == 4
        assert rows[1][7].startswith("No dependencies found")
        assert rows[2][4] == "https://github.com/myorg/thing@master"
        assert rows[3][5:7] == ["puppetlabs/concat", ">= 4.0.0"]
