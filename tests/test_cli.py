"""
Tests for the option-compare command line
"""

import re

import pytest
from click.testing import CliRunner

from option_compare.cli import main

ID = r"([0-9a-z]{9})"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path):
    storage = tmp_path / "storage.json"
    env = {"OPTION_COMPARE_BASE_URL": "https://example.com/app/"}

    def _invoke(*args, storage_path=storage):
        return runner.invoke(main, ["--storage", str(storage_path), *args], env=env)
    return _invoke


def created_id(result, pattern):
    match = re.search(pattern + " " + ID, result.stdout)
    assert match, result.output
    return match.group(1)


class TestCli:
    """End-to-end CLI flows against a storage file"""

    def test_build_and_rank(self, invoke):
        assert invoke("new", "Laptops").exit_code == 0

        a = created_id(invoke("add-option", "A"), "Added option")
        b = created_id(invoke("add-option", "B"), "Added option")
        c1 = created_id(invoke("add-criterion", "Price", "--weight", "5"), "Added criterion")
        c2 = created_id(invoke("add-criterion", "Quality", "-w", "2"), "Added criterion")

        for option, criterion, value in [(a, c1, "4"), (a, c2, "2"), (b, c1, "3"), (b, c2, "5")]:
            assert invoke("score", option, criterion, value).exit_code == 0

        result = invoke("rank")
        assert result.exit_code == 0
        assert "Project: Laptops" in result.stdout
        rows = [line for line in result.stdout.splitlines() if re.match(r"\|\s+\d", line)]
        assert re.match(r"\|\s+1\s+\|\s+B\s+\|\s+25\s", rows[0])
        assert re.match(r"\|\s+2\s+\|\s+A\s+\|\s+24\s", rows[1])

    def test_projects_listing(self, invoke):
        invoke("new", "First")
        invoke("new", "Second")
        result = invoke("projects")
        assert result.exit_code == 0
        assert "First" in result.stdout
        assert "Second" in result.stdout

    def test_switch_rename_duplicate_delete(self, invoke):
        first = created_id(invoke("new", "First"), "Created")
        invoke("new", "Second")

        assert "Active project: First" in invoke("switch", first).stdout
        assert invoke("rename", "Renamed").exit_code == 0

        copy = created_id(invoke("duplicate", "--name", "Copy"), "Created")
        assert copy != first

        result = invoke("delete", copy)
        assert result.exit_code == 0
        assert "Deleted" in result.stdout

    def test_unknown_ids_fail(self, invoke):
        assert invoke("switch", "missing00").exit_code == 1
        assert invoke("delete", "missing00").exit_code == 1
        assert invoke("remove-option", "missing00").exit_code == 1
        assert invoke("score", "missing00", "missing00", "3").exit_code == 1

    def test_remove_option_and_criterion(self, invoke):
        invoke("new", "Cleanup")
        option = created_id(invoke("add-option", "A"), "Added option")
        criterion = created_id(invoke("add-criterion", "Price"), "Added criterion")

        assert invoke("remove-criterion", criterion).exit_code == 0
        assert invoke("remove-option", option).exit_code == 0

    def test_share_and_open(self, invoke, tmp_path):
        invoke("new", "Shared project")
        invoke("add-option", "Only option")

        url = invoke("share").stdout.strip()
        assert url.startswith("https://example.com/app/#share=")

        other = tmp_path / "other.json"
        result = invoke("open", url, storage_path=other)
        assert result.exit_code == 0
        assert "Active project: Shared project" in result.stdout

        # opening the same link again keeps local data
        invoke("rename", "Edited", storage_path=other)
        result = invoke("open", url, storage_path=other)
        assert "Active project: Edited" in result.stdout

    def test_open_bad_link(self, invoke):
        result = invoke("open", "https://example.com/app/#share=broken")
        assert result.exit_code == 0
        assert "Link not imported" in result.output
