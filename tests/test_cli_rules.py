"""Tests for rules CLI commands."""

from pathlib import Path

import yaml

from nutcracker.__main__ import cli


def test_rules_list_empty(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["rules", "list"])
    assert result.exit_code == 0
    assert "No rules loaded" in result.output


def test_rules_list_custom_rules(cli_runner) -> None:
    cli_runner.invoke(
        cli, ["custom", "set", "-"], input="@@||example.com^$removeparam=fbclid\n"
    )

    result = cli_runner.invoke(cli, ["rules", "list"])

    assert result.exit_code == 0
    assert "exception" in result.output
    assert "fbclid" in result.output


def test_rules_parse_file_yaml(cli_runner, tmp_path: Path) -> None:
    path = tmp_path / "list.txt"
    path.write_text(
        "! Title: test\n"
        "||bing.*$removeparam=cvid\n"
        "*$removeparam=/^utm_/i,domain=a.test|~b.test\n"
        "example.com##.banner\n",
        encoding="utf-8",
    )

    result = cli_runner.invoke(cli, ["rules", "parse", str(path), "--format", "yaml"])

    assert result.exit_code == 0
    assert yaml.safe_load(result.output) == [
        {"exception": False, "domains": ["bing"], "matcher": "exact", "param": "cvid"},
        {
            "exception": False,
            "domains": ["a.test"],
            "matcher": "regex",
            "param": "/^utm_/i",
        },
    ]


def test_rules_parse_limit_table(cli_runner, tmp_path: Path) -> None:
    path = tmp_path / "list.txt"
    path.write_text(
        "".join(f"*$removeparam=param{index}\n" for index in range(5)),
        encoding="utf-8",
    )

    result = cli_runner.invoke(cli, ["rules", "parse", str(path), "--limit", "2"])

    assert result.exit_code == 0
    assert "showing 2 of 5" in result.output
    assert "param1" in result.output
    assert "param4" not in result.output


def test_rules_parse_missing_file(cli_runner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["rules", "parse", str(tmp_path / "missing.txt")])
    assert result.exit_code != 0
