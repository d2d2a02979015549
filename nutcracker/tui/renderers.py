from rich.console import Console
from rich.markup import escape

from nutcracker.cleaner import CleanReport
from nutcracker.filters.models import Rule
from nutcracker.service import RefreshResult
from nutcracker.sources.models import FilterSource
from nutcracker.tui.enums import CLEAN_STATUS_STYLE, UIStyle
from nutcracker.tui.sections import UISection
from nutcracker.tui.tables import CleanTable, RulesTable, SourcesTable
from nutcracker.utils import compact_home_path


class CleanerConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_report(self, report: CleanReport) -> None:
        style = CLEAN_STATUS_STYLE.get(report.status, UIStyle.WHITE.value)
        self.console.print(
            UISection.wrap("check", CleanTable.report_block(report), style=style)
        )
        if report.params:
            self.console.print(
                UISection.wrap(
                    "parameters",
                    CleanTable.params_table(report),
                    style=UIStyle.CYAN.value,
                )
            )

    def render_rules(
        self, rules: tuple[Rule, ...], origin: str, limit: int | None = None
    ) -> None:
        self.console.print(
            UISection.wrap(
                "rules overview",
                RulesTable.summary_block(rules, origin=origin),
                style=UIStyle.BLUE.value,
            )
        )
        if not rules:
            self.console.print(
                UISection.note("rules", "No rules loaded.", style=UIStyle.YELLOW.value)
            )
            return

        shown = rules if limit is None else rules[:limit]
        subtitle = None
        if len(shown) < len(rules):
            subtitle = f"showing {len(shown)} of {len(rules)}"
        self.console.print(
            UISection.wrap(
                "rules",
                RulesTable.rules_table(shown),
                style=UIStyle.CYAN.value,
                subtitle=subtitle,
            )
        )

    def render_sources(self, items: list[tuple[FilterSource, int | None]]) -> None:
        if not items:
            self.console.print(
                UISection.note(
                    "sources",
                    "No filter sources configured.\n"
                    "- nutcracker sources add <name> <url>",
                    style=UIStyle.YELLOW.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "sources", SourcesTable.sources_table(items), style=UIStyle.BLUE.value
            )
        )

    def render_source_saved(self, source: FilterSource, verb: str) -> None:
        border_style = UIStyle.YELLOW.value if verb == "removed" else UIStyle.GREEN.value
        self.console.print(
            UISection.note(
                "source",
                f"Source {verb}: [bold]{escape(source.name)}[/bold]\n{escape(source.url)}",
                style=border_style,
            )
        )

    def render_refresh_result(self, result: RefreshResult, rule_count: int) -> None:
        if result.skipped:
            self.console.print(
                UISection.note(
                    "refresh",
                    f"Filter lists are up to date ({rule_count} rules).\n"
                    "- nutcracker refresh --force",
                    style=UIStyle.DIM.value,
                )
            )
            return

        lines = [f"refreshed={len(result.refreshed)}  failed={len(result.failures)}"]
        lines.append(f"rules={rule_count}")
        self.console.print(
            UISection.note(
                "refresh",
                "\n".join(lines),
                style=UIStyle.GREEN.value if result.ok else UIStyle.RED.value,
            )
        )
        if result.failures:
            failure_text = "\n".join([f"- {escape(item)}" for item in result.failures])
            self.console.print(
                UISection.note("failures", failure_text, style=UIStyle.RED.value)
            )

    def render_custom_rules(self, text: str, path: str) -> None:
        if not text.strip():
            self.console.print(
                UISection.note(
                    "custom rules",
                    f"No custom rules.\n{compact_home_path(path)}",
                    style=UIStyle.YELLOW.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "custom rules",
                escape(text.rstrip("\n")),
                style=UIStyle.MAGENTA.value,
                subtitle=compact_home_path(path),
            )
        )

    def render_custom_saved(self, rule_count: int, cleared: bool = False) -> None:
        message = (
            "Custom rules cleared."
            if cleared
            else f"Custom rules saved ({rule_count} rules parsed)."
        )
        self.console.print(
            UISection.note("custom rules", message, style=UIStyle.GREEN.value)
        )
