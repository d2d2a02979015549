from collections import Counter

from rich.markup import escape
from rich.table import Column, Table

from nutcracker.cleaner import CleanReport, QueryParam
from nutcracker.filters.models import ExactMatcher, Rule, describe_matcher
from nutcracker.sources.models import FilterSource
from nutcracker.tui.enums import CLEAN_STATUS_STYLE, UIStyle


def _param_label(param: QueryParam) -> str:
    if param.value is None:
        return escape(param.name)
    return escape(f"{param.name}={param.value}")


class RulesTable:
    @staticmethod
    def summary_block(rules: tuple[Rule, ...], origin: str):
        kinds = Counter(
            "exact" if isinstance(rule.matcher, ExactMatcher) else "regex"
            for rule in rules
        )
        exceptions = sum(1 for rule in rules if rule.is_exception)
        scoped = sum(1 for rule in rules if rule.domains)

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Origin", escape(origin))
        table.add_row("Rules", str(len(rules)))
        table.add_row("Exceptions", str(exceptions))
        table.add_row("Scoped", str(scoped))
        table.add_row(
            "Matchers",
            "  ".join(f"{key}={value}" for key, value in sorted(kinds.items()))
            or "none",
        )
        return table

    @staticmethod
    def rules_table(rules: tuple[Rule, ...]) -> Table:
        table = Table(
            Column(header="#", width=6, justify="right"),
            Column(header="Kind", width=10),
            Column(header="Param", overflow="fold"),
            Column(header="Domains", overflow="ellipsis", max_width=48),
            expand=True,
            header_style="bold",
        )
        for index, rule in enumerate(rules, start=1):
            kind = (
                f"[{UIStyle.YELLOW.value}]exception[/{UIStyle.YELLOW.value}]"
                if rule.is_exception
                else "remove"
            )
            domains = ", ".join(rule.domains) if rule.domains else "(any)"
            table.add_row(
                str(index),
                kind,
                escape(describe_matcher(rule.matcher)),
                escape(domains),
            )
        return table


class SourcesTable:
    @staticmethod
    def sources_table(items: list[tuple[FilterSource, int | None]]) -> Table:
        table = Table(
            Column(header="Name", width=28),
            Column(header="Status", width=10),
            Column(header="Rules", width=8, justify="right"),
            Column(header="URL", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for source, rule_count in items:
            style = UIStyle.GREEN.value if source.enabled else UIStyle.YELLOW.value
            label = "enabled" if source.enabled else "disabled"
            count = "-" if rule_count is None else str(rule_count)
            table.add_row(
                escape(source.name),
                f"[{style}]{label}[/{style}]",
                count,
                escape(source.url),
            )
        return table


class CleanTable:
    @staticmethod
    def report_block(report: CleanReport):
        style = CLEAN_STATUS_STYLE.get(report.status, UIStyle.WHITE.value)
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column(overflow="fold")
        table.add_row("URL", escape(report.url))
        table.add_row("Status", f"[{style}]{report.status.value}[/{style}]")
        if report.host:
            table.add_row("Host", escape(report.host))
        if report.cleaned_url is not None:
            table.add_row("Cleaned", escape(report.cleaned_url))
        return table

    @staticmethod
    def params_table(report: CleanReport) -> Table:
        table = Table(
            Column(header="Param", overflow="fold"),
            Column(header="Action", width=10),
            expand=True,
            header_style="bold",
        )
        removed_style = UIStyle.RED.value
        for param in report.params:
            action = (
                f"[{removed_style}]removed[/{removed_style}]"
                if param in report.removed
                else "kept"
            )
            table.add_row(_param_label(param), action)
        return table
