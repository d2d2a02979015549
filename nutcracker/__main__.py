from pathlib import Path
from typing import Callable, Dict, Optional, TextIO

import click
import yaml
from rich.console import Console

from nutcracker.errors import FilterFetchError, NutcrackerError
from nutcracker.filters.models import Rule, rule_as_dict
from nutcracker.filters.parser import parse_filter_list
from nutcracker.logging_config import configure_logging
from nutcracker.service import FilterListService
from nutcracker.sources.fetcher import fetch_filter_list
from nutcracker.sources.models import FilterSource
from nutcracker.sources.repository import FilterListRepository
from nutcracker.tui import CleanerConsoleUI


FORMAT_VALUES = ["table", "yaml"]


def _format_option() -> Callable:
    return click.option(
        "--format",
        "output_format",
        type=click.Choice(FORMAT_VALUES, case_sensitive=False),
        default="table",
        show_default=True,
        help="Output format.",
    )


def _no_refresh_option() -> Callable:
    return click.option(
        "--no-refresh",
        is_flag=True,
        help="Use cached filter lists without fetching stale sources.",
    )


def _service_from_obj(obj: Dict[str, Optional[Path]]) -> FilterListService:
    repository = FilterListRepository(obj.get("root"))
    return FilterListService(repository, fetcher=fetch_filter_list)


def _load_rules(service: FilterListService, refresh: bool) -> None:
    try:
        if refresh:
            service.load_or_fetch()
        else:
            service.ensure_default_source()
            service.reload()
    except NutcrackerError as exc:
        raise click.ClickException(str(exc))


def _echo_rules_yaml(rules: tuple[Rule, ...]) -> None:
    payload = [rule_as_dict(rule) for rule in rules]
    click.echo(yaml.safe_dump(payload, default_flow_style=False, sort_keys=False), nl=False)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Store sources, caches and custom rules here instead of ~/.config/nutcracker.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_dir: Optional[Path]) -> None:
    """Strip tracking parameters from URLs using removeparam filter lists."""
    configure_logging(verbose)
    ctx.obj = {"root": config_dir}


@cli.command(help="Clean URLs given as arguments, or one per line from stdin.")
@click.argument("urls", nargs=-1)
@_no_refresh_option()
@click.pass_obj
def clean(obj: Dict[str, Optional[Path]], urls: tuple[str, ...], no_refresh: bool) -> None:
    service = _service_from_obj(obj)
    _load_rules(service, refresh=not no_refresh)

    candidates = urls or click.get_text_stream("stdin")
    for line in candidates:
        candidate = line.strip()
        if not candidate:
            click.echo("")
            continue
        cleaned = service.clean(candidate)
        click.echo(cleaned if cleaned is not None else candidate)


@cli.command(help="Explain which parameters would be removed from a URL.")
@click.argument("url")
@_no_refresh_option()
@click.pass_obj
def check(obj: Dict[str, Optional[Path]], url: str, no_refresh: bool) -> None:
    ui = CleanerConsoleUI(Console())
    service = _service_from_obj(obj)
    _load_rules(service, refresh=not no_refresh)
    ui.render_report(service.inspect(url))


@cli.command(help="Fetch enabled filter sources.")
@click.option("--force", is_flag=True, help="Fetch even if lists are fresh.")
@click.pass_obj
def refresh(obj: Dict[str, Optional[Path]], force: bool) -> None:
    ui = CleanerConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        service.ensure_default_source()
        service.reload()
        result = service.refresh(force=force)
    except NutcrackerError as exc:
        raise click.ClickException(str(exc))

    ui.render_refresh_result(result, rule_count=len(service.rules))
    if result.failures:
        raise click.exceptions.Exit(1)


@cli.group(help="Inspect compiled removeparam rules.")
def rules() -> None:
    pass


@rules.command("list", help="List the active rules from enabled sources.")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show at most N rules.")
@_format_option()
@click.pass_obj
def rules_list(obj: Dict[str, Optional[Path]], limit: Optional[int], output_format: str) -> None:
    service = _service_from_obj(obj)
    _load_rules(service, refresh=False)
    if output_format.lower() == "yaml":
        shown = service.rules if limit is None else service.rules[:limit]
        _echo_rules_yaml(shown)
        return
    CleanerConsoleUI(Console()).render_rules(service.rules, origin="active", limit=limit)


@rules.command("parse", help="Parse a local filter list file.")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show at most N rules.")
@_format_option()
def rules_parse(path: Path, limit: Optional[int], output_format: str) -> None:
    parsed = parse_filter_list(path.read_text(encoding="utf-8"))
    if output_format.lower() == "yaml":
        _echo_rules_yaml(parsed if limit is None else parsed[:limit])
        return
    CleanerConsoleUI(Console()).render_rules(parsed, origin=str(path), limit=limit)


@cli.group(help="Manage filter list sources.")
def sources() -> None:
    pass


def _source_rows(service: FilterListService) -> list[tuple[FilterSource, Optional[int]]]:
    rows: list[tuple[FilterSource, Optional[int]]] = []
    for source in service.repository.load_sources():
        cached = service.repository.read_cache(source)
        count = None if cached is None else len(parse_filter_list(cached))
        rows.append((source, count))
    return rows


@sources.command("list", help="List configured filter sources.")
@click.pass_obj
def sources_list(obj: Dict[str, Optional[Path]]) -> None:
    ui = CleanerConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        service.ensure_default_source()
        rows = _source_rows(service)
    except NutcrackerError as exc:
        raise click.ClickException(str(exc))
    ui.render_sources(rows)


@sources.command("add", help="Add a filter source by name and URL.")
@click.argument("name")
@click.argument("url")
@click.option("--no-fetch", is_flag=True, help="Register without downloading the list.")
@click.pass_obj
def sources_add(obj: Dict[str, Optional[Path]], name: str, url: str, no_fetch: bool) -> None:
    ui = CleanerConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        source = service.add_source(name, url, fetch=not no_fetch)
    except FilterFetchError as exc:
        raise click.ClickException(f"Source saved but initial fetch failed: {exc}")
    except NutcrackerError as exc:
        raise click.ClickException(str(exc))
    ui.render_source_saved(source, "added")


@sources.command("remove", help="Remove a filter source and its cached list.")
@click.argument("name")
@click.pass_obj
def sources_remove(obj: Dict[str, Optional[Path]], name: str) -> None:
    ui = CleanerConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        source = service.remove_source(name)
    except NutcrackerError as exc:
        raise click.ClickException(str(exc))
    ui.render_source_saved(source, "removed")


def _set_source_enabled(obj: Dict[str, Optional[Path]], name: str, enabled: bool) -> None:
    ui = CleanerConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        source = service.set_enabled(name, enabled)
    except NutcrackerError as exc:
        raise click.ClickException(str(exc))
    ui.render_source_saved(source, "enabled" if enabled else "disabled")


@sources.command("enable", help="Enable a filter source.")
@click.argument("name")
@click.pass_obj
def sources_enable(obj: Dict[str, Optional[Path]], name: str) -> None:
    _set_source_enabled(obj, name, True)


@sources.command("disable", help="Disable a filter source.")
@click.argument("name")
@click.pass_obj
def sources_disable(obj: Dict[str, Optional[Path]], name: str) -> None:
    _set_source_enabled(obj, name, False)


@cli.group(help="Manage custom removeparam rules.")
def custom() -> None:
    pass


@custom.command("show", help="Print the custom rules text.")
@click.pass_obj
def custom_show(obj: Dict[str, Optional[Path]]) -> None:
    service = _service_from_obj(obj)
    CleanerConsoleUI(Console()).render_custom_rules(
        service.repository.load_custom_rules(), str(service.repository.custom_rules_path)
    )


@custom.command("set", help="Replace custom rules with the contents of FILE ('-' for stdin).")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def custom_set(obj: Dict[str, Optional[Path]], source: TextIO) -> None:
    service = _service_from_obj(obj)
    text = source.read()
    try:
        service.apply_custom_rules(text)
    except NutcrackerError as exc:
        raise click.ClickException(str(exc))
    CleanerConsoleUI(Console()).render_custom_saved(len(parse_filter_list(text)))


@custom.command("clear", help="Remove all custom rules.")
@click.pass_obj
def custom_clear(obj: Dict[str, Optional[Path]]) -> None:
    service = _service_from_obj(obj)
    try:
        service.apply_custom_rules("")
    except NutcrackerError as exc:
        raise click.ClickException(str(exc))
    CleanerConsoleUI(Console()).render_custom_saved(0, cleared=True)


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
