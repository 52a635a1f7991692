"""Command line interface entry point."""

from __future__ import annotations

import asyncio
import locale
import logging
import sys
from collections.abc import Callable
from typing import Any

import click

from simple_record_forms.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    StoreSettings,
    load_configuration,
    write_placeholder_configuration,
)
from simple_record_forms.form_engine import FormPhase, FormScreen
from simple_record_forms.list_engine import (
    EMPTY_STATE_HINT,
    EMPTY_STATE_MESSAGE,
    ListScreen,
)
from simple_record_forms.notifications import Notifier
from simple_record_forms.remote_store import DocumentStoreClient, RecordStore
from simple_record_forms.schema_management import FieldSpec, FieldType

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "simple_record_forms"
CLEAR_VALUE = "-"

StoreFactory = Callable[[StoreSettings], RecordStore]

_TYPE_HINTS = {
    FieldType.DATETIME: "ISO 8601",
    FieldType.INTEGER: "whole number",
    FieldType.FLOAT: "number",
    FieldType.BOOLEAN: "yes/no",
}


class CliError(Exception):
    """Custom CLI error."""


class _ScreenExit:  # pylint: disable=too-few-public-methods
    """Navigator for a single terminal screen."""

    def __init__(self) -> None:
        self.left = False

    def back(self) -> None:
        self.left = True


def _require_record_id(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if not value.strip():
        raise click.BadParameter("must not be blank.", ctx=ctx, param=param)
    return value


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(package_name="simple-record-forms")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML configuration with store settings and field schema",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log store operations.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Schema-driven list and form client for a remote record collection."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # Package logs only with --verbose.
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.CRITICAL)
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error:
        logger.debug("System locale unavailable, keeping default date formatting")
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_records)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML configuration mirroring the built-in defaults."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="list")
@click.option(
    "--watch",
    is_flag=True,
    default=False,
    help="Offer to re-fetch the list after each render.",
)
@click.pass_context
def list_records(ctx: click.Context, watch: bool) -> None:
    """Show every record, newest first."""
    configuration, store_factory, notifier = _screen_dependencies(ctx)
    if not asyncio.run(_show_list(configuration, store_factory, notifier, watch=watch)):
        ctx.exit(1)


@cli.command(name="create")
@click.pass_context
def create_record(ctx: click.Context) -> None:
    """Prompt for each field and create a new record."""
    configuration, store_factory, notifier = _screen_dependencies(ctx)
    if not asyncio.run(_run_form(configuration, store_factory, notifier, record_id=None)):
        ctx.exit(1)


@cli.command(name="edit")
@click.argument("record_id", callback=_require_record_id)
@click.pass_context
def edit_record(ctx: click.Context, record_id: str) -> None:
    """Edit the record stored under RECORD_ID."""
    configuration, store_factory, notifier = _screen_dependencies(ctx)
    if not asyncio.run(_run_form(configuration, store_factory, notifier, record_id=record_id)):
        ctx.exit(1)


@cli.command(name="delete")
@click.argument("record_id")
@click.pass_context
def delete_record(ctx: click.Context, record_id: str) -> None:
    """Delete the record stored under RECORD_ID after confirmation."""
    configuration, store_factory, notifier = _screen_dependencies(ctx)
    if not asyncio.run(_run_delete(configuration, store_factory, notifier, record_id)):
        ctx.exit(1)


def _screen_dependencies(
    ctx: click.Context,
) -> tuple[Configuration, StoreFactory, Notifier]:
    obj = ctx.ensure_object(dict)
    try:
        configuration = load_configuration(obj.get("config_path"))
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    store_factory: StoreFactory = obj.get("store_factory") or DocumentStoreClient
    notifier = obj.get("notifier") or Notifier()
    return configuration, store_factory, notifier


async def _show_list(
    configuration: Configuration,
    store_factory: StoreFactory,
    notifier: Notifier,
    *,
    watch: bool = False,
) -> bool:
    store = store_factory(configuration.store)
    try:
        screen = _list_screen(configuration, store, notifier)
        if not await screen.mount():
            return False
        _render_list(screen)
        while watch and click.confirm("Refresh the list?", default=False):
            if await screen.refresh():
                _render_list(screen)
        return True
    finally:
        await _close_store(store)


async def _run_delete(
    configuration: Configuration,
    store_factory: StoreFactory,
    notifier: Notifier,
    record_id: str,
) -> bool:
    answers: list[bool] = []

    def confirm(title: str, prompt: str) -> bool:
        answers.append(_confirm_destructive(title, prompt))
        return answers[-1]

    store = store_factory(configuration.store)
    try:
        screen = ListScreen(
            configuration.schema,
            store,
            notifier,
            configuration.store.collection_id,
            confirm=confirm,
        )
        if not await screen.request_delete(record_id):
            if any(answers):
                return False
            click.echo("Cancelled.")
            return True
        if screen.state.last_error is None:
            _render_list(screen)
        return True
    finally:
        await _close_store(store)


async def _run_form(
    configuration: Configuration,
    store_factory: StoreFactory,
    notifier: Notifier,
    *,
    record_id: str | None,
) -> bool:
    store = store_factory(configuration.store)
    navigator = _ScreenExit()
    try:
        screen = FormScreen(
            configuration.schema,
            store,
            notifier,
            navigator,
            configuration.store.collection_id,
            record_id=record_id,
        )
        await screen.open()
        while screen.phase is FormPhase.READY:
            _prompt_values(screen)
            if await screen.submit():
                break
            if not click.confirm("Edit the values and try again?", default=True):
                screen.cancel()
        if screen.phase is FormPhase.DONE and screen.record is not None:
            click.echo(screen.record.record_id)
            return True
        return False
    finally:
        await _close_store(store)


def _list_screen(
    configuration: Configuration, store: RecordStore, notifier: Notifier
) -> ListScreen:
    return ListScreen(
        configuration.schema,
        store,
        notifier,
        configuration.store.collection_id,
        confirm=_confirm_destructive,
    )


def _confirm_destructive(title: str, prompt: str) -> bool:
    return click.confirm(f"{title}: {prompt}", default=False)


def _prompt_values(screen: FormScreen) -> None:
    current = screen.values
    if any(current.values()):
        click.echo(f"Press Enter to keep a value, '{CLEAR_VALUE}' to clear it.")
    for field in screen.schema:
        value = click.prompt(
            _prompt_label(field),
            default=current.get(field.key, ""),
            show_default=bool(current.get(field.key)),
        )
        screen.set_value(field.key, "" if value.strip() == CLEAR_VALUE else value)


def _prompt_label(field: FieldSpec) -> str:
    hint = _TYPE_HINTS.get(field.type)
    label = f"{field.label} ({hint})" if hint else field.label
    return f"{label} *" if field.required else label


def _render_list(screen: ListScreen) -> None:
    if screen.is_empty:
        click.echo(EMPTY_STATE_MESSAGE)
        click.echo(EMPTY_STATE_HINT)
        return
    for summary in screen.summaries():
        click.echo(click.style(f"[{summary.record_id}]", bold=True))
        for line in summary.lines:
            click.echo(f"  {line.label}: {line.text}")


async def _close_store(store: Any) -> None:
    close = getattr(store, "aclose", None)
    if close is not None:
        await close()


def main(argv: list[str] | None = None, *, obj: dict[str, Any] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        result = cli.main(args=list(argv), standalone_mode=False, obj=obj or {})
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
