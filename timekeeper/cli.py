#!filepath: timekeeper/cli.py
import json
import shlex
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table
from rich.text import Text

from timekeeper import __version__, init_logging, logs, registry_from_config
from timekeeper.config import AppConfig
from timekeeper.observability.instrumentation import Instrumentation
from timekeeper.observability.records import TimerRecord
from timekeeper.observability.registry import TimerRegistry
from timekeeper.utils.errors import TimerError

app = typer.Typer(help="timekeeper: named timer registry CLI")

# 会话内命令：每一行输入解析成其中一个
session_app = typer.Typer(help="Commands accepted inside a timer session", add_completion=False)

console = Console(highlight=False)


@dataclass
class SessionState:
    registry: TimerRegistry
    as_json: bool = False
    failed: bool = False


# ---------------------------------------------------------
# 输出
# ---------------------------------------------------------
def _emit_records(state: SessionState, records: List[TimerRecord], title: Optional[str] = None):
    if not records:
        return

    if state.as_json:
        for rec in records:
            console.print(json.dumps(rec.to_dict()), markup=False, emoji=False, soft_wrap=True)
        return

    table = Table(title=title)
    table.add_column("Name")
    table.add_column("ElapsedTime", justify="right")
    table.add_column("IsRunning")
    for rec in records:
        table.add_row(Text(rec.name), rec.elapsed_time, str(rec.is_running))
    console.print(table)


def _emit_messages(messages: Iterable[str]):
    for msg in messages:
        console.print(Text(msg))


def _emit_errors(state: SessionState, errors: Iterable[Exception]):
    for err in errors:
        state.failed = True
        code = getattr(err, "code", type(err).__name__)
        console.print(Text(f"[{code}] {err}", style="red"))


# ---------------------------------------------------------
# 会话命令
# ---------------------------------------------------------
@session_app.command("start")
def start_cmd(
    ctx: typer.Context,
    names: List[str] = typer.Argument(..., help="Timer names"),
    force: bool = typer.Option(False, "--force", "-f", help="Restart existing timers"),
):
    """Start one or more timers."""
    state: SessionState = ctx.obj
    result = state.registry.start(names, force=force)
    _emit_errors(state, result.errors)


@session_app.command("get")
def get_cmd(
    ctx: typer.Context,
    names: Optional[List[str]] = typer.Argument(None, help="Timer names (default: all)"),
):
    """Show elapsed time of timers."""
    state: SessionState = ctx.obj
    result = state.registry.get(names)
    _emit_records(state, result.items)
    _emit_errors(state, result.errors)


@session_app.command("stop")
def stop_cmd(ctx: typer.Context, names: List[str] = typer.Argument(...)):
    """Stop timers and show their final elapsed time."""
    state: SessionState = ctx.obj
    result = state.registry.stop(names)
    _emit_records(state, result.items)
    _emit_errors(state, result.errors)


@session_app.command("reset")
def reset_cmd(ctx: typer.Context, names: List[str] = typer.Argument(...)):
    """Zero timers and start them again."""
    state: SessionState = ctx.obj
    result = state.registry.reset(names)
    _emit_messages(result.items)
    _emit_errors(state, result.errors)


@session_app.command("remove")
def remove_cmd(
    ctx: typer.Context,
    names: List[str] = typer.Argument(...),
    force: bool = typer.Option(False, "--force", "-f", help="Remove running timers too"),
):
    """Remove timers from the registry."""
    state: SessionState = ctx.obj
    result = state.registry.remove(names, force=force)
    _emit_messages(result.items)
    _emit_errors(state, result.errors)


@session_app.command("sleep")
def sleep_cmd(seconds: float = typer.Argument(..., min=0.0)):
    """Wait, so scripts can measure something."""
    time.sleep(seconds)


@session_app.command("report")
def report_cmd(ctx: typer.Context):
    """Show every timer in one table."""
    state: SessionState = ctx.obj
    if not state.registry.initialized:
        console.print("(no timers)")
        return
    _emit_records(state, state.registry.get().items, title="Timers")


_session_command = typer.main.get_command(session_app)

# typer 暴露的 click 异常基类。新版 typer 内置 click，抛出的不再是 click.ClickException
UsageErrorBase = next(c for c in typer.BadParameter.__mro__ if c.__name__ == "ClickException")


@logs.catch(msg="session line failed")
def run_line(state: SessionState, line: str) -> None:
    """
    执行一行会话命令；任何错误都只打印，不中断会话。
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return

    try:
        args = shlex.split(line)
        _session_command.main(
            args=args,
            prog_name="timekeeper",
            obj=state,
            standalone_mode=False,
        )
    except UsageErrorBase as e:
        state.failed = True
        console.print(Text(f"[Usage] {e.format_message()}", style="yellow"))
    except (TimerError, ValueError) as e:
        # ValueError: TimerInputError，或 shlex 引号不配对
        _emit_errors(state, [e])


# ---------------------------------------------------------
# 顶层命令
# ---------------------------------------------------------
@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def session(
    script: Optional[Path] = typer.Option(
        None, "--script", "-s", exists=True, dir_okay=False, help="Read commands from a file instead of stdin"
    ),
    json_output: bool = typer.Option(False, "--json", help="Print records as JSON lines"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    report: bool = typer.Option(False, "--report", help="Print (and log) a timer report when the session ends"),
):
    """
    运行一个计时会话：每行一个命令（start/get/stop/reset/remove/sleep/report）
    """
    cfg = AppConfig.load(str(config) if config else None)
    init_logging(cfg.log)

    state = SessionState(registry=registry_from_config(cfg), as_json=json_output)

    if script is not None:
        lines = script.read_text(encoding="utf-8").splitlines()
    else:
        lines = sys.stdin

    for line in lines:
        run_line(state, line)

    if report:
        records = state.registry.get().items if state.registry.initialized else []
        if records:
            _emit_records(state, records, title="Timer report: session")
        else:
            console.print("Timer report: session (no timers)")
        Instrumentation(registry=state.registry).generate_report("session")

    raise typer.Exit(code=1 if state.failed else 0)


if __name__ == "__main__":
    app()

# echo "start A" | python -m timekeeper.cli session
