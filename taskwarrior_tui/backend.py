"""Task storage backends; the command-line backend drives ``task``."""

from __future__ import annotations

import abc
import enum
import logging
import re
import shlex
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
from uuid import UUID

from .task_report import Task, import_tasks

log = logging.getLogger(__name__)

Version = tuple[int, ...]
Runner = Callable[[list[str]], subprocess.CompletedProcess]

_SUPPORTED_VERSION: Version = (3, 0, 0)
_VERSION = re.compile(r"v?([0-9]+(?:\.[0-9]+)*)")

_EXPORT_FLAGS = (
    "rc.json.array=on",
    "rc.confirmation=off",
    "rc.json.depends.array=on",
    "rc.color=off",
    "rc._forcecolor=off",
)
_BULK_FLAGS = (
    "rc.bulk=0",
    "rc.confirmation=off",
    "rc.dependency.confirmation=off",
    "rc.recurrence.confirmation=off",
)


class BackendError(RuntimeError):
    """Raised when a backend cannot be created or a task command fails."""


class BackendKind(enum.Enum):
    """Which storage a backend uses."""

    CLI = "cli"
    TASKCHAMPION = "taskchampion"


@dataclass(frozen=True)
class BackendConfig:
    """Which backend to create and its settings."""

    kind: BackendKind = BackendKind.CLI
    data_dir: Optional[Path] = None
    server_config: Optional[str] = None


class TaskBackend(abc.ABC):
    """Operations every task storage offers."""

    @abc.abstractmethod
    def export_tasks(self, filter: str, report: str, context_filter: str) -> list[Task]:
        """Tasks of ``report`` matching the filters."""

    @abc.abstractmethod
    def add_task(self, description: str, args: Sequence[str]) -> None:
        """Add a task."""

    @abc.abstractmethod
    def mark_done(self, task_uuids: Sequence[Union[UUID, str]]) -> None:
        """Complete tasks."""

    @abc.abstractmethod
    def delete_tasks(self, task_uuids: Sequence[Union[UUID, str]]) -> None:
        """Delete tasks."""

    @abc.abstractmethod
    def modify_tasks(self, task_uuids: Sequence[Union[UUID, str]], modifications: str) -> None:
        """Apply modifications to tasks."""

    @abc.abstractmethod
    def get_task_details(self, task_uuid: Union[UUID, str]) -> Optional[str]:
        """Exported JSON of one task, or None."""

    @abc.abstractmethod
    def sync(self) -> None:
        """Synchronise with a server."""


def parse_version(text: str) -> Version:
    """Parse a dotted version number into a comparable tuple."""
    match = _VERSION.match(text.strip())
    if match is None:
        raise BackendError(f"Failed to parse version: {text}")
    parts = tuple(int(p) for p in match.group(1).split("."))
    return parts + (0,) * (3 - len(parts))


def parse_taskwarrior_version(output: str) -> Version:
    """Version from ``task --version`` output such as ``task 2.6.2 (2022-10-19)`` or ``3.4.1``."""
    lines = output.splitlines()
    line = lines[0] if lines else ""
    if line.startswith("task "):
        tokens = line.split()
        text = tokens[1] if len(tokens) > 1 else "0.0.0"
    else:
        text = line.strip()
    return parse_version(text)


def _run_command(cmd: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, capture_output=True, check=False)


def _decode(data: Union[bytes, str, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


def _invoke(runner: Runner, cmd: list[str]) -> subprocess.CompletedProcess:
    try:
        return runner(cmd)
    except OSError as exc:
        raise BackendError(f"Unable to run {cmd[0]}: {exc}") from exc


def _query_version(runner: Runner) -> Version:
    result = _invoke(runner, ["task", "--version"])
    if result.returncode != 0:
        raise BackendError("Failed to get taskwarrior version")
    return parse_taskwarrior_version(_decode(result.stdout))


def get_taskwarrior_version() -> Version:
    """Version of the installed ``task`` program."""
    return _query_version(_run_command)


def _split(text: str) -> list[str]:
    try:
        return shlex.split(text)
    except ValueError:
        return []


class CliBackend(TaskBackend):
    """Backend that runs the ``task`` program for every operation."""

    def __init__(self, version: Optional[Version] = None, runner: Optional[Runner] = None) -> None:
        self._runner: Runner = runner if runner is not None else _run_command
        self.task_version: Version = version if version is not None else _query_version(self._runner)
        log.debug("Detected TaskWarrior version: %s", self.task_version)

    @property
    def _modern(self) -> bool:
        return self.task_version >= _SUPPORTED_VERSION

    def _check(self, cmd: list[str], action: str) -> subprocess.CompletedProcess:
        result = _invoke(self._runner, cmd)
        if result.returncode != 0:
            raise BackendError(f"Task {action} failed: {_decode(result.stderr)}")
        return result

    def build_export_command(self, filter: str, report: str, context_filter: str) -> list[str]:
        """The ``task ... export`` command line for a report."""
        cmd = ["task", *_EXPORT_FLAGS]
        if filter.strip():
            cmd.extend(_split(f"rc.report.{report}.filter='{filter.strip()}'".strip()))
        if context_filter.strip():
            if self._modern:
                cmd.extend(_split(context_filter))
            else:
                cmd.append(f"'\\({context_filter}\\)'")
        cmd.append("export")
        if self._modern:
            cmd.append(report)
        return cmd

    def export_tasks(self, filter: str, report: str, context_filter: str) -> list[Task]:
        cmd = self.build_export_command(filter, report, context_filter)
        log.debug("Running command: %s", cmd)
        result = self._check(cmd, "export")
        return import_tasks(_decode(result.stdout))

    def add_task(self, description: str, args: Sequence[str]) -> None:
        self._check(["task", "add", description, *args], "add")

    def _bulk(self, task_uuids: Sequence[Union[UUID, str]]) -> list[str]:
        return ["task", *_BULK_FLAGS, *(str(u) for u in task_uuids)]

    def mark_done(self, task_uuids: Sequence[Union[UUID, str]]) -> None:
        self._check([*self._bulk(task_uuids), "done"], "done")

    def delete_tasks(self, task_uuids: Sequence[Union[UUID, str]]) -> None:
        self._check([*self._bulk(task_uuids), "delete"], "delete")

    def modify_tasks(self, task_uuids: Sequence[Union[UUID, str]], modifications: str) -> None:
        self._check([*self._bulk(task_uuids), *_split(modifications)], "modify")

    def get_task_details(self, task_uuid: Union[UUID, str]) -> Optional[str]:
        result = _invoke(self._runner, ["task", *_EXPORT_FLAGS, str(task_uuid), "export"])
        if result.returncode != 0:
            return None
        return _decode(result.stdout)

    def sync(self) -> None:
        self._check(["task", "sync"], "sync")


def create_backend(config: BackendConfig) -> TaskBackend:
    """Create the backend described by ``config``."""
    if config.kind is BackendKind.CLI:
        return CliBackend()
    raise BackendError(f"The {config.kind.value} backend is not available")