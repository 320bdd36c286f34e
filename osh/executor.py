"""Process orchestration: fork, pipe, redirect and exec one pipeline."""

from __future__ import annotations

import logging
import os
import sys
from typing import NoReturn

from .command import Command
from .config import FILE_MODE
from .exceptions import ExecutionError

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1


class _StageError(Exception):
    def __init__(self, context: str, exc: OSError) -> None:
        super().__init__(context)
        self.context = context
        self.cause = exc


def _report(context: str, exc: Exception) -> None:
    reason = getattr(exc, "strerror", None) or str(exc)
    os.write(2, f"{context}: {reason}\n".encode(errors="replace"))


def _flush_stdio() -> None:
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()


def _replace_fd(fd: int, target: int) -> None:
    if fd != target:
        os.dup2(fd, target)
        os.close(fd)


def _peel_predecessors(stage: Command) -> Command:
    """Hand every stage left of ``stage`` to a descendant process.

    Runs in the process that will become ``stage``. Each iteration forks one
    child for the predecessor: the child writes into the pipe and carries on
    peeling its own predecessors, the parent reads from it and stops. The
    stage the calling process must run is returned.
    """

    while stage.predecessor is not None:
        try:
            read_fd, write_fd = os.pipe()
        except OSError as exc:
            raise _StageError("pipe()", exc) from exc
        try:
            pid = os.fork()
        except OSError as exc:
            os.close(read_fd)
            os.close(write_fd)
            raise _StageError("fork()", exc) from exc
        if pid == 0:
            os.dup2(write_fd, 1)
            os.close(read_fd)
            os.close(write_fd)
            stage = stage.predecessor
            continue
        os.dup2(read_fd, 0)
        os.close(read_fd)
        os.close(write_fd)
        break
    return stage


def _apply_redirections(stage: Command, file_mode: int) -> None:
    if stage.stdout is not None:
        try:
            fd = os.open(stage.stdout, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, file_mode)
        except OSError as exc:
            raise _StageError(stage.stdout, exc) from exc
        _replace_fd(fd, 1)
    if stage.stdin is not None:
        try:
            fd = os.open(stage.stdin, os.O_RDONLY)
        except OSError as exc:
            raise _StageError(stage.stdin, exc) from exc
        _replace_fd(fd, 0)


def exec_pipeline(head: Command, *, file_mode: int = FILE_MODE) -> NoReturn:
    """Become the pipeline whose right-most stage is ``head``.

    Must be called in a freshly forked process. On success the process image
    is replaced and this never returns; on any failure the error is written to
    stderr and the process exits with status 1.
    """

    stage = head
    try:
        stage = _peel_predecessors(head)
        _apply_redirections(stage, file_mode)
        argv = stage.exec_args()
        try:
            os.execvp(argv[0], argv)
        except OSError as exc:
            raise _StageError(argv[0], exc) from exc
    except _StageError as err:
        _report(err.context, err.cause)
    except ValueError as exc:
        _report(stage.name or "osh", exc)
    finally:
        os._exit(EXIT_FAILURE)


def spawn(head: Command, *, file_mode: int = FILE_MODE) -> int:
    """Fork the process that runs ``head`` and return its pid."""

    _flush_stdio()
    try:
        pid = os.fork()
    except OSError as exc:
        raise ExecutionError(f"fork(): {exc.strerror or exc}") from exc
    if pid == 0:
        exec_pipeline(head, file_mode=file_mode)
    logger.debug("spawned pid %d for %d stage(s)", pid, len(head))
    return pid


def wait_for(pid: int) -> int:
    """Block until ``pid`` terminates and return its exit code.

    Signal deaths are reported as the negated signal number.
    """

    try:
        _, status = os.waitpid(pid, 0)
    except ChildProcessError:
        logger.debug("pid %d was already reclaimed", pid)
        return 0
    code = os.waitstatus_to_exitcode(status)
    logger.debug("pid %d exited with %d", pid, code)
    return code


def reap_children() -> list[tuple[int, int]]:
    """Collect every already-terminated child without blocking."""

    reaped: list[tuple[int, int]] = []
    while True:
        try:
            pid, status = os.waitpid(-1, os.WNOHANG)
        except ChildProcessError:
            break
        if pid == 0:
            break
        code = os.waitstatus_to_exitcode(status)
        reaped.append((pid, code))
        logger.debug("reaped pid %d (exit %d)", pid, code)
    return reaped


__all__ = ["EXIT_FAILURE", "exec_pipeline", "reap_children", "spawn", "wait_for"]
