"""Recursive content scanners used by the include search.

Each scanner is an async generator of ``LineMatch`` events for every line under
``root`` that matches ``pattern``. Closing the generator stops the scan: the
ripgrep process is killed and reaped, the walk worker sees its cancel event.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
import shutil
import threading
from collections.abc import AsyncGenerator, Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from ..errors import IncludeSearchError

logger = logging.getLogger(__name__)

SEARCH_TOOLS = ("auto", "rg", "walk")
RG_EVENT_LINE_LIMIT = 1 << 20
BINARY_PROBE_BYTES = 4_096
CANCEL_CHECK_LINES = 256
WALK_THREAD_NAME = "companionfile-include-walk"


@dataclass(frozen=True)
class LineMatch:
    path: Path
    text: str


Scanner = Callable[[Path, str], AsyncGenerator[LineMatch, None]]


def _parse_rg_event(raw: bytes, root: Path) -> LineMatch | None:
    """Extract a ``LineMatch`` from one ``rg --json`` event line."""
    try:
        payload = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(payload, dict) or payload.get("type") != "match":
        return None
    data = payload.get("data", {})
    if not isinstance(data, dict):
        return None
    path_data = data.get("path", {})
    path_text = path_data.get("text") if isinstance(path_data, dict) else None
    if not path_text:
        return None
    lines_data = data.get("lines", {})
    # Non UTF-8 lines arrive base64-encoded under "bytes"; those never match a path we can compare.
    line_text = lines_data.get("text") if isinstance(lines_data, dict) else None
    if not isinstance(line_text, str):
        return None
    path = Path(path_text)
    if not path.is_absolute():
        path = root / path
    return LineMatch(path=path, text=line_text)


async def scan_with_ripgrep(root: Path, pattern: str) -> AsyncGenerator[LineMatch, None]:
    """Stream ``rg --json`` matches for ``pattern`` under ``root``.

    Exit status 1 (no matches) is a normal completion. Failure to start ``rg``
    raises ``IncludeSearchError``, as does any other status when no match was
    streamed. After partial output (say, one unreadable subdirectory) the
    failure is only logged.
    """
    cmd = [
        "rg",
        "--json",
        "--no-config",
        "--no-ignore",
        "--hidden",
        "-e",
        pattern,
        "--",
        str(root),
    ]
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            limit=RG_EVENT_LINE_LIMIT,
        )
    except OSError as exc:
        raise IncludeSearchError(f"failed to run rg: {exc}") from exc

    assert proc.stdout is not None
    assert proc.stderr is not None
    stderr_task = asyncio.ensure_future(proc.stderr.read())
    streamed = False
    try:
        while True:
            try:
                raw = await proc.stdout.readline()
            except ValueError:
                logger.debug("skipping oversized rg event under %s", root)
                continue
            if not raw:
                break
            match = _parse_rg_event(raw, root)
            if match is not None:
                streamed = True
                yield match

        returncode = await proc.wait()
        stderr_text = (await stderr_task).decode("utf-8", errors="replace").strip()
        if returncode not in (0, 1):
            message = stderr_text or f"rg failed with exit code {returncode}"
            if not streamed:
                raise IncludeSearchError(message)
            logger.warning("rg under %s exited with status %s after partial output: %s", root, returncode, message)
    finally:
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
        if not stderr_task.done():
            stderr_task.cancel()


def _matching_lines(
    path: Path,
    regex: re.Pattern[str],
    should_cancel: Callable[[], bool],
) -> Iterator[str]:
    """Yield lines of ``path`` matching ``regex``; binary or unreadable files yield nothing.

    ``should_cancel`` is polled every ``CANCEL_CHECK_LINES`` lines so a large
    file does not outlive a cancelled scan.
    """
    try:
        with path.open("rb") as handle:
            if b"\x00" in handle.read(BINARY_PROBE_BYTES):
                return
            handle.seek(0)
            for line_number, raw in enumerate(handle):
                if line_number % CANCEL_CHECK_LINES == 0 and should_cancel():
                    return
                line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                if regex.search(line):
                    yield line
    except OSError as exc:
        logger.debug("cannot read %s: %s", path, exc)


def walk_matching_lines(
    root: Path,
    regex: re.Pattern[str],
    should_cancel: Callable[[], bool],
) -> Iterator[LineMatch]:
    """Synchronously walk ``root`` and yield matching lines until cancelled."""
    for dirpath, _dirnames, filenames in os.walk(root):
        if should_cancel():
            return
        base = Path(dirpath)
        for filename in filenames:
            if should_cancel():
                return
            path = base / filename
            if not path.is_file():
                continue
            for line in _matching_lines(path, regex, should_cancel):
                yield LineMatch(path=path, text=line)


async def scan_with_walk(root: Path, pattern: str) -> AsyncGenerator[LineMatch, None]:
    """Scan ``root`` in-process on a daemon worker thread.

    Matches cross into the event loop through an ``asyncio.Queue``. Closing
    the generator sets the worker's cancel event.
    """
    regex = re.compile(pattern)
    loop = asyncio.get_running_loop()
    events: asyncio.Queue[tuple[object, ...]] = asyncio.Queue()
    cancel_event = threading.Event()

    def post(event: tuple[object, ...]) -> None:
        try:
            loop.call_soon_threadsafe(events.put_nowait, event)
        except RuntimeError:
            # Loop already closed; nobody is listening anymore.
            cancel_event.set()

    def run_worker() -> None:
        try:
            for match in walk_matching_lines(root, regex, cancel_event.is_set):
                if cancel_event.is_set():
                    return
                post(("match", match))
        except Exception as exc:
            post(("error", exc))
        finally:
            post(("done",))

    worker = threading.Thread(target=run_worker, name=WALK_THREAD_NAME, daemon=True)
    worker.start()
    try:
        while True:
            event = await events.get()
            kind = event[0]
            if kind == "match":
                yield event[1]
            elif kind == "error":
                raise IncludeSearchError(f"walk of {root} failed: {event[1]}")
            else:
                return
    finally:
        cancel_event.set()


def default_scanner(tool: str = "auto") -> Scanner:
    """Return the scanner for ``tool``; ``auto`` prefers ripgrep when installed."""
    if tool == "rg":
        return scan_with_ripgrep
    if tool == "walk":
        return scan_with_walk
    if tool != "auto":
        raise ValueError(f"unknown search tool: {tool!r}")
    if shutil.which("rg") is None:
        logger.debug("rg not found on PATH; using in-process walk")
        return scan_with_walk
    return scan_with_ripgrep


__all__ = [
    "LineMatch",
    "SEARCH_TOOLS",
    "Scanner",
    "default_scanner",
    "scan_with_ripgrep",
    "scan_with_walk",
    "walk_matching_lines",
]
