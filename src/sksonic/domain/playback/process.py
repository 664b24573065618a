"""
External player process control.

The player has no IPC channel: it is started with the stream URL as its last
argument and afterwards controlled only through POSIX signals (SIGSTOP to
pause, SIGCONT to resume, SIGTERM to stop). Each spawn runs in its own daemon
thread that starts the process, waits for it and reports back over a queue.
"""

import os
import queue
import shlex
import signal
import subprocess
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import psutil
from loguru import logger

from .state import PlayerEvent, PlayerEventKind


class PlayerBackend(ABC):
    """Start and signal an external audio player."""

    @abstractmethod
    def spawn(self, url: str, generation: int, events: "queue.Queue[PlayerEvent]") -> None:
        """Start a player for url without blocking.

        Implementations report STARTED or FAILED, then EXITED, on events.
        """

    @abstractmethod
    def pause(self, pid: int) -> None: ...

    @abstractmethod
    def resume(self, pid: int) -> None: ...

    @abstractmethod
    def terminate(self, pid: int) -> None: ...

    def find_pid(self) -> Optional[int]:
        """Look the running player up when no STARTED event arrived in time."""
        return None


class SignalPlayerBackend(PlayerBackend):
    """Runs the configured player executable and controls it with signals."""

    def __init__(self, executable: str, flags: str = ""):
        self.executable = executable
        self.flags = flags
        # Players we sent SIGTERM; they may linger until reaped
        self._terminated: set[int] = set()

    def build_command(self, url: str) -> list[str]:
        """Argument vector for one play; no shell is involved."""
        return [self.executable, *shlex.split(self.flags), url]

    def spawn(self, url: str, generation: int, events: "queue.Queue[PlayerEvent]") -> None:
        command = self.build_command(url)
        thread = threading.Thread(
            target=self._run,
            args=(command, generation, events),
            name=f"player-{generation}",
            daemon=True,
        )
        thread.start()

    def _run(
        self, command: list[str], generation: int, events: "queue.Queue[PlayerEvent]"
    ) -> None:
        """Spawn, wait, release. Touches nothing but its arguments and the queue."""
        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, ValueError) as e:
            logger.error(f"Failed to start player '{command[0]}': {e}")
            events.put(PlayerEvent(PlayerEventKind.FAILED, generation, error=str(e)))
            return

        logger.debug(f"Player started (pid={process.pid}, generation={generation})")
        events.put(PlayerEvent(PlayerEventKind.STARTED, generation, pid=process.pid))

        returncode = process.wait()
        self._terminated.discard(process.pid)
        logger.debug(f"Player {process.pid} exited with {returncode}")
        events.put(
            PlayerEvent(
                PlayerEventKind.EXITED,
                generation,
                pid=process.pid,
                returncode=returncode,
            )
        )

    def _signal(self, pid: int, sig: signal.Signals) -> None:
        try:
            os.kill(pid, sig)
        except ProcessLookupError:
            logger.warning(f"{sig.name} to player {pid}: no such process")
        except OSError as e:
            logger.error(f"{sig.name} to player {pid} failed: {e}")

    def pause(self, pid: int) -> None:
        self._signal(pid, signal.SIGSTOP)

    def resume(self, pid: int) -> None:
        self._signal(pid, signal.SIGCONT)

    def terminate(self, pid: int) -> None:
        self._terminated.add(pid)
        self._signal(pid, signal.SIGTERM)

    def find_pid(self) -> Optional[int]:
        """Find our newest child process running the player executable.

        Players already sent SIGTERM are skipped.
        """
        name = Path(self.executable).name
        try:
            children = psutil.Process().children(recursive=True)
        except psutil.Error as e:
            logger.warning(f"Process table lookup failed: {e}")
            return None

        candidates = []
        for child in children:
            if child.pid in self._terminated:
                continue
            try:
                if child.name() == name and child.status() != psutil.STATUS_ZOMBIE:
                    candidates.append((child.create_time(), child.pid))
            except psutil.Error:
                continue

        if candidates:
            return max(candidates)[1]

        logger.warning(f"No running '{name}' process found")
        return None
