"""Notifier adapters - terminal output and desktop notifications."""

import logging
import subprocess

import click

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Prints reminders to the terminal."""

    def notify(self, title: str, body: str) -> None:
        click.echo(f"🔔 {title} - {body}")


class DesktopNotifier:
    """
    notify-send subprocess adapter.

    When the binary is missing or refuses to deliver, the reminder is dropped
    with a warning; the caller still treats it as delivered.
    """

    def __init__(self, binary: str = "notify-send", timeout: int = 10):
        self.binary = binary
        self.timeout = timeout

    def notify(self, title: str, body: str) -> None:
        cmd = [self.binary, "--app-name=daybook", title, body]
        try:
            subprocess.run(cmd, capture_output=True, text=True, check=True, timeout=self.timeout)
        except FileNotFoundError:
            logger.warning(f"{self.binary} not found - desktop notifications disabled")
        except subprocess.CalledProcessError as e:
            logger.warning(f"{self.binary} failed: {e}")
        except subprocess.TimeoutExpired:
            logger.warning(f"{self.binary} timed out after {self.timeout}s")
