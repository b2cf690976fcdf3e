"""Prettier adapter, the default formatting oracle.

Runs the ``prettier`` CLI in a subprocess, text on stdin, formatted text
on stdout.  Any failure (missing executable, non-zero exit, timeout) is
raised as FormatterError; callers decide how to fall back.
"""

from __future__ import annotations
import shutil
import subprocess
from dataclasses import dataclass


class FormatterError(RuntimeError):
    """The external formatter could not format the text."""


# Resolved on the first format call, then cached
_command: list[str] | None = None
_command_name: str = ""


def _get_command(executable: str = "prettier") -> list[str]:
    """Resolve the prettier command, falling back to ``npx --no-install``."""
    global _command, _command_name
    if _command is None or _command_name != executable:
        path = shutil.which(executable)
        if path is not None:
            command = [path]
        else:
            npx = shutil.which("npx")
            if npx is None:
                raise FormatterError(f"{executable!r} not found on PATH (and no npx)")
            command = [npx, "--no-install", executable]
        _command = command
        _command_name = executable
    return _command


def prettier_format(
    text: str,
    parser: str,
    *,
    executable: str = "prettier",
    xml_plugin: str | None = None,
    timeout: float = 30.0,
) -> str:
    """Format text with prettier using the given parser.

    Args:
        text: Source to format.
        parser: Prettier parser identifier ("html", "babel", "typescript", "xml").
        executable: Name or path of the prettier binary.
        xml_plugin: Plugin to load for the xml parser (e.g. "@prettier/plugin-xml").
        timeout: Seconds before the subprocess is killed.
    """
    args = [*_get_command(executable), "--parser", parser]
    if parser == "html":
        args += ["--html-whitespace-sensitivity", "ignore"]
    if parser == "xml" and xml_plugin:
        args += ["--plugin", xml_plugin]

    try:
        proc = subprocess.run(
            args,
            input=text,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise FormatterError(f"prettier timed out after {timeout}s") from e
    except OSError as e:
        raise FormatterError(f"could not run prettier: {e}") from e

    if proc.returncode != 0:
        raise FormatterError(proc.stderr.strip() or f"prettier exited with {proc.returncode}")
    return proc.stdout


@dataclass
class PrettierFormatter:
    """Callable ``(text, parser) -> text`` oracle backed by prettier."""

    executable: str = "prettier"
    xml_plugin: str | None = None
    timeout: float = 30.0

    def __call__(self, text: str, parser: str) -> str:
        return prettier_format(
            text,
            parser,
            executable=self.executable,
            xml_plugin=self.xml_plugin,
            timeout=self.timeout,
        )
