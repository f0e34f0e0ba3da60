"""Interactive registry editor — the line-oriented command loop.

Each input line is parsed by parser.parse_line(), names are resolved with
completion.auto_complete() (or true_auto_complete() when substring
matching is on), and the result is echoed to the output stream.

State machine
-------------
AWAITING → EXECUTING → AWAITING, until ``quit`` or end-of-input moves it
to TERMINATED.  Every ValmanError raised while executing is reported on
the output stream and the loop carries on.

The cursor is the entry most recently resolved.  The editor listens for
erase/clear on the registry so the cursor never outlives its entry.

Usage
-----
    editor = Editor(Registry("values.txt"))
    editor.run()                      # REPL on stdin/stdout
    text = editor.edit("x || 3")      # one line, output returned as str
"""
from __future__ import annotations

import io
import math
import sys
from enum import Enum
from typing import Any, Callable, Optional, TextIO

from valman.core.commands import (
    Command, AssignCommand, VerbCommand, NavigateCommand, MalformedLine,
)
from valman.core.completion import (
    Ambiguous, Unique, auto_complete, true_auto_complete,
)
from valman.core.constants import EMPTY_LISTING, VERBS
from valman.core.errors import (
    AmbiguousEntry, FileNotFound, MalformedCommand, TransformError,
    UnresolvedEntry, ValmanError,
)
from valman.core.parser import format_value, parse_line
from valman.core.registry import Entry, Registry
from valman.core.settings_manager import SettingsManager
from valman.utils.optional_deps import HAS_READLINE, readline

LogFn = Callable[[str, str], None]   # (level, message)

_HELP = """\
Commands
  name {m} value        assign to an existing entry (name may be a prefix)
  name {m} op value     compound assignment, op is one of + - * / ^
  name                  select an entry and show its value
  list [filter]         show entries, only names containing filter if given
  add name {m} value    create or overwrite an entry
  erase name            remove an entry
  store [file]          write the registry to file
  load [file]           merge entries from file
  sqrt [name]           square root of name, or of the selected entry
  pow exp [name]        raise name, or the selected entry, to exp
  clear                 remove every entry
  help                  show this summary
  quit                  end the session
"""


class EditorState(Enum):
    AWAITING   = "awaiting"
    EXECUTING  = "executing"
    TERMINATED = "terminated"


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

def _checked(result: float, what: str) -> float:
    if not math.isfinite(result):
        raise TransformError(f"{what}: result is not a finite number")
    return result


def apply_operator(op: str, value: float, operand: float) -> float:
    """Return ``value <op> operand``; raises TransformError on domain errors."""
    what = f"{format_value(value)} {op} {format_value(operand)}"
    try:
        if   op == "+": result = value + operand
        elif op == "-": result = value - operand
        elif op == "*": result = value * operand
        elif op == "/": result = value / operand
        elif op == "^": result = math.pow(value, operand)
        else:
            raise TransformError(f"unknown operator {op!r}")
    except (ZeroDivisionError, ValueError, OverflowError) as exc:
        raise TransformError(f"{what}: {exc}") from exc
    return _checked(result, what)


def square_root(value: float) -> float:
    what = f"sqrt {format_value(value)}"
    try:
        return _checked(math.sqrt(value), what)
    except ValueError as exc:
        raise TransformError(f"{what}: {exc}") from exc


# ---------------------------------------------------------------------------
# Editor
# ---------------------------------------------------------------------------

class Editor:
    """Command dispatcher for one editing session on one registry.

    Parameters
    ----------
    registry : Registry
    output : TextIO | None
        Where results are echoed; stdout by default.
    settings : SettingsManager | None
        Supplies the prompt and the name matching mode.
    log_fn : LogFn | None
        Optional callback(level, message).
    """

    def __init__(
        self,
        registry: Registry,
        output:   TextIO | None           = None,
        settings: SettingsManager | None  = None,
        log_fn:   LogFn | None            = None,
    ) -> None:
        self._registry = registry
        self._out      = output if output is not None else sys.stdout
        settings       = settings or SettingsManager()
        self._prompt   = settings.prompt
        self._resolver = true_auto_complete if settings.substring_match else auto_complete
        self._log      = log_fn or (lambda lvl, msg: None)
        self._cursor: Optional[Entry] = None
        self._state    = EditorState.AWAITING
        registry.add_listener(self._on_erase)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def cursor(self) -> Optional[Entry]:
        return self._cursor

    @property
    def marker(self) -> str:
        return self._registry.marker

    def run(self, input_stream: TextIO | None = None) -> None:
        """Read and execute lines until ``quit`` or end-of-input.

        With no stream and a terminal on stdin, lines are read with
        input() so readline editing and tab completion are available.
        """
        interactive = input_stream is None and sys.stdin.isatty()
        stream      = input_stream if input_stream is not None else sys.stdin
        if interactive and HAS_READLINE:
            readline.set_completer(self._complete)
            readline.parse_and_bind("tab: complete")

        self._log("INFO", f"Session started ({len(self._registry)} entries)")
        while self._state is not EditorState.TERMINATED:
            line = self._read_line(stream, interactive)
            if line is None:
                self._state = EditorState.TERMINATED
                break
            self.execute(line)
        self._log("INFO", "Session ended")

    def execute(self, line: str) -> bool:
        """Execute one line. Returns False once the session is terminated."""
        if self._state is EditorState.TERMINATED:
            return False
        command = parse_line(line, self.marker)
        if command is None:
            return True

        self._state = EditorState.EXECUTING
        self._log("DEBUG", f"{type(command).__name__}: {line.strip()}")
        try:
            self._dispatch(command)
        except ValmanError as exc:
            self._log("WARNING", str(exc))
            self._report(exc)
        finally:
            if self._state is EditorState.EXECUTING:
                self._state = EditorState.AWAITING
        return self._state is not EditorState.TERMINATED

    def edit(self, command: str) -> str:
        """Execute one line and return what it printed."""
        buf = io.StringIO()
        saved, self._out = self._out, buf
        try:
            self.execute(command)
        finally:
            self._out = saved
        return buf.getvalue()

    def close(self) -> None:
        """Detach from the registry."""
        self._registry.remove_listener(self._on_erase)
        self._cursor = None

    # ------------------------------------------------------------------
    # Input / output helpers
    # ------------------------------------------------------------------

    def _read_line(self, stream: TextIO, interactive: bool) -> Optional[str]:
        if interactive:
            try:
                return input(self._prompt)
            except (EOFError, KeyboardInterrupt):
                self._write("")
                return None
        line = stream.readline()
        return line if line else None

    def _write(self, text: str) -> None:
        self._out.write(text + "\n")
        self._out.flush()

    def _echo(self, entry: Entry) -> None:
        self._write(f"{entry.name} {self.marker} {format_value(entry.value)}")

    def _report(self, exc: ValmanError) -> None:
        if isinstance(exc, AmbiguousEntry):
            self._write(f"{exc.name!r} is ambiguous:")
            for name in exc.candidates:
                self._write(f"  {name}")
            return
        self._write(str(exc))

    def _complete(self, text: str, state: int) -> Optional[str]:
        """readline completer over verbs and entry names."""
        options = sorted(
            word for word in VERBS | set(self._registry.names())
            if word.startswith(text)
        )
        return options[state] if state < len(options) else None

    # ------------------------------------------------------------------
    # Cursor and resolution
    # ------------------------------------------------------------------

    def _on_erase(self, name: Optional[str]) -> None:
        if self._cursor is not None and (name is None or name == self._cursor.name):
            self._cursor = None

    def _resolve(self, candidate: str) -> Entry:
        """Entry for ``candidate``; raises UnresolvedEntry / AmbiguousEntry."""
        result = self._resolver(candidate, self._registry.names())
        if isinstance(result, Unique):
            entry = self._registry.get(result.name)
            if entry is not None:
                return entry
        elif isinstance(result, Ambiguous):
            raise AmbiguousEntry(candidate, result.candidates)
        raise UnresolvedEntry(candidate)

    def _target(self, name: str) -> Entry:
        """Entry named ``name`` if given, else the cursor."""
        if name:
            return self._resolve(name)
        if self._cursor is None:
            raise MalformedCommand("no target: name an entry or select one first")
        return self._cursor

    def _select(self, entry: Entry) -> None:
        self._cursor = entry
        self._echo(entry)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, command: Command) -> None:
        if   isinstance(command, MalformedLine):   self._run_malformed(command)
        elif isinstance(command, NavigateCommand): self._run_navigate(command)
        elif isinstance(command, AssignCommand):   self._run_assign(command)
        elif isinstance(command, VerbCommand):     _DISPATCH[command.verb](self, command)

    def _run_malformed(self, command: MalformedLine) -> None:
        raise MalformedCommand(f"parse error: {command.reason}")

    def _run_navigate(self, command: NavigateCommand) -> None:
        self._select(self._resolve(command.name))

    def _run_assign(self, command: AssignCommand) -> None:
        entry = self._resolve(command.name)
        if command.op is None:
            entry.value = command.value
        else:
            entry.value = apply_operator(command.op, entry.value, command.value)
        self._select(entry)

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def _verb_list(self, command: VerbCommand) -> None:
        pattern = command.argument
        names = [n for n in self._registry.names() if pattern in n]
        if not names:
            self._write(EMPTY_LISTING)
            return
        for name in names:
            self._echo(self._registry.get(name))

    def _verb_help(self, command: VerbCommand) -> None:
        self._out.write(_HELP.format(m=self.marker))
        self._out.flush()

    def _verb_add(self, command: VerbCommand) -> None:
        spec = command.assignment
        self._select(self._registry.add(spec.name, spec.value))

    def _verb_erase(self, command: VerbCommand) -> None:
        entry = self._resolve(command.target)
        self._registry.erase(entry.name)
        self._write(f"erased {entry.name}")

    def _verb_store(self, command: VerbCommand) -> None:
        path  = command.argument or None
        count = self._registry.store(path)
        self._write(f"stored {count} entries to {path or self._registry.path}")

    def _verb_load(self, command: VerbCommand) -> None:
        path = command.argument or None
        if not self._registry.load(path):
            raise FileNotFound(path or self._registry.path)
        self._write(f"loaded {path or self._registry.path} ({len(self._registry)} entries)")

    def _verb_sqrt(self, command: VerbCommand) -> None:
        entry = self._target(command.target)
        entry.value = square_root(entry.value)
        self._select(entry)

    def _verb_pow(self, command: VerbCommand) -> None:
        entry = self._target(command.target)
        entry.value = apply_operator("^", entry.value, command.exponent)
        self._select(entry)

    def _verb_clear(self, command: VerbCommand) -> None:
        self._registry.clear()
        self._write("registry cleared")

    def _verb_quit(self, command: VerbCommand) -> None:
        self._state = EditorState.TERMINATED
        self._log("INFO", "quit requested")


# ---------------------------------------------------------------------------
# Verb → handler
# ---------------------------------------------------------------------------

_DISPATCH: dict[str, Any] = {
    "list":  Editor._verb_list,
    "help":  Editor._verb_help,
    "add":   Editor._verb_add,
    "erase": Editor._verb_erase,
    "store": Editor._verb_store,
    "load":  Editor._verb_load,
    "sqrt":  Editor._verb_sqrt,
    "pow":   Editor._verb_pow,
    "clear": Editor._verb_clear,
    "quit":  Editor._verb_quit,
}
