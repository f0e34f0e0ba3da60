"""Tests for valman.core.editor — command dispatch, cursor, REPL loop."""
import io

import pytest

from valman.core.editor import Editor, EditorState, apply_operator, square_root
from valman.core.errors import TransformError
from valman.core.registry import Registry
from valman.core.settings_manager import SettingsManager


def _lines(text: str) -> list[str]:
    return text.splitlines()


# ---------------------------------------------------------------------------
# Arithmetic helpers
# ---------------------------------------------------------------------------

class TestArithmetic:
    def test_operators(self):
        assert apply_operator("+", 2, 3) == 5
        assert apply_operator("-", 2, 3) == -1
        assert apply_operator("*", 2, 3) == 6
        assert apply_operator("/", 3, 2) == 1.5
        assert apply_operator("^", 2, 10) == 1024

    def test_division_by_zero(self):
        with pytest.raises(TransformError):
            apply_operator("/", 1, 0)

    def test_fractional_power_of_negative(self):
        with pytest.raises(TransformError):
            apply_operator("^", -8, 0.5)

    def test_overflow(self):
        with pytest.raises(TransformError):
            apply_operator("^", 10, 400)
        with pytest.raises(TransformError):
            apply_operator("*", 1e308, 10)

    def test_sqrt(self):
        assert square_root(16) == 4
        with pytest.raises(TransformError):
            square_root(-4)


# ---------------------------------------------------------------------------
# Assignment
# ---------------------------------------------------------------------------

class TestAssignment:
    def test_exact_name(self, editor, registry):
        assert editor.edit("beta || 7") == "beta || 7.0\n"
        assert registry["beta"] == 7.0
        assert editor.cursor is registry.get("beta")

    def test_prefix_name(self, editor, registry):
        editor.edit("b || 4")
        assert registry["beta"] == 4.0

    def test_repeated_markers(self, editor, registry):
        editor.edit("beta || || 3.5")
        assert registry["beta"] == 3.5

    def test_ambiguous_changes_nothing(self, editor, registry):
        out = editor.edit("al || 5")
        assert _lines(out) == ["'al' is ambiguous:", "  alice", "  alpha"]
        assert registry["alpha"] == 1.0
        assert registry["alice"] == 2.0
        assert editor.cursor is None

    def test_unknown_name_not_created(self, editor, registry):
        out = editor.edit("gamma || 1")
        assert "no entry matches 'gamma'" in out
        assert registry.get("gamma") is None

    def test_compound(self, editor, registry):
        editor.edit("beta || * 2")
        assert registry["beta"] == 6.0
        editor.edit("beta || - 1")
        assert registry["beta"] == 5.0
        editor.edit("beta || ^ 2")
        assert registry["beta"] == 25.0

    def test_compound_error_keeps_value(self, editor, registry):
        out = editor.edit("beta || / 0")
        assert "float division by zero" in out or "division" in out
        assert registry["beta"] == 3.0

    def test_oversized_literal_rejected(self, editor, registry):
        out = editor.edit("beta || " + "9" * 400)
        assert out.startswith("parse error: bad number")
        assert registry["beta"] == 3.0

    def test_malformed(self, editor, registry):
        before = registry.as_dict()
        out = editor.edit("beta || abc")
        assert out.startswith("parse error:")
        assert registry.as_dict() == before


# ---------------------------------------------------------------------------
# Navigation and cursor
# ---------------------------------------------------------------------------

class TestNavigation:
    def test_unique(self, editor, registry):
        assert editor.edit("be") == "beta || 3.0\n"
        assert editor.cursor is registry.get("beta")

    def test_not_found_does_not_create(self, editor, registry):
        assert editor.edit("zeta") == "no entry matches 'zeta'\n"
        assert registry.get("zeta") is None

    def test_ambiguous_keeps_cursor(self, editor, registry):
        editor.edit("beta")
        editor.edit("al")
        assert editor.cursor is registry.get("beta")

    def test_erase_clears_cursor(self, editor, registry):
        editor.edit("alpha")
        assert editor.cursor.name == "alpha"
        assert editor.edit("erase alpha") == "erased alpha\n"
        assert editor.cursor is None
        assert editor.edit("alpha") == "no entry matches 'alpha'\n"

    def test_erase_other_entry_keeps_cursor(self, editor, registry):
        editor.edit("alpha")
        editor.edit("erase beta")
        assert editor.cursor.name == "alpha"

    def test_direct_registry_erase_clears_cursor(self, editor, registry):
        editor.edit("beta")
        registry.erase("beta")
        assert editor.cursor is None

    def test_clear_clears_cursor(self, editor):
        editor.edit("beta")
        assert editor.edit("clear") == "registry cleared\n"
        assert editor.cursor is None

    def test_substring_mode(self, registry, tmp_path):
        ini = tmp_path / "valman.ini"
        ini.write_text("[EDITOR]\nsubstring_match = true\n", encoding="utf-8")
        editor = Editor(registry, output=io.StringIO(), settings=SettingsManager(ini))
        assert editor.edit("eta") == "beta || 3.0\n"


# ---------------------------------------------------------------------------
# Verbs
# ---------------------------------------------------------------------------

class TestVerbs:
    def test_list(self, editor):
        assert _lines(editor.edit("list")) == [
            "alice || 2.0", "alpha || 1.0", "beta || 3.0",
        ]

    def test_list_filter(self, editor):
        assert _lines(editor.edit("list ph")) == ["alpha || 1.0"]

    def test_list_empty(self):
        editor = Editor(Registry(), output=io.StringIO())
        assert editor.edit("list") == "(empty)\n"

    def test_help(self, editor):
        out = editor.edit("help")
        for verb in ("list", "add", "erase", "store", "load", "sqrt", "pow", "clear", "quit"):
            assert verb in out

    def test_add_creates(self, editor, registry):
        assert editor.edit("add gamma || 1.5") == "gamma || 1.5\n"
        assert registry["gamma"] == 1.5
        assert editor.cursor.name == "gamma"

    def test_add_overwrites_exact_name_only(self, editor, registry):
        editor.edit("add al || 9")
        assert registry["al"] == 9.0
        assert registry["alpha"] == 1.0

    def test_erase_by_prefix(self, editor, registry):
        editor.edit("erase b")
        assert registry.get("beta") is None

    def test_erase_ambiguous(self, editor, registry):
        out = editor.edit("erase al")
        assert "ambiguous" in out
        assert len(registry) == 3

    def test_sqrt_named(self, editor, registry):
        registry.add("nine", 9)
        assert editor.edit("sqrt ni") == "nine || 3.0\n"
        assert editor.cursor.name == "nine"

    def test_sqrt_cursor(self, editor, registry):
        registry.add("nine", 9)
        editor.edit("nine")
        editor.edit("sqrt")
        assert registry["nine"] == 3.0

    def test_sqrt_no_target(self, editor):
        assert editor.edit("sqrt").startswith("no target")

    def test_sqrt_negative(self, editor, registry):
        registry.add("neg", -4)
        out = editor.edit("sqrt neg")
        assert out.startswith("sqrt -4.0:")
        assert registry["neg"] == -4.0

    def test_pow_named(self, editor, registry):
        assert editor.edit("pow 3 beta") == "beta || 27.0\n"

    def test_pow_cursor(self, editor, registry):
        editor.edit("alice")
        editor.edit("pow 0.5")
        assert registry["alice"] == pytest.approx(2 ** 0.5)

    def test_pow_no_target(self, editor):
        assert editor.edit("pow 2").startswith("no target")

    def test_store_and_load(self, editor, registry, tmp_path):
        f = tmp_path / "values.txt"
        assert editor.edit(f"store {f}") == f"stored 3 entries to {f}\n"
        editor.edit("clear")
        out = editor.edit(f"load {f}")
        assert out == f"loaded {f} (3 entries)\n"
        assert registry.as_dict() == {"alpha": 1.0, "alice": 2.0, "beta": 3.0}

    def test_add_oversized_literal_then_store(self, editor, registry, tmp_path):
        out = editor.edit("add x || " + "9" * 400)
        assert out.startswith("parse error: add: bad number")
        assert registry.get("x") is None

        f = tmp_path / "values.txt"
        editor.edit(f"store {f}")
        assert Registry(f).as_dict() == registry.as_dict()

    def test_store_uses_backing_file(self, tmp_path):
        f = tmp_path / "values.txt"
        reg = Registry(f)
        editor = Editor(reg, output=io.StringIO())
        editor.edit("add x || 1")
        editor.edit("store")
        assert f.read_text(encoding="utf-8") == "x||1.0\n"

    def test_store_without_file(self, editor):
        assert editor.edit("store") == "file name required\n"

    def test_store_failure(self, editor, registry, tmp_path):
        out = editor.edit(f"store {tmp_path / 'no' / 'values.txt'}")
        assert out.startswith("cannot write file")
        assert len(registry) == 3

    def test_load_missing(self, editor, registry, tmp_path):
        out = editor.edit(f"load {tmp_path / 'none.txt'}")
        assert out.startswith("cannot read file")
        assert len(registry) == 3

    def test_quit(self, editor):
        assert editor.execute("quit") is False
        assert editor.state is EditorState.TERMINATED
        assert editor.execute("beta || 1") is False


# ---------------------------------------------------------------------------
# REPL loop
# ---------------------------------------------------------------------------

class TestRun:
    def test_runs_until_end_of_input(self, registry):
        out = io.StringIO()
        editor = Editor(registry, output=out)
        editor.run(io.StringIO("beta || 5\n\nlist\n"))
        assert editor.state is EditorState.TERMINATED
        assert registry["beta"] == 5.0
        assert "alice || 2.0" in out.getvalue()

    def test_stream_session_writes_no_prompt(self, registry):
        out = io.StringIO()
        Editor(registry, output=out).run(io.StringIO("beta\n"))
        assert out.getvalue() == "beta || 3.0\n"

    def test_quit_stops_reading(self, registry):
        editor = Editor(registry, output=io.StringIO())
        editor.run(io.StringIO("quit\nbeta || 5\n"))
        assert registry["beta"] == 3.0

    def test_errors_do_not_stop_the_loop(self, registry):
        out = io.StringIO()
        editor = Editor(registry, output=out)
        editor.run(io.StringIO("nonsense 3\nal || 1\nbeta || 8\n"))
        assert registry["beta"] == 8.0
        text = out.getvalue()
        assert "parse error" in text
        assert "ambiguous" in text

    def test_no_implicit_save(self, tmp_path):
        f = tmp_path / "values.txt"
        f.write_text("x||1\n", encoding="utf-8")
        editor = Editor(Registry(f), output=io.StringIO())
        editor.run(io.StringIO("x || 2\nquit\n"))
        assert f.read_text(encoding="utf-8") == "x||1\n"

    def test_ctrl_c_at_prompt_ends_session(self, registry, monkeypatch):
        class _Terminal(io.StringIO):
            def isatty(self):
                return True

        def _interrupt(prompt=""):
            raise KeyboardInterrupt

        monkeypatch.setattr("sys.stdin", _Terminal())
        monkeypatch.setattr("builtins.input", _interrupt)
        monkeypatch.setattr("valman.core.editor.HAS_READLINE", False)
        out = io.StringIO()
        editor = Editor(registry, output=out)
        editor.run()
        assert editor.state is EditorState.TERMINATED
        assert out.getvalue() == "\n"
        assert registry["beta"] == 3.0

    def test_log_callback(self, registry):
        logs = []
        editor = Editor(registry, output=io.StringIO(), log_fn=lambda l, m: logs.append((l, m)))
        editor.run(io.StringIO("zeta\n"))
        levels = [l for l, _ in logs]
        assert "DEBUG" in levels
        assert "WARNING" in levels
        assert levels[0] == "INFO" and levels[-1] == "INFO"

    def test_close_detaches(self, registry):
        editor = Editor(registry, output=io.StringIO())
        editor.edit("beta")
        editor.close()
        assert editor.cursor is None
