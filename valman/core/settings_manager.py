"""Settings manager — reads/writes valman.ini via configparser."""
from configparser import ConfigParser
from pathlib import Path

from valman.core.classify import is_numeric, is_operator
from valman.core.constants import DEFAULT_PROMPT, DEFAULT_REGISTRY_FILE, MARKER_LEN
from valman.core.prefix import ASSIGN_MARKER, COMMENT_PREFIX


class SettingsManager:
    def __init__(self, ini_path: Path | None = None) -> None:
        self.ini_path = ini_path
        self.config = ConfigParser(comment_prefixes=(COMMENT_PREFIX, ";"), inline_comment_prefixes=(COMMENT_PREFIX,))
        if ini_path is not None and ini_path.exists():
            self.config.read(ini_path, encoding="utf-8")

    # ------------------------------------------------------------------
    # Generic getters
    # ------------------------------------------------------------------
    def get(self, section: str, key: str, fallback: str = "") -> str:
        return self.config.get(section, key, fallback=fallback)

    def getbool(self, section: str, key: str, fallback: bool = False) -> bool:
        try:
            return self.config.getboolean(section, key, fallback=fallback)
        except ValueError:
            return fallback

    def set(self, section: str, key: str, value: str) -> None:
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, key, value)
        self.save()

    def save(self) -> None:
        if self.ini_path is None:
            return
        with open(self.ini_path, "w", encoding="utf-8") as f:
            self.config.write(f)

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------
    @property
    def registry_file(self) -> Path:
        return Path(self.get("GENERAL", "registry_file", DEFAULT_REGISTRY_FILE))

    @property
    def marker(self) -> str:
        """Assignment marker; falls back to '||' unless it is two plain symbols."""
        value = self.get("EDITOR", "marker", ASSIGN_MARKER)
        if len(value) != MARKER_LEN or any(
            ch.isspace() or ch.isalnum() or is_numeric(ch) or is_operator(ch)
            for ch in value
        ):
            return ASSIGN_MARKER
        return value

    @property
    def prompt(self) -> str:
        # ConfigParser strips values, so the trailing blank is restored here
        raw = self.get("EDITOR", "prompt", DEFAULT_PROMPT.strip())
        return raw + " " if raw else ""

    @property
    def substring_match(self) -> bool:
        return self.getbool("EDITOR", "substring_match", False)
