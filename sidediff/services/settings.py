"""
Persistent user preferences.

Comparison options and view preferences are stored together as one JSON
document. A missing, unreadable or partially written file never stops
the application: whatever cannot be read falls back to its default.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from sidediff.core.diff.pairing import DEFAULT_SIMILARITY_THRESHOLD
from sidediff.core.diff.text_diff import TextCompareOptions, WhitespaceMode
from sidediff.core.render import SideBySideFormatter
from sidediff.core.window import WindowIndexMapper
from sidediff.services.file_io import DEFAULT_MAX_TEXT_SIZE, FileIOService, LineExtractor

E = TypeVar('E', bound=Enum)
SettingsObserver = Callable[['ApplicationSettings'], None]


@dataclass
class ComparisonSettings:
    """How two documents are read and compared."""
    ignore_case: bool = False
    whitespace_mode: WhitespaceMode = WhitespaceMode.EXACT
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    intraline_char_threshold: int = 0
    default_encoding: str = 'utf-8'
    max_text_size: int = DEFAULT_MAX_TEXT_SIZE

    def to_compare_options(self) -> TextCompareOptions:
        return TextCompareOptions(
            ignore_case=self.ignore_case,
            whitespace_mode=self.whitespace_mode,
            similarity_threshold=self.similarity_threshold,
            intraline_char_threshold=self.intraline_char_threshold,
        )

    def create_extractor(self) -> LineExtractor:
        return LineExtractor(default_encoding=self.default_encoding)

    def create_file_service(self) -> FileIOService:
        return FileIOService(self.create_extractor(), max_text_size=self.max_text_size)


@dataclass
class ViewSettings:
    """Side-by-side panel preferences."""
    row_height: int = 45
    overscan: int = 10          # Rows rendered beyond each viewport edge
    sync_scroll: bool = True
    tab_size: int = 4
    column_width: int = 80

    def create_formatter(self) -> SideBySideFormatter:
        return SideBySideFormatter(width=self.column_width, tab_size=self.tab_size)

    def visible_rows(
        self,
        mapper: WindowIndexMapper,
        scroll_top: int,
        viewport_height: int
    ) -> range:
        """Rows a panel of ``viewport_height`` pixels renders at ``scroll_top``."""
        return mapper.viewport(scroll_top, viewport_height, self.row_height, self.overscan)


@dataclass
class ApplicationSettings:
    """Everything persisted between runs."""
    comparison: ComparisonSettings = field(default_factory=ComparisonSettings)
    view: ViewSettings = field(default_factory=ViewSettings)
    recent_files: list[str] = field(default_factory=list)
    recent_files_limit: int = 10


def _parse_enum(enum_class: type[E], value: Any, default: E) -> E:
    """Look an enum member up by name, keeping ``default`` on a miss."""
    if not isinstance(value, str):
        return default
    try:
        return enum_class[value]
    except KeyError:
        logging.warning(f"SettingsManager - Unknown {enum_class.__name__} '{value}', using {default.name}")
        return default


def _merge_section(section_class: type, data: Any) -> Any:
    """
    Build a settings section from a JSON object.

    Keys that are missing, unknown, or of the wrong JSON type keep the
    section default; enum fields are read by member name.
    """
    section = section_class()
    if not isinstance(data, dict):
        return section

    for f in fields(section):
        if f.name not in data:
            continue
        default = getattr(section, f.name)
        value = data[f.name]
        if isinstance(default, Enum):
            value = _parse_enum(type(default), value, default)
        elif isinstance(default, bool) != isinstance(value, bool):
            continue
        elif isinstance(default, (int, float)) and not isinstance(value, (int, float)):
            continue
        elif isinstance(default, str) and not isinstance(value, str):
            continue
        setattr(section, f.name, value)

    return section


def _to_json(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, dict):
        return {k: _to_json(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_json(v) for v in value]
    return value


class SettingsManager:
    """
    Loads, saves and publishes ``ApplicationSettings``.

    Settings are read lazily on first access. Observers are called after
    every successful save with the settings that were written.
    """

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = settings_path or self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None
        self._observers: list[SettingsObserver] = []

    @staticmethod
    def _get_default_path() -> Path:
        if os.name == 'nt':
            base = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(base) / 'SideDiff' / 'settings.json'
        base = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(base) / 'sidediff' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Read settings from disk; anything unreadable gives defaults."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            data = json.loads(self.settings_path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logging.warning(f"SettingsManager - Failed to load {self.settings_path}: {e}")
            return ApplicationSettings()

        if not isinstance(data, dict):
            logging.warning(f"SettingsManager - Ignoring malformed settings in {self.settings_path}")
            return ApplicationSettings()

        return self._from_dict(data)

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """
        Write settings to disk and make them current.

        Returns:
            False if there was nothing to save or the write failed
        """
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)
            self.settings_path.write_text(
                json.dumps(self._to_dict(settings), indent=2),
                encoding='utf-8'
            )
        except OSError as e:
            logging.error(f"SettingsManager - Failed to save {self.settings_path}: {e}")
            return False

        self._settings = settings
        logging.debug(f"SettingsManager - Saved {self.settings_path}")
        self._notify_observers()
        return True

    def reset(self) -> ApplicationSettings:
        """Replace the current settings with defaults and save them."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def add_observer(self, callback: SettingsObserver) -> None:
        self._observers.append(callback)

    def remove_observer(self, callback: SettingsObserver) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        for callback in list(self._observers):
            try:
                callback(self._settings)
            except Exception as e:
                logging.warning(f"SettingsManager - Observer {callback!r} failed: {e}")

    def add_recent_file(self, path: str) -> None:
        """Move ``path`` to the front of the recent list and save."""
        settings = self.settings
        recent = [path] + [p for p in settings.recent_files if p != path]
        settings.recent_files = recent[:settings.recent_files_limit]
        self.save()

    def _to_dict(self, settings: ApplicationSettings) -> dict:
        return _to_json(asdict(settings))

    def _from_dict(self, data: dict) -> ApplicationSettings:
        recent = data.get('recent_files', [])
        limit = data.get('recent_files_limit', 10)
        return ApplicationSettings(
            comparison=_merge_section(ComparisonSettings, data.get('comparison')),
            view=_merge_section(ViewSettings, data.get('view')),
            recent_files=[p for p in recent if isinstance(p, str)] if isinstance(recent, list) else [],
            recent_files_limit=limit if isinstance(limit, int) and not isinstance(limit, bool) else 10,
        )
