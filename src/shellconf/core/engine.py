#!/usr/bin/env python3
"""
SHELLCONF ENGINE - The Store
----------------------------
ShellConf keeps an insertion-ordered set of variables parsed from shell
dotfiles or set directly, and writes them back as text a shell can source.
File writes are atomic and can leave a backup of the file they replace.

Author: ShellConf Team
Date: 2026-10-18
"""

import os
import shutil
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

from shellconf.core.errors import IllegalNameError, IllegalValueError, UndecodableTextError
from shellconf.core.models import LineResult
from shellconf.parsing.exporter import ConfExporter
from shellconf.parsing.pipeline import Source, iter_parse, parse_lines
from shellconf.parsing.serializer import serialize
from shellconf.validator.validator import is_legal_name, is_legal_value

logger = logging.getLogger("shellconf.engine")

BACKUP_SUFFIX = ".shellconf.backup"
TEMP_SUFFIX = ".shellconf.tmp"


def read_config_text(path: Union[str, Path], normalize_newlines: bool = True) -> str:
    """
    Reads a config file, dropping any UTF-8 BOM. CRLF becomes LF unless
    `normalize_newlines` is False. Bytes that are not UTF-8 raise
    UndecodableTextError naming the file.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Missing or invalid file path: {path}")
    try:
        text = path.read_text(encoding='utf-8-sig')
    except UnicodeDecodeError as e:
        raise UndecodableTextError(e, source=str(path)) from e
    if normalize_newlines:
        text = text.replace('\r\n', '\n')
    return text


class ShellConf:
    """
    Ordered variable store backed by the line parser.

    Every mutator returns the store itself so calls can be chained:
    ShellConf().load("app.conf").sort_by_name().to_string("export")
    """

    def __init__(self, data: Optional[Dict[str, str]] = None, prefix: str = ""):
        self.prefix = prefix
        self.errors: List[LineResult] = []
        self._data: Dict[str, str] = {}
        self.exporter = ConfExporter()
        for name, value in (data or {}).items():
            self.set(name, value)

    # --- Loading & parsing ---

    def load(self, path: Union[str, Path], skip_errors: bool = False) -> "ShellConf":
        """Loads and parses a config file (BOM-aware, CRLF tolerant)."""
        text = read_config_text(path)
        logger.info(f"Loading {path}")
        return self.parse(text, skip_errors=skip_errors, source_name=str(path))

    def parse(self, env: Source, skip_errors: bool = False,
              source_name: str = "<string>") -> "ShellConf":
        """
        Parses newline-separated assignments and merges them into the store.

        In strict mode (the default) the first bad line raises and nothing
        from this call is merged. With `skip_errors`, bad lines are logged,
        kept in `self.errors` and the rest is merged.
        """
        self.errors = []
        if not skip_errors:
            self._data.update(parse_lines(env))
            return self

        data: Dict[str, str] = {}
        for result in iter_parse(env):
            if not result.ok:
                logger.warning(f"{source_name}:{result.line_no}: {result.error}")
                self.errors.append(result)
                continue
            if not result.is_blank:
                data[result.assignment.name] = result.assignment.value

        self._data.update(data)
        return self

    def reset(self) -> "ShellConf":
        self._data = {}
        self.errors = []
        return self

    # --- Variable access ---

    def set(self, name: str, value: str) -> "ShellConf":
        """Adds or overwrites a variable after validating both parts."""
        if not is_legal_name(name):
            raise IllegalNameError(name)
        value = str(value)
        if not is_legal_value(value):
            raise IllegalValueError(value)
        self._data[name] = value
        return self

    def unset(self, name: str) -> "ShellConf":
        self._data.pop(name, None)
        return self

    def get(self, name: str, default: Any = None) -> Any:
        return self._data.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    # --- Ordering ---

    def sort_by_name(self, key: Optional[Callable[[str], Any]] = None,
                     reverse: bool = False) -> "ShellConf":
        """Reorders variables by name; `key` works as it does for sorted()."""
        names = sorted(self._data, key=key, reverse=reverse)
        self._data = {n: self._data[n] for n in names}
        return self

    def sort_by_value(self, key: Optional[Callable[[str], Any]] = None,
                      reverse: bool = False) -> "ShellConf":
        """Reorders variables by value. Ties keep their current order."""
        value_key = key or (lambda v: v)
        items = sorted(self._data.items(), key=lambda item: value_key(item[1]), reverse=reverse)
        self._data = dict(items)
        return self

    # --- Output ---

    @staticmethod
    def get_line(name: str, value: str = "", prefix: str = "") -> str:
        """A single sourceable assignment. Inputs are not validated."""
        return serialize(name, value, prefix)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._data)

    def to_string(self, prefix: Optional[str] = None) -> str:
        return self.exporter.to_shell(self._data, self.prefix if prefix is None else prefix)

    def to_json(self) -> str:
        return self.exporter.to_json(self._data)

    def to_yaml(self) -> str:
        return self.exporter.to_yaml(self._data)

    def __str__(self) -> str:
        return self.to_string()

    # --- Persistence ---

    def save(self, path: Union[str, Path], prefix: Optional[str] = None,
             backup: bool = True) -> Optional[Path]:
        """
        Writes the store to `path` atomically.
        Returns the backup path when an existing file was backed up.
        """
        target = Path(path)
        content = self.to_string(prefix)
        if content:
            content += "\n"

        backup_path = None
        if backup and target.exists():
            backup_path = self._create_unique_backup(target)
            shutil.copy2(target, backup_path)
            logger.info(f"Backed up {target} to {backup_path}")

        self._atomic_write(target, content)
        logger.info(f"Wrote {len(self._data)} variables to {target}")
        return backup_path

    def _atomic_write(self, target_path: Path, content: str):
        if not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_name(target_path.name + TEMP_SUFFIX)
        try:
            temp_file.write_text(content, encoding='utf-8')
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise IOError(f"Atomic write failed: {e}") from e

    def _create_unique_backup(self, target_path: Path) -> Path:
        backup_path = target_path.with_name(target_path.name + BACKUP_SUFFIX)
        counter = 1
        while backup_path.exists():
            backup_path = target_path.with_name(f"{target_path.name}-{counter}{BACKUP_SUFFIX}")
            counter += 1
        return backup_path


def load_files(paths: Iterable[Union[str, Path]], skip_errors: bool = False,
               prefix: str = "") -> ShellConf:
    """Loads several files into one store, later files winning on conflicts."""
    conf = ShellConf(prefix=prefix)
    errors: List[LineResult] = []
    for path in paths:
        conf.load(path, skip_errors=skip_errors)
        errors.extend(conf.errors)
    conf.errors = errors
    return conf
