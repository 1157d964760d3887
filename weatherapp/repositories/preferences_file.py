from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

LAST_SEARCHED_CITY_KEY = "last_searched_city"


class JsonFileLastCityStore:
    """Keeps the last searched city in a small JSON preferences file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_last_city(self) -> str | None:
        value = self._read().get(LAST_SEARCHED_CITY_KEY)
        if isinstance(value, str) and value:
            return value
        return None

    def set_last_city(self, city_name: str) -> None:
        prefs = self._read()
        prefs[LAST_SEARCHED_CITY_KEY] = city_name
        self._write(prefs)
        logger.debug("Saved last searched city %r to %s", city_name, self._path)

    def _read(self) -> dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("Could not read preferences file %s: %s", self._path, e)
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring malformed preferences file %s", self._path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, prefs: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(prefs, fh)
            os.replace(tmp_name, self._path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
