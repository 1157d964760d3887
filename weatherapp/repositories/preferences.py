from __future__ import annotations

from typing import Protocol


class LastCityStore(Protocol):
    def get_last_city(self) -> str | None: ...

    def set_last_city(self, city_name: str) -> None: ...
