"""Observer port for the config domain — defines events in domain language."""

from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, name: str, sources: list[str]) -> None: ...

    def config_nesting_depth_warning(self, max_nesting_depth: int) -> None: ...
