"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, name: str, sources: list[str]) -> None:
        self._log.info("config.loaded", name=name, sources=sources)

    def config_nesting_depth_warning(self, max_nesting_depth: int) -> None:
        self._log.warning(
            "config.nesting_depth_warning",
            max_nesting_depth=max_nesting_depth,
            message="Low max_nesting_depth flattens nested arguments into text",
        )
