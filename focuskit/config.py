from __future__ import annotations

from dataclasses import dataclass

from focuskit.error_contract import format_actionable_error, require_choice

__all__ = ["FocusConfig", "LOG_LEVELS"]

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class FocusConfig:
    debug: bool = False
    log_level: str = "INFO"
    announce_delay_ms: int = 100  # empty region must exist before text lands
    announce_display_ms: int = 1000
    scroll_into_view: bool = True
    skip_shortcuts: bool = True

    def __post_init__(self) -> None:
        for field_name in ("announce_delay_ms", "announce_display_ms"):
            value = getattr(self, field_name)
            if int(value) < 0:
                raise ValueError(
                    format_actionable_error(
                        "Focus config",
                        field_name,
                        f"delay must be >= 0 (got {value})",
                        "pass a non-negative number of milliseconds",
                    )
                )
        require_choice("Focus config", "log_level", str(self.log_level).upper(), LOG_LEVELS)
