"""Interactive preview session shared by the desktop app and CLI tooling."""

from __future__ import annotations

from dataclasses import fields, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from lifecal_renderer import RenderResult, preview_data_url, to_png

from .config import AppConfig
from .logging_setup import get_logger
from .wallpaper import WizardState, build_share_url, render_query

Clock = Callable[[], datetime]


def stats_lines(result: RenderResult) -> list[tuple[str, str]]:
    """(value, label) pairs shown beside the preview."""
    s = result.stats
    if result.kind == "year":
        return [
            (str(s["current_day"]), "days passed"),
            (str(s["remaining_days"]), "days remaining"),
            (f"{s['progress_percent']}%", f"of {s['year']}"),
        ]
    if result.kind == "life":
        return [
            (str(s["age_years"]), "years lived"),
            (f"{s['weeks_remaining']:,}", "weeks remaining"),
            (f"{s['progress_percent']}%", "of life"),
        ]
    return [
        (str(s["days_remaining"]), "days to go"),
        (f"{s['progress_percent']}%", "complete"),
    ]


class PreviewSession:
    """Re-renders on every state change and keeps the last good preview.

    A failed render (for example an unparseable date typed into the wizard)
    leaves ``preview_url`` and ``result`` untouched and records ``error``.
    """

    def __init__(
        self,
        state: WizardState | None = None,
        config: AppConfig | None = None,
        clock: Clock = datetime.now,
    ) -> None:
        self.config = config or AppConfig()
        self.state = state or WizardState.from_config(self.config)
        self.scale = self.config.export.preview_scale
        self._clock = clock
        self.result: RenderResult | None = None
        self.preview_url = ""
        self.error: str | None = None
        self._logger = get_logger("preview")

    def update(self, **changes: Any) -> bool:
        known = {f.name for f in fields(WizardState)}
        unknown = set(changes) - known
        if unknown:
            raise TypeError(f"Unknown wizard fields: {sorted(unknown)}")
        self.state = replace(self.state, **changes)
        return self.refresh()

    def refresh(self) -> bool:
        now = self._clock()
        try:
            result = render_query(self.state.to_query(), now=now)
            url = preview_data_url(result, scale=self.scale)
        except Exception as exc:
            self.error = str(exc) or exc.__class__.__name__
            self._logger.warning(f"preview render failed: {self.error}", extra={"event": "preview_failed"})
            return False
        self.result = result
        self.preview_url = url
        self.error = None
        return True

    def stats_text(self) -> str:
        if self.result is None:
            return ""
        return "\n".join(f"{value} {label}" for value, label in stats_lines(self.result))

    def export_filename(self) -> str:
        return f"{self.state.calendar_type}-calendar-{self.state.device}.png"

    def export_png(self, directory: Path | None = None) -> Path:
        if self.result is None:
            self.refresh()
        if self.result is None:
            raise RuntimeError(f"Nothing to export: {self.error}")
        base = directory or Path(self.config.export.output_dir or Path.home()).expanduser()
        base.mkdir(parents=True, exist_ok=True)
        path = base / self.export_filename()
        path.write_bytes(to_png(self.result))
        self._logger.info(f"exported {path}", extra={"event": "export_png"})
        return path

    def share_url(self, base_url: str) -> str:
        return build_share_url(base_url, self.state, now=self._clock())
