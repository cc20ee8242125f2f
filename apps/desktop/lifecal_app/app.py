"""Desktop preview runtime, view-model, and QML integration."""

from __future__ import annotations

import json
import os
import sys
from importlib import metadata
from pathlib import Path

from PySide6.QtCore import QObject, Property, QUrl, Qt, Signal, Slot
from PySide6.QtGui import QDesktopServices, QGuiApplication
from PySide6.QtQml import QQmlApplicationEngine
from PySide6.QtWidgets import QApplication

from lifecal_core import AppConfig, PreviewSession, WizardState, load_config, save_config, stats_lines
from lifecal_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from lifecal_renderer import list_devices, list_themes

SWATCHES = ("#ff6b6b", "#ffd93d", "#6bcb77", "#4d96ff", "#c77dff", "#ffffff")


def _app_version() -> str:
    try:
        return metadata.version("lifecal")
    except metadata.PackageNotFoundError:
        return "0.1.0"


class LifeCalViewModel(QObject):
    previewUrlChanged = Signal()
    statsJsonChanged = Signal()
    errorTextChanged = Signal()
    stateChanged = Signal()
    shareUrlChanged = Signal()
    exportPathChanged = Signal()

    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__()
        self.config: AppConfig = config or load_config()
        self.logger = get_logger("app")
        self.session = PreviewSession(WizardState.from_config(self.config), config=self.config)
        self._share_url = ""
        self._export_path = ""
        self._error_text = ""
        self._refresh()

    @Property(str, constant=True)
    def appVersion(self) -> str:
        return _app_version()

    @Property(str, constant=True)
    def devicesJson(self) -> str:
        return json.dumps(list_devices())

    @Property(str, constant=True)
    def themesJson(self) -> str:
        return json.dumps(list_themes())

    @Property(str, constant=True)
    def swatchesJson(self) -> str:
        return json.dumps(list(SWATCHES))

    @Property(str, notify=previewUrlChanged)
    def previewUrl(self) -> str:
        return self.session.preview_url

    @Property(str, notify=statsJsonChanged)
    def statsJson(self) -> str:
        if self.session.result is None:
            return "[]"
        return json.dumps([{"value": v, "label": label} for v, label in stats_lines(self.session.result)])

    @Property(str, notify=errorTextChanged)
    def errorText(self) -> str:
        return self._error_text

    @Property(str, notify=stateChanged)
    def calendarType(self) -> str:
        return self.session.state.calendar_type

    @Property(str, notify=stateChanged)
    def deviceId(self) -> str:
        return self.session.state.device

    @Property(str, notify=stateChanged)
    def accentColor(self) -> str:
        return self.session.state.accent

    @Property(str, notify=stateChanged)
    def theme(self) -> str:
        return self.session.state.theme or ""

    @Property(str, notify=stateChanged)
    def birthDate(self) -> str:
        return self.session.state.birth_date

    @Property(int, notify=stateChanged)
    def lifeExpectancy(self) -> int:
        return self.session.state.expectancy

    @Property(str, notify=stateChanged)
    def targetDate(self) -> str:
        return self.session.state.target_date or ""

    @Property(str, notify=stateChanged)
    def startDate(self) -> str:
        return self.session.state.start_date or ""

    @Property(str, notify=stateChanged)
    def goalTitle(self) -> str:
        return self.session.state.title

    @Property(str, notify=shareUrlChanged)
    def shareUrl(self) -> str:
        return self._share_url

    @Property(str, notify=exportPathChanged)
    def exportPath(self) -> str:
        return self._export_path

    def _set_error(self, text: str) -> None:
        if text != self._error_text:
            self._error_text = text
            self.errorTextChanged.emit()

    def _refresh(self) -> None:
        previous = self.session.preview_url
        self._publish(self.session.refresh(), previous)

    def _apply(self, **changes) -> None:
        previous = self.session.preview_url
        ok = self.session.update(**changes)
        self.stateChanged.emit()
        self._publish(ok, previous)

    def _publish(self, ok: bool, previous: str) -> None:
        # On failure the previous preview stays on screen.
        self._set_error("" if ok else f"Preview not updated: {self.session.error}")
        if ok:
            if self.session.preview_url != previous:
                self.previewUrlChanged.emit()
            self.statsJsonChanged.emit()

    @Slot(str)
    def setCalendarType(self, value: str) -> None:
        if value in ("year", "life", "goal") and value != self.session.state.calendar_type:
            self._apply(calendar_type=value)

    @Slot(str)
    def setDevice(self, device_id: str) -> None:
        self._apply(device=device_id)

    @Slot(str)
    def setAccentColor(self, color: str) -> None:
        self._apply(accent=color)

    @Slot(str)
    def setTheme(self, name: str) -> None:
        if name in list_themes():
            self._apply(theme=name)

    @Slot(str)
    def setBirthDate(self, value: str) -> None:
        self._apply(birth_date=value.strip())

    @Slot(int)
    def setLifeExpectancy(self, years: int) -> None:
        self._apply(expectancy=years if years > 0 else 80)

    @Slot(str)
    def setTargetDate(self, value: str) -> None:
        self._apply(target_date=value.strip() or None)

    @Slot(str)
    def setStartDate(self, value: str) -> None:
        self._apply(start_date=value.strip() or None)

    @Slot(str)
    def setGoalTitle(self, title: str) -> None:
        self._apply(title=title or "Goal")

    @Slot()
    def exportPng(self) -> None:
        try:
            path = self.session.export_png()
        except (OSError, RuntimeError) as exc:
            self._set_error(f"Export failed: {exc}")
            return
        self._export_path = str(path)
        self.exportPathChanged.emit()

    @Slot()
    def openExportPath(self) -> None:
        if self._export_path:
            QDesktopServices.openUrl(QUrl.fromLocalFile(str(Path(self._export_path).parent)))

    @Slot()
    def copyShareUrl(self) -> None:
        base = f"http://{self.config.server.host}:{self.config.server.port}"
        try:
            url = self.session.share_url(base)
        except ValueError as exc:
            self._set_error(f"Cannot build URL: {exc}")
            return
        QGuiApplication.clipboard().setText(url)
        if url != self._share_url:
            self._share_url = url
            self.shareUrlChanged.emit()

    def shutdown(self) -> None:
        state = self.session.state
        self.config.wallpaper.calendar_type = state.calendar_type
        self.config.wallpaper.device = state.device
        self.config.wallpaper.accent = state.accent
        if state.theme:
            self.config.wallpaper.theme = state.theme
        self.config.life.birth_date = state.birth_date
        self.config.life.expectancy = state.expectancy
        self.config.goal.target_date = state.target_date
        self.config.goal.title = state.title
        self.config.goal.start_date = state.start_date
        save_config(self.config)


def run_gui() -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.logging.keep_log_files)
    install_crash_hooks()
    logger = get_logger()

    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    QApplication.setHighDpiScaleFactorRoundingPolicy(Qt.HighDpiScaleFactorRoundingPolicy.PassThrough)

    app = QApplication(sys.argv)
    app.setApplicationName("LifeCal")
    app.setOrganizationName("LifeCal")

    vm = LifeCalViewModel(cfg)

    engine = QQmlApplicationEngine()
    engine.rootContext().setContextProperty("vm", vm)
    engine.load(str(Path(__file__).with_name("qml") / "Main.qml"))

    if not engine.rootObjects():
        logger.error("failed to load QML")
        return 1

    exit_code = app.exec()
    vm.shutdown()
    logger.info("app shutdown", extra={"event": "shutdown", "exit_code": int(exit_code)})
    return int(exit_code)
