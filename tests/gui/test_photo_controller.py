from __future__ import annotations

import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Callable

import numpy as np
import pytest
from PIL import Image

pytest.importorskip("PySide6", reason="PySide6 is required for controller tests", exc_type=ImportError)

from PySide6.QtCore import QCoreApplication, QRunnable, QThreadPool

from photoexpress.config import PICTURES_COLLECTION
from photoexpress.core.capture import CaptureSession, path_from_uri
from photoexpress.core.export import ExportPipeline
from photoexpress.core.session import ExportSnapshot
from photoexpress.gui.ui.controllers.photo_controller import PhotoController
from photoexpress.library.media_store import LocalMediaStore

FIXED_TIME = datetime(2024, 6, 1, 18, 45, 3)


@pytest.fixture(scope="module")
def qapp() -> QCoreApplication:
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


class _ScriptedCamera:
    """Camera double that copies a prepared image or backs out."""

    def __init__(self, source: Path) -> None:
        self.source = source
        self.cancel_next = False
        self.corrupt_next = False

    def take_picture(self, destination_uri: str, callback: Callable[[bool], None]) -> None:
        if self.cancel_next:
            self.cancel_next = False
            callback(False)
            return
        destination = path_from_uri(destination_uri)
        if self.corrupt_next:
            self.corrupt_next = False
            destination.write_bytes(b"not a jpeg")
        else:
            destination.write_bytes(self.source.read_bytes())
        callback(True)


class _Recorder:
    def __init__(self, controller: PhotoController) -> None:
        self.previews = []
        self.unavailable: list[str] = []
        self.brightness: list[tuple[bool, int]] = []
        self.save_enabled: list[bool] = []
        self.exports: list[tuple[bool, str]] = []
        controller.previewChanged.connect(self.previews.append)
        controller.previewUnavailable.connect(self.unavailable.append)
        controller.brightnessControlChanged.connect(lambda visible, level: self.brightness.append((visible, level)))
        controller.saveEnabledChanged.connect(self.save_enabled.append)
        controller.exportFinished.connect(lambda ok, message: self.exports.append((ok, message)))


@pytest.fixture
def harness(qapp, make_jpeg, tmp_path: Path):
    camera = _ScriptedCamera(make_jpeg(size=(160, 120)))
    store = LocalMediaStore(tmp_path / "library")
    pending: list[QRunnable] = []
    controller = PhotoController(
        capture_session=CaptureSession(camera, tmp_path / "captures", clock=lambda: FIXED_TIME),
        pipeline=ExportPipeline(store),
        submit=pending.append,
    )
    controller.set_viewport_size(40, 30)
    recorder = _Recorder(controller)
    return controller, camera, store, pending, recorder


def test_initial_state_hides_controls(harness) -> None:
    controller, _camera, _store, _pending, recorder = harness

    assert not controller.state.has_photo
    assert not controller.save_photo()
    assert recorder.save_enabled == []


def test_capture_shows_neutral_preview_and_enables_save(harness) -> None:
    controller, _camera, _store, _pending, recorder = harness

    controller.take_photo()

    assert controller.state.has_photo
    assert controller.state.level == 100
    assert recorder.brightness == [(True, 100)]
    assert recorder.save_enabled == [True]
    assert recorder.previews[-1].size == (40, 30)


def test_cancelled_capture_keeps_previous_photo(harness) -> None:
    controller, camera, _store, _pending, recorder = harness
    controller.take_photo()
    photo = controller.state.photo

    camera.cancel_next = True
    controller.take_photo()

    assert controller.state.photo == photo
    assert len(recorder.previews) == 1


def test_undecodable_capture_reports_preview_unavailable(harness) -> None:
    controller, camera, _store, _pending, recorder = harness

    camera.corrupt_next = True
    controller.take_photo()

    assert not controller.state.has_photo
    assert len(recorder.unavailable) == 1
    assert recorder.save_enabled == []


def test_slider_rerenders_preview(harness) -> None:
    controller, _camera, _store, _pending, recorder = harness
    controller.take_photo()

    controller.set_brightness(0)

    assert controller.state.level == 0
    assert not recorder.previews[-1].pixels[..., :3].any()


def test_brightness_ignored_without_photo(harness) -> None:
    controller, _camera, _store, _pending, recorder = harness

    controller.set_brightness(30)

    assert controller.state.level == 100
    assert recorder.previews == []


def test_second_commit_is_ignored_while_export_in_flight(harness) -> None:
    controller, _camera, store, pending, recorder = harness
    controller.take_photo()

    assert controller.save_photo()
    assert not controller.save_photo()
    assert len(pending) == 1
    assert recorder.save_enabled[-1] is False

    pending.pop().run()

    assert len(store.entries(PICTURES_COLLECTION)) == 1
    assert recorder.save_enabled[-1] is True
    assert recorder.exports[-1][0] is True
    assert controller.save_photo()


def test_end_to_end_black_export(harness) -> None:
    controller, _camera, store, pending, recorder = harness
    controller.take_photo()
    controller.set_brightness(0)

    controller.save_photo()
    pending.pop().run()

    [exported] = store.entries(PICTURES_COLLECTION)
    with Image.open(exported) as image:
        assert image.size == (160, 120)
        assert not np.array(image.convert("RGB")).any()


def test_export_snapshot_ignores_later_slider_moves(harness) -> None:
    controller, _camera, store, pending, _recorder = harness
    controller.take_photo()
    controller.set_brightness(0)
    controller.save_photo()

    controller.set_brightness(200)
    pending.pop().run()

    [exported] = store.entries(PICTURES_COLLECTION)
    with Image.open(exported) as image:
        assert not np.array(image.convert("RGB")).any()


def test_failed_export_reenables_save(harness) -> None:
    controller, _camera, store, pending, recorder = harness
    controller.take_photo()
    photo = controller.state.photo
    assert photo is not None
    photo.path.write_bytes(b"corrupted after capture")

    controller.save_photo()
    pending.pop().run()

    assert recorder.exports[-1][0] is False
    assert recorder.save_enabled[-1] is True
    assert store.entries(PICTURES_COLLECTION) == []
    assert controller.state.can_commit


class _CrashingPipeline:
    def export(self, snapshot: ExportSnapshot):
        raise RuntimeError("boom")


def test_unexpected_worker_error_still_reenables_save(qapp, make_jpeg, tmp_path: Path) -> None:
    pending: list[QRunnable] = []
    controller = PhotoController(
        capture_session=CaptureSession(
            _ScriptedCamera(make_jpeg(size=(32, 24))), tmp_path / "captures", clock=lambda: FIXED_TIME
        ),
        pipeline=_CrashingPipeline(),
        submit=pending.append,
    )
    controller.set_viewport_size(32, 24)
    recorder = _Recorder(controller)
    controller.take_photo()

    assert controller.save_photo()
    pending.pop().run()

    ok, message = recorder.exports[-1]
    assert ok is False
    assert "boom" in message
    assert recorder.save_enabled[-1] is True
    assert controller.state.can_commit


def test_thread_pool_export_reports_back_on_the_gui_thread(qapp, make_jpeg, tmp_path: Path) -> None:
    store = LocalMediaStore(tmp_path / "library")
    controller = PhotoController(
        capture_session=CaptureSession(
            _ScriptedCamera(make_jpeg(size=(64, 48))), tmp_path / "captures", clock=lambda: FIXED_TIME
        ),
        pipeline=ExportPipeline(store),
    )
    controller.set_viewport_size(32, 24)
    controller.take_photo()

    gui_thread = threading.get_ident()
    finished: list[tuple[bool, int]] = []
    controller.exportFinished.connect(lambda ok, _message: finished.append((ok, threading.get_ident())))

    assert controller.save_photo()
    assert not controller.save_photo()

    deadline = time.monotonic() + 10.0
    while not finished and time.monotonic() < deadline:
        qapp.processEvents()
        time.sleep(0.01)
    QThreadPool.globalInstance().waitForDone()

    assert finished == [(True, gui_thread)]
    assert len(store.entries(PICTURES_COLLECTION)) == 1
    assert controller.state.can_commit
