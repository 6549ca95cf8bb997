"""
video_panel.py

Live camera feed from the rover.

MJPEGPipeline is the video pipeline driven by PipelineCoordinator: it reads an
MJPEG-over-HTTP stream on a worker thread, decodes frames with OpenCV and hands
them to the bound surface while playing. VideoPanel is that surface; it tells
the coordinator when it becomes visible or goes away.
"""

import logging
import threading

import cv2
import numpy as np
import requests
from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QImage, QPixmap
from PyQt6.QtWidgets import QLabel

log = logging.getLogger(__name__)


def extract_jpeg_frames(byte_buffer: bytes) -> tuple[list[bytes], bytes]:
    """
    Split complete JPEG images out of an MJPEG byte stream.

    Returns:
        tuple: (list of JPEG byte strings, leftover bytes to keep buffering)
    """
    frames = []
    while True:
        start = byte_buffer.find(b"\xff\xd8")
        if start == -1:
            # keep a trailing 0xff in case the marker is split across chunks
            return frames, byte_buffer[-1:]
        end = byte_buffer.find(b"\xff\xd9", start + 2)
        if end == -1:
            return frames, byte_buffer[start:]
        frames.append(byte_buffer[start: end + 2])
        byte_buffer = byte_buffer[end + 2:]


class MJPEGPipeline(QObject):
    """
    Video pipeline over an MJPEG HTTP stream.

    - init() starts the reader thread; the first successful connection reports
      on_pipeline_ready() to the listener.
    - Stream errors are reported through on_status_message() and retried.
    - Frames reach the surface only between play() and pause(), and only while
      a surface is bound.
    """

    new_frame = pyqtSignal(np.ndarray)

    def __init__(self, stream_url: str, reconnect_delay: float = 2.0, listener=None):
        """
        Args:
            stream_url (str): URL of the MJPEG stream.
            reconnect_delay (float): Seconds to wait before reconnecting.
            listener: Object with on_status_message(text) and on_pipeline_ready().
        """
        super().__init__()
        self.stream_url = stream_url
        self.reconnect_delay = reconnect_delay
        self.listener = listener
        self.playing = False
        self._surface = None
        self._stop_event = threading.Event()
        self._worker_thread: threading.Thread | None = None

    def init(self):
        """Start the background thread that reads the stream."""
        if self._worker_thread and self._worker_thread.is_alive():
            return
        self._stop_event = threading.Event()
        self._worker_thread = threading.Thread(
            target=self.grab_loop, args=(self._stop_event,), name="mjpeg-pipeline", daemon=True
        )
        self._worker_thread.start()

    def play(self):
        self.playing = True

    def pause(self):
        self.playing = False

    def surface_init(self, surface):
        if self._surface is not None:
            self.surface_finalize()
        self._surface = surface
        self.new_frame.connect(surface.show_frame)

    def surface_finalize(self):
        if self._surface is None:
            return
        try:
            self.new_frame.disconnect(self._surface.show_frame)
        except TypeError:
            pass  # already disconnected
        self._surface = None

    def finalize(self):
        """Stop the reader thread and drop the surface."""
        self.playing = False
        self.surface_finalize()
        self._stop_event.set()
        if self._worker_thread and self._worker_thread.is_alive():
            self._worker_thread.join(timeout=2)
        self._worker_thread = None

    def _report(self, text: str):
        log.info(f"[MJPEGPipeline] {text}")
        if self.listener is not None:
            self.listener.on_status_message(text)

    def grab_loop(self, stop_event: threading.Event):
        """Read, split and decode frames until finalize()."""
        announced = False
        while not stop_event.is_set():
            try:
                with requests.get(self.stream_url, stream=True, timeout=10) as r:
                    r.raise_for_status()
                    if not announced:
                        announced = True
                        self._report(f"Connected to {self.stream_url}")
                        if self.listener is not None:
                            self.listener.on_pipeline_ready()
                    byte_buffer = b""
                    for chunk in r.iter_content(chunk_size=4096):
                        if stop_event.is_set():
                            return
                        frames, byte_buffer = extract_jpeg_frames(byte_buffer + chunk)
                        if not (self.playing and self._surface is not None):
                            continue
                        for jpg in frames:
                            frame = cv2.imdecode(np.frombuffer(jpg, dtype=np.uint8), cv2.IMREAD_COLOR)
                            if frame is not None:
                                self.new_frame.emit(frame)
                self._report(f"Stream ended. Reconnecting in {self.reconnect_delay:g}s...")
            except Exception as e:
                self._report(f"Stream error: {e}. Reconnecting in {self.reconnect_delay:g}s...")
            stop_event.wait(self.reconnect_delay)


class VideoPanel(QLabel):
    """
    Drawing surface for the camera feed.

    - Emits surface_available(self) when shown and surface_destroyed() when
      hidden or closed, so the pipeline coordinator can bind and unbind it.
    - Converts decoded OpenCV images to QPixmap on the GUI thread.
    """

    surface_available = pyqtSignal(object)
    surface_destroyed = pyqtSignal()

    def __init__(self, parent=None, camera_resolution: tuple[int, int] = (640, 480)):
        super().__init__(parent)
        self.camera_resolution = camera_resolution
        self.setFixedSize(self.camera_resolution[0], self.camera_resolution[1])
        self.setScaledContents(True)
        self.setText("No video")

    def show_frame(self, frame):
        """Qt slot receiving frames from the pipeline thread."""
        try:
            frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            h, w, ch = frame.shape
            img = QImage(frame.data, w, h, ch * w, QImage.Format.Format_RGB888)
            self.setPixmap(QPixmap.fromImage(img))
        except cv2.error as e:
            log.warning(f"[VideoPanel] Failed to update frame: {e}")

    def showEvent(self, a0):
        super().showEvent(a0)
        self.surface_available.emit(self)

    def hideEvent(self, a0):
        self.surface_destroyed.emit()
        super().hideEvent(a0)
