"""
lifecycle.py

Implements PipelineCoordinator, the state machine that sequences the video
pipeline (init, surface binding, play/pause, teardown) against application
and surface lifecycle events.

Events are messages: anything may post() into the inbox, and the UI thread
processes them with drain(). Pipeline callbacks arrive on the pipeline's own
thread, so they only ever post. The transition table below is the only place
that decides which pipeline call is legal.
"""

import logging
import queue
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from teleop_client.errors import LifecycleContractViolation

log = logging.getLogger(__name__)


class PipelineState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    SURFACE_BOUND = "surface_bound"
    PLAYING = "playing"
    PAUSED = "paused"
    FINALIZED = "finalized"


class PipelineEventKind(Enum):
    APP_CREATED = "app_created"
    APP_PAUSED = "app_paused"
    APP_RESUMED = "app_resumed"
    APP_DESTROYED = "app_destroyed"
    SURFACE_AVAILABLE = "surface_available"
    SURFACE_DESTROYED = "surface_destroyed"
    PIPELINE_READY = "pipeline_ready"
    STATUS_MESSAGE = "status_message"


@dataclass(frozen=True)
class PipelineEvent:
    kind: PipelineEventKind
    payload: Any = None


class VideoPipeline(Protocol):
    """Calls the coordinator makes on the external video pipeline."""

    def init(self) -> None: ...

    def finalize(self) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def surface_init(self, surface) -> None: ...

    def surface_finalize(self) -> None: ...


S = PipelineState
E = PipelineEventKind

# (from-states, event) -> (to-state, pipeline method name)
TRANSITIONS = {
    (S.UNINITIALIZED, E.APP_CREATED): (S.INITIALIZED, "init"),
    (S.INITIALIZED, E.SURFACE_AVAILABLE): (S.SURFACE_BOUND, "surface_init"),
    (S.SURFACE_BOUND, E.SURFACE_AVAILABLE): (S.SURFACE_BOUND, "surface_init"),
    (S.PLAYING, E.SURFACE_AVAILABLE): (S.SURFACE_BOUND, "surface_init"),
    (S.PAUSED, E.SURFACE_AVAILABLE): (S.SURFACE_BOUND, "surface_init"),
    (S.SURFACE_BOUND, E.PIPELINE_READY): (S.PLAYING, "play"),
    (S.SURFACE_BOUND, E.SURFACE_DESTROYED): (S.INITIALIZED, "surface_finalize"),
    (S.PLAYING, E.SURFACE_DESTROYED): (S.INITIALIZED, "surface_finalize"),
    (S.PAUSED, E.SURFACE_DESTROYED): (S.INITIALIZED, "surface_finalize"),
    (S.PLAYING, E.APP_PAUSED): (S.PAUSED, "pause"),
    (S.PAUSED, E.APP_RESUMED): (S.PLAYING, "play"),
}
for _state in S:
    if _state is not S.FINALIZED:
        TRANSITIONS[(_state, E.APP_DESTROYED)] = (S.FINALIZED, "finalize")


class PipelineCoordinator:
    """
    Tracks the pipeline's state and issues only the calls that are legal in it.

    - Out-of-order events are logged as contract violations and ignored; the
      coordinator stays in its last valid state.
    - A surface offered before init() is remembered and bound right after it.
    - A ready report is remembered, so a surface bound later (or re-bound after
      being destroyed) goes straight on to playing unless the app is paused.
    - Status messages are forwarded to the status sink in every state.
    """

    def __init__(self, pipeline: VideoPipeline, status_sink: Optional[Callable[[str], None]] = None):
        """
        Args:
            pipeline (VideoPipeline): External pipeline to drive.
            status_sink (callable, optional): Receives pipeline status text.
        """
        self.pipeline = pipeline
        self.status_sink = status_sink
        self.state = PipelineState.UNINITIALIZED
        self.pipeline_ready = False
        self._app_paused = False
        self._pending_surface = None
        self._inbox: "queue.SimpleQueue[PipelineEvent]" = queue.SimpleQueue()

    @property
    def paused(self) -> bool:
        """True between an app-paused and the next app-resumed event."""
        return self._app_paused

    # -- inbound callbacks (any thread) --

    def on_status_message(self, text: str):
        self.post(PipelineEvent(E.STATUS_MESSAGE, text))

    def on_pipeline_ready(self):
        self.post(PipelineEvent(E.PIPELINE_READY))

    # -- UI timeline --

    def app_created(self):
        self.dispatch(PipelineEvent(E.APP_CREATED))

    def app_paused(self):
        self.dispatch(PipelineEvent(E.APP_PAUSED))

    def app_resumed(self):
        self.dispatch(PipelineEvent(E.APP_RESUMED))

    def app_destroyed(self):
        self.dispatch(PipelineEvent(E.APP_DESTROYED))

    def surface_available(self, surface):
        self.dispatch(PipelineEvent(E.SURFACE_AVAILABLE, surface))

    def surface_destroyed(self):
        self.dispatch(PipelineEvent(E.SURFACE_DESTROYED))

    def post(self, event: PipelineEvent):
        """Queue an event for the next drain(). Thread-safe."""
        self._inbox.put(event)

    def dispatch(self, event: PipelineEvent):
        """Queue *event* and process the inbox immediately."""
        self.post(event)
        self.drain()

    def drain(self) -> int:
        """
        Process every queued event in arrival order.

        Returns:
            int: Number of events processed.
        """
        processed = 0
        while True:
            try:
                event = self._inbox.get_nowait()
            except queue.Empty:
                return processed
            processed += 1
            try:
                self._handle(event)
            except LifecycleContractViolation as e:
                log.warning(f"[Pipeline] Ignored {event.kind.value} in state {self.state.value}: {e}")

    def _handle(self, event: PipelineEvent):
        kind = event.kind
        if kind is E.STATUS_MESSAGE:
            if self.status_sink is not None:
                try:
                    self.status_sink(str(event.payload))
                except Exception:
                    log.exception("[Pipeline] Status sink failed")
            return

        if kind is E.APP_PAUSED:
            self._app_paused = True
        elif kind is E.APP_RESUMED:
            self._app_paused = False
        elif kind is E.PIPELINE_READY:
            self.pipeline_ready = True

        if self.state is S.UNINITIALIZED and kind is E.SURFACE_AVAILABLE:
            self._pending_surface = event.payload
            raise LifecycleContractViolation("surface offered before pipeline init; deferred")
        if self.state is S.UNINITIALIZED and kind is E.SURFACE_DESTROYED and self._pending_surface is not None:
            self._pending_surface = None
            log.debug("[Pipeline] Deferred surface withdrawn before init")
            return

        transition = TRANSITIONS.get((self.state, kind))
        if transition is None:
            if kind is E.PIPELINE_READY and self.state is S.INITIALIZED:
                log.info("[Pipeline] Ready before a surface was bound; will play once bound")
                return
            if kind is E.APP_RESUMED and self.state is S.SURFACE_BOUND and self.pipeline_ready:
                self.post(PipelineEvent(E.PIPELINE_READY))
                return
            if kind in (E.APP_PAUSED, E.APP_RESUMED):
                log.debug(f"[Pipeline] {kind.value} has no effect in state {self.state.value}")
                return
            raise LifecycleContractViolation("no transition")

        if kind is E.PIPELINE_READY and self._app_paused:
            log.info("[Pipeline] Ready while paused; holding surface until resume")
            return

        target, action = transition
        args = (event.payload,) if action == "surface_init" else ()
        if not self._transition(target, action, *args):
            return

        if target is S.INITIALIZED and kind is E.APP_CREATED and self._pending_surface is not None:
            surface, self._pending_surface = self._pending_surface, None
            self.post(PipelineEvent(E.SURFACE_AVAILABLE, surface))
        elif target is S.SURFACE_BOUND and self.pipeline_ready and not self._app_paused:
            self.post(PipelineEvent(E.PIPELINE_READY))

    def _transition(self, target: PipelineState, action: str, *args) -> bool:
        try:
            getattr(self.pipeline, action)(*args)
        except Exception as e:
            log.error(f"[Pipeline] {action}() failed in state {self.state.value}: {e}")
            return False
        log.info(f"[Pipeline] {self.state.value} -> {target.value} ({action})")
        self.state = target
        return True
