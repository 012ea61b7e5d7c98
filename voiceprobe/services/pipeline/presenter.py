"""Pipeline driver sequencing the recorder and the evaluator.

``Presenter`` accepts the three external commands (start, stop, reset),
performs the side effects each one needs, and feeds the outcome to the
pure reducer in ``state.py``. Evaluation runs as an independent
``asyncio.Task`` so ``request_stop`` returns as soon as the pipeline is
analyzing.

Usage::

    from voiceprobe.services.pipeline import build_presenter

    presenter = build_presenter()
    presenter.subscribe(lambda state: print(state.phase))
    await presenter.request_start()
    await presenter.request_stop()
    await presenter.wait_for_analysis()
"""

import asyncio
import logging
from collections.abc import Callable

from voiceprobe.core.config import Settings, get_settings
from voiceprobe.core.models import AudioCapture, ErrorInfo, PipelinePhase, PipelineState
from voiceprobe.services.audio import AudioInputStream, Recorder, create_stream
from voiceprobe.services.evaluation import BaseEvaluator, create_evaluator
from voiceprobe.services.pipeline.state import (
    AnalysisSucceeded,
    OperationFailed,
    PipelineEvent,
    Reset,
    StartRecording,
    StopRecording,
    initial_state,
    reduce,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[PipelineState], None]


class Presenter:
    """Owns the live ``PipelineState`` for one recorder/evaluator pair.

    Args:
        recorder: Recorder holding the microphone capability.
        evaluator: Any ``BaseEvaluator`` implementation.
    """

    def __init__(self, recorder: Recorder, evaluator: BaseEvaluator) -> None:
        self._recorder = recorder
        self._evaluator = evaluator
        self._state = initial_state()
        self._capture: AudioCapture | None = None
        self._listeners: list[StateListener] = []
        # True while a command is awaiting the recorder
        self._command_in_flight = False
        self._analysis_task: asyncio.Task | None = None
        self._analysis_tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def capture(self) -> AudioCapture | None:
        """The capture of the current run, kept for playback until reset."""
        return self._capture

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a callback invoked with every new state.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def request_start(self) -> bool:
        """Start a new recording run.

        Returns:
            False if the request was rejected (not idle, or another command
            is still in flight); True once the run has begun, even when the
            microphone then fails and the pipeline moves to ``failed``.
        """
        if self._command_in_flight or not self._dispatch(StartRecording()):
            logger.debug("Start rejected in phase %s", self._state.phase)
            return False

        run_id = self._state.run_id
        self._command_in_flight = True
        try:
            try:
                await self._recorder.start()
            except Exception as exc:
                logger.warning("Recording could not start: %s", exc)
                error = ErrorInfo.from_exception(exc, default_code="DEVICE_UNAVAILABLE")
                self._dispatch(OperationFailed(run_id, error))
                return True

            if not self._is_current(run_id, PipelinePhase.recording):
                # Reset arrived while the device was being opened
                await self._release_device()
        finally:
            self._command_in_flight = False
        return True

    async def request_stop(self) -> bool:
        """Finalize the recording and begin analysis.

        Returns:
            False if there was no recording to stop.
        """
        if self._command_in_flight or self._state.phase is not PipelinePhase.recording:
            logger.debug("Stop rejected in phase %s", self._state.phase)
            return False

        run_id = self._state.run_id
        self._command_in_flight = True
        try:
            capture = await self._recorder.stop()
        except Exception as exc:
            logger.warning("Recording could not be finalized: %s", exc)
            error = ErrorInfo.from_exception(exc, default_code="DEVICE_UNAVAILABLE")
            self._dispatch(OperationFailed(run_id, error))
            return True
        finally:
            self._command_in_flight = False

        if not self._is_current(run_id, PipelinePhase.recording):
            logger.debug("Discarding capture of reset run %d", run_id)
            return False

        self._capture = capture
        self._dispatch(StopRecording())
        task = asyncio.create_task(self._run_analysis(run_id, capture))
        self._analysis_tasks.add(task)
        task.add_done_callback(self._analysis_tasks.discard)
        self._analysis_task = task
        return True

    async def request_reset(self) -> bool:
        """Return to idle, discarding the capture, result and error.

        An in-flight evaluation is not cancelled; its result is ignored
        when it arrives.

        Returns:
            False if the pipeline was already idle.
        """
        self._capture = None
        changed = self._dispatch(Reset())

        # A start/stop in flight releases the device itself once it resumes
        if self._recorder.is_active and not self._command_in_flight:
            self._command_in_flight = True
            try:
                await self._release_device()
            finally:
                self._command_in_flight = False
        return changed

    async def wait_for_analysis(self) -> None:
        """Wait until the most recently scheduled evaluation has finished."""
        task = self._analysis_task
        if task is not None:
            await task

    async def aclose(self) -> None:
        """Release the microphone and cancel every pending evaluation."""
        await self.request_reset()
        tasks = [task for task in self._analysis_tasks if not task.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._analysis_tasks.clear()
        self._analysis_task = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _run_analysis(self, run_id: int, capture: AudioCapture) -> None:
        try:
            result = await self._evaluator.evaluate(capture)
        except Exception as exc:
            logger.warning("Evaluation failed for run %d: %s", run_id, exc)
            self._dispatch(OperationFailed(run_id, ErrorInfo.from_exception(exc)))
            return

        if not self._dispatch(AnalysisSucceeded(run_id, result)):
            logger.info("Ignoring result of run %d (pipeline was reset)", run_id)

    async def _release_device(self) -> None:
        try:
            await self._recorder.abort()
        except Exception:
            logger.warning("Microphone release failed during reset", exc_info=True)

    def _is_current(self, run_id: int, phase: PipelinePhase) -> bool:
        return self._state.run_id == run_id and self._state.phase is phase

    def _dispatch(self, event: PipelineEvent) -> bool:
        """Apply an event; notify listeners when the state changed."""
        new_state = reduce(self._state, event)
        if new_state is self._state:
            return False

        self._state = new_state
        logger.info("Pipeline -> %s (run %d)", new_state.phase, new_state.run_id)
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener failed (non-fatal)")
        return True


def build_presenter(
    settings: Settings | None = None,
    stream: AudioInputStream | None = None,
    evaluator: BaseEvaluator | None = None,
) -> Presenter:
    """Wire a Presenter from configuration.

    Args:
        settings: Optional Settings instance (defaults to get_settings()).
        stream: Microphone capability; created from ``settings.audio_backend``
            when omitted.
        evaluator: Evaluator; created from ``settings.evaluator_provider``
            when omitted.
    """
    settings = settings or get_settings()
    if stream is None:
        stream = create_stream(settings.audio_backend, settings=settings)
    if evaluator is None:
        evaluator = create_evaluator(settings.evaluator_provider, settings=settings)
    return Presenter(Recorder(stream), evaluator)
