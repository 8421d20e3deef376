"""
Background Training for the Hybrid Model
Snapshots are published by atomic reference swap; training runs off the request path
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterable, Optional, Sequence

from ..config import TrainingConfig, default_config
from ..exceptions import RecommenderError, TrainingCancelled, TrainingError
from ..log import get_logger
from ..models import Interaction, Job
from .model import HybridSnapshot, train

log = get_logger(__name__)


class ModelStore:
    """
    Holds the current HybridSnapshot

    Readers take the reference once and keep using it; a refresh
    publishes a new snapshot without mutating the old one.
    """

    def __init__(self, snapshot: Optional[HybridSnapshot] = None):
        self._lock = threading.Lock()
        self._snapshot = snapshot

    def current(self) -> Optional[HybridSnapshot]:
        with self._lock:
            return self._snapshot

    def swap(self, snapshot: HybridSnapshot) -> Optional[HybridSnapshot]:
        """Publish a new snapshot, returning the previous one"""
        with self._lock:
            previous, self._snapshot = self._snapshot, snapshot
        return previous


class TrainingTask:
    """
    Handle for one background training run

    The result is the new snapshot, or the failure raised by
    training. Cancellation is cooperative and takes effect at the
    next phase boundary.
    """

    def __init__(self, future: Future, cancel_event: threading.Event):
        self._future = future
        self._cancel_event = cancel_event

    def done(self) -> bool:
        return self._future.done()

    def cancel(self) -> None:
        self._cancel_event.set()
        self._future.cancel()

    def cancelled(self) -> bool:
        if self._future.cancelled():
            return True
        return self._future.done() and isinstance(self._future.exception(), TrainingCancelled)

    def result(self, timeout: Optional[float] = None) -> HybridSnapshot:
        """Wait for the snapshot; raises TrainingError on failure or cancellation"""
        if self._future.cancelled():
            raise TrainingCancelled("Training cancelled before it started")
        return self._future.result(timeout=timeout)

    def error(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        if self._future.cancelled():
            return TrainingCancelled("Training cancelled before it started")
        return self._future.exception(timeout=timeout)


class ModelTrainer:
    """
    Runs training on a background executor and swaps the result into a store

    Runs are serialized through a single lock, so two refreshes never
    interleave; each publishes a complete snapshot.
    """

    def __init__(
        self,
        store: ModelStore,
        config: Optional[TrainingConfig] = None,
        executor: Optional[ThreadPoolExecutor] = None
    ):
        self.store = store
        self.config = config or default_config.training
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.config.max_workers, thread_name_prefix="jobrec-train",
        )
        self._train_lock = threading.Lock()

    def train_now(
        self,
        interactions: Sequence[Interaction],
        jobs: Iterable[Job],
        cancel_event: Optional[threading.Event] = None
    ) -> HybridSnapshot:
        """Train synchronously and publish the snapshot"""
        with self._train_lock:
            try:
                snapshot = train(interactions, jobs, self.config, cancel_event)
            except TrainingError:
                raise
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise TrainingError(f"Hybrid model training failed: {e}") from e
            self.store.swap(snapshot)
        return snapshot

    def _load_training_data(
        self,
        load_interactions: Callable[[], Sequence[Interaction]],
        load_jobs: Callable[[], Iterable[Job]]
    ):
        try:
            return load_interactions(), list(load_jobs())
        except (RecommenderError, OSError, KeyError, ValueError) as e:
            raise TrainingError(f"Could not load training data: {e}") from e

    def submit(
        self,
        load_interactions: Callable[[], Sequence[Interaction]],
        load_jobs: Callable[[], Iterable[Job]]
    ) -> TrainingTask:
        """
        Schedule a background refresh

        Args:
            load_interactions: Fetches the global interaction history
            load_jobs: Fetches the job catalog

        Returns:
            TrainingTask handle to poll, await or cancel
        """
        cancel_event = threading.Event()

        def run() -> HybridSnapshot:
            try:
                interactions, jobs = self._load_training_data(load_interactions, load_jobs)
                return self.train_now(interactions, jobs, cancel_event)
            except TrainingCancelled:
                log.info("Training cancelled")
                raise
            except TrainingError as e:
                log.error("Training failed: %s", e)
                raise

        future = self._executor.submit(run)
        return TrainingTask(future, cancel_event)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
