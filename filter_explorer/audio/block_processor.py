"""
Block-oriented front end of the filter engine for audio callbacks.

The host audio callback hands over one block of stereo samples at a time;
``BlockProcessor`` runs the engine over every frame of the block in order.
Edits coming from the control surface are queued and applied between
blocks, so coefficients never change while a block is being filtered.
"""

import logging
import queue
import time
from typing import Callable, Dict, Tuple

import numpy as np

from filter_explorer.exceptions import FilterProcessingError
from filter_explorer.filters.digital_filter import DigitalFilter

logger = logging.getLogger('filter_explorer.audio.block_processor')

EngineEdit = Callable[[DigitalFilter], object]

class BlockProcessor:
    """
    Runs a ``DigitalFilter`` over stereo sample blocks.

    ``process_block`` must only be called from the audio thread; any thread
    may ``submit`` edits.
    """

    def __init__(self, engine: DigitalFilter, block_size: int = 2048):
        """
        Initialize block processor.

        Args:
            engine: Filter engine shared with the control surface
            block_size: Nominal number of frames per block
        """
        self._engine = engine
        self.block_size = block_size
        self._pending_edits: "queue.SimpleQueue[EngineEdit]" = queue.SimpleQueue()

        # Performance tracking
        self._block_count = 0
        self._frame_count = 0
        self._edit_count = 0
        self._total_processing_time = 0.0

        logger.debug(f"BlockProcessor initialized (block size: {block_size})")

    @property
    def engine(self) -> DigitalFilter:
        return self._engine

    def submit(self, edit: EngineEdit) -> None:
        """
        Queue an edit for the start of the next block.

        Args:
            edit: Callable receiving the engine, e.g.
                ``lambda engine: engine.compute(descriptor)``
        """
        self._pending_edits.put(edit)

    def apply_pending_edits(self) -> int:
        """
        Apply queued edits in submission order.

        Returns:
            Number of edits applied
        """
        applied = 0
        while True:
            try:
                edit = self._pending_edits.get_nowait()
            except queue.Empty:
                break
            edit(self._engine)
            applied += 1

        if applied:
            self._edit_count += applied
            logger.debug(f"Applied {applied} pending edit(s)")
        return applied

    def process_block(self, left: np.ndarray, right: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Filter one block of stereo samples.

        Args:
            left: Left channel samples (1D)
            right: Right channel samples (1D, same length)

        Returns:
            Filtered left and right channels as float64 arrays

        Raises:
            FilterProcessingError: If the channels are malformed
        """
        left = np.asarray(left, dtype=np.float64)
        right = np.asarray(right, dtype=np.float64)

        if left.ndim != 1 or right.ndim != 1:
            raise FilterProcessingError(
                f"Channels must be 1D, got shapes {left.shape} and {right.shape}"
            )
        if left.shape != right.shape:
            raise FilterProcessingError(
                f"Channel lengths differ: {left.shape[0]} and {right.shape[0]}"
            )

        self.apply_pending_edits()

        start_time = time.perf_counter()

        left_out = np.empty_like(left)
        right_out = np.empty_like(right)
        process = self._engine.process
        for i in range(left.shape[0]):
            left_out[i], right_out[i] = process(left[i], right[i])

        self._update_performance_metrics(left.shape[0], time.perf_counter() - start_time)
        return left_out, right_out

    def process_buffer(self, frames: np.ndarray) -> np.ndarray:
        """
        Filter an interleaved ``(N, 2)`` block.

        Raises:
            FilterProcessingError: If the block is not two-channel
        """
        frames = np.asarray(frames)
        if frames.ndim != 2 or frames.shape[1] != 2:
            raise FilterProcessingError(f"Unsupported audio data shape: {frames.shape}")

        left_out, right_out = self.process_block(frames[:, 0], frames[:, 1])
        return np.column_stack((left_out, right_out))

    def get_performance_stats(self) -> Dict[str, float]:
        """Get block processing statistics"""
        average_block_time = (
            self._total_processing_time / self._block_count
            if self._block_count > 0 else 0.0
        )

        return {
            'block_count': self._block_count,
            'frame_count': self._frame_count,
            'edit_count': self._edit_count,
            'average_block_time_ms': average_block_time * 1000,
            'total_processing_time_ms': self._total_processing_time * 1000,
            'filter_order': self._engine.coefficients.order
        }

    def _update_performance_metrics(self, frames: int, processing_time: float) -> None:
        self._block_count += 1
        self._frame_count += frames
        self._total_processing_time += processing_time
