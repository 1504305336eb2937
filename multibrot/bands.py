"""Row-band decomposition of a frame across the worker ranks.

Rank 0 coordinates; ranks 1..W each own one contiguous block of
``height // W`` rows. The mapping is computed once at startup and shared by
both sides of the exchange instead of being re-derived per message.
"""
import numpy as np

from .config import RenderConfig
from .errors import CoordinationError

COORDINATOR_RANK = 0


class BandLayout:
    def __init__(self, config: RenderConfig, worker_count: int):
        self.width = config.width
        self.height = config.height
        self.band_height = config.band_height(worker_count)
        self.worker_count = worker_count
        self.rows = {
            rank: slice((rank - 1)*self.band_height, rank*self.band_height)
            for rank in self.worker_ranks
        }

    @classmethod
    def for_group_size(cls, config: RenderConfig, size: int) -> "BandLayout":
        return cls(config, size - 1)

    @property
    def worker_ranks(self) -> range:
        return range(COORDINATOR_RANK + 1, self.worker_count + 1)

    @property
    def band_shape(self) -> tuple:
        return (self.band_height, self.width, 3)

    def rows_for(self, rank: int) -> slice:
        try:
            return self.rows[rank]
        except KeyError:
            raise CoordinationError(f"rank {rank} owns no band in this layout") from None

    def first_row(self, rank: int) -> int:
        return self.rows_for(rank).start


class FrameAssembler:
    """Frame buffer the coordinator reuses for every frame of the sweep.

    ``start_frame`` forgets which bands arrived; the frame may only be written
    once ``is_complete`` says every row was overwritten for this frame.
    """

    def __init__(self, layout: BandLayout):
        self.layout = layout
        self.frame = np.zeros((layout.height, layout.width, 3), dtype=np.uint8)
        self.received = set()

    def start_frame(self) -> None:
        self.received.clear()

    def target(self, rank: int) -> np.ndarray:
        """Slice of the frame buffer that ``rank``'s band is received into."""
        rows = self.layout.rows_for(rank)
        if rank in self.received:
            raise CoordinationError(f"rank {rank} sent two bands for the same frame")
        return self.frame[rows]

    def mark_received(self, rank: int) -> None:
        self.received.add(rank)

    def place(self, rank: int, band: np.ndarray) -> None:
        target = self.target(rank)
        if band.shape != target.shape:
            raise CoordinationError(
                f"band from rank {rank} has shape {band.shape}, expected {target.shape}")
        target[...] = band
        self.mark_received(rank)

    def is_complete(self) -> bool:
        return len(self.received) == self.layout.worker_count
