"""Per-frame exchange between the coordinator (rank 0) and the workers.

1. the coordinator posts the exponent to every worker without waiting;
2. each worker blocks on it, renders its band and sends it back in one message;
3. the coordinator takes the bands in arrival order and places each one by
   its sender's rank.

A worker that never answers stalls ``collect`` forever unless a timeout is
given; there is no retry.
"""
from time import sleep, time

import numpy as np
from mpi4py import MPI

from .bands import COORDINATOR_RANK, BandLayout, FrameAssembler
from .errors import CoordinationTimeout
from .kernel import MultibrotSet

TAG_POWER = 1
TAG_BAND  = 2


class Coordinator:
    def __init__(self, comm, layout: BandLayout, poll_interval: float = 0.001):
        self.comm = comm
        self.layout = layout
        self.assembler = FrameAssembler(layout)
        self.poll_interval = poll_interval
        self.pending = []

    def broadcast_power(self, power: float) -> None:
        self.assembler.start_frame()
        self.pending = [
            self.comm.isend(power, dest=rank, tag=TAG_POWER)
            for rank in self.layout.worker_ranks
        ]

    def collect(self, timeout: float = None) -> np.ndarray:
        """Receive one band from every worker; ``timeout=None`` waits forever."""
        deadline = None if timeout is None else time() + timeout
        status = MPI.Status()
        for _ in self.layout.worker_ranks:
            self.wait_for_band(status, deadline)
            source = status.Get_source()
            self.comm.Recv(self.assembler.target(source), source=source, tag=TAG_BAND)
            self.assembler.mark_received(source)
        for request in self.pending:
            request.wait()
        self.pending = []
        return self.assembler.frame

    def wait_for_band(self, status, deadline) -> None:
        if deadline is None:
            self.comm.Probe(source=MPI.ANY_SOURCE, tag=TAG_BAND, status=status)
            return
        while not self.comm.Iprobe(source=MPI.ANY_SOURCE, tag=TAG_BAND, status=status):
            if time() >= deadline:
                missing = sorted(set(self.layout.worker_ranks) - self.assembler.received)
                raise CoordinationTimeout(f"no band received from ranks {missing} before the timeout")
            sleep(self.poll_interval)

    def render_frame(self, power: float, timeout: float = None) -> np.ndarray:
        self.broadcast_power(power)
        return self.collect(timeout)


class Worker:
    def __init__(self, comm, layout: BandLayout, multibrot: MultibrotSet):
        self.comm = comm
        self.layout = layout
        self.multibrot = multibrot
        self.rank = comm.Get_rank()
        self.first_row = layout.first_row(self.rank)
        self.band = np.empty(layout.band_shape, dtype=np.uint8)

    def serve_frame(self) -> float:
        power = self.comm.recv(source=COORDINATOR_RANK, tag=TAG_POWER)
        self.multibrot.render_band(self.first_row, self.layout.band_height, power, out=self.band)
        self.comm.Send(self.band, dest=COORDINATOR_RANK, tag=TAG_BAND)
        return power
