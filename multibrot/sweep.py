import os
from math import floor
from time import time

from .bands import BandLayout
from .config import RenderConfig
from .errors import FrameWriteError
from .image import frame_path, write_ppm
from .kernel import MultibrotSet
from .palette import Palette
from .protocol import Coordinator, Worker


def frame_count(config: RenderConfig) -> int:
    # Tolerance keeps max_power itself in the sweep despite rounding in the division
    return floor((config.max_power - config.min_power)/config.power_step + 1e-9) + 1


def sweep_powers(config: RenderConfig):
    """Exponents min_power, min_power + step, ... up to max_power inclusive."""
    for k in range(frame_count(config)):
        yield config.min_power + k*config.power_step


def frame_index(power: float, config: RenderConfig) -> int:
    return round((power - config.min_power)/config.power_step)


def run_coordinator(comm, config: RenderConfig, timeout: float = None, verbose: bool = True) -> int:
    layout = BandLayout.for_group_size(config, comm.Get_size())
    coordinator = Coordinator(comm, layout)
    try:
        os.makedirs(config.output_dir, exist_ok=True)
    except OSError as e:
        raise FrameWriteError(config.output_dir, e) from e

    written = 0
    for power in sweep_powers(config):
        deb = time()
        frame = coordinator.render_frame(power, timeout)
        fin = time()
        index = frame_index(power, config)
        path = frame_path(config.output_dir, index)
        write_ppm(frame, path)
        written += 1
        if verbose:
            print(f"Frame {index:04d} (power={power:.2f}): computed in {fin-deb:.4f} s, written to {path}",
                  flush=True)
    return written


def run_worker(comm, config: RenderConfig, palette: Palette) -> int:
    layout = BandLayout.for_group_size(config, comm.Get_size())
    worker = Worker(comm, layout, MultibrotSet(config, palette))
    served = 0
    for _ in sweep_powers(config):
        worker.serve_frame()
        served += 1
    return served
