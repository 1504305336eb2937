import os
import threading

import numpy as np
import pytest

pytest.importorskip("mpi4py.MPI")

from loopback import LoopbackGroup  # noqa: E402

from multibrot import FrameWriteError, MultibrotSet, RenderConfig  # noqa: E402
from multibrot.bands import BandLayout  # noqa: E402
from multibrot.image import frame_path  # noqa: E402
from multibrot.sweep import (frame_count, frame_index, run_coordinator,  # noqa: E402
                             run_worker, sweep_powers)


def test_default_sweep_is_inclusive():
    config = RenderConfig()
    powers = list(sweep_powers(config))
    assert frame_count(config) == len(powers) == 901
    assert powers[0] == 1.0
    assert powers[-1] == pytest.approx(10.0)


def test_frame_indices_count_up_from_zero():
    config = RenderConfig()
    indices = [frame_index(power, config) for power in sweep_powers(config)]
    assert indices == list(range(901))
    assert frame_index(config.min_power, config) == 0
    assert frame_index(config.min_power + config.power_step, config) == 1


def test_single_frame_sweep():
    config = RenderConfig(min_power=2.0, max_power=2.0)
    assert list(sweep_powers(config)) == [2.0]


def run_group(config, palette, workers):
    group = LoopbackGroup(workers + 1)
    served = {}

    def worker_main(rank):
        served[rank] = run_worker(group.comm(rank), config, palette)

    threads = [threading.Thread(target=worker_main, args=(rank,), daemon=True)
               for rank in range(1, workers + 1)]
    for thread in threads:
        thread.start()
    try:
        return run_coordinator(group.comm(0), config, verbose=False), served
    finally:
        for thread in threads:
            thread.join(timeout=60)


@pytest.mark.parametrize("workers", [1, 3, 4])
def test_sweep_writes_one_file_per_power(small_config, small_palette, workers):
    written, served = run_group(small_config, small_palette, workers)
    assert written == 3
    assert served == {rank: 3 for rank in range(1, workers + 1)}
    assert sorted(os.listdir(small_config.output_dir)) == ["0000.ppm", "0001.ppm", "0002.ppm"]

    header = b"P6\n24 12\n255\n"
    layout = BandLayout(small_config, workers)
    multibrot = MultibrotSet(small_config, small_palette)
    for power in sweep_powers(small_config):
        with open(frame_path(small_config.output_dir, frame_index(power, small_config)), "rb") as f:
            data = f.read()
        assert data[:len(header)] == header
        pixels = np.frombuffer(data[len(header):], dtype=np.uint8)
        assert pixels.size == 24 * 12 * 3
        pixels = pixels.reshape(12, 24, 3)
        for rank in layout.worker_ranks:
            expected = multibrot.render_band(layout.first_row(rank), layout.band_height, power)
            assert np.array_equal(pixels[layout.rows_for(rank)], expected)


def test_consecutive_frames_differ(small_config, small_palette):
    run_group(small_config, small_palette, 2)
    with open(frame_path(small_config.output_dir, 0), "rb") as f:
        first = f.read()
    with open(frame_path(small_config.output_dir, 1), "rb") as f:
        second = f.read()
    assert len(first) == len(second)
    assert first != second


def test_unwritable_output_directory_is_fatal(small_config, tmp_path):
    blocker = tmp_path / "not_a_directory"
    blocker.write_text("")
    config = small_config.replace(output_dir=str(blocker / "output"))
    # Fails before any power is broadcast
    with pytest.raises(FrameWriteError):
        run_coordinator(LoopbackGroup(2).comm(0), config, verbose=False)
