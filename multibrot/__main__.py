# Usage: mpiexec -n <workers+1> python -m multibrot [output_dir]
import sys
from time import time

from mpi4py import MPI

from .config import RenderConfig
from .errors import ConfigurationError, MultibrotError
from .palette import make_palette
from .sweep import frame_count, run_coordinator, run_worker


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    comm = MPI.COMM_WORLD
    rank = comm.Get_rank()
    size = comm.Get_size()

    config = RenderConfig() if len(argv) == 0 else RenderConfig(output_dir=argv[0])

    # Every rank validates the same constants, so only rank 0 reports
    try:
        config.validate(size - 1)
        palette = make_palette(config.max_iterations)
    except ConfigurationError as e:
        if rank == 0:
            print(f"Error: {e}", flush=True)
        comm.Abort(1)
        return 1

    try:
        if rank == 0:
            print(f"Multibrot sweep with {size} processes ({size-1} workers), "
                  f"{config.width}x{config.height}, {frame_count(config)} frames.", flush=True)
            deb = time()
            written = run_coordinator(comm, config)
            fin = time()
            print(f"Total time for {written} frames: {fin-deb:.4f} s", flush=True)
        else:
            run_worker(comm, config, palette)
    except MultibrotError as e:
        print(f"Error on rank {rank}: {e}", flush=True)
        comm.Abort(1)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
