from dataclasses import dataclass, replace

from .errors import ConfigurationError


@dataclass(frozen=True)
class RenderConfig:
    """Constants of a sweep: frame size, viewport, iteration ceiling and exponent range."""
    width:          int   = 1920
    height:         int   = 1080
    real_min:       float = -2.0
    real_max:       float = 1.5
    imag_min:       float = -1.0
    imag_max:       float = 1.0
    escape_radius:  float = 20.0
    max_iterations: int   = 8000
    min_power:      float = 1.0
    max_power:      float = 10.0
    power_step:     float = 0.01
    output_dir:     str   = "output"

    @property
    def scale_x(self) -> float:
        return (self.real_max - self.real_min) / self.width

    @property
    def scale_y(self) -> float:
        return (self.imag_max - self.imag_min) / self.height

    def replace(self, **changes) -> "RenderConfig":
        return replace(self, **changes)

    def band_height(self, worker_count: int) -> int:
        self.validate(worker_count)
        return self.height // worker_count

    def validate(self, worker_count: int) -> None:
        """Reject anything that would make the run compute garbage or hang."""
        if self.max_iterations <= 1:
            raise ConfigurationError(f"max_iterations must be > 1, got {self.max_iterations}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"frame size must be positive, got {self.width}x{self.height}")
        if self.real_max <= self.real_min or self.imag_max <= self.imag_min:
            raise ConfigurationError("viewport bounds are empty or inverted")
        # The smooth count takes log(log|z|) at escape
        if self.escape_radius <= 1:
            raise ConfigurationError(f"escape_radius must be > 1, got {self.escape_radius}")
        if self.min_power < 1:
            raise ConfigurationError(f"min_power must be >= 1, got {self.min_power}")
        if self.max_power < self.min_power:
            raise ConfigurationError(
                f"max_power ({self.max_power}) is below min_power ({self.min_power})")
        if self.power_step <= 0:
            raise ConfigurationError(f"power_step must be positive, got {self.power_step}")
        if worker_count < 1:
            raise ConfigurationError(
                "at least one worker is required: mpiexec -n 2 python -m multibrot")
        # Remainder rows would be dropped from every frame
        if self.height % worker_count != 0:
            raise ConfigurationError(
                f"height {self.height} must be divisible by the number of workers ({worker_count})")
