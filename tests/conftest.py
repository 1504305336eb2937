import pytest

from multibrot import RenderConfig, make_palette


@pytest.fixture
def small_config(tmp_path):
    """A 24x12 frame with a low ceiling, sweeping three exponents."""
    return RenderConfig(width=24, height=12, max_iterations=60,
                        min_power=1.0, max_power=1.2, power_step=0.1,
                        output_dir=str(tmp_path / "output"))


@pytest.fixture
def small_palette(small_config):
    return make_palette(small_config.max_iterations)
