import pytest

from multibrot import ConfigurationError, RenderConfig


def test_defaults_match_the_batch_job():
    config = RenderConfig()
    assert (config.width, config.height) == (1920, 1080)
    assert (config.real_min, config.real_max, config.imag_min, config.imag_max) == (-2.0, 1.5, -1.0, 1.0)
    assert config.escape_radius == 20.0
    assert config.max_iterations == 8000
    assert (config.min_power, config.max_power, config.power_step) == (1.0, 10.0, 0.01)
    assert config.output_dir == "output"


def test_config_is_immutable():
    config = RenderConfig()
    with pytest.raises(AttributeError):
        config.width = 10
    assert config.replace(width=10).width == 10
    assert config.width == 1920


@pytest.mark.parametrize("workers", [1, 2, 3, 4, 5, 6, 8, 10, 12, 1080])
def test_divisible_worker_counts_are_accepted(workers):
    config = RenderConfig()
    config.validate(workers)
    assert config.band_height(workers) * workers == config.height


@pytest.mark.parametrize("workers", [0, 7, 11, 1081])
def test_incompatible_worker_counts_are_rejected(workers):
    with pytest.raises(ConfigurationError):
        RenderConfig().validate(workers)


@pytest.mark.parametrize("changes", [
    {"max_iterations": 1},
    {"max_iterations": 0},
    {"width": 0},
    {"height": -4},
    {"real_min": 2.0},
    {"imag_max": -1.0},
    {"escape_radius": 1.0},
    {"min_power": 0.5},
    {"max_power": 0.9},
    {"power_step": 0.0},
])
def test_invalid_constants_are_rejected(changes):
    with pytest.raises(ConfigurationError):
        RenderConfig().replace(**changes).validate(1)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        RenderConfig(max_iterations=1).validate(1)
