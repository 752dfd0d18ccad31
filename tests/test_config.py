import pytest

from pathviz import ConfigError, RunConfig


def test_defaults():
    cfg = RunConfig()
    assert cfg.algorithm == "astar"
    assert cfg.delay_sec == 0
    assert cfg.weight == 5


@pytest.mark.parametrize("changes", [
    {"algorithm": "jps"},
    {"delay_ms": -1},
    {"obstacle_percent": 101},
    {"weight": 0},
    {"weight": 11},
    {"dfs_order": "sideways"},
    {"greedy_priority": "g-h"},
])
def test_invalid_values(changes):
    with pytest.raises(ConfigError):
        RunConfig(**changes)


def test_replace_validates():
    cfg = RunConfig().replace(algorithm="bfs", delay_ms=20)
    assert cfg.algorithm == "bfs"
    assert cfg.delay_sec == pytest.approx(0.02)
    with pytest.raises(ValueError):
        cfg.replace(weight=99)


def test_speed_slider_mapping():
    assert RunConfig.speed_to_delay(100) == 1.0
    assert RunConfig.speed_to_delay(80) == 21.0
    assert RunConfig.speed_to_delay(1) == 100.0
    with pytest.raises(ConfigError):
        RunConfig.speed_to_delay(0)
