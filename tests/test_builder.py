import pytest

import main
from cells3d.connectivity.builder import (
    available_strategies, find_components, get_strategy,
)
from cells3d.connectivity.builderconfig import ConnectivityConfig, STRATEGY_NAMES
from cells3d.connectivity.flood_fill import FloodFill
from cells3d.connectivity.union_find_sweep import UnionFindSweep


def test_registry_matches_config_names():
    assert set(available_strategies()) == set(STRATEGY_NAMES)


def test_get_strategy():
    assert isinstance(get_strategy("flood_fill"), FloodFill)
    sweep = get_strategy("union_find", ConnectivityConfig(nx=2, ny=2, nz=2, backend="python"))
    assert isinstance(sweep, UnionFindSweep)
    assert sweep.backend == "python"
    with pytest.raises(ValueError):
        get_strategy("watershed")


@pytest.mark.parametrize("kwargs", [
    {"nx": 0}, {"ny": -1}, {"nz": 2.5}, {"probability": 1.2},
    {"strategy": "bfs"}, {"backend": "gpu"},
])
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        ConnectivityConfig(**kwargs)


def test_config_builds_reproducible_grids():
    config = ConnectivityConfig(nx=5, ny=4, nz=3, seed=8, probability=0.4)
    assert config.shape == (5, 4, 3)
    assert (config.make_grid().flat == config.make_grid().flat).all()


@pytest.mark.parametrize("name", STRATEGY_NAMES)
def test_find_components(three_blob_grid, name):
    catalog = find_components(three_blob_grid, strategy=name)
    assert {cid: m.tolist() for cid, m in catalog.items()} == {1: [0, 1, 4], 2: [6], 3: [17, 26]}


def test_find_components_uses_config_strategy(three_blob_grid):
    config = ConnectivityConfig(nx=3, ny=3, nz=3, strategy="flood_fill")
    assert len(find_components(three_blob_grid, config=config)) == 3


@pytest.mark.parametrize("strategy", STRATEGY_NAMES)
def test_harness_run(capsys, strategy):
    config = ConnectivityConfig(nx=6, ny=5, nz=4, strategy=strategy)
    timings, catalog = main.run(config)
    out = capsys.readouterr().out
    assert f"Start {strategy}" in out
    assert "Start get sets" in out
    assert "Time used sum(1, 2):" in out
    assert set(timings) == {"connect", "catalog", "total"}
    assert timings["total"] == pytest.approx(timings["connect"] + timings["catalog"])
    assert catalog.n_cells == config.make_grid().n_occupied


def test_harness_main(capsys):
    assert main.main(["--nx", "4", "--ny", "4", "--nz", "4", "--no-warmup",
                      "--strategy", "union_find", "--backend", "python"]) == 0
    assert "Components:" in capsys.readouterr().out
    assert main.main(["--nx", "4", "--ny", "4", "--nz", "4", "--probability", "2"]) == 2
