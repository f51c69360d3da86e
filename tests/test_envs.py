#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np
import pytest

from envs.generator import blank_components, generate_environment, has_path, reachable_mask
from envs.grid_io import format_grid, load_grid, parse_cell, parse_grid, save_grid


def test_generate_success_always_has_path():
    for seed in range(20):
        rng = np.random.default_rng(seed)
        env = generate_environment(H=20, W=20, density=0.45, ensure_status="success", rng=rng)
        assert has_path(env.grid, env.start, env.goal, env.blank)


def test_generate_failure_has_no_path():
    for seed in range(20):
        rng = np.random.default_rng(seed)
        env = generate_environment(H=20, W=20, density=0.1, ensure_status="failure", rng=rng)
        assert not has_path(env.grid, env.start, env.goal, env.blank)
        assert env.grid[env.start] == env.blank and env.grid[env.goal] == env.blank


def test_generate_uses_markers_and_records_settings():
    rng = np.random.default_rng(3)
    env = generate_environment(H=15, W=25, density=0.3, blank=5, obstacle=9, rng=rng)
    assert env.shape == (15, 25) and (env.H, env.W) == (15, 25)
    assert set(np.unique(env.grid)) <= {5, 9}
    assert env.occupancy.sum() > 0
    assert env.settings["blank"] == 5 and env.settings["goal"] == (14, 24)


def test_generate_is_reproducible():
    a = generate_environment(H=16, W=16, density=0.3, rng=np.random.default_rng(11))
    b = generate_environment(H=16, W=16, density=0.3, rng=np.random.default_rng(11))
    assert np.array_equal(a.grid, b.grid)


def test_zero_density_is_all_blank():
    env = generate_environment(H=6, W=9, density=0.0, rng=np.random.default_rng(0))
    assert (env.grid == env.blank).all()


def test_generate_rejects_bad_arguments():
    with pytest.raises(ValueError):
        generate_environment(H=8, W=8, ensure_status="sometimes")
    with pytest.raises(ValueError):
        generate_environment(H=8, W=8, start=(0, 0), goal=(0, 1), ensure_status="failure")
    with pytest.raises(ValueError):
        generate_environment(H=8, W=8, goal=(8, 8))


def test_oracle_uses_four_connectivity():
    grid = np.array([[0, 1],
                     [1, 0]])
    # diagonal neighbours are not connected
    assert not has_path(grid, (0, 0), (1, 1), 0)
    labels, num = blank_components(grid, 0)
    assert num == 2 and labels[0, 1] == 0
    mask = reachable_mask(grid, (0, 0), 0)
    assert mask.sum() == 1 and mask[0, 0]
    assert not reachable_mask(grid, (0, 1), 0).any()


# -------------------------------- grid io -------------------------------- #

def test_parse_character_map():
    grid = parse_grid("#! wall with gap\n..#\n..#\n...\n")
    assert grid.tolist() == [[0, 0, 1], [0, 0, 1], [0, 0, 0]]


def test_parse_digit_and_number_maps():
    assert parse_grid("010\n000").tolist() == [[0, 1, 0], [0, 0, 0]]
    assert parse_grid("0, 12, 0\n3 0 0").tolist() == [[0, 12, 0], [3, 0, 0]]


def test_parse_errors_name_the_line():
    with pytest.raises(ValueError, match="line 2"):
        parse_grid("...\n..")
    with pytest.raises(ValueError, match="unknown cell"):
        parse_grid("..?")
    with pytest.raises(ValueError):
        parse_grid("\n\n")


def test_load_grid_formats(tmp_path):
    txt = tmp_path / "g.txt"
    txt.write_text(".#\n..\n", encoding="utf-8")
    assert load_grid(str(txt)).tolist() == [[0, 1], [0, 0]]

    arr = np.array([[0, 2], [0, 0]])
    npy = tmp_path / "g.npy"
    np.save(npy, arr)
    assert np.array_equal(load_grid(str(npy)), arr)

    npz = tmp_path / "g.npz"
    save_grid(str(npz), arr, start=(0, 0), goal=(1, 1))
    assert np.array_equal(load_grid(str(npz)), arr)

    bad = tmp_path / "bad.npz"
    np.savez(bad, other=arr)
    with pytest.raises(ValueError):
        load_grid(str(bad))


def test_format_grid_marks_path_and_endpoints():
    grid = np.array([[0, 1], [0, 0]])
    text = format_grid(grid, 0, path=[(1, 1), (1, 0), (0, 0)], start=(0, 0), goal=(1, 1))
    assert text == "S#\n*G"


def test_parse_cell():
    assert parse_cell("3,4") == (3, 4)
    assert parse_cell(" 0, 12") == (0, 12)
    with pytest.raises(ValueError):
        parse_cell("3")


def test_stamp_respects_moat_and_keep_free():
    from envs.generator import _stamp_mask
    occ = np.zeros((4, 4), dtype=bool)
    occ[0, 0] = True
    one = np.ones((1, 1), dtype=bool)
    assert not _stamp_mask(occ, (1, 1), one, moat=1)      # diagonal touch
    assert _stamp_mask(occ, (0, 2), one, moat=1)
    assert not _stamp_mask(occ, (3, 3), one, moat=0, keep_free=((3, 3),))
    assert not _stamp_mask(occ, (3, 3), np.ones((2, 2), dtype=bool), moat=0)  # off grid
    assert occ.sum() == 2
