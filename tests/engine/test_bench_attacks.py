from __future__ import annotations

from bitchess.engine.position import Position
from scripts.bench_attacks import bench


def test_bench_leaves_attack_maps_unchanged() -> None:
    pos = Position.startpos()
    before = pos.copy()
    assert bench(pos, 3) >= 0.0
    assert pos == before
