import math

import numpy as np

from fieldlab.core.growth import GrowthParams, RadialGrowth, Seed, init_seeds, touches_boundary
from fieldlab.utils.image_ops import hsl_color
from fieldlab.utils.surface import Surface

RED = (200, 10, 10)


def _run(growth, frames):
    history = []
    for _ in range(frames):
        growth.update()
        history.append([(s.radius, s.growing) for s in growth.seeds])
    return history


def test_init_seeds():
    seeds = init_seeds(100, 60, np.random.default_rng(5))
    assert len(seeds) == 20
    for s in seeds:
        assert 0 <= s.x < 100 and 0 <= s.y < 60
        assert s.radius == 1.0
        assert s.growing
        assert len(s.color) == 3 and all(0 <= c <= 255 for c in s.color)


def test_touches_boundary():
    assert touches_boundary(Seed(5, 50, 5, RED), 100, 100)
    assert touches_boundary(Seed(50, 96, 4, RED), 100, 100)
    assert not touches_boundary(Seed(50, 50, 10, RED), 100, 100)


def test_single_seed_grows_to_edge():
    g = RadialGrowth(Surface(100, 100), seeds=[Seed(50.0, 50.0, 1.0, RED)])
    history = _run(g, 200)
    radii = [h[0][0] for h in history]
    flags = [h[0][1] for h in history]
    prev = 1.0
    for r, growing in zip(radii, flags):
        if growing:
            assert r == prev + 0.5
        else:
            assert r == prev
        prev = r
    assert g.seeds[0].radius == 50.0
    assert g.done


def test_freeze_is_permanent():
    g = RadialGrowth(Surface(120, 90), rng=np.random.default_rng(42))
    history = _run(g, 150)
    for i in range(len(g.seeds)):
        flags = [frame[i][1] for frame in history]
        radii = [frame[i][0] for frame in history]
        first_frozen = flags.index(False) if False in flags else len(flags)
        assert not any(flags[first_frozen:])
        assert all(b >= a for a, b in zip(radii, radii[1:]))
        assert len(set(radii[first_frozen:])) <= 1


def test_neighbours_stop_on_contact():
    params = GrowthParams()
    seeds = [Seed(30.0, 50.0, 1.0, RED), Seed(70.0, 50.0, 1.0, RED)]
    g = RadialGrowth(Surface(100, 100), params, seeds=seeds)
    _run(g, 100)
    assert g.done
    a, b = g.seeds
    d = math.hypot(a.x - b.x, a.y - b.y)
    reach = a.radius + b.radius + params.gap
    assert reach >= d
    assert reach - d <= params.growth_step


def test_distant_seeds_only_hit_edges():
    seeds = [Seed(25.0, 50.0, 1.0, RED), Seed(175.0, 50.0, 1.0, RED)]
    g = RadialGrowth(Surface(200, 100), seeds=seeds)
    _run(g, 100)
    assert g.done
    assert [s.radius for s in g.seeds] == [25.0, 25.0]


def test_draw_clears_and_fills():
    surface = Surface(50, 50)
    surface.fill_rect((255, 255, 255))
    g = RadialGrowth(surface, seeds=[Seed(25.0, 25.0, 1.0, RED)])
    g.update()
    px = surface.to_array()
    assert tuple(px[24, 24]) == RED + (255,)
    assert tuple(px[2, 2]) == (0, 0, 0, 0)


def test_hsl_color():
    assert hsl_color(0, 100, 50) == (255, 0, 0)
    assert hsl_color(120, 100, 50) == (0, 255, 0)
    assert hsl_color(360, 100, 50) == (255, 0, 0)
