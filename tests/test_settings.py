import pytest

from lumenscene.settings import RenderMode, RenderSettings


def test_next_from_every_mode_reaches_six_distinct_modes():
    successors = [
        RenderMode.MATERIALS.next(),
        RenderMode.RADIANCE.next(),
        RenderMode.FORM_FACTORS.next(),
        RenderMode.LIGHTS.next(),
        RenderMode.UNDISTRIBUTED.next(),
        RenderMode.ABSORBED.next(),
    ]
    assert len(successors) == 6
    assert set(successors) == set(RenderMode)


def test_next_cycles_through_all_modes():
    mode = RenderMode.MATERIALS
    seen = []
    for _ in range(len(RenderMode)):
        seen.append(mode)
        mode = mode.next()
    assert mode is RenderMode.MATERIALS
    assert set(seen) == set(RenderMode)


def test_next_order_follows_values():
    assert RenderMode.MATERIALS.next() is RenderMode.RADIANCE
    assert RenderMode.ABSORBED.next() is RenderMode.MATERIALS


def test_settings_defaults_are_independent():
    a = RenderSettings()
    b = RenderSettings()
    a.raytracing_x = 5
    assert b.raytracing_x == 0
    assert a.render_mode is RenderMode.MATERIALS
    assert len(a.proj_mat) == 16


@pytest.mark.parametrize("kwargs", [
    {"width": 0},
    {"height": -1},
    {"sphere_horiz": 7},
    {"sphere_vert": 1},
    {"proj_mat": (0.0,) * 15},
])
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ValueError):
        RenderSettings(**kwargs)