import pytest

from constants import DEFAULT_ANIMATION_COLORS
from glyphs import DIGIT_FONT, filled_cells
from layout import build_ball_field, compute_layout, digit_positions, particle_radius


def test_every_glyph_is_five_by_seven():
    assert sorted(DIGIT_FONT) == list("0123456789")
    for pattern in DIGIT_FONT.values():
        assert len(pattern) == 7
        assert all(len(row) == 5 for row in pattern)


def test_filled_cells_counts():
    assert filled_cells("0") == 16
    assert filled_cells("1") == 10
    assert filled_cells("4") == 14
    assert filled_cells("x") == 0


@pytest.mark.parametrize("code", [0, 7, 200, 404, 418, 503, 1234567890])
def test_ball_count_matches_filled_cells(code):
    layout = compute_layout(code, 600, 200)
    assert len(layout.seeds) == sum(filled_cells(d) for d in str(code))


def test_404_has_44_balls():
    assert len(compute_layout(404, 400, 200).seeds) == 44


def test_digit_positions_row_major():
    positions = digit_positions("1", 10, 20, 12)
    # '..#..' is the first row
    assert positions[0] == (34, 20)
    # '.###.' is the last row
    assert positions[-3:] == [(22, 92), (34, 92), (46, 92)]


def test_unknown_digit_yields_nothing():
    assert digit_positions("-", 0, 0, 12) == []


def test_200_on_400_canvas_is_centred_at_full_radius():
    layout = compute_layout(200, 400, 200)
    xs = [x for x, _ in layout.seeds]
    ys = [y for _, y in layout.seeds]

    # Three 60px blocks plus two 15px gaps
    assert min(xs) == pytest.approx(95.0)
    assert 400 - (min(xs) + 210) == pytest.approx(min(xs))
    assert max(xs) == pytest.approx(95 + 150 + 48)
    assert min(ys) == pytest.approx(58.0)
    assert max(ys) == pytest.approx(58.0 + 72)
    assert layout.radius == 8


def test_503_on_narrow_canvas_floors_radius():
    assert compute_layout(503, 200, 200).radius == pytest.approx(4.0)
    assert particle_radius(100) == 4
    assert particle_radius(300) == pytest.approx(6.0)
    assert particle_radius(1200) == 8


@pytest.mark.parametrize("code", [200, 404, 500, 503])
def test_home_positions_inside_canvas(code):
    field = build_ball_field(code, 400, 200, DEFAULT_ANIMATION_COLORS)
    assert (field.origins[:, 0] >= 0).all() and (field.origins[:, 0] <= 400).all()
    assert (field.origins[:, 1] >= 0).all() and (field.origins[:, 1] <= 200).all()


def test_field_starts_at_rest_on_home_positions():
    field = build_ball_field(404, 600, 200, DEFAULT_ANIMATION_COLORS)
    assert (field.positions == field.origins).all()
    assert (field.velocities == 0).all()


def test_colors_cycle_per_ball():
    palette = ["a", "b", "c", "d", "e"]
    field = build_ball_field(11, 600, 200, palette)
    assert field.colors[:7] == ["a", "b", "c", "d", "e", "a", "b"]
    assert field.colors[10] == "a"


def test_negative_code_rejected():
    with pytest.raises(ValueError):
        compute_layout(-1, 400, 200)


def test_empty_palette_rejected():
    with pytest.raises(ValueError):
        build_ball_field(404, 400, 200, [])
