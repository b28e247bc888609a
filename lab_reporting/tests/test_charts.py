from __future__ import annotations

import math

import pytest

from lab_reporting.charts import bar, line, pie
from lab_reporting.charts.common import NO_DATA_TEXT
from lab_reporting.layout import ChartRegion
from lab_reporting.styles import BAR_SERIES, PALETTE, PIE_PALETTE


REGION = ChartRegion(x=20, y=50, width=170, height=60, title="Chart")


def _drawn(surface):
    return [(op.name, op.args.get("fill")) for op in surface.drawing_ops()]


# --- bar chart ---


@pytest.mark.parametrize(
    "records",
    [
        [],
        [{"month": "Jan", "experiments": 0, "reports": 0, "tasks": 0}],
        [{"month": "Jan"}, {"month": "Feb", "experiments": 0}],
    ],
)
def test_bar_chart_degenerate_input_draws_only_frame_and_placeholder(surface, records):
    bar.draw_bar_chart(surface, records, REGION)

    assert _drawn(surface) == [("text", None), ("rect", False), ("text", None)]
    assert surface.texts() == ["Chart", NO_DATA_TEXT]


def test_bar_heights_scale_to_the_largest_value_across_series():
    records = [
        {"month": "Jan", "experiments": 4, "reports": 2, "tasks": 8},
        {"month": "Feb", "experiments": 1, "reports": 0, "tasks": 2},
    ]
    plot = bar.plot_area(REGION)
    peak = bar.max_value(records)
    bars = bar.layout_bars(records, plot, peak)

    assert peak == 8
    # zero values get no bar
    assert len(bars) == 5
    tallest = max(bars, key=lambda b: b.height)
    assert tallest.series.key == "tasks"
    assert tallest.height == pytest.approx(plot.height)
    assert tallest.y == pytest.approx(plot.top)

    jan_experiments = next(b for b in bars if b.index == 0 and b.series.key == "experiments")
    assert jan_experiments.height == pytest.approx(plot.height / 2)
    for b in bars:
        assert b.y + b.height == pytest.approx(plot.bottom)


def test_bar_groups_stay_centered_inside_their_slot():
    records = [{"month": m, "experiments": 3, "reports": 3, "tasks": 3} for m in ("Jan", "Feb", "Mar")]
    plot = bar.plot_area(REGION)
    bars = bar.layout_bars(records, plot, 3)
    slot = plot.width / 3

    for index in range(3):
        group = sorted((b for b in bars if b.index == index), key=lambda b: b.x)
        assert [b.series.key for b in group] == [s.key for s in BAR_SERIES]
        slot_left = plot.left + index * slot
        left_gap = group[0].x - slot_left
        right_gap = slot_left + slot - (group[-1].x + group[-1].width)
        assert left_gap == pytest.approx(right_gap)
        for a, b in zip(group, group[1:]):
            assert b.x > a.x + a.width


def test_bar_chart_y_labels_use_quarters_of_max():
    assert bar.y_labels(10) == ["10", "8", "5", "3", "0"]
    assert bar.y_labels(3) == ["3", "2", "2", "1", "0"]


def test_bar_legend_sits_outside_plot_for_any_record_count(surface):
    records = [{"month": f"M{i}", "experiments": i + 1, "reports": 1, "tasks": 2} for i in range(24)]
    bar.draw_bar_chart(surface, records, REGION)

    plot = bar.plot_area(REGION)
    swatches = [op for op in surface.named("rect") if op.args["fill"] and op.args["w"] == bar.SWATCH_W]
    assert len(swatches) == 3
    for op in swatches:
        assert op.args["x"] > plot.right
        assert op.args["x"] + op.args["w"] <= REGION.right


def test_bar_colors_follow_series_role(surface):
    records = [{"month": "Jan", "experiments": 0, "reports": 5, "tasks": 0}]
    bar.draw_bar_chart(surface, records, REGION)

    fills = [op.args["color"] for op in surface.named("set_fill_color")]
    # one data bar (reports) then three legend swatches
    assert fills[0] == BAR_SERIES[1].color
    assert fills[1:] == [s.color for s in BAR_SERIES]


# --- pie chart ---


def test_slice_angles_cover_full_circle_without_gaps():
    items = [{"name": n, "value": v} for n, v in [("a", 1), ("b", 2), ("c", 3.5), ("d", 0.01), ("e", 7)]]
    slices = pie.build_slices(items)

    assert sum(s.sweep for s in slices) == pytest.approx(2 * math.pi, abs=1e-6)
    assert slices[0].start == pie.START_ANGLE
    for a, b in zip(slices, slices[1:]):
        assert b.start == pytest.approx(a.start + a.sweep)


@pytest.mark.parametrize(
    "values",
    [[1, 1, 1], [5], [2, 3, 7, 11, 13, 17, 19], [0.4, 0.4, 0.2], [1] * 9],
)
def test_legend_percentages_sum_to_hundred(values):
    slices = pie.build_slices([{"name": str(i), "value": v} for i, v in enumerate(values)])
    assert sum(s.percent for s in slices) == pytest.approx(100.0, abs=0.2)


def test_fan_sampling_density_grows_with_slice_size():
    assert pie.arc_steps(0.01) == pie.MIN_STEPS
    assert pie.arc_steps(math.pi) == 31
    assert pie.arc_steps(2 * math.pi) == 62

    triangles = pie.fan_triangles(100, 100, 30, 0.0, math.pi / 2)
    assert len(triangles) == pie.arc_steps(math.pi / 2)
    # first edge starts at the top of the circle, last ends at 3 o'clock
    assert triangles[0][2:4] == pytest.approx((100, 70))
    assert triangles[-1][4:6] == pytest.approx((130, 100))
    for tri in triangles:
        assert tri[0:2] == (100, 100)


def test_pie_chart_degenerate_input_draws_placeholder(surface):
    pie.draw_pie_chart(surface, [], 80, 100, 30, "Status")
    pie.draw_pie_chart(surface, [{"name": "idle", "value": 0}], 80, 100, 30, "Status")

    assert not surface.named("triangle")
    assert surface.texts() == ["Status", NO_DATA_TEXT, "Status", NO_DATA_TEXT]


def test_pie_palette_cycles_by_slice_index(surface):
    items = [{"name": f"s{i}", "value": 1} for i in range(6)]
    pie.draw_pie_chart(surface, items, 80, 100, 30, "Status")

    slice_fills = []
    for op in surface.ops:
        if op.name == "set_fill_color":
            current = op.args["color"]
        elif op.name == "triangle" and (not slice_fills or slice_fills[-1] is not current):
            slice_fills.append(current)
    assert slice_fills == [PIE_PALETTE[i % len(PIE_PALETTE)] for i in range(6)]


def test_pie_legend_rows_do_not_overlap(surface):
    items = [{"name": "done", "value": 3}, {"name": "running", "value": 1}, {"name": "failed", "value": 1}]
    pie.draw_pie_chart(surface, items, 80, 100, 30, "Status")

    legend = [op for op in surface.named("text") if op.args["value"] != "Status"]
    assert [op.args["value"] for op in legend] == [
        "done: 3 (60.0%)",
        "running: 1 (20.0%)",
        "failed: 1 (20.0%)",
    ]
    ys = [op.args["y"] for op in legend]
    assert all(b - a >= pie.LEGEND_ROW for a, b in zip(ys, ys[1:]))
    assert ys[0] > 100 + 30
    assert ys[-1] <= 100 - 30 - pie.TITLE_SPACE + pie.pie_chart_height(3, 30)


def test_pie_without_legend_returns_slices_for_the_caller(surface):
    items = [{"name": "done", "value": 3}, {"name": "running", "value": 1}]
    slices = pie.draw_pie_chart(surface, items, 80, 100, 30, "Status", legend=False)

    assert [s.name for s in slices] == ["done", "running"]
    assert surface.texts() == ["Status"]

    pie.draw_legend_row(surface, slices[1], 20, 140)
    swatch = surface.named("rect")[-1]
    label = surface.named("text")[-1]
    assert label.args["value"] == "running: 1 (25.0%)"
    assert 140 <= swatch.args["y"] and swatch.args["y"] + swatch.args["h"] <= 140 + pie.LEGEND_ROW
    assert label.args["y"] <= 140 + pie.LEGEND_ROW


# --- line chart ---


def test_single_point_sits_at_left_edge_mid_height(surface):
    line.draw_line_chart(surface, [{"week": "W1", "productivity": 10}], REGION)

    plot = line.plot_area(REGION)
    markers = surface.named("circle")
    assert len(markers) == 1
    assert markers[0].args["cx"] == pytest.approx(plot.left)
    assert markers[0].args["cy"] == pytest.approx(plot.top + plot.height / 2)
    # no connecting segments beyond grid and axes
    series_lines = [op for op in surface.named("line") if op.args["y1"] != op.args["y2"] and op.args["x1"] != op.args["x2"]]
    assert series_lines == []


def test_line_positions_span_plot_and_map_extremes():
    plot = line.plot_area(REGION)
    positions = line.point_positions([10, 30, 20], plot)

    assert positions[0] == pytest.approx((plot.left, plot.bottom))
    assert positions[1] == pytest.approx((plot.left + plot.width / 2, plot.top))
    assert positions[2] == pytest.approx((plot.right, plot.top + plot.height / 2))


def test_flat_series_uses_unit_range():
    lo, span = line.value_range([7, 7, 7])
    assert span == 1.0
    assert lo == 6.5
    assert line.y_labels([7, 7]) == ["8", "7", "7", "7", "7"]
    assert line.y_labels([0, 40]) == ["40", "30", "20", "10", "0"]


def test_line_chart_draws_grid_before_series_and_marks_every_point(surface):
    points = [{"week": f"W{i}", "productivity": v} for i, v in enumerate([5, 9, 4, 12])]
    line.draw_line_chart(surface, points, REGION)

    names = [op.name for op in surface.drawing_ops()]
    first_marker = names.index("circle")
    colors_before_markers = [op.args["color"] for op in surface.ops[: surface.ops.index(surface.named("circle")[0])] if op.name == "set_stroke_color"]
    assert colors_before_markers.index(PALETTE.grid) < colors_before_markers.index(PALETTE.line_series)
    assert names.count("circle") == 4
    assert all(n != "line" for n in names[first_marker:])
    assert [t for t in surface.texts() if t.startswith("W")] == ["W0", "W1", "W2", "W3"]


def test_line_chart_empty_input_draws_placeholder(surface):
    line.draw_line_chart(surface, [], REGION)
    assert surface.texts() == ["Chart", NO_DATA_TEXT]
    assert not surface.named("circle")
