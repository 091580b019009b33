"""
Tests for the layout engine
"""

import pytest

from core.enums import Orientation
from core.exceptions import InvalidImageDimensions
from core.layout import compute_layout

SIZE_PAIRS = [
    ((800, 600), (400, 300)),
    ((400, 300), (800, 600)),
    ((1920, 1080), (1080, 1920)),
    ((333, 777), (1001, 250)),
    ((1, 1), (1, 1)),
    ((4000, 3000), (640, 480)),
    ((17, 5), (5, 17)),
]


class TestHorizontalLayout:
    """Side-by-side layout"""

    def test_reference_pair(self):
        """800x600 + 400x300 -> 815x300"""
        plan = compute_layout((800, 600), (400, 300), Orientation.HORIZONTAL)

        assert plan.canvas.width == 815
        assert plan.canvas.height == 300
        assert (plan.before.x, plan.before.y) == (0, 0)
        assert (plan.before.width, plan.before.height) == (400, 300)
        assert (plan.after.x, plan.after.y) == (415, 0)
        assert (plan.after.width, plan.after.height) == (400, 300)

    @pytest.mark.parametrize("before_size,after_size", SIZE_PAIRS)
    def test_common_height(self, before_size, after_size):
        """Both placed heights equal the smaller source height"""
        plan = compute_layout(before_size, after_size, Orientation.HORIZONTAL)
        common = min(before_size[1], after_size[1])

        assert plan.before.height == common
        assert plan.after.height == common
        assert plan.canvas.height == common

    @pytest.mark.parametrize("before_size,after_size", SIZE_PAIRS)
    def test_canvas_width_is_sum_plus_separator(self, before_size, after_size):
        """Canvas width = placed widths + 15"""
        plan = compute_layout(before_size, after_size, Orientation.HORIZONTAL)

        assert plan.canvas.width == plan.before.width + plan.after.width + 15
        assert plan.after.x == plan.before.x2 + 15

    def test_width_is_floored(self):
        """Placed width uses floor division"""
        plan = compute_layout((333, 777), (1001, 250), Orientation.HORIZONTAL)

        assert plan.before.width == 333 * 250 // 777
        assert plan.after.width == 1001

    def test_no_upscaling(self):
        """Placed sizes never exceed source sizes"""
        plan = compute_layout((4000, 3000), (640, 480), Orientation.HORIZONTAL)

        assert plan.before.width <= 4000
        assert plan.after.width == 640
        assert plan.after.height == 480

    def test_separator_region(self):
        """Separator band lies between the two images"""
        plan = compute_layout((800, 600), (400, 300))
        band = plan.separator_region

        assert (band.x, band.width) == (400, 15)
        assert band.height == 300
        assert not band.intersects(plan.before)
        assert not band.intersects(plan.after)

    def test_cross_dimension_is_height(self):
        plan = compute_layout((800, 600), (400, 300))
        assert plan.cross_dimension == 300


class TestVerticalLayout:
    """Stacked layout"""

    def test_reference_pair(self):
        """800x600 + 400x300 -> 400x615"""
        plan = compute_layout((800, 600), (400, 300), Orientation.VERTICAL)

        assert plan.canvas.width == 400
        assert plan.canvas.height == 615
        assert (plan.before.width, plan.before.height) == (400, 300)
        assert (plan.after.x, plan.after.y) == (0, 315)
        assert (plan.after.width, plan.after.height) == (400, 300)

    @pytest.mark.parametrize("before_size,after_size", SIZE_PAIRS)
    def test_common_width(self, before_size, after_size):
        """Both placed widths equal the smaller source width"""
        plan = compute_layout(before_size, after_size, Orientation.VERTICAL)
        common = min(before_size[0], after_size[0])

        assert plan.before.width == common
        assert plan.after.width == common
        assert plan.canvas.width == common

    @pytest.mark.parametrize("before_size,after_size", SIZE_PAIRS)
    def test_canvas_height_is_sum_plus_separator(self, before_size, after_size):
        """Canvas height = placed heights + 15"""
        plan = compute_layout(before_size, after_size, Orientation.VERTICAL)

        assert plan.canvas.height == plan.before.height + plan.after.height + 15

    def test_accepts_string_orientation(self):
        plan = compute_layout((800, 600), (400, 300), "vertical")
        assert plan.orientation == Orientation.VERTICAL

    def test_cross_dimension_is_width(self):
        plan = compute_layout((800, 600), (400, 300), Orientation.VERTICAL)
        assert plan.cross_dimension == 400


class TestLayoutValidation:
    """Invalid dimensions fail fast"""

    @pytest.mark.parametrize(
        "before_size,after_size",
        [
            ((0, 600), (400, 300)),
            ((800, 0), (400, 300)),
            ((800, 600), (0, 0)),
            ((-10, 600), (400, 300)),
        ],
    )
    @pytest.mark.parametrize("orientation", list(Orientation))
    def test_non_positive_dimensions(self, before_size, after_size, orientation):
        """Zero or negative sizes raise InvalidImageDimensions"""
        with pytest.raises(InvalidImageDimensions):
            compute_layout(before_size, after_size, orientation)

    def test_error_names_source(self):
        with pytest.raises(InvalidImageDimensions) as exc_info:
            compute_layout((800, 600), (0, 300))
        assert exc_info.value.detail["source"] == "after"

    def test_placed_width_floors_to_zero(self):
        """A sliver image that would be placed 0px wide is rejected"""
        with pytest.raises(InvalidImageDimensions):
            compute_layout((1, 1000), (1000, 10), Orientation.HORIZONTAL)

    def test_placed_height_floors_to_zero(self):
        with pytest.raises(InvalidImageDimensions):
            compute_layout((1000, 1), (10, 1000), Orientation.VERTICAL)

    def test_custom_separator(self):
        plan = compute_layout((800, 600), (400, 300), separator=0)
        assert plan.canvas.width == 800
