"""Tests for the layout descriptor codec."""

import pytest

from tmuxlayout.errors import ChecksumMismatchError, UnbalancedBracketsError, UnexpectedTokenError
from tmuxlayout.layout.codec import format_checksum, layout_checksum, parse_layout, serialize_layout
from tmuxlayout.layout.tree import from_declarative, normalize_cells
from tmuxlayout.layout.types import Leaf, Orientation, Split, iter_leaves

# Left pane beside a right column of two panes, as tmux prints it for 159x48
THREE_PANE_BODY = "159x48,0,0{79x48,0,0,1,79x48,80,0[79x24,80,0,2,79x23,80,25,3]}"


def with_checksum(body: str) -> str:
    return f"{format_checksum(body)},{body}"


class TestChecksum:
    """Tests for layout_checksum."""

    def test_known_value(self):
        assert layout_checksum("80x24,0,0,5") == 0xB262
        assert format_checksum("80x24,0,0,5") == "b262"

    def test_empty(self):
        assert format_checksum("") == "0000"

    def test_stays_16_bit(self):
        assert 0 <= layout_checksum(THREE_PANE_BODY * 20) <= 0xFFFF


class TestParseLayout:
    """Tests for parse_layout."""

    def test_single_pane(self):
        decoded = parse_layout("b262,80x24,0,0,5")
        assert decoded.checksum == "b262"
        assert decoded.checksum_mismatch is None
        assert decoded.tree == Leaf(width=80, height=24, x=0, y=0, pane_id=5)

    def test_uppercase_checksum(self):
        assert parse_layout("B262,80x24,0,0,5").checksum_mismatch is None

    def test_nested_splits(self):
        decoded = parse_layout(with_checksum(THREE_PANE_BODY))
        tree = decoded.tree
        assert isinstance(tree, Split)
        assert tree.orientation is Orientation.HORIZONTAL
        assert (tree.width, tree.height) == (159, 48)

        left, right = tree.children
        assert left.pane_id == 1
        assert right.orientation is Orientation.VERTICAL
        assert [(c.y, c.height) for c in right.children] == [(0, 24), (25, 23)]
        assert [leaf.pane_id for leaf in iter_leaves(tree)] == [1, 2, 3]

    def test_checksum_mismatch_is_reported(self):
        """A wrong checksum still decodes, with the mismatch attached."""
        decoded = parse_layout("b262,80x24,0,0,6")
        assert decoded.tree.pane_id == 6
        mismatch = decoded.checksum_mismatch
        assert isinstance(mismatch, ChecksumMismatchError)
        assert mismatch.embedded == "b262"
        assert mismatch.computed == format_checksum("80x24,0,0,6")

    def test_checksum_mismatch_strict(self):
        with pytest.raises(ChecksumMismatchError):
            parse_layout("b262,80x24,0,0,6", strict=True)

    def test_missing_closer(self):
        with pytest.raises(UnbalancedBracketsError) as exc_info:
            parse_layout("0000,80x24,0,0{40x24,0,0,1")
        assert exc_info.value.expected == "}"
        assert exc_info.value.found is None

    def test_mismatched_closer(self):
        with pytest.raises(UnbalancedBracketsError) as exc_info:
            parse_layout("0000,80x24,0,0{40x24,0,0,1]")
        assert exc_info.value.found == "]"

    def test_trailing_input(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_layout("b262,80x24,0,0,5x")
        assert exc_info.value.position == 16
        assert exc_info.value.found == "x"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "b26,80x24,0,0,5",
            "zzzz,80x24,0,0,5",
            "b262,80y24,0,0,5",
            "b262,80x24,0,0",
            "b262,80x24,0,0(1)",
            "0000,80x24,0,0{}",
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(UnexpectedTokenError):
            parse_layout(text)

    def test_surrounding_whitespace_ignored(self):
        assert parse_layout("  b262,80x24,0,0,5\n").checksum_mismatch is None


class TestSerializeLayout:
    """Tests for serialize_layout."""

    def test_decoded_layout_reencodes_identically(self):
        text = with_checksum(THREE_PANE_BODY)
        assert serialize_layout(parse_layout(text).tree) == text

    def test_unrealized_leaves_numbered_in_order(self):
        tree = normalize_cells(from_declarative({"left": {"width": 60}, "right": {}}), 80, 24, border=1)
        body = "80x24,0,0{47x24,0,0,0,32x24,48,0,1}"
        assert serialize_layout(tree) == with_checksum(body)

    def test_round_trip_preserves_shape(self, layout_shape):
        tree = normalize_cells(
            from_declarative(
                {
                    "top": {"height": "25%"},
                    "bottom": {"left": {}, "right": {"top": {}, "bottom": {"height": 70}}},
                }
            ),
            200,
            60,
            border=1,
        )
        decoded = parse_layout(serialize_layout(tree))
        assert decoded.checksum_mismatch is None
        assert layout_shape(decoded.tree) == layout_shape(tree)
