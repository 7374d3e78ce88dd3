# tests/test_presentation.py

"""Tests for list presentation: status, sorting, paging and edit state."""

import unittest

from inventory_tracker.ui.presentation import (
    LOW_STOCK_THRESHOLD,
    EditState,
    ListPresentation,
    Pagination,
    SortState,
    StockStatus,
    build_patch,
    low_stock_count,
    parse_count,
    sort_products,
    stock_status,
    total_units,
    validate_form,
)
from tests.fakes import make_product


class TestStockStatus(unittest.TestCase):
    """Derived stock status boundaries."""

    def test_threshold_is_five(self) -> None:
        """The low-stock threshold is fixed at 5."""
        self.assertEqual(LOW_STOCK_THRESHOLD, 5)

    def test_boundaries(self) -> None:
        """0 is out, 1..5 is low, above 5 is in stock."""
        cases = {
            0: StockStatus.OUT_OF_STOCK,
            1: StockStatus.LOW_STOCK,
            5: StockStatus.LOW_STOCK,
            6: StockStatus.IN_STOCK,
            500: StockStatus.IN_STOCK,
        }
        for count, expected in cases.items():
            with self.subTest(count=count):
                self.assertIs(stock_status(count), expected)

    def test_labels(self) -> None:
        """Labels are human-readable."""
        self.assertEqual(StockStatus.LOW_STOCK.label, "low stock")
        self.assertEqual(StockStatus.OUT_OF_STOCK.label, "out of stock")


class TestSorting(unittest.TestCase):
    """SortState toggling and stable ordering."""

    def test_same_field_flips_direction(self) -> None:
        """Re-selecting the active column toggles direction."""
        state = SortState()
        state.toggle("name")
        self.assertFalse(state.ascending)
        state.toggle("name")
        self.assertTrue(state.ascending)

    def test_new_field_resets_to_ascending(self) -> None:
        """Switching column starts ascending again."""
        state = SortState(field="name", ascending=False)
        state.toggle("count")
        self.assertEqual(state.field, "count")
        self.assertTrue(state.ascending)

    def test_unknown_field_rejected(self) -> None:
        """Only name, code and count are sortable."""
        with self.assertRaises(ValueError):
            SortState().toggle("description")

    def test_numeric_sort(self) -> None:
        """count compares numerically, not lexically."""
        products = [
            make_product(1, count=10),
            make_product(2, count=9),
            make_product(3, count=100),
        ]
        ordered = sort_products(products, SortState("count", True))
        self.assertEqual([p.count for p in ordered], [9, 10, 100])
        ordered = sort_products(products, SortState("count", False))
        self.assertEqual([p.count for p in ordered], [100, 10, 9])

    def test_string_sort(self) -> None:
        """Names sort lexically."""
        products = [
            make_product(1, name="pear"),
            make_product(2, name="apple"),
            make_product(3, name="melon"),
        ]
        ordered = sort_products(products, SortState("name", True))
        self.assertEqual(
            [p.name for p in ordered], ["apple", "melon", "pear"]
        )

    def test_stable_for_equal_keys(self) -> None:
        """Equal keys keep input order in both directions."""
        products = [
            make_product(1, count=5),
            make_product(2, count=7),
            make_product(3, count=5),
            make_product(4, count=5),
        ]
        asc = sort_products(products, SortState("count", True))
        self.assertEqual([p.id for p in asc[:3]], [
            products[0].id, products[2].id, products[3].id,
        ])
        desc = sort_products(products, SortState("count", False))
        self.assertEqual([p.id for p in desc[1:]], [
            products[0].id, products[2].id, products[3].id,
        ])

    def test_sort_does_not_mutate_input(self) -> None:
        """The collection passed in keeps its order."""
        products = [make_product(2, name="b"), make_product(1, name="a")]
        sort_products(products, SortState())
        self.assertEqual(products[0].name, "b")


class TestPagination(unittest.TestCase):
    """Page math and clamping."""

    def test_total_pages(self) -> None:
        """ceil(N / K), zero for an empty collection."""
        pager = Pagination(items_per_page=10)
        self.assertEqual(pager.total_pages(0), 0)
        self.assertEqual(pager.total_pages(10), 1)
        self.assertEqual(pager.total_pages(11), 2)
        self.assertEqual(pager.total_pages(25), 3)

    def test_first_and_last_page_slices(self) -> None:
        """Page 1 shows [0, K); the last page holds the remainder."""
        items = [make_product(i) for i in range(23)]
        pager = Pagination(items_per_page=10)
        self.assertEqual(pager.page_slice(items), items[:10])
        pager.go_to(3, len(items))
        self.assertEqual(pager.page_slice(items), items[20:])
        self.assertEqual(pager.window(len(items)), (21, 23))

    def test_navigation_clamps(self) -> None:
        """Pages outside [1, total] clamp to the edges."""
        pager = Pagination(items_per_page=5)
        self.assertEqual(pager.go_to(99, 12), 3)
        self.assertEqual(pager.next_page(12), 3)
        self.assertEqual(pager.go_to(-4, 12), 1)
        self.assertEqual(pager.previous_page(12), 1)
        self.assertEqual(pager.go_to(2, 0), 1)

    def test_page_size_change_resets_page(self) -> None:
        """Changing items per page returns to page 1."""
        pager = Pagination(items_per_page=5, current_page=3)
        pager.set_items_per_page(20)
        self.assertEqual(pager.current_page, 1)
        self.assertEqual(pager.items_per_page, 20)
        with self.assertRaises(ValueError):
            pager.set_items_per_page(0)

    def test_window_empty(self) -> None:
        """No rows means a (0, 0) window."""
        self.assertEqual(Pagination().window(0), (0, 0))


class TestEditState(unittest.TestCase):
    """Full-row and inline-count edit bookkeeping."""

    def test_single_full_row_edit(self) -> None:
        """Starting another full-row edit replaces the first."""
        edit = EditState()
        edit.start_edit("a")
        edit.start_edit("b")
        self.assertEqual(edit.editing_id, "b")
        self.assertEqual(edit.commit_edit(), "b")
        self.assertIsNone(edit.editing_id)

    def test_modes_independent_across_products(self) -> None:
        """Different products may be in different modes at once."""
        edit = EditState()
        edit.start_edit("a")
        edit.start_count_edit("b", 4)
        self.assertEqual(edit.editing_id, "a")
        self.assertEqual(edit.count_editing_id, "b")

    def test_modes_exclusive_per_product(self) -> None:
        """One product cannot be in both modes."""
        edit = EditState()
        edit.start_edit("a")
        edit.start_count_edit("a", 4)
        self.assertIsNone(edit.editing_id)
        edit.start_edit("a")
        self.assertIsNone(edit.count_editing_id)

    def test_enter_commits_count(self) -> None:
        """Enter returns the pending count and clears the state."""
        edit = EditState()
        edit.start_count_edit("a", 4)
        edit.pending_count = 9
        self.assertEqual(edit.handle_count_key("enter"), ("a", 9))
        self.assertIsNone(edit.count_editing_id)

    def test_escape_discards_count(self) -> None:
        """Escape clears the state without a result."""
        edit = EditState()
        edit.start_count_edit("a", 4)
        edit.pending_count = 9
        self.assertIsNone(edit.handle_count_key("escape"))
        self.assertIsNone(edit.count_editing_id)

    def test_other_keys_ignored(self) -> None:
        """Unrelated keys leave the edit running."""
        edit = EditState()
        edit.start_count_edit("a", 4)
        self.assertIsNone(edit.handle_count_key("tab"))
        self.assertEqual(edit.count_editing_id, "a")

    def test_blur_commits(self) -> None:
        """Losing focus commits; a second blur is a no-op."""
        edit = EditState()
        edit.start_count_edit("a", 4)
        self.assertEqual(edit.handle_count_blur(), ("a", 4))
        self.assertIsNone(edit.handle_count_blur())

    def test_non_positive_count_not_committed(self) -> None:
        """Zero or negative inline counts are dropped."""
        edit = EditState()
        edit.start_count_edit("a", 4)
        edit.pending_count = 0
        self.assertIsNone(edit.commit_count_edit())
        self.assertIsNone(edit.count_editing_id)


class TestFormHelpers(unittest.TestCase):
    """Client-side validation and patch building."""

    def test_validate_all_bad(self) -> None:
        """Blank name/code and non-positive count are all reported."""
        errors = validate_form("  ", "", 0)
        self.assertEqual(set(errors), {"name", "code", "count"})

    def test_validate_ok(self) -> None:
        """A complete form has no errors."""
        self.assertEqual(validate_form("Widget", "W-1", 1), {})

    def test_parse_count(self) -> None:
        """Unparseable input counts as zero."""
        self.assertEqual(parse_count(" 12 "), 12)
        self.assertEqual(parse_count(""), 0)
        self.assertEqual(parse_count("abc"), 0)

    def test_build_patch_trims(self) -> None:
        """Strings are trimmed; blank description becomes None."""
        patch = build_patch(" Widget ", " W-1 ", 3, "   ")
        self.assertEqual(patch.name, "Widget")
        self.assertEqual(patch.code, "W-1")
        self.assertIsNone(patch.description)


class TestListPresentation(unittest.TestCase):
    """Derived view and aggregates."""

    def setUp(self) -> None:
        self.products = [
            make_product(i, name=f"item {i:02d}", count=i)
            for i in range(12)
        ]

    def test_aggregates_cover_full_collection(self) -> None:
        """Totals ignore the current page and sort."""
        presentation = ListPresentation()
        presentation.pagination.set_items_per_page(5)
        presentation.sort_by("count")
        presentation.pagination.go_to(3, len(self.products))
        view = presentation.build(self.products)
        self.assertEqual(len(view.rows), 2)
        self.assertEqual(view.total_units, sum(range(12)))
        self.assertEqual(view.total_units, total_units(self.products))
        # counts 0..5 are at or below the threshold
        self.assertEqual(view.low_stock_count, 6)
        self.assertEqual(low_stock_count(self.products), 6)

    def test_rows_carry_status(self) -> None:
        """Each row pairs a product with its status."""
        presentation = ListPresentation()
        presentation.sort_by("count")
        view = presentation.build(self.products)
        self.assertIs(view.rows[0].status, StockStatus.OUT_OF_STOCK)
        self.assertIs(view.rows[1].status, StockStatus.LOW_STOCK)
        self.assertIs(view.rows[9].status, StockStatus.IN_STOCK)

    def test_page_clamped_after_shrink(self) -> None:
        """A page beyond the end snaps back when items disappear."""
        presentation = ListPresentation()
        presentation.pagination.go_to(2, len(self.products))
        view = presentation.build(self.products[:4])
        self.assertEqual(view.current_page, 1)
        self.assertEqual((view.first_shown, view.last_shown), (1, 4))

    def test_default_sort_is_name_ascending(self) -> None:
        """The initial view sorts by name."""
        view = ListPresentation().build(list(reversed(self.products)))
        self.assertEqual(view.rows[0].product.name, "item 00")
        self.assertEqual(view.total_pages, 2)


if __name__ == "__main__":
    unittest.main()
