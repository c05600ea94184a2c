import random
import unittest

from facturago.services import columns as column_ops
from facturago.services.configuration import default_columns


class TestMove(unittest.TestCase):
    def setUp(self):
        self.columns = default_columns()

    def ids(self, columns):
        return [column.id for column in columns]

    def test_move_up(self):
        moved = column_ops.move(self.columns, 2, "up")
        self.assertEqual(self.ids(moved)[:3], ["reference", "quantity", "name"])
        self.assertEqual([column.order for column in moved], [1, 2, 3, 4, 5, 6])

    def test_move_down(self):
        moved = column_ops.move(self.columns, 0, "down")
        self.assertEqual(self.ids(moved)[:2], ["name", "reference"])
        self.assertEqual([column.order for column in moved], list(range(1, len(moved) + 1)))

    def test_boundary_moves_are_noops(self):
        first = column_ops.move(self.columns, 0, "up")
        last = column_ops.move(self.columns, len(self.columns) - 1, "down")
        for result in (first, last):
            self.assertEqual([c.model_dump() for c in result], [c.model_dump() for c in self.columns])

    def test_orders_dense_after_chained_moves(self):
        rng = random.Random(20260117)
        columns = self.columns
        for _ in range(200):
            columns = column_ops.move(columns, rng.randrange(len(columns)), rng.choice(["up", "down"]))
        self.assertEqual(sorted(column.order for column in columns), list(range(1, len(columns) + 1)))
        self.assertEqual(sorted(self.ids(columns)), sorted(self.ids(self.columns)))

    def test_ids_preserved(self):
        moved = column_ops.move(self.columns, 3, "down")
        self.assertEqual(sorted(self.ids(moved)), sorted(self.ids(self.columns)))

    def test_input_untouched(self):
        column_ops.move(self.columns, 1, "up")
        self.assertEqual(self.ids(self.columns)[:2], ["reference", "name"])
        self.assertEqual(self.columns[1].order, 1)

    def test_bad_arguments(self):
        with self.assertRaises(ValueError):
            column_ops.move(self.columns, 1, "left")
        with self.assertRaises(IndexError):
            column_ops.move(self.columns, 6, "up")


class TestToggleAndRelabel(unittest.TestCase):
    def test_toggle(self):
        columns = column_ops.toggle_visibility(default_columns(), "reference")
        self.assertTrue(columns[0].visible)
        self.assertFalse(column_ops.toggle_visibility(columns, "reference")[0].visible)

    def test_relabel_hidden_column(self):
        columns = column_ops.relabel(default_columns(), "reference", "Code")
        self.assertEqual(columns[0].label, "Code")
        self.assertFalse(columns[0].visible)

    def test_unknown_id_changes_nothing(self):
        columns = default_columns()
        result = column_ops.toggle_visibility(columns, "discount")
        self.assertEqual([c.model_dump() for c in result], [c.model_dump() for c in columns])

    def test_visible_columns(self):
        visible = column_ops.visible_columns(default_columns())
        self.assertEqual([c.id for c in visible], ["name", "quantity", "unitPrice", "vat", "total"])
