import unittest
import unittest.mock

from aioxmpp.testutils import (
    make_listener,
)

import qmldata
import qmldata.query_model as query_model

from qmldata.list_model import ListModel
from qmldata.query_model import QueryModel


class RangeModel(QueryModel):
    def __init__(self, rows, *args, **kwargs):
        self.rows = list(rows)
        self.backend = unittest.mock.Mock()
        self.backend.query.side_effect = \
            lambda offset, count: self.rows[offset:offset + count]
        self.backend.query_count.side_effect = lambda: len(self.rows)
        super().__init__("value", *args, **kwargs)

    def query_count(self):
        return self.backend.query_count()

    def query(self, offset, count):
        return self.backend.query(offset, count)


class TestQueryModel(unittest.TestCase):
    def test_is_list_model(self):
        self.assertTrue(issubclass(QueryModel, ListModel))

    def test_exported_from_package(self):
        self.assertIs(qmldata.QueryModel, QueryModel)

    def test_defaults(self):
        self.assertEqual(query_model.DEFAULT_BLOCK_SIZE, 256)
        self.assertEqual(query_model.DEFAULT_MAX_CACHED_BLOCKS, 4)

        model = RangeModel(range(3))
        self.assertEqual(model.block_size, 256)
        self.assertEqual(model.max_cached_blocks, 4)

    def test_bare_construction_fails_with_not_implemented_error(self):
        with self.assertRaises(NotImplementedError):
            QueryModel()

    def test_query_fails_with_not_implemented_error_by_default(self):
        class Model(QueryModel):
            def query_count(self):
                return 10

        model = Model()
        self.assertEqual(model.count(), 10)
        with self.assertRaises(NotImplementedError):
            model[0]

    def test_rejects_non_positive_block_size(self):
        with self.assertRaises(ValueError):
            RangeModel(range(3), block_size=0)

    def test_rejects_non_positive_max_cached_blocks(self):
        with self.assertRaises(ValueError):
            RangeModel(range(3), max_cached_blocks=0)

    def test_rejects_non_integer_block_size(self):
        with self.assertRaises(TypeError):
            RangeModel(range(3), block_size=2.5)

    def test_rejects_non_integer_max_cached_blocks(self):
        with self.assertRaises(TypeError):
            RangeModel(range(3), max_cached_blocks=1.5)

    def test_count_is_read_on_construction(self):
        model = RangeModel(range(10))
        self.assertEqual(model.count(), 10)
        self.assertEqual(len(model), 10)
        model.backend.query_count.assert_called_once_with()
        model.backend.query.assert_not_called()

    def test_getitem_queries_block(self):
        model = RangeModel(range(10), block_size=4)

        self.assertEqual(model[5], 5)

        model.backend.query.assert_called_once_with(4, 4)

    def test_getitem_uses_cached_block(self):
        model = RangeModel(range(10), block_size=4)

        self.assertEqual(model[4], 4)
        self.assertEqual(model[7], 7)
        self.assertEqual(model[6], 6)

        model.backend.query.assert_called_once_with(4, 4)

    def test_getitem_evicts_least_recently_used_block(self):
        model = RangeModel(range(10), block_size=2, max_cached_blocks=2)

        model[0]
        model[2]
        model[1]
        model[4]
        model[1]
        model[2]

        self.assertSequenceEqual(
            model.backend.query.mock_calls,
            [
                unittest.mock.call(0, 2),
                unittest.mock.call(2, 2),
                unittest.mock.call(4, 2),
                unittest.mock.call(2, 2),
            ]
        )

    def test_getitem_negative_index(self):
        model = RangeModel(range(10), block_size=4)
        self.assertEqual(model[-1], 9)
        self.assertEqual(model[-10], 0)

    def test_getitem_out_of_range(self):
        model = RangeModel(range(10), block_size=4)
        for index in [10, 11, -11]:
            with self.assertRaises(IndexError):
                model[index]
        model.backend.query.assert_not_called()

    def test_getitem_rejects_non_integer(self):
        model = RangeModel(range(10))
        with self.assertRaises(TypeError):
            model[1:2]

    def test_getitem_raises_index_error_if_backend_shrank(self):
        model = RangeModel(range(10), block_size=4)
        del model.rows[6:]

        self.assertEqual(model[5], 5)
        with self.assertRaises(IndexError):
            model[7]

    def test_iter(self):
        model = RangeModel(range(5), block_size=2)
        self.assertSequenceEqual(list(model), [0, 1, 2, 3, 4])
        self.assertEqual(model.backend.query.call_count, 3)

    def test_update_rereads_count_and_drops_cache(self):
        model = RangeModel(range(4), block_size=4)
        listener = make_listener(model)

        self.assertEqual(model[0], 0)
        model.rows[:] = ["a", "b", "c", "d", "e", "f"]
        self.assertEqual(model[0], 0)

        model.update()

        self.assertEqual(model.count(), 6)
        self.assertEqual(model[0], "a")
        self.assertEqual(model[5], "f")
        self.assertSequenceEqual(
            listener.mock_calls,
            [
                unittest.mock.call.begin_reset_model(),
                unittest.mock.call.end_reset_model(),
            ]
        )

    def test_update_changes_count_between_notifications(self):
        model = RangeModel(range(2))
        counts = []

        def on_begin():
            counts.append(model.count())

        def on_end():
            counts.append(model.count())

        model.begin_reset_model.connect(on_begin)
        model.end_reset_model.connect(on_end)
        model.rows.append(2)
        model.update()

        self.assertEqual(counts, [2, 3])

    def test_update_failure_leaves_model_and_notifications_untouched(self):
        model = RangeModel(range(4), block_size=4)
        listener = make_listener(model)
        self.assertEqual(model[1], 1)

        exc = ConnectionError()
        model.backend.query_count.side_effect = exc

        with self.assertRaises(ConnectionError) as ctx:
            model.update()

        self.assertIs(ctx.exception, exc)
        self.assertSequenceEqual(listener.mock_calls, [])
        self.assertEqual(model.count(), 4)
        self.assertEqual(model[1], 1)
        model.backend.query.assert_called_once_with(0, 4)
