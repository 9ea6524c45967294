import contextlib
import logging

import aioxmpp.callbacks


logger = logging.getLogger(__name__)


class ListModel:
    """
    Abstract base for list models which back a list view. A list model
    exposes a number of elements (:meth:`count`) and indexed access to those
    elements (``model[index]``).

    :param columns: The names of the columns (roles) the elements provide.

    Subclasses must override :meth:`count` and :meth:`__getitem__`. The
    implementations in this class raise :class:`NotImplementedError` for any
    argument; a bare :class:`ListModel` never reports a count nor an element.

    Overriding implementations must keep both operations consistent: for
    each index in ``0 .. count()-1``, ``model[index]`` returns the element
    and for any other index, it raises :class:`IndexError`.

    The following operations are implemented in terms of :meth:`count` and
    ``model[index]`` and work on any subclass:

    .. automethod:: __len__

    .. automethod:: __iter__

    .. automethod:: to_list

    .. automethod:: index

    Views keep themselves in sync with the model by connecting to the
    following :class:`aioxmpp.callbacks.Signal` attributes. Row indices are
    inclusive on both ends. The first argument of the ``begin_`` signals
    which take a row range is always :data:`None`; it is there for
    consistency with the :class:`QAbstractItemModel` API, which passes the
    parent index there.

    .. method:: begin_insert_rows(_, index1, index2)

       Emitted before rows are inserted at `index1` up to (and including)
       `index2`.

    .. method:: end_insert_rows()

       Emitted after rows have been inserted.

    .. method:: begin_remove_rows(_, index1, index2)

       Emitted before the rows from `index1` up to (and including) `index2`
       are removed.

    .. method:: end_remove_rows()

       Emitted after rows have been removed.

    .. method:: begin_move_rows(_, srcindex1, srcindex2, _, destindex)

       Emitted before the rows from `srcindex1` up to (and including)
       `srcindex2` are moved in front of the row which is addressed by
       `destindex` *before* the rows are removed for moving.

    .. method:: end_move_rows()

       Emitted after rows have been moved.

    .. method:: begin_reset_model()

       Emitted before the complete contents of the model are replaced.

    .. method:: end_reset_model()

       Emitted after the contents of the model have been replaced.

    .. method:: data_changed(_, index1, index2)

       Emitted after the rows from `index1` up to (and including) `index2`
       have changed in place.

    Subclasses emit the signals by wrapping their storage mutation in one of
    the protected context managers:

    .. automethod:: _inserting

    .. automethod:: _removing

    .. automethod:: _moving

    .. automethod:: _resetting

    .. automethod:: _updated
    """

    begin_insert_rows = aioxmpp.callbacks.Signal()
    end_insert_rows = aioxmpp.callbacks.Signal()
    begin_remove_rows = aioxmpp.callbacks.Signal()
    end_remove_rows = aioxmpp.callbacks.Signal()
    begin_move_rows = aioxmpp.callbacks.Signal()
    end_move_rows = aioxmpp.callbacks.Signal()
    begin_reset_model = aioxmpp.callbacks.Signal()
    end_reset_model = aioxmpp.callbacks.Signal()
    data_changed = aioxmpp.callbacks.Signal()

    def __init__(self, *columns, **kwargs):
        super().__init__(**kwargs)
        self.columns = tuple(columns)

    def count(self):
        """
        Return the number of elements in the model.

        :raises NotImplementedError: unless overridden by a subclass.
        """
        raise NotImplementedError(
            "{}.count is not implemented".format(type(self).__qualname__)
        )

    def __getitem__(self, index):
        """
        Return the element at `index`.

        :raises NotImplementedError: unless overridden by a subclass.
        """
        raise NotImplementedError(
            "{}.__getitem__ is not implemented".format(
                type(self).__qualname__
            )
        )

    def __len__(self):
        """
        Equivalent to :meth:`count`.
        """
        return self.count()

    def __iter__(self):
        """
        Iterate over the elements at the indices ``0 .. count()-1``.

        The count is evaluated once when iteration starts.
        """
        for i in range(self.count()):
            yield self[i]

    def __contains__(self, item):
        return any(item == other for other in self)

    def to_list(self):
        """
        Return a new :class:`list` holding all elements of the model.
        """
        return list(self)

    def index(self, item):
        """
        Return the index of the first element which compares equal to
        `item`.

        :raises ValueError: if no such element exists.
        """
        for i, other in enumerate(self):
            if other == item:
                return i
        raise ValueError("{!r} is not in model".format(item))

    @contextlib.contextmanager
    def _inserting(self, index1, index2):
        """
        Context manager which announces the insertion of the rows from
        `index1` up to (and including) `index2`.

        The rows must be added to the storage inside the ``with`` block.
        Nothing is emitted if the range is empty.
        """
        if index2 < index1:
            yield
            return
        self.begin_insert_rows(None, index1, index2)
        yield
        self.end_insert_rows()

    @contextlib.contextmanager
    def _removing(self, index1, index2):
        """
        Context manager which announces the removal of the rows from `index1`
        up to (and including) `index2`.
        """
        if index2 < index1:
            yield
            return
        self.begin_remove_rows(None, index1, index2)
        yield
        self.end_remove_rows()

    @contextlib.contextmanager
    def _moving(self, index1, index2, destindex):
        """
        Context manager which announces that the rows from `index1` up to
        (and including) `index2` are moved in front of the row currently at
        `destindex`.
        """
        if index2 < index1:
            yield
            return
        self.begin_move_rows(None, index1, index2, None, destindex)
        yield
        self.end_move_rows()

    @contextlib.contextmanager
    def _resetting(self):
        """
        Context manager which announces that the whole contents of the model
        are replaced.
        """
        self.begin_reset_model()
        yield
        self.end_reset_model()

    def _updated(self, index1, index2):
        """
        Announce that the rows from `index1` up to (and including) `index2`
        have changed in place.
        """
        if index2 < index1:
            return
        self.data_changed(None, index1, index2)

    def __repr__(self):
        return "<{}.{} columns={!r} at 0x{:x}>".format(
            type(self).__module__,
            type(self).__qualname__,
            self.columns,
            id(self),
        )


class ArrayModel(ListModel):
    """
    A list model backed by a :class:`list`.

    :param columns: The column names, see :class:`ListModel`.
    :param items: Initial elements of the model.

    All mutating operations emit the matching notifications of
    :class:`ListModel`. Negative indices are interpreted like for
    :class:`list`; indices out of range raise :class:`IndexError`.

    Note that :meth:`count` takes no arguments, in contrast to
    :meth:`list.count`.
    """

    def __init__(self, *columns, items=(), **kwargs):
        super().__init__(*columns, **kwargs)
        self._storage = list(items)

    def _check_and_normalize_index(self, index):
        if not isinstance(index, int):
            raise TypeError(
                "list indices must be integers, not {}".format(
                    type(index).__name__
                )
            )
        if abs(index) > len(self._storage) or index == len(self._storage):
            raise IndexError("list index out of bounds")
        if index < 0:
            return index % len(self._storage)
        return index

    def _clamp_insert_index(self, index):
        if index > len(self._storage):
            return len(self._storage)
        if index < 0:
            if index < -len(self._storage):
                return 0
            return index % len(self._storage)
        return index

    def count(self):
        return len(self._storage)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._storage[index]
        return self._storage[self._check_and_normalize_index(index)]

    def __setitem__(self, index, item):
        index = self._check_and_normalize_index(index)
        self._storage[index] = item
        self._updated(index, index)

    def __delitem__(self, index):
        self.delete_at(index)

    def insert(self, index, *items):
        """
        Insert `items` in front of the element at `index`.

        Like :meth:`list.insert`, indices beyond the end insert at the end
        and negative indices beyond the start insert at the start.

        Return the model.
        """
        index = self._clamp_insert_index(index)
        with self._inserting(index, index + len(items) - 1):
            self._storage[index:index] = items
        return self

    def push(self, *items):
        """
        Append `items` at the end and return the model.
        """
        return self.insert(len(self._storage), *items)

    def append(self, item):
        self.push(item)

    def extend(self, items):
        self.push(*items)

    def unshift(self, *items):
        """
        Insert `items` at the start and return the model.
        """
        return self.insert(0, *items)

    def delete_at(self, index, count=None):
        """
        Remove and return the element at `index`.

        If `count` is not :data:`None`, remove up to `count` elements
        starting at `index` and return them as :class:`list`.
        """
        index = self._check_and_normalize_index(index)
        if count is None:
            with self._removing(index, index):
                return self._storage.pop(index)

        if count < 0:
            raise ValueError("count must be non-negative")
        end = min(index + count, len(self._storage))
        with self._removing(index, end - 1):
            result = self._storage[index:end]
            del self._storage[index:end]
        return result

    def pop(self, index=-1):
        return self.delete_at(index)

    def shift(self, count=None):
        """
        Remove and return the first element, or the first `count` elements
        as :class:`list` if `count` is given.
        """
        if count is not None and not self._storage:
            return []
        return self.delete_at(0, count)

    def move(self, index1, index2):
        """
        Move the row at `index1` in front of the row which is addressed by
        `index2` at the time :meth:`move` is called. `index2` may be equal
        to :meth:`count` to move the row to the end.

        Moves which would not change the order are ignored.
        """
        index1 = self._check_and_normalize_index(index1)

        if index2 != len(self._storage):
            index2 = self._check_and_normalize_index(index2)

        if index1 == index2 or index1 == index2 - 1:
            return

        with self._moving(index1, index1, index2):
            if index2 > index1:
                index2 -= 1
            item = self._storage.pop(index1)
            self._storage.insert(index2, item)

    def replace(self, items):
        """
        Replace the contents of the model with the elements of `items`.

        Return the model.
        """
        with self._resetting():
            self._storage = list(items)
        return self

    def clear(self):
        self.replace(())

    def to_list(self):
        return list(self._storage)
