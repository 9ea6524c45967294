import collections
import logging

from .list_model import ListModel


logger = logging.getLogger(__name__)


DEFAULT_BLOCK_SIZE = 256
DEFAULT_MAX_CACHED_BLOCKS = 4


class QueryModel(ListModel):
    """
    Abstract list model for data which is fetched from a backend on demand,
    such as a database table.

    :param columns: The column names, see :class:`ListModel`.
    :param block_size: Number of rows fetched with a single :meth:`query`.
    :type block_size: positive :class:`int`
    :param max_cached_blocks: Number of blocks which are kept in memory.
    :type max_cached_blocks: positive :class:`int`

    Subclasses implement :meth:`query_count` and :meth:`query`. The count is
    read once on construction and on each call to :meth:`update`; rows are
    fetched in blocks of `block_size` rows, the least recently used block is
    dropped when more than `max_cached_blocks` blocks are held.

    As the constructor already calls :meth:`query_count`, subclasses must
    set up their backend before calling it.

    .. automethod:: query_count

    .. automethod:: query

    .. automethod:: update
    """

    def __init__(self, *columns,
                 block_size=DEFAULT_BLOCK_SIZE,
                 max_cached_blocks=DEFAULT_MAX_CACHED_BLOCKS,
                 **kwargs):
        if not isinstance(block_size, int):
            raise TypeError("block_size must be an integer")
        if not isinstance(max_cached_blocks, int):
            raise TypeError("max_cached_blocks must be an integer")
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        if max_cached_blocks <= 0:
            raise ValueError("max_cached_blocks must be positive")
        super().__init__(*columns, **kwargs)
        self._block_size = block_size
        self._max_cached_blocks = max_cached_blocks
        self._count = 0
        self._blocks = collections.OrderedDict()
        self.update()

    @property
    def block_size(self):
        return self._block_size

    @property
    def max_cached_blocks(self):
        return self._max_cached_blocks

    def query_count(self):
        """
        Return the number of rows available in the backend.

        Must be overridden by subclasses.
        """
        raise NotImplementedError(
            "{}.query_count is not implemented".format(
                type(self).__qualname__
            )
        )

    def query(self, offset, count):
        """
        Return a sequence of at most `count` rows, starting at row `offset`.

        Must be overridden by subclasses.
        """
        raise NotImplementedError(
            "{}.query is not implemented".format(type(self).__qualname__)
        )

    def update(self):
        """
        Re-read the row count from the backend and drop all cached rows.

        Views are notified with a model reset. If reading the count fails,
        the exception propagates and neither the model nor the views are
        changed.
        """
        count = self.query_count()
        with self._resetting():
            self._count = count
            self._blocks.clear()
        logger.debug("%r reset to %d rows", self, self._count)

    def count(self):
        return self._count

    def _get_block(self, block_offset):
        try:
            block = self._blocks[block_offset]
        except KeyError:
            pass
        else:
            self._blocks.move_to_end(block_offset)
            return block

        logger.debug("%r fetching rows %d..%d",
                     self,
                     block_offset,
                     block_offset + self._block_size - 1)
        block = list(self.query(block_offset, self._block_size))
        self._blocks[block_offset] = block
        while len(self._blocks) > self._max_cached_blocks:
            evicted, _ = self._blocks.popitem(last=False)
            logger.debug("%r evicted block at %d", self, evicted)
        return block

    def __getitem__(self, index):
        if not isinstance(index, int):
            raise TypeError(
                "list indices must be integers, not {}".format(
                    type(index).__name__
                )
            )
        if index < 0:
            index += self._count
        if not 0 <= index < self._count:
            raise IndexError("list index out of bounds")

        block_offset = index - index % self._block_size
        block = self._get_block(block_offset)
        try:
            return block[index - block_offset]
        except IndexError:
            raise IndexError(
                "row {} vanished from the backend".format(index)
            ) from None
