import collections.abc
import logging

from PyQt5 import QtCore


logger = logging.getLogger(__name__)


class QtListModel(QtCore.QAbstractListModel):
    """
    Present a :class:`~qmldata.list_model.ListModel` to Qt views and QML.

    :param model: The list model to present.
    :type model: :class:`~qmldata.list_model.ListModel`
    :param parent: The parent :class:`QObject`.

    Each column of the `model` is exposed as a role, starting at
    :attr:`Qt.UserRole`. The role names are the column names, so a QML
    delegate refers to a column by its name. Elements which are mappings
    provide column values by key, other elements by attribute.

    The adapter connects to the signals of the `model` and translates them
    into the corresponding :class:`QAbstractItemModel` notifications, until
    :meth:`detach` is called.
    """

    def __init__(self, model, parent=None):
        super().__init__(parent)
        self._model = model
        self._columns = {
            QtCore.Qt.UserRole + i: column
            for i, column in enumerate(model.columns)
        }
        self._connections = [
            (model.begin_insert_rows,
             model.begin_insert_rows.connect(self._begin_insert_rows)),
            (model.end_insert_rows,
             model.end_insert_rows.connect(self._end_insert_rows)),
            (model.begin_remove_rows,
             model.begin_remove_rows.connect(self._begin_remove_rows)),
            (model.end_remove_rows,
             model.end_remove_rows.connect(self._end_remove_rows)),
            (model.begin_move_rows,
             model.begin_move_rows.connect(self._begin_move_rows)),
            (model.end_move_rows,
             model.end_move_rows.connect(self._end_move_rows)),
            (model.begin_reset_model,
             model.begin_reset_model.connect(self._begin_reset_model)),
            (model.end_reset_model,
             model.end_reset_model.connect(self._end_reset_model)),
            (model.data_changed,
             model.data_changed.connect(self._data_changed)),
        ]

    @property
    def model(self):
        return self._model

    def detach(self):
        """
        Disconnect from the signals of the list model.
        """
        for signal, token in self._connections:
            signal.disconnect(token)
        self._connections.clear()

    # the handlers must return None: a true value would disconnect them

    def _begin_insert_rows(self, _, index1, index2):
        self.beginInsertRows(QtCore.QModelIndex(), index1, index2)

    def _end_insert_rows(self):
        self.endInsertRows()

    def _begin_remove_rows(self, _, index1, index2):
        self.beginRemoveRows(QtCore.QModelIndex(), index1, index2)

    def _end_remove_rows(self):
        self.endRemoveRows()

    def _begin_move_rows(self, _, index1, index2, __, destindex):
        self.beginMoveRows(QtCore.QModelIndex(), index1, index2,
                           QtCore.QModelIndex(), destindex)

    def _end_move_rows(self):
        self.endMoveRows()

    def _begin_reset_model(self):
        self.beginResetModel()

    def _end_reset_model(self):
        self.endResetModel()

    def _data_changed(self, _, index1, index2):
        self.dataChanged.emit(self.index(index1), self.index(index2))

    def rowCount(self, parent=QtCore.QModelIndex()):
        if parent.isValid():
            return 0
        return self._model.count()

    def roleNames(self):
        return {
            role: column.encode("utf-8")
            for role, column in self._columns.items()
        }

    def _column_value(self, item, column):
        if isinstance(item, collections.abc.Mapping):
            return item[column]
        return getattr(item, column)

    def data(self, index, role=QtCore.Qt.DisplayRole):
        if not index.isValid():
            return None

        try:
            item = self._model[index.row()]
        except IndexError:
            return None

        if role == QtCore.Qt.DisplayRole:
            if not self._columns:
                return str(item)
            column = self._columns[QtCore.Qt.UserRole]
        else:
            try:
                column = self._columns[role]
            except KeyError:
                return None

        try:
            return self._column_value(item, column)
        except (KeyError, AttributeError):
            logger.debug("element %r at row %d has no column %r",
                         item, index.row(), column)
            return None

    def flags(self, index):
        if not index.isValid():
            return QtCore.Qt.NoItemFlags
        return QtCore.Qt.ItemIsEnabled | QtCore.Qt.ItemIsSelectable
