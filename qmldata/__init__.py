from .list_model import (  # NOQA
    ListModel,
    ArrayModel,
)
from .query_model import (  # NOQA
    QueryModel,
)

__version__ = "0.1.0"
