"""Public core API for statement preparation, execution, and row mapping."""

from .contracts import ConnectionPort, ConnectionSourcePort, CursorPort, RowMapper, StatementPort
from .errors import DataAccessError
from .mappers import as_dict, as_tuple, column, into, scalar
from .release import close_quietly, release_quietly
from .rows import Row
from .statement import StatementBuilder
from .template import SqlTemplate

__all__ = [
    "ConnectionPort",
    "ConnectionSourcePort",
    "CursorPort",
    "StatementPort",
    "RowMapper",
    "DataAccessError",
    "Row",
    "SqlTemplate",
    "StatementBuilder",
    "as_dict",
    "as_tuple",
    "close_quietly",
    "column",
    "into",
    "release_quietly",
    "scalar",
]
