"""Connectivity probe for the marketplace database."""

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from app.domain import HealthStatus

from .interfaces import DatabaseHealthPort

_PROBE_SQL = text("SELECT 1")


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Answer `/health` probes by round-tripping a trivial query.

    The label exposed to callers never carries the database password.
    """

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine
        self._dialect_name = engine.dialect.name

    def db_connection_label(self) -> str:
        """Return the engine URL with the password replaced by `***`."""

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Round-trip `SELECT 1` and name the dialect that answered.

        Returns:
            HealthStatus: `ok` status with a `<dialect> connectivity verified` detail.

        Raises:
            ConnectionError: Raised when the engine cannot connect or the
            probe returns an unexpected value.
        """

        try:
            with self._engine.connect() as connection:
                probe_value = connection.scalar(_PROBE_SQL)
        except SQLAlchemyError as error:
            raise ConnectionError("marketplace database connectivity check failed") from error

        if probe_value != 1:
            raise ConnectionError(f"{self._dialect_name} probe returned {probe_value!r}")
        return HealthStatus(status="ok", detail=f"{self._dialect_name} connectivity verified")
