"""SQL storage adapter: implements StoragePort against MySQL, Postgres
or SQLite through SQLAlchemy Core.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from sqlalchemy import (
    Column,
    Double,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.pool import NullPool

from gotophoto.application.dto import LocationPage, PhotolocationPage
from gotophoto.domain.entities import (
    LOCATION_COLUMNS,
    PHOTOLOCATION_COLUMNS,
    blank_row,
    check_limit,
    paginate,
    verify_fields,
)
from gotophoto.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

metadata = MetaData()

locations_table = Table(
    "locations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255)),
)

photolocations_table = Table(
    "photolocations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("location", Integer),
    Column("title", String(255)),
    Column("latitude", Double),
    Column("longitude", Double),
    Column("image_url", String(255)),
    Column("description", String(255)),
)


class SqlStorageAdapter:
    """Adapter that stores locations and photolocations in a relational
    database, satisfying :class:`StoragePort`.

    Every operation checks out a fresh connection (``NullPool``); nothing
    is held open between calls. Driver errors propagate unchanged.

    Args:
        dsn: SQLAlchemy URL or URL string (see :meth:`get_mysql_dsn` and
            :meth:`get_postgres_dsn`).
        user: Database user, overriding any user in *dsn*.
        password: Database password, overriding any password in *dsn*.
    """

    def __init__(
        self,
        dsn: Union[str, URL],
        user: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        url = self.with_credentials(dsn, user, password)
        self._url = url
        logger.debug("Creating SQL engine for %s", url.render_as_string(hide_password=True))
        self._engine: Engine = create_engine(url, poolclass=NullPool)
        metadata.create_all(self._engine, checkfirst=True)
        logger.debug("SQL schema ready")

    @property
    def engine(self) -> Engine:
        return self._engine

    # -- Listing --

    def list_locations(
        self, limit: int = 1000, cursor: Optional[int] = None
    ) -> LocationPage:
        """List locations in ascending id order."""
        rows, new_cursor = self._list(locations_table, limit, cursor)
        return LocationPage(locations=rows, cursor=new_cursor)

    def list_photolocations(
        self,
        at_location: int,
        limit: int = 1000,
        cursor: Optional[int] = None,
    ) -> PhotolocationPage:
        """List photolocations at one location in ascending id order."""
        rows, new_cursor = self._list(
            photolocations_table,
            limit,
            cursor,
            photolocations_table.c.location == at_location,
        )
        return PhotolocationPage(photolocations=rows, cursor=new_cursor)

    def _list(self, table: Table, limit: int, cursor: Optional[int], *criteria):
        stmt = select(table).order_by(table.c.id).limit(check_limit(limit))
        if criteria:
            stmt = stmt.where(*criteria)
        if cursor is not None:
            stmt = stmt.where(table.c.id > cursor)
        with self._engine.connect() as conn:
            rows = [dict(row) for row in conn.execute(stmt).mappings()]
        return paginate(rows, limit)

    # -- Location CRUD --

    def create_location(
        self, location: Dict[str, Any], id: Optional[int] = None
    ) -> int:
        """Insert a location and return its id."""
        verify_fields("location", location, LOCATION_COLUMNS)
        return self._insert(locations_table, location, id)

    def read_location(self, id: int) -> Optional[Dict[str, Any]]:
        """Return the location row, or None if absent."""
        stmt = select(locations_table).where(locations_table.c.id == id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    def update_location(self, location: Dict[str, Any]) -> int:
        """Overwrite every declared column of the location keyed by ``id``."""
        verify_fields("location", location, LOCATION_COLUMNS)
        if location.get("id") is None:
            raise ValidationError("location id is required for update")
        values = blank_row(LOCATION_COLUMNS)
        values.update(location)
        location_id = values.pop("id")
        stmt = (
            update(locations_table)
            .where(locations_table.c.id == location_id)
            .values(**values)
        )
        with self._engine.begin() as conn:
            return conn.execute(stmt).rowcount

    def delete_location(self, id: int) -> int:
        """Delete a location and return the number of rows deleted."""
        stmt = delete(locations_table).where(locations_table.c.id == id)
        with self._engine.begin() as conn:
            return conn.execute(stmt).rowcount

    # -- Photolocation writes --

    def create_photolocation(
        self, photolocation: Dict[str, Any], id: Optional[int] = None
    ) -> int:
        """Insert a photolocation and return its id."""
        verify_fields("photolocation", photolocation, PHOTOLOCATION_COLUMNS)
        return self._insert(photolocations_table, photolocation, id)

    def _insert(self, table: Table, row: Dict[str, Any], id: Optional[int]) -> int:
        values = dict(row)
        if id is not None:
            values["id"] = id
        elif values.get("id") is None:
            # let the backend assign the key
            values.pop("id", None)
        with self._engine.begin() as conn:
            result = conn.execute(insert(table).values(**values))
            return result.inserted_primary_key[0]

    # -- DSN helpers --

    @staticmethod
    def with_credentials(
        dsn: Union[str, URL],
        user: Optional[str] = None,
        password: Optional[str] = None,
    ) -> URL:
        """Return *dsn* as a URL carrying *user* and *password*.

        SQLite has no authentication, so credentials are ignored for
        ``sqlite`` URLs.
        """
        url = make_url(dsn)
        if user is None:
            return url
        if url.get_backend_name() == "sqlite":
            logger.debug("Ignoring database credentials for SQLite")
            return url
        return url.set(username=user, password=password)

    @staticmethod
    def get_mysql_dsn(
        db_name: str,
        port: int,
        connection_name: Optional[str] = None,
        host: str = "127.0.0.1",
    ) -> URL:
        """Build a MySQL URL: unix socket under /cloudsql when a connection
        name is given, otherwise TCP to host:port."""
        logger.debug("MySQL connection name: %s", connection_name)
        if connection_name:
            return URL.create(
                "mysql+pymysql",
                database=db_name,
                query={"unix_socket": f"/cloudsql/{connection_name}"},
            )
        return URL.create("mysql+pymysql", host=host, port=int(port), database=db_name)

    @staticmethod
    def get_postgres_dsn(
        db_name: str,
        port: int,
        connection_name: Optional[str] = None,
        host: str = "127.0.0.1",
    ) -> URL:
        """Build a Postgres URL: socket directory under /cloudsql when a
        connection name is given, otherwise TCP to host:port."""
        logger.debug("Postgres connection name: %s", connection_name)
        if connection_name:
            return URL.create(
                "postgresql+psycopg",
                database=db_name,
                query={"host": f"/cloudsql/{connection_name}"},
            )
        return URL.create("postgresql+psycopg", host=host, port=int(port), database=db_name)
