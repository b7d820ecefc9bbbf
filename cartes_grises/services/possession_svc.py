"""
Possession service: the operation boundary over POSSEDER.

Each call acquires its own connection from the provider, runs one statement and
releases the connection. Database errors are logged and turned into a failure
signal; callers get either a plain bool (or list) or a PossessionOutcome.
"""
from __future__ import annotations

import datetime as dt
import logging
import sqlite3
from contextlib import AbstractContextManager
from typing import Callable, Optional

from ..db import get_conn
from ..domain.possession import Possession, PossessionOutcome
from ..repository import possession_repo

logger = logging.getLogger(__name__)

ConnectionProvider = Callable[[], AbstractContextManager[sqlite3.Connection]]


def check_possession(owner_id: int, vehicle_id: int, *, connect: ConnectionProvider = get_conn) -> PossessionOutcome:
    try:
        with connect() as conn:
            n = possession_repo.count_pair(conn, owner_id, vehicle_id)
    except sqlite3.Error as e:
        logger.error("SQL error while checking possession (%s, %s): %s", owner_id, vehicle_id, e)
        return PossessionOutcome.BACKEND_ERROR
    return PossessionOutcome.OK if n > 0 else PossessionOutcome.NOT_FOUND


def fetch_possessions(*, connect: ConnectionProvider = get_conn) -> tuple[PossessionOutcome, list[Possession]]:
    try:
        with connect() as conn:
            rows = possession_repo.list_all(conn)
    except sqlite3.Error as e:
        logger.error("SQL error while listing possessions: %s", e)
        return PossessionOutcome.BACKEND_ERROR, []
    try:
        items = [Possession.from_row(r) for r in rows]
    except (TypeError, ValueError) as e:
        logger.error("Unreadable POSSEDER row while listing possessions: %s", e)
        return PossessionOutcome.BACKEND_ERROR, []
    return PossessionOutcome.OK, items


def create_possession(
    owner_id: int,
    vehicle_id: int,
    start_date: dt.date,
    end_date: Optional[dt.date] = None,
    *,
    connect: ConnectionProvider = get_conn,
) -> PossessionOutcome:
    """
    Insert a possession unless the (owner, vehicle) pair is already recorded.

    The existence check and the insert use separate connections, so two
    concurrent callers may both pass the check; the composite primary key then
    rejects the second insert and it is reported as DUPLICATE as well.
    """
    if exists_possession(owner_id, vehicle_id, connect=connect):
        logger.info("Possession add cancelled: duplicate detected (%s, %s)", owner_id, vehicle_id)
        return PossessionOutcome.DUPLICATE

    try:
        with connect() as conn:
            n = possession_repo.insert(conn, owner_id, vehicle_id, start_date, end_date)
            conn.commit()
    except sqlite3.IntegrityError as e:
        if _is_pair_conflict(e):
            logger.info("Possession add rejected by database: duplicate (%s, %s)", owner_id, vehicle_id)
            return PossessionOutcome.DUPLICATE
        logger.error("SQL error while adding possession (%s, %s): %s", owner_id, vehicle_id, e)
        return PossessionOutcome.BACKEND_ERROR
    except sqlite3.Error as e:
        logger.error("SQL error while adding possession (%s, %s): %s", owner_id, vehicle_id, e)
        return PossessionOutcome.BACKEND_ERROR
    return PossessionOutcome.OK if n == 1 else PossessionOutcome.BACKEND_ERROR


def change_possession(
    owner_id: int,
    vehicle_id: int,
    start_date: dt.date,
    end_date: Optional[dt.date] = None,
    *,
    connect: ConnectionProvider = get_conn,
) -> PossessionOutcome:
    """Replace both dates of an existing possession; the pair itself never changes."""
    try:
        with connect() as conn:
            n = possession_repo.update_dates(conn, owner_id, vehicle_id, start_date, end_date)
            conn.commit()
    except sqlite3.Error as e:
        logger.error("SQL error while updating possession (%s, %s): %s", owner_id, vehicle_id, e)
        return PossessionOutcome.BACKEND_ERROR
    return PossessionOutcome.OK if n > 0 else PossessionOutcome.NOT_FOUND


def remove_possession(owner_id: int, vehicle_id: int, *, connect: ConnectionProvider = get_conn) -> PossessionOutcome:
    try:
        with connect() as conn:
            n = possession_repo.delete(conn, owner_id, vehicle_id)
            conn.commit()
    except sqlite3.Error as e:
        logger.error("SQL error while deleting possession (%s, %s): %s", owner_id, vehicle_id, e)
        return PossessionOutcome.BACKEND_ERROR
    return PossessionOutcome.OK if n > 0 else PossessionOutcome.NOT_FOUND


def _is_pair_conflict(e: sqlite3.IntegrityError) -> bool:
    name = getattr(e, "sqlite_errorname", None)  # Python 3.11+
    if name:
        return name in ("SQLITE_CONSTRAINT_PRIMARYKEY", "SQLITE_CONSTRAINT_UNIQUE")
    msg = str(e).upper()
    return "UNIQUE" in msg or "PRIMARY KEY" in msg


# ---------------- boolean contract ----------------

def exists_possession(owner_id: int, vehicle_id: int, *, connect: ConnectionProvider = get_conn) -> bool:
    """True iff the pair is recorded. A database error reads as False."""
    return check_possession(owner_id, vehicle_id, connect=connect) is PossessionOutcome.OK


def list_possessions(*, connect: ConnectionProvider = get_conn) -> list[Possession]:
    _, items = fetch_possessions(connect=connect)
    return items


def add_possession(
    owner_id: int,
    vehicle_id: int,
    start_date: dt.date,
    end_date: Optional[dt.date] = None,
    *,
    connect: ConnectionProvider = get_conn,
) -> bool:
    return create_possession(owner_id, vehicle_id, start_date, end_date, connect=connect) is PossessionOutcome.OK


def update_possession(
    owner_id: int,
    vehicle_id: int,
    start_date: dt.date,
    end_date: Optional[dt.date] = None,
    *,
    connect: ConnectionProvider = get_conn,
) -> bool:
    return change_possession(owner_id, vehicle_id, start_date, end_date, connect=connect) is PossessionOutcome.OK


def delete_possession(owner_id: int, vehicle_id: int, *, connect: ConnectionProvider = get_conn) -> bool:
    return remove_possession(owner_id, vehicle_id, connect=connect) is PossessionOutcome.OK
