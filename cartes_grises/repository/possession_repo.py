from __future__ import annotations

import datetime as dt
from sqlite3 import Connection, Row

SQL_COUNT_PAIR = "SELECT COUNT(*) FROM POSSEDER WHERE id_proprietaire=? AND id_vehicule=?"
SQL_LIST_ALL = "SELECT * FROM POSSEDER"
SQL_INSERT = (
    "INSERT INTO POSSEDER (id_proprietaire, id_vehicule, date_debut_propriete, date_fin_propriete) "
    "VALUES (?, ?, ?, ?)"
)
SQL_UPDATE_DATES = (
    "UPDATE POSSEDER SET date_debut_propriete=?, date_fin_propriete=? "
    "WHERE id_proprietaire=? AND id_vehicule=?"
)
SQL_DELETE = "DELETE FROM POSSEDER WHERE id_proprietaire=? AND id_vehicule=?"


def count_pair(conn: Connection, owner_id: int, vehicle_id: int) -> int:
    row = conn.execute(SQL_COUNT_PAIR, (owner_id, vehicle_id)).fetchone()
    return int(row[0]) if row else 0


def list_all(conn: Connection) -> list[Row]:
    return conn.execute(SQL_LIST_ALL).fetchall()


def insert(
    conn: Connection,
    owner_id: int,
    vehicle_id: int,
    start_date: dt.date,
    end_date: dt.date | None,
) -> int:
    # end_date=None is bound as NULL
    cur = conn.execute(SQL_INSERT, (owner_id, vehicle_id, start_date, end_date))
    return cur.rowcount


def update_dates(
    conn: Connection,
    owner_id: int,
    vehicle_id: int,
    start_date: dt.date,
    end_date: dt.date | None,
) -> int:
    cur = conn.execute(SQL_UPDATE_DATES, (start_date, end_date, owner_id, vehicle_id))
    return cur.rowcount


def delete(conn: Connection, owner_id: int, vehicle_id: int) -> int:
    cur = conn.execute(SQL_DELETE, (owner_id, vehicle_id))
    return cur.rowcount
