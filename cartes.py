#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Cartes grises: owner <-> vehicle possessions (SQLite)

Commands:
  init                Create PROPRIETAIRE / VEHICULE / POSSEDER tables if missing
  list                Print every possession
  exists              Check whether an (owner, vehicle) pair is recorded
  add                 Record a possession (rejected if the pair already exists)
  update              Change the dates of a possession
  delete              Remove a possession
  export              Export all possessions to CSV

Notes:
- Dates are YYYY-MM-DD. Omit --end for an ongoing possession.
- The DB path comes from --db, else CG_DB_PATH, else config.yaml, else ./cartes_grises.db.
"""

import argparse
import datetime as dt
import os
import sys

import pandas as pd

from cartes_grises.db import ensure_schema, get_conn
from cartes_grises.logs import setup_logging
from cartes_grises.services import possession_svc


def _date(s: str) -> dt.date:
    try:
        return dt.date.fromisoformat(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {s}")


def _connect(args):
    return lambda: get_conn(args.db)


# ---------------- commands ----------------

def cmd_init(args):
    ensure_schema(args.db)
    print("Schema ready.")
    return 0


def cmd_list(args):
    items = possession_svc.list_possessions(connect=_connect(args))
    if not items:
        print("(empty)")
        return 0
    df = pd.DataFrame([p.to_dict() for p in items])
    print(df.to_string(index=False))
    return 0


def cmd_exists(args):
    found = possession_svc.exists_possession(args.owner, args.vehicle, connect=_connect(args))
    print("yes" if found else "no")
    return 0 if found else 1


def cmd_add(args):
    ok = possession_svc.add_possession(args.owner, args.vehicle, args.start, args.end, connect=_connect(args))
    print("Possession added." if ok else "Add failed (duplicate or database error).")
    return 0 if ok else 1


def cmd_update(args):
    ok = possession_svc.update_possession(args.owner, args.vehicle, args.start, args.end, connect=_connect(args))
    print("Possession updated." if ok else "Update failed (not found or database error).")
    return 0 if ok else 1


def cmd_delete(args):
    ok = possession_svc.delete_possession(args.owner, args.vehicle, connect=_connect(args))
    print("Possession deleted." if ok else "Delete failed (not found or database error).")
    return 0 if ok else 1


def cmd_export(args):
    items = possession_svc.list_possessions(connect=_connect(args))
    df = pd.DataFrame(
        [p.to_dict() for p in items],
        columns=["owner_id", "vehicle_id", "start_date", "end_date"],
    )
    out = args.out or os.path.join(os.getcwd(), "exports", "possessions.csv")
    os.makedirs(os.path.dirname(out) or ".", exist_ok=True)
    df.to_csv(out, index=False, encoding="utf-8-sig")
    print(f"{len(df)} possession(s) exported to {out}")
    return 0


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cartes grises possessions (SQLite)")
    parser.add_argument("--db", default=None, help="SQLite file (default: resolved from env/config)")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create tables")
    p_init.set_defaults(func=cmd_init)

    p_list = sub.add_parser("list", help="list possessions")
    p_list.set_defaults(func=cmd_list)

    def add_pair(p):
        p.add_argument("--owner", required=True, type=int, help="id_proprietaire")
        p.add_argument("--vehicle", required=True, type=int, help="id_vehicule")

    p_exists = sub.add_parser("exists", help="check a pair")
    add_pair(p_exists)
    p_exists.set_defaults(func=cmd_exists)

    p_add = sub.add_parser("add", help="add a possession")
    add_pair(p_add)
    p_add.add_argument("--start", required=True, type=_date, help="YYYY-MM-DD")
    p_add.add_argument("--end", required=False, type=_date, help="YYYY-MM-DD (omit if ongoing)")
    p_add.set_defaults(func=cmd_add)

    p_upd = sub.add_parser("update", help="change possession dates")
    add_pair(p_upd)
    p_upd.add_argument("--start", required=True, type=_date, help="YYYY-MM-DD")
    p_upd.add_argument("--end", required=False, type=_date, help="YYYY-MM-DD (omit if ongoing)")
    p_upd.set_defaults(func=cmd_update)

    p_del = sub.add_parser("delete", help="delete a possession")
    add_pair(p_del)
    p_del.set_defaults(func=cmd_delete)

    p_exp = sub.add_parser("export", help="export possessions to CSV")
    p_exp.add_argument("--out", required=False, help="CSV path (default ./exports/possessions.csv)")
    p_exp.set_defaults(func=cmd_export)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    if hasattr(args, "func"):
        return args.func(args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
