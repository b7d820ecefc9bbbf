import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

OWNERS = [(1, "Dupont", "Jean"), (2, "Martin", "Claire")]
VEHICLES = [(10, "AB-123-CD", "Renault", "Clio"), (11, "EF-456-GH", "Peugeot", "208"), (20, "IJ-789-KL", "Citroen", "C3")]


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "cartes_grises_test.db"
    # Point the connection provider to this temp DB
    os.environ["CG_DB_PATH"] = str(path)
    schema = Path(_PROJECT_ROOT / "schema.sql").read_text(encoding="utf-8")
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(schema)
        conn.commit()
    finally:
        conn.close()
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    from cartes_grises.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: only ever wipe the temp DB
    assert os.environ.get("CG_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.execute("DELETE FROM POSSEDER")
        conn.execute("DELETE FROM VEHICULE")
        conn.execute("DELETE FROM PROPRIETAIRE")
        conn.executemany("INSERT INTO PROPRIETAIRE(id_proprietaire, nom, prenom) VALUES (?,?,?)", OWNERS)
        conn.executemany("INSERT INTO VEHICULE(id_vehicule, matricule, marque, modele) VALUES (?,?,?,?)", VEHICLES)
        conn.commit()
    finally:
        conn.close()
    yield
