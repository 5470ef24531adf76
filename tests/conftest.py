"""Shared fixtures: fixture catalogs and small project trees."""
import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


DB_OBJECT = {
    "_scriptingName": "db",
    "_qualifiedName": "com.example.scripting.Database",
    "description": "Record access",
    "functions": {"function": {
        "_name": "get",
        "parameters": {"parameter": {"_name": "id", "_typecode": "java.lang.Number"}},
        "return": {"_typecode": "com.example.Row"},
        "descriptions": {"description": {"__cdata": "Load one row"}},
    }},
}

GLOBALS_OBJECT = {
    "_scriptingName": "globals",
    "_qualifiedName": "com.example.scripting.GlobalScope",
    "description": "Global scope of the solution",
}


def write_catalog(path: Path, objects) -> str:
    path.write_text(json.dumps({"servoydoc": {"runtime": {"object": list(objects)}}}), encoding='utf-8')
    return str(path)


@pytest.fixture
def make_catalog(tmp_path):
    """Factory writing a catalog JSON with the given raw objects."""
    def _make(*objects):
        return write_catalog(tmp_path / 'catalog.json', objects)
    return _make


@pytest.fixture
def db_catalog(make_catalog):
    return make_catalog(GLOBALS_OBJECT, DB_OBJECT)


@pytest.fixture
def write_files(tmp_path):
    """Factory creating files below a workspace directory from a {relative path: text} mapping."""
    def _write(files, root=None):
        base = Path(root) if root else tmp_path / 'workspace'
        for relative, text in files.items():
            target = base / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding='utf-8')
        return base
    return _write
