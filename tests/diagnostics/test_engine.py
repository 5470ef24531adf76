"""Tests for call-site overload diagnostics."""
from concurrent.futures import ThreadPoolExecutor

import pytest

from servoy_intel.config import AnalyzerConfig
from servoy_intel.diagnostics import DiagnosticEngine, Severity
from servoy_intel.index import SymbolIndex
from servoy_intel.storage import DiskCache

GLOBALS_OBJECT = {
    "_scriptingName": "globals",
    "_qualifiedName": "com.example.scripting.GlobalScope",
}

DB_OBJECT = {
    "_scriptingName": "db",
    "_qualifiedName": "com.example.scripting.Database",
    "functions": {"function": {
        "_name": "get",
        "parameters": {"parameter": {"_name": "id", "_typecode": "java.lang.Number"}},
        "return": {"_typecode": "com.example.Row"},
    }},
}

FINDER_OBJECT = {
    "_scriptingName": "finder",
    "_qualifiedName": "com.example.scripting.Finder",
    "functions": {"function": [
        {"_name": "find",
         "parameters": {"parameter": {"_name": "id", "_typecode": "java.lang.Number"}}},
        {"_name": "find",
         "parameters": {"parameter": [
             {"_name": "name", "_typecode": "java.lang.String"},
             {"_name": "limit", "_typecode": "java.lang.Number", "_optional": "true"},
         ]}},
        {"_name": "format",
         "parameters": {"parameter": [
             {"_name": "value", "_typecode": "java.lang.String"},
             {"_name": "pattern", "_typecode": "java.lang.String", "_optional": "true"},
         ]}},
    ]},
}


def _engine(tmp_path, catalog, **options):
    workspace = tmp_path / 'workspace'
    workspace.mkdir(exist_ok=True)
    config = AnalyzerConfig(catalog_path=catalog, **options)
    index = SymbolIndex(str(workspace), config, DiskCache(str(workspace), root=str(tmp_path / 'cache')))
    return DiagnosticEngine(index.initialize(), config)


@pytest.fixture
def engine(tmp_path, make_catalog):
    return _engine(tmp_path, make_catalog(GLOBALS_OBJECT, DB_OBJECT, FINDER_OBJECT))


def test_argument_type_mismatch_is_reported(engine):
    diagnostics = engine.analyze('db.get("x");\n')

    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.mismatches == ["Argument 1 ('id'): expected number, got string"]
    assert diagnostic.message == ("No matching overload found for function 'db.get'.\n"
                                  "Argument 1 ('id'): expected number, got string")
    assert diagnostic.severity == Severity.ERROR
    assert diagnostic.source == 'servoy-intel'
    assert diagnostic.range.to_dict() == {'start': {'line': 0, 'character': 0},
                                          'end': {'line': 0, 'character': 11}}


def test_matching_call_is_clean(engine):
    assert engine.analyze('db.get(1);\n') == []


def test_argument_count(engine):
    assert engine.analyze('db.get();')[0].mismatches == ["Incorrect number of arguments: expected 1-1, got 0"]
    assert engine.analyze('db.get(1, 2);')[0].mismatches == [
        "Argument 2: unexpected",
        "Incorrect number of arguments: expected 1-1, got 2",
    ]


def test_variables_typed_from_literals_and_doc(engine):
    assert len(engine.analyze("var s = 'a';\ndb.get(s);\n")) == 1
    assert engine.analyze("/** @type {Number} */\nvar n = lookup();\ndb.get(n);\n") == []
    assert engine.analyze("/** @type {String} */\nvar n = 5;\ndb.get(n);\n")[0].mismatches == [
        "Argument 1 ('id'): expected number, got string"]


def test_untracked_variable_is_any(engine):
    assert engine.analyze("var u = lookup();\ndb.get(u);\n") == []
    assert engine.analyze("db.get(undeclared);\n") == []
    assert engine.analyze("db.get(1 + 2);\n") == []


def test_block_scoping(engine):
    source = """\
var s = 1;
if (s) {
    var s = 'a';
    db.get(s);
}
db.get(s);
"""
    diagnostics = engine.analyze(source)
    assert len(diagnostics) == 1
    assert diagnostics[0].range.start.line == 3


def test_redeclaration_without_type_untracks(engine):
    assert engine.analyze("var s = 'a';\nvar s = lookup();\ndb.get(s);\n") == []


def test_untyped_inner_redeclaration_hides_outer_type(engine):
    in_function = "var s = 'a';\nfunction f() {\n    var s = lookup();\n    db.get(s);\n}\n"
    assert engine.analyze(in_function) == []

    in_block = "var s = 'a';\nif (s) {\n    let s = lookup();\n    db.get(s);\n}\ndb.get(s);\n"
    diagnostics = engine.analyze(in_block)
    assert [d.range.start.line for d in diagnostics] == [5]


def test_first_matching_overload_wins(engine):
    assert engine.analyze("finder.find(1);\nfinder.find('x');\nfinder.find('x', 5);\n") == []


def test_fewest_mismatches_reported_first_seen_on_tie(engine):
    diagnostics = engine.analyze("finder.find(true);\n")
    assert diagnostics[0].mismatches == ["Argument 1 ('id'): expected number, got boolean"]

    diagnostics = engine.analyze("finder.find(true, 'x');\n")
    assert diagnostics[0].mismatches == [
        "Argument 1 ('name'): expected string, got boolean",
        "Argument 2 ('limit'): expected number, got string",
    ]


def test_null_is_accepted_for_optional_parameters(engine):
    assert engine.analyze("finder.format('a', null);\n") == []
    assert engine.analyze("finder.format(null);\n")[0].mismatches == [
        "Argument 1 ('value'): expected string, got null"]


def test_calls_inside_initializers_and_arguments(engine):
    source = "var row = db.get('a');\nlog(db.get('b'));\n"
    assert [d.range.start.line for d in engine.analyze(source)] == [0, 1]


def test_unknown_objects_and_methods_are_ignored(engine):
    assert engine.analyze("other.get('x');\ndb.put('x');\nget('x');\ndb['get']('x');\n") == []


def test_positions_count_code_points(engine):
    diagnostics = engine.analyze("var s = 'é'; db.get('x');\n")
    assert diagnostics[0].range.start.character == 13
    assert diagnostics[0].range.end.character == 24


def test_parse_failure_returns_none(engine):
    assert engine.analyze("db.get(1;\n") is None


def test_unknown_actuals_can_be_allowed(tmp_path, make_catalog):
    source = "/** @type {?} */\nvar q = lookup();\ndb.get(q);\n"
    catalog = make_catalog(GLOBALS_OBJECT, DB_OBJECT)

    strict = _engine(tmp_path, catalog)
    assert strict.analyze(source)[0].mismatches == ["Argument 1 ('id'): expected number, got unknown"]

    lenient = _engine(tmp_path, catalog, allow_unknown_actuals=True)
    assert lenient.analyze(source) == []


def test_project_globals_are_checked(tmp_path, make_catalog, write_files):
    write_files({'core/globals.js': "/** @param {Number} id */\nfunction load(id) {}\n"})
    engine = _engine(tmp_path, make_catalog(GLOBALS_OBJECT))
    assert len(engine.analyze("globals.load('x');\n")) == 1
    assert engine.analyze("globals.load(3);\n") == []


def test_concurrent_analyses_do_not_interact(engine):
    sources = ["var s = 'a';\ndb.get(s);\n", "var s = 1;\ndb.get(s);\n"] * 10
    with ThreadPoolExecutor(max_workers=4) as executor:
        results = list(executor.map(engine.analyze, sources))
    assert [len(r) for r in results] == [1, 0] * 10
