"""Tests for the symbol index."""
import logging

import pytest

from servoy_intel.config import AnalyzerConfig
from servoy_intel.errors import NotInitializedError
from servoy_intel.index import SymbolIndex, aggregate_globals
from servoy_intel.models import ExtractionResult, Function, Param, TypeInfo, Variable
from servoy_intel.storage import DiskCache


def _index(workspace, catalog_path, tmp_path):
    config = AnalyzerConfig(catalog_path=catalog_path)
    cache = DiskCache(str(workspace), root=str(tmp_path / 'cache'))
    return SymbolIndex(str(workspace), config, cache).initialize()


def test_queries_before_initialize_fail_loudly(tmp_path):
    index = SymbolIndex(str(tmp_path))
    with pytest.raises(NotInitializedError):
        index.lookup('db')
    with pytest.raises(NotInitializedError):
        index.list_names()


def test_globals_replaced_with_project_functions(tmp_path, db_catalog, write_files):
    workspace = write_files({
        'core/globals.js': "/** @param {Number} id */\nfunction load(id) {}\n/** @type {String} */\nvar mode = 'a';\n",
        'sales/globals.js': "function report() {}\n",
        'node_modules/pkg/globals.js': "function vendored() {}\n",
    })

    index = _index(workspace, db_catalog, tmp_path)

    assert index.list_names() == ['globals', 'db']
    globals_object = index.globals
    assert globals_object.description == 'Global scope of the solution'
    assert globals_object.function_names() == ['load', 'report']
    assert [p.name for p in globals_object.properties] == ['mode']
    assert index.lookup('db').functions[0].params[0].type == TypeInfo('number')
    assert index.lookup('missing') is None


def test_broken_globals_file_is_skipped(tmp_path, db_catalog, write_files):
    workspace = write_files({
        'core/globals.js': "function ok() {}\n",
        'broken/globals.js': "function (\n",
    })
    assert _index(workspace, db_catalog, tmp_path).globals.function_names() == ['ok']


def test_missing_catalog_still_builds_globals(tmp_path, write_files):
    workspace = write_files({'core/globals.js': "function ok() {}\n"})
    index = _index(workspace, str(tmp_path / 'nope.json'), tmp_path)
    assert index.list_names() == ['globals']
    assert index.globals.function_names() == ['ok']


def test_duplicate_functions(caplog):
    same = Function('f', [Param('a', TypeInfo('string'))])
    different = Function('f', [Param('a', TypeInfo('number'))])
    results = [
        ('one', ExtractionResult(functions=[same], variables=[Variable('v')])),
        ('two', ExtractionResult(functions=[Function('f', [Param('a', TypeInfo('string'))])],
                                 variables=[Variable('v')])),
        ('three', ExtractionResult(functions=[different])),
    ]

    with caplog.at_level(logging.WARNING):
        merged = aggregate_globals(results)

    assert merged.overloads('f') == [same, different]
    assert [v.name for v in merged.properties] == ['v', 'v']
    assert 'three' in caplog.text


def test_search_helpers(tmp_path, db_catalog, write_files):
    workspace = write_files({'core/globals.js': "function loadAll() {}\nfunction load(a) {}\nfunction load(a, b) {}\n"})
    index = _index(workspace, db_catalog, tmp_path)

    assert [obj.name for obj in index.search_objects('glob')] == ['globals']
    found = SymbolIndex.search_functions(index.globals, 'load')
    assert [f.name for f in found] == ['load', 'loadAll']
    assert len(found[0].params) == 1
    assert SymbolIndex.fuzzy_search(['db', 'globals'], 'd') == ['db']


def test_unset_catalog_path_degrades_to_empty_catalog(tmp_path, write_files):
    workspace = write_files({'core/globals.js': "function ok() {}\n"})
    config = AnalyzerConfig.from_dict({'catalogPath': None})
    index = SymbolIndex(str(workspace), config, DiskCache(str(workspace), root=str(tmp_path / 'cache'))).initialize()

    assert index.list_names() == ['globals']
    assert index.globals.function_names() == ['ok']


def test_same_named_module_folders_get_separate_cache_entries(tmp_path, db_catalog, write_files):
    source = "function shared() {}\n"
    workspace = write_files({'a/common/globals.js': source, 'b/common/globals.js': source})

    _index(workspace, db_catalog, tmp_path)
    cache = DiskCache(str(workspace), root=str(tmp_path / 'cache'))
    assert len(cache.list_folder('globals/a/common/globals')) == 1
    assert len(cache.list_folder('globals/b/common/globals')) == 1

    rebuilt = _index(workspace, db_catalog, tmp_path)
    location = rebuilt.globals.functions[0].location
    assert location.file_path.replace('\\', '/').endswith('a/common/globals.js')
