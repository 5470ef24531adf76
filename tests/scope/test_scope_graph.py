"""Tests for unit discovery and the scope graph."""
import os

import pytest

from servoy_intel.config import AnalyzerConfig
from servoy_intel.errors import NotInitializedError, SettingsError
from servoy_intel.models import ModuleRef
from servoy_intel.scope import (
    ScopeGraph,
    build_dependency_graph,
    parse_settings_text,
    read_solution_settings,
    resolve_transitive,
)
from servoy_intel.storage import DiskCache


def _settings(uuid, modules=None):
    lines = ['{', f'    uuid: "{uuid}",']
    if modules is not None:
        lines.append(f'    modulesNames: "{modules}",')
    lines.append('    style: "default"')
    lines.append('}')
    return '\n'.join(lines) + '\n'


@pytest.fixture
def chain_workspace(write_files):
    """A depends on B, B depends on C."""
    return write_files({
        'A/solution_settings.obj': _settings('a-1', 'B'),
        'A/forms/orders.js': "function show() {}\n",
        'A/globals.js': "function g() {}\n",
        'B/solution_settings.obj': _settings('b-1', 'C'),
        'B/scopes/util.js': "/** @param {Number} n */\nfunction twice(n) {}\n",
        'B/node_modules/lib/vendor.js': "function v() {}\n",
        'C/solution_settings.obj': _settings('c-1'),
        'C/deep.js': "function deep() {}\n",
        'D/solution_settings.obj': 'name: "D"\n',
    })


@pytest.fixture
def graph(chain_workspace, tmp_path):
    cache = DiskCache(str(chain_workspace), root=str(tmp_path / 'cache'))
    return ScopeGraph(str(chain_workspace), AnalyzerConfig(), cache).initialize()


def test_settings_parsing():
    settings = parse_settings_text(_settings('x-9', ' A , B,, '))
    assert settings == {'uuid': 'x-9', 'modulesNames': ' A , B,, ', 'style': 'default'}


def test_settings_without_uuid_is_rejected(tmp_path):
    path = tmp_path / 'Solo' / 'solution_settings.obj'
    path.parent.mkdir()
    path.write_text('modulesNames: "A",\n', encoding='utf-8')
    with pytest.raises(SettingsError):
        read_solution_settings(str(path))


def test_references_are_trimmed(tmp_path):
    path = tmp_path / 'Main' / 'solution_settings.obj'
    path.parent.mkdir()
    path.write_text(_settings('m-1', ' A , B,, '), encoding='utf-8')
    solution = read_solution_settings(str(path))
    assert solution.name == 'Main'
    assert solution.references == ('A', 'B')


def test_references_are_direct_only(graph):
    assert graph.references_of('A') == {'A', 'B'}
    assert graph.references_of('C') == {'C'}
    assert graph.references_of('Unknown') == set()


def test_unit_without_uuid_is_skipped(graph):
    assert [s.name for s in graph.solutions] == ['A', 'B', 'C']
    assert graph.solution_by_name('D') is None
    assert graph.solution_by_name('B').uuid == 'b-1'


def test_visible_modules(graph):
    assert graph.visible_modules('A') == [ModuleRef('orders', 'A'), ModuleRef('util', 'B')]
    assert graph.module_names('B') == ['util', 'deep']


def test_solution_for_path(graph, chain_workspace):
    assert graph.solution_for_path(os.path.join(chain_workspace, 'A', 'forms', 'orders.js')).name == 'A'
    assert graph.solution_for_path(os.path.join(chain_workspace, 'B', 'node_modules', 'lib', 'vendor.js')) is None
    assert graph.solution_for_path(os.path.join(chain_workspace, 'elsewhere.js')) is None


def test_declarations_are_indexed(graph, chain_workspace):
    result = graph.declarations_for(os.path.join(chain_workspace, 'B', 'scopes', 'util.js'))
    assert result.functions[0].name == 'twice'
    assert graph.declarations_for(os.path.join(chain_workspace, 'A', 'globals.js')) is None


def test_solution_scripts_are_cached_by_relative_path(graph, tmp_path):
    cache = DiskCache('unused', root=str(tmp_path / 'cache'))
    assert len(cache.list_folder('solutions/B/scopes/util')) == 1


def test_queries_before_initialize_fail_loudly(tmp_path):
    with pytest.raises(NotInitializedError):
        ScopeGraph(str(tmp_path)).references_of('A')


def test_transitive_resolution_handles_cycles():
    graph = {'A': ('A', 'B'), 'B': ('B', 'C'), 'C': ('C', 'A')}
    assert resolve_transitive(graph, 'A') == {'B', 'C'}
    assert resolve_transitive(graph, 'missing') == set()


def test_dependency_graph_lists_self_first(graph):
    solutions = graph.solutions
    assert build_dependency_graph(solutions)['A'] == ('A', 'B')
