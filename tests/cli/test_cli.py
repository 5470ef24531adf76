"""Tests for context construction and the command line."""
import logging

import pytest

from servoy_intel import build_context
from servoy_intel.cli import main
from servoy_intel.config import AnalyzerConfig

SETTINGS = 'uuid: "1234",\nmodulesNames: "Base",\n'


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _project(write_files):
    return write_files({
        'Shop/solution_settings.obj': SETTINGS,
        'Shop/globals.js': "/** @param {Number} id */\nfunction load(id) {}\n",
        'Shop/forms/cart.js': "globals.load('x');\n",
        'Shop/forms/list.js': "globals.load(1);\n",
        'Base/solution_settings.obj': 'uuid: "5678",\n',
    })


def test_build_context(tmp_path, write_files):
    workspace = _project(write_files)
    context = build_context(str(workspace), AnalyzerConfig(cache_root=str(tmp_path / 'cache')))

    assert context.symbol_index.initialized
    assert context.scope_graph.references_of('Shop') == {'Shop', 'Base'}
    assert context.symbol_index.globals.function_names()[-1] == 'load'
    assert len(context.diagnostics.analyze("globals.load('x');")) == 1


def test_check_reports_diagnostics(tmp_path, write_files, capsys):
    workspace = _project(write_files)
    cache_args = ['--quiet', '--cache-root', str(tmp_path / 'cache')]

    assert main(cache_args + ['check', str(workspace), str(workspace / 'Shop' / 'forms' / 'list.js')]) == 0
    assert main(cache_args + ['check', str(workspace), str(workspace / 'Shop' / 'forms' / 'cart.js')]) == 1
    assert "No matching overload found for function 'globals.load'." in capsys.readouterr().out


def test_index_summary(tmp_path, write_files, capsys):
    workspace = _project(write_files)
    assert main(['--quiet', '--cache-root', str(tmp_path / 'cache'), 'index', str(workspace)]) == 0
    out = capsys.readouterr().out
    assert 'Solutions: 2' in out
    assert 'Shop: 2 visible modules (references: Base)' in out
