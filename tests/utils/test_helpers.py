"""Tests for display formatting, cursor chains and configuration."""
import logging

from servoy_intel.config import AnalyzerConfig
from servoy_intel.models import Function, Param, TypeInfo
from servoy_intel.utils import (
    FileFilter,
    format_function_detail,
    format_function_docs,
    format_signature_label,
    format_snippet,
    get_chain,
)

OUTPUT = Function('output', [
    Param('msg', TypeInfo('string'), 'text to log'),
    Param('level', TypeInfo('number'), 'log level', optional=True),
], returns=TypeInfo('void'), description='Writes a message')


def test_signature_and_detail():
    assert format_signature_label(OUTPUT) == 'output(msg: string, level?: number)'
    assert format_function_detail(OUTPUT) == '(method) output(msg: string, level?: number): void'


def test_docs_join_overloads():
    docs = format_function_docs(OUTPUT, Function('output', description='Other'))
    assert docs.startswith('**output**\n\n_Writes a message_')
    assert '- **level** (number)_(optional)_: log level' in docs
    assert '\n---\n' in docs


def test_snippet_brackets_optional_params():
    assert format_snippet(OUTPUT) == 'output(${1:msg},[${2:level}])'


def test_get_chain():
    text = 'application.output(globals.\n    mod'
    assert get_chain(text, len(text)) == 'globals.mod'
    assert get_chain('foo.', 4) == 'foo.'
    assert get_chain('x = bar', 7) == 'bar'


def test_file_filter(tmp_path):
    (tmp_path / 'keep').mkdir()
    (tmp_path / 'keep' / 'a.js').write_text('', encoding='utf-8')
    (tmp_path / 'keep' / 'a.min.js').write_text('', encoding='utf-8')
    (tmp_path / 'vendor').mkdir()
    (tmp_path / 'vendor' / 'b.js').write_text('', encoding='utf-8')

    found = FileFilter(['vendor']).find_files(str(tmp_path), lambda name: name.endswith('.js'))
    assert [p.rsplit('/', 1)[-1] for p in found] == ['a.js']


def test_config_from_editor_options(caplog):
    with caplog.at_level(logging.WARNING):
        config = AnalyzerConfig.from_dict({
            'typeComparison': {'allowUnknownActuals': True},
            'vendorDirs': 'bower_components',
            'maxWorkers': '3',
            'colour': 'blue',
        })

    assert config.allow_unknown_actuals
    assert config.vendor_dirs == ('bower_components',)
    assert config.worker_count == 3
    assert config.extra == {'colour': 'blue'}
    assert 'colour' in caplog.text
    assert AnalyzerConfig.from_dict(None) == AnalyzerConfig()
