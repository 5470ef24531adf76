"""Tests for the doc comment reader and the comment map."""
from servoy_intel.extraction import parse_doc_comment, parse_script
from servoy_intel.models import TypeInfo


def test_description_and_tags():
    doc = parse_doc_comment("""*
     * Loads the orders.
     * Second line.
     * @param {String} server - server name
     * @param {Number} [limit=10] maximum rows
     * @return {JSDataSet} the rows
     """)

    assert doc.description == 'Loads the orders.\nSecond line.'
    params = doc.params()
    assert [p.name for p in params] == ['server', 'limit']
    assert params[0].description == 'server name'
    assert not params[0].optional
    assert params[1].optional
    assert params[1].type == TypeInfo('number', optional=True)
    assert doc.first({'returns', 'return'}).type == TypeInfo('JSDataSet')


def test_optional_type_marker():
    doc = parse_doc_comment('* @param {Number=} retries')
    assert doc.params()[0].optional


def test_nested_braces_in_type():
    doc = parse_doc_comment('* @type {{name: String, age: Number}}')
    assert doc.first({'type'}).type == TypeInfo('object')


def test_comment_map_keys_by_following_line():
    script = parse_script("""\
// first
var a = 1;

/* detached */

var b = 2;
/**
 * doc
 */
function f() {}
""")

    assert script.comments[2].value == ' first'
    assert not script.comments[2].is_doc_block
    assert 6 not in script.comments
    assert script.comments[10].is_doc_block
    assert set(script.comments) == {2, 10}
