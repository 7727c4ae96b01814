from urllib.parse import quote_from_bytes

import pytest

from paramenc.controller import BINARY, ActionEncodingTemplate, InvalidParameterEncoding, UnknownEncodingError
from paramenc.controller.params import decode_value, encoding_for, is_binary, parse_urlencoded


def test_decode_binary_keeps_bytes():
    assert decode_value(b'\xff\xfe', BINARY) == b'\xff\xfe'
    assert decode_value(b'\xff', 'ASCII-8BIT') == b'\xff'


def test_decode_invalid_utf8():
    with pytest.raises(InvalidParameterEncoding) as exc:
        decode_value(b'\xff', 'utf-8', 'name')
    assert exc.value.name == 'name'
    assert isinstance(exc.value, ValueError)


def test_decode_unknown_encoding():
    with pytest.raises(UnknownEncodingError):
        decode_value(b'abc', 'no-such-codec')


def test_is_binary():
    assert is_binary('binary') and is_binary('ascii-8bit')
    assert not is_binary('utf-8') and not is_binary(None)


def test_encoding_for_falls_back_to_default():
    explicit = ActionEncodingTemplate().with_param('file_path', BINARY)
    assert encoding_for('file_path', explicit) == BINARY
    assert encoding_for('other', explicit, 'latin-1') == 'latin-1'
    assert encoding_for('other', None, 'latin-1') == 'latin-1'


def test_parse_shift_jis_values():
    raw = b'id=1&name=' + quote_from_bytes('山田'.encode('shift_jis')).encode('ascii')
    params = parse_urlencoded(raw, ActionEncodingTemplate(fallback='shift_jis'))
    assert params['id'] == '1'
    assert params['name'] == '山田'


def test_parse_mixed_template():
    raw = b'file_path=%FF%FE&repo_name=%E4%B8%AD'
    template = ActionEncodingTemplate().with_param('file_path', BINARY)
    params = parse_urlencoded(raw, template)
    assert params['file_path'] == b'\xff\xfe'
    assert params['repo_name'] == '中'


def test_parse_without_template_rejects_invalid_utf8():
    with pytest.raises(InvalidParameterEncoding):
        parse_urlencoded(b'q=%FF')


def test_parse_multi_values_and_blanks():
    params = parse_urlencoded(b'tag=a&tag=b+c&empty=&flag')
    assert params.getlist('tag') == ['a', 'b c']
    assert params['empty'] == ''
    assert params['flag'] == ''


def test_parse_empty():
    assert len(parse_urlencoded(b'')) == 0
