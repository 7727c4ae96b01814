import uuid

from paramenc.controller import BINARY, ActionEncodingTemplate, ParameterEncoding


def _controller():
    class SomeController(ParameterEncoding):
        pass
    return SomeController


def test_unconfigured_action_has_no_template():
    ctrl = _controller()
    assert ctrl.action_encoding_template('show') is None
    ctrl.param_encoding('index', 'q', 'latin-1')
    assert ctrl.action_encoding_template('show') is None


def test_default_encoding_answers_every_param():
    ctrl = _controller()
    ctrl.default_parameter_encoding('show', 'shift_jis')
    template = ctrl.action_encoding_template('show')
    assert template['id'] == 'shift_jis'
    assert template[uuid.uuid4().hex] == 'shift_jis'
    assert template.is_default


def test_skip_encoding_is_binary_default():
    ctrl = _controller()
    ctrl.skip_parameter_encoding('show')
    template = ctrl.action_encoding_template('show')
    assert template['file_path'] == BINARY
    assert template[uuid.uuid4().hex] == BINARY


def test_param_encodings_are_independent():
    ctrl = _controller()
    ctrl.param_encoding('show', 'file_path', BINARY)
    ctrl.param_encoding('show', 'repo_name', 'euc-jp')
    template = ctrl.action_encoding_template('show')
    assert template['file_path'] == BINARY
    assert template['repo_name'] == 'euc-jp'
    assert len(template) == 2


def test_explicit_template_answers_none_for_unlisted():
    ctrl = _controller()
    ctrl.param_encoding('show', 'file_path', BINARY)
    template = ctrl.action_encoding_template('show')
    assert template['other'] is None
    assert template.get('other', 'utf-8') == 'utf-8'
    assert 'other' not in template
    assert not template.is_default


def test_param_after_default_keeps_default():
    ctrl = _controller()
    ctrl.default_parameter_encoding('show', 'shift_jis')
    ctrl.param_encoding('show', 'x', BINARY)
    template = ctrl.action_encoding_template('show')
    assert template['x'] == BINARY
    assert template['y'] == 'shift_jis'


def test_default_after_param_discards_overrides():
    ctrl = _controller()
    ctrl.param_encoding('show', 'x', BINARY)
    ctrl.default_parameter_encoding('show', 'shift_jis')
    template = ctrl.action_encoding_template('show')
    assert template['x'] == 'shift_jis'
    assert list(template) == []


def test_names_are_normalized_to_str():
    class Action:
        def __str__(self):
            return 'show'

    ctrl = _controller()
    ctrl.param_encoding(Action(), 'file_path', BINARY)
    assert ctrl.action_encoding_template('show')['file_path'] == BINARY


def test_subclass_registry_is_independent():
    class Parent(ParameterEncoding):
        pass

    class Child(Parent):
        pass

    Parent.default_parameter_encoding('show', 'shift_jis')
    assert Child.action_encoding_template('show') is None

    Child.skip_parameter_encoding('index')
    assert Parent.action_encoding_template('index') is None
    assert Parent.action_encoding_template('show')['x'] == 'shift_jis'


def test_distinct_classes_are_independent():
    a, b = _controller(), _controller()
    a.skip_parameter_encoding('show')
    assert b.action_encoding_template('show') is None


def test_setup_param_encode_resets_registry():
    ctrl = _controller()
    ctrl.skip_parameter_encoding('show')
    ctrl.setup_param_encode()
    assert ctrl.action_encoding_template('show') is None
    assert ctrl.parameter_encodings() == {}


def test_template_is_copy_on_write():
    ctrl = _controller()
    ctrl.param_encoding('show', 'a', BINARY)
    before = ctrl.action_encoding_template('show')
    ctrl.param_encoding('show', 'b', 'latin-1')
    assert 'b' not in before
    assert ctrl.action_encoding_template('show')['b'] == 'latin-1'


def test_template_to_dict():
    template = ActionEncodingTemplate(fallback='shift_jis').with_param('x', BINARY)
    assert template.to_dict() == {'default': 'shift_jis', 'params': {'x': BINARY}}
