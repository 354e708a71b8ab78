import pytest

from shellconf.validator.validator import is_legal_name, is_legal_value


@pytest.mark.parametrize("name", ["FOO", "_X", "X_", "__", "X1", "_1", "foo", "camelCase"])
def test_legal_names(name):
    assert is_legal_name(name) is True


@pytest.mark.parametrize("name", ["_", "", "1", "1FOO", "FOO-BAR", "FOO BAR", "FÖO", "$FOO", "FOO\n"])
def test_illegal_names(name):
    assert is_legal_name(name) is False


@pytest.mark.parametrize("value", ["", "bar", "bar baz", "tab\there", "$`\\\"'", "…"])
def test_legal_values(value):
    assert is_legal_value(value) is True


@pytest.mark.parametrize("value", ["\0", "a\nb", "a\rb", "trailing\n", "nul\0inside"])
def test_illegal_values(value):
    assert is_legal_value(value) is False
