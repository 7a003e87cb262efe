import pytest

from morseflow.core.symbol_table import SYMBOL_TABLE, WORD_SEPARATOR, SymbolTable


def test_letters_digits_and_space():
    assert SYMBOL_TABLE.lookup("A") == ".-"
    assert SYMBOL_TABLE.lookup("0") == "-----"
    assert SYMBOL_TABLE.lookup(" ") == WORD_SEPARATOR == "/"


def test_lookup_is_case_insensitive():
    assert SYMBOL_TABLE.lookup("q") == SYMBOL_TABLE.lookup("Q") == "--.-"
    assert "q" in SYMBOL_TABLE


def test_unknown_character_and_token():
    assert SYMBOL_TABLE.lookup("~") is None
    assert SYMBOL_TABLE.reverse_lookup("......") is None
    assert "~" not in SYMBOL_TABLE


def test_reverse_is_exact_inverse():
    for char in SYMBOL_TABLE:
        assert SYMBOL_TABLE.reverse_lookup(SYMBOL_TABLE.lookup(char)) == char
    assert SYMBOL_TABLE.reverse_lookup("/") == " "


def test_table_size():
    # 26 letters, 10 digits, 18 punctuation marks, space
    assert len(SYMBOL_TABLE) == 55


def test_as_dict_is_a_copy():
    codes = SYMBOL_TABLE.as_dict()
    codes["A"] = "---"
    assert SYMBOL_TABLE.lookup("A") == ".-"


def test_duplicate_codes_rejected():
    with pytest.raises(ValueError):
        SymbolTable({"A": ".-", "B": ".-"})
