import pytest

from morseflow.core.codec import Codec
from morseflow.core.policy import UnsupportedInputPolicy
from morseflow.core.symbol_table import SYMBOL_TABLE
from morseflow.exceptions import (
    ConfigurationError,
    EmptyInputError,
    InvalidCharacterError,
    InvalidCodeFormatError,
    InvalidCodeTokenError,
    TranslatorError,
)

HELLO_WITH_UNKNOWN = ".... . ...... .-.. .-.. ---"


def test_encode_sos():
    assert Codec().encode("SOS") == "... --- ..."


def test_encode_words():
    assert Codec().encode("Hello World") == ".... . .-.. .-.. --- / .-- --- .-. .-.. -.."


def test_encode_is_case_insensitive():
    assert Codec().encode("sos") == Codec().encode("SOS")


def test_encode_keeps_surrounding_spaces():
    assert Codec().encode(" A") == "/ .-"


def test_encode_fail_reports_character_and_position():
    with pytest.raises(InvalidCharacterError) as excinfo:
        Codec().encode("Hello~World")
    assert excinfo.value.character == "~"
    assert excinfo.value.position == 5
    assert "'~' at position 5" in str(excinfo.value)


def test_encode_skip():
    codec = Codec(UnsupportedInputPolicy.skip())
    assert codec.encode("HE~LLO") == codec.encode("HELLO")


def test_encode_substitute_emits_code_of_replacement():
    codec = Codec(UnsupportedInputPolicy.substitute("?"))
    assert codec.encode("A~B") == ".- ..--.. -..."


def test_encode_substitute_with_uncodable_replacement_emits_nothing():
    codec = Codec(UnsupportedInputPolicy.substitute("#"))
    assert codec.encode("A~B") == ".- -..."


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_encode_blank(text):
    with pytest.raises(EmptyInputError):
        Codec().encode(text)


def test_decode_sos():
    assert Codec().decode("... --- ...") == "SOS"


def test_decode_words():
    assert Codec().decode(".... .. / - .... . .-. .") == "HI THERE"


def test_decode_collapses_whitespace():
    assert Codec().decode("  ...   ---\t...\n") == "SOS"


def test_decode_fail_on_unknown_token():
    with pytest.raises(InvalidCodeTokenError) as excinfo:
        Codec().decode(HELLO_WITH_UNKNOWN)
    assert excinfo.value.token == "......"


def test_decode_skip():
    assert Codec(UnsupportedInputPolicy.skip()).decode(HELLO_WITH_UNKNOWN) == "HELLO"


def test_decode_substitute():
    codec = Codec(UnsupportedInputPolicy.substitute("?"))
    assert codec.decode(HELLO_WITH_UNKNOWN) == "HE?LLO"


@pytest.mark.parametrize("policy", [
    UnsupportedInputPolicy.fail(),
    UnsupportedInputPolicy.skip(),
    UnsupportedInputPolicy.substitute(),
])
def test_decode_format_error_ignores_policy(policy):
    with pytest.raises(InvalidCodeFormatError):
        Codec(policy).decode("... x ...")


@pytest.mark.parametrize("code", ["", "  ", "\n"])
def test_decode_blank(code):
    with pytest.raises(EmptyInputError):
        Codec().decode(code)


@pytest.mark.parametrize("text", ["SOS", "HELLO WORLD", "MORSE CODE 123", "A1 B2 C3"])
def test_round_trip(text):
    codec = Codec()
    assert codec.decode(codec.encode(text)) == text


@pytest.mark.parametrize("char", sorted(SYMBOL_TABLE))
def test_round_trip_every_character(char):
    codec = Codec()
    assert codec.decode(codec.encode(f"A{char}b")) == f"A{char}B"


def test_round_trip_all_punctuation_in_one_text():
    text = "'\"$@/()&:;=+-_.,?!"
    codec = Codec()
    assert codec.decode(codec.encode(text)) == text


@pytest.mark.parametrize("text", ["A  B", " A", "A ", " A  B ", "A   B"])
def test_round_trip_keeps_spacing(text):
    codec = Codec()
    assert codec.decode(codec.encode(text)) == text


def test_round_trip_uppercases():
    codec = Codec()
    assert codec.decode(codec.encode("Hello, World!")) == "HELLO, WORLD!"


def test_policy_can_be_swapped():
    codec = Codec()
    codec.policy = UnsupportedInputPolicy.skip()
    assert codec.encode("A~") == ".-"


def test_character_code():
    codec = Codec()
    assert codec.character_code("a") == ".-"
    assert codec.character_code("~") is None
    with pytest.raises(EmptyInputError):
        codec.character_code("")
    with pytest.raises(ConfigurationError):
        codec.character_code("ab")


def test_errors_share_base_class():
    with pytest.raises(TranslatorError):
        Codec().encode("~")
    with pytest.raises(TranslatorError):
        Codec().decode("abc")
