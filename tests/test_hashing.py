import hashlib
import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sns_lookup.errors import ErrorType, InvalidInputError
from sns_lookup.hashing import get_hashed_name, hash_label, normalize_label


def test_get_hashed_name():
    assert get_hashed_name("bonfida") == hashlib.sha256(b"SPL Name Servicebonfida").digest()
    assert len(get_hashed_name("bonfida")) == 32


def test_hash_is_case_insensitive():
    for label in ["bonfida", "dex", "a-b_c1"]:
        assert hash_label(label) == hash_label(label.upper())
    assert hash_label("Bonfida") == get_hashed_name("bonfida")


def test_hash_with_prefix():
    assert hash_label("Dex", "\x00") == get_hashed_name("\x00dex")


def test_raw_hash_keeps_case():
    # Reverse keys hash base58 text, which is case sensitive
    assert get_hashed_name("Crf8") != get_hashed_name("crf8")


@pytest.mark.parametrize("label", [
    "", "   ", "bon.fida", "bon fida", "héllo", "bon/fida",
    # Non-ASCII letters that lowercase or casefold into ASCII
    "ßonfida", "\u212aey", "bon\ufb01da", "\u0130stanbul",
])
def test_invalid_labels(label):
    with pytest.raises(InvalidInputError) as exc:
        normalize_label(label)
    assert exc.value.type == ErrorType.InvalidInput


def test_normalize_label():
    assert normalize_label("  BonFida ") == "bonfida"
