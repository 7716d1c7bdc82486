import os
import sys

import pytest
from solders.pubkey import Pubkey

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sns_lookup.deprecated_tokens import (
    MINT_LAYOUT,
    TOKEN_DATA_LAYOUT,
    TOKEN_TLD,
    TokenData,
    get_token_info_from_mint,
    get_token_info_from_name,
)
from sns_lookup.derivation import get_name_account_key
from sns_lookup.errors import InvalidRecordDataError, NoAccountDataError
from sns_lookup.hashing import get_hashed_name
from tests.helpers import make_client, registry_bytes

MINT = Pubkey.from_string("So11111111111111111111111111111111111111112")
OWNER = Pubkey.from_string("HKKp49qGWXd639QsuH7JiLijfVW5UtCVY4s1n2HANwEA")


def token_bytes(website=None):
    return TOKEN_DATA_LAYOUT.build(dict(
        name="Wrapped SOL",
        ticker="SOL",
        mint=bytes(MINT),
        decimals=9,
        has_website=1 if website else 0,
        website=website,
        has_logo_uri=0,
        logo_uri=None,
    ))


def test_token_data():
    token = TokenData.deserialize(token_bytes("https://solana.com"))
    assert token.name == "Wrapped SOL"
    assert token.ticker == "SOL"
    assert token.mint == MINT
    assert token.decimals == 9
    assert token.website == "https://solana.com"
    assert token.logo_uri is None
    with pytest.raises(InvalidRecordDataError):
        TokenData.deserialize(b"\x01")


def test_lookups_are_deprecated():
    mint_key = get_name_account_key(get_hashed_name(str(MINT)), None, TOKEN_TLD)
    name_key = get_name_account_key(get_hashed_name("Wrapped SOL"), None, TOKEN_TLD)
    client = make_client({
        mint_key: registry_bytes(OWNER, TOKEN_TLD, token_bytes()),
        name_key: registry_bytes(OWNER, TOKEN_TLD, MINT_LAYOUT.build(dict(mint=bytes(MINT)))),
    })
    with pytest.warns(DeprecationWarning):
        assert get_token_info_from_mint(client, MINT).ticker == "SOL"
    with pytest.warns(DeprecationWarning):
        assert get_token_info_from_name(client, "Wrapped SOL").mint == MINT


def test_missing_token():
    with pytest.warns(DeprecationWarning):
        with pytest.raises(NoAccountDataError):
            get_token_info_from_mint(make_client({}), MINT)
