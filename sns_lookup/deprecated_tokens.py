"""
Legacy token registry lookups.

Token metadata used to be published as name accounts under TOKEN_TLD. The
registry is no longer maintained, these helpers only remain for old callers.
"""

import warnings
from dataclasses import dataclass
from typing import Optional

from construct import Bytes, ConstructError, If, Int8ul, Int32ul, PascalString, Struct, this
from solders.pubkey import Pubkey

from .derivation import get_name_account_key
from .errors import InvalidRecordDataError, NoAccountDataError
from .hashing import get_hashed_name
from .state import retrieve

TOKEN_TLD = Pubkey.from_string("6NSu2tci4apRKQtt257bAVcvqYjB3zV2H1dWo56vgpa6")

# borsh string: u32 length + utf8
BorshString = PascalString(Int32ul, "utf8")

TOKEN_DATA_LAYOUT = Struct(
    "name" / BorshString,
    "ticker" / BorshString,
    "mint" / Bytes(32),
    "decimals" / Int8ul,
    "has_website" / Int8ul,
    "website" / If(this.has_website == 1, BorshString),
    "has_logo_uri" / Int8ul,
    "logo_uri" / If(this.has_logo_uri == 1, BorshString),
)

MINT_LAYOUT = Struct("mint" / Bytes(32))


@dataclass(frozen=True)
class TokenData:
    name: str
    ticker: str
    mint: Pubkey
    decimals: int
    website: Optional[str] = None
    logo_uri: Optional[str] = None

    @classmethod
    def deserialize(cls, data: bytes) -> "TokenData":
        try:
            parsed = TOKEN_DATA_LAYOUT.parse(bytes(data))
        except (ConstructError, UnicodeDecodeError) as exc:
            raise InvalidRecordDataError(f"Invalid token data: {exc}") from exc
        return cls(
            name=parsed.name,
            ticker=parsed.ticker,
            mint=Pubkey.from_bytes(parsed.mint),
            decimals=parsed.decimals,
            website=parsed.website,
            logo_uri=parsed.logo_uri,
        )


def _deprecated(name: str):
    warnings.warn(f"{name} is deprecated, the token registry is no longer maintained", DeprecationWarning, stacklevel=3)


def _registry_data(client, key: Pubkey) -> bytes:
    registry = retrieve(client, key)
    if registry is None or not registry.data:
        raise NoAccountDataError(f"No token registry data at {key}")
    return registry.data


def get_token_info_from_mint(client, mint: Pubkey) -> TokenData:
    _deprecated("get_token_info_from_mint")
    key = get_name_account_key(get_hashed_name(str(mint)), None, TOKEN_TLD)
    return TokenData.deserialize(_registry_data(client, key))


def get_token_info_from_name(client, name: str) -> TokenData:
    _deprecated("get_token_info_from_name")
    reverse_key = get_name_account_key(get_hashed_name(name), None, TOKEN_TLD)
    data = _registry_data(client, reverse_key)
    try:
        mint = Pubkey.from_bytes(MINT_LAYOUT.parse(data).mint)
    except ConstructError as exc:
        raise InvalidRecordDataError(f"Invalid mint data: {exc}") from exc
    return get_token_info_from_mint(client, mint)
