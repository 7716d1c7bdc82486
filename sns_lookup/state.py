import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from construct import Bytes, Struct
from solders.pubkey import Pubkey

from .constants import NAME_REGISTRY_HEADER_LEN
from .errors import InvalidRecordDataError, NoAccountDataError

logger = logging.getLogger(__name__)

NAME_REGISTRY_LAYOUT = Struct(
    "parent_name" / Bytes(32),
    "owner" / Bytes(32),
    "class_" / Bytes(32),
)

# get_multiple_accounts accepts at most 100 keys per call
MULTIPLE_ACCOUNTS_LIMIT = 100


@dataclass(frozen=True)
class NameRegistry:
    parent_name: Pubkey
    owner: Pubkey
    class_: Pubkey
    data: bytes

    @classmethod
    def deserialize(cls, raw: Optional[bytes]) -> "NameRegistry":
        if not raw:
            raise NoAccountDataError()
        raw = bytes(raw)
        if len(raw) < NAME_REGISTRY_HEADER_LEN:
            raise InvalidRecordDataError(
                f"Name registry too short: {len(raw)} < {NAME_REGISTRY_HEADER_LEN}"
            )
        header = NAME_REGISTRY_LAYOUT.parse(raw[:NAME_REGISTRY_HEADER_LEN])
        return cls(
            parent_name=Pubkey.from_bytes(header.parent_name),
            owner=Pubkey.from_bytes(header.owner),
            class_=Pubkey.from_bytes(header.class_),
            data=raw[NAME_REGISTRY_HEADER_LEN:],
        )


def _account_data(account) -> Optional[bytes]:
    if account is None:
        return None
    return bytes(account.data)


def fetch_account_data(client, key: Pubkey) -> Optional[bytes]:
    """Raw bytes of an account, None when it does not exist."""
    res = client.get_account_info(key)
    data = _account_data(res.value)
    logger.debug("Fetched %s: %s", key, "missing" if data is None else f"{len(data)} bytes")
    return data


def retrieve(client, key: Pubkey) -> Optional[NameRegistry]:
    data = fetch_account_data(client, key)
    if data is None:
        return None
    return NameRegistry.deserialize(data)


def fetch_multiple_account_data(client, keys: Sequence[Pubkey]) -> List[Optional[bytes]]:
    keys = list(keys)
    results = []
    for i in range(0, len(keys), MULTIPLE_ACCOUNTS_LIMIT):
        res = client.get_multiple_accounts(keys[i:i + MULTIPLE_ACCOUNTS_LIMIT])
        results.extend(_account_data(account) for account in res.value)
    return results


def retrieve_batch(client, keys: Sequence[Pubkey]) -> List[Optional[NameRegistry]]:
    return [
        NameRegistry.deserialize(data) if data else None
        for data in fetch_multiple_account_data(client, keys)
    ]
