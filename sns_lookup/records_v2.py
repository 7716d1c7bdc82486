"""
Records v2 accounts.

After the 96 byte name registry header a v2 record stores::

    u16 staleness_validation | u16 roa_validation | u32 content_length
    staleness id | right of association id | content

The staleness id is the key that last validated the record, a record is only
fresh when that key is the current owner of the domain. The right of
association (RoA) id proves that the destination itself accepted the record.
"""

from enum import IntEnum
from typing import Optional

import base58
from construct import Int16ul, Int32ul, Struct
from solders.pubkey import Pubkey

from .constants import NAME_REGISTRY_HEADER_LEN
from .errors import InvalidRecordDataError, NoAccountDataError
from .records import (
    EVM_RECORDS,
    DecodedRecord,
    Record,
    encode_evm,
    encode_injective,
    encode_ip,
)

RECORD_HEADER_LAYOUT = Struct(
    "staleness_validation" / Int16ul,
    "roa_validation" / Int16ul,
    "content_length" / Int32ul,
)
RECORD_HEADER_LEN = RECORD_HEADER_LAYOUT.sizeof()


class Validation(IntEnum):
    NONE = 0
    Solana = 1
    Ethereum = 2
    UnverifiedSolana = 3


VALIDATION_LENGTHS = {
    Validation.NONE: 0,
    Validation.Solana: 32,
    Validation.Ethereum: 20,
    Validation.UnverifiedSolana: 32,
}


def _validation(value: int) -> Validation:
    try:
        return Validation(value)
    except ValueError:
        raise InvalidRecordDataError(f"Unknown validation type: {value}") from None


def deserialize_record_v2_content(content: bytes, record: Record) -> str:
    if record == Record.SOL:
        if len(content) != 32:
            raise InvalidRecordDataError(f"Invalid SOL record length: {len(content)}")
        return base58.b58encode(content).decode("ascii")
    if record in EVM_RECORDS:
        if len(content) != 20:
            raise InvalidRecordDataError(f"Invalid {record.value} record length: {len(content)}")
        return encode_evm(content)
    if record == Record.Injective:
        return encode_injective(content)
    if record in (Record.A, Record.AAAA):
        expected = 4 if record == Record.A else 16
        if len(content) != expected:
            raise InvalidRecordDataError(f"Invalid {record.value} record length: {len(content)}")
        return encode_ip(content)
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidRecordDataError(f"Record is not valid UTF-8: {exc}") from exc


def _check_roa(record: Record, roa_validation: Validation, roa_id: bytes, content: bytes) -> Optional[bool]:
    if record == Record.SOL:
        return roa_validation == Validation.Solana and roa_id == content
    if record in EVM_RECORDS:
        return roa_validation == Validation.Ethereum and roa_id == content
    return None


def deserialize_record_v2(raw: Optional[bytes], record: Record, owner: Pubkey = None) -> DecodedRecord:
    """Decode a full v2 record account (header included)."""
    if not raw:
        raise NoAccountDataError()
    raw = bytes(raw)
    start = NAME_REGISTRY_HEADER_LEN + RECORD_HEADER_LEN
    if len(raw) < start:
        raise InvalidRecordDataError(f"Record v2 account too short: {len(raw)}")

    header = RECORD_HEADER_LAYOUT.parse(raw[NAME_REGISTRY_HEADER_LEN:start])
    staleness = _validation(header.staleness_validation)
    roa = _validation(header.roa_validation)
    staleness_len = VALIDATION_LENGTHS[staleness]
    roa_len = VALIDATION_LENGTHS[roa]

    body = raw[start:]
    if len(body) != staleness_len + roa_len + header.content_length:
        raise InvalidRecordDataError(
            f"Record v2 length mismatch: header declares {staleness_len + roa_len + header.content_length} "
            f"bytes, account holds {len(body)}"
        )

    staleness_id = body[:staleness_len]
    roa_id = body[staleness_len:staleness_len + roa_len]
    content = body[staleness_len + roa_len:]

    fresh = owner is not None and staleness == Validation.Solana and staleness_id == bytes(owner)
    return DecodedRecord(
        record,
        deserialize_record_v2_content(content, record),
        content,
        stale=not fresh,
        roa_valid=_check_roa(record, roa, roa_id, content),
        staleness_id=staleness_id,
        roa_id=roa_id,
        version=2,
    )
