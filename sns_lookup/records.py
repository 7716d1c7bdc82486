import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import base58
from bech32 import bech32_decode, bech32_encode, convertbits
from solders.pubkey import Pubkey
from solders.signature import Signature

from .errors import InvalidInputError, InvalidRecordDataError, NoAccountDataError


class Record(str, Enum):
    IPFS = "IPFS"
    ARWV = "ARWV"
    SOL = "SOL"
    ETH = "ETH"
    BTC = "BTC"
    LTC = "LTC"
    DOGE = "DOGE"
    Email = "email"
    Url = "url"
    Discord = "discord"
    Github = "github"
    Reddit = "reddit"
    Twitter = "twitter"
    Telegram = "telegram"
    Pic = "pic"
    SHDW = "SHDW"
    POINT = "POINT"
    BSC = "BSC"
    Injective = "INJ"
    Backpack = "backpack"
    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    TXT = "TXT"

    @classmethod
    def from_str(cls, name: str) -> "Record":
        """Look a record up by its on-chain name, case-insensitively."""
        for record in cls:
            if record.value.lower() == name.strip().lower():
                return record
        raise InvalidInputError(f"Unknown record: {name!r}")


EVM_RECORDS = (Record.ETH, Record.BSC)
INJECTIVE_HRP = "inj"

RECORD_SIZES = {
    Record.SOL: 96,
    Record.ETH: 20,
    Record.BSC: 20,
    Record.Injective: 20,
    Record.A: 4,
    Record.AAAA: 16,
}


@dataclass(frozen=True)
class DecodedRecord:
    record: Record
    value: str
    content: bytes
    # True when the record was not validated by the current domain owner
    stale: bool = False
    roa_valid: Optional[bool] = None
    staleness_id: Optional[bytes] = None
    roa_id: Optional[bytes] = None
    proof: Optional[bytes] = None
    version: int = 1

    @property
    def trusted(self) -> bool:
        return not self.stale and self.roa_valid is not False


def get_record_size(record: Record) -> Optional[int]:
    return RECORD_SIZES.get(record)


def check_sol_record(message: bytes, signed_record: bytes, pubkey: Pubkey) -> bool:
    """Verify the ed25519 signature of a SOL record against `pubkey`."""
    if len(signed_record) != 64:
        return False
    return Signature.from_bytes(bytes(signed_record)).verify(pubkey, message)


def sol_record_message(destination: bytes, record_key: Pubkey) -> bytes:
    # The owner signs the hex text of destination || record key
    return (bytes(destination) + bytes(record_key)).hex().encode("utf-8")


def _utf8(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidRecordDataError(f"Record is not valid UTF-8: {exc}") from exc


def encode_evm(data: bytes) -> str:
    return "0x" + data.hex()


def encode_injective(data: bytes) -> str:
    return bech32_encode(INJECTIVE_HRP, convertbits(list(data), 8, 5))


def encode_ip(data: bytes) -> str:
    return str(ipaddress.ip_address(bytes(data)))


def _is_legacy_valid(address: str, record: Record) -> bool:
    if record == Record.Injective:
        hrp, words = bech32_decode(address)
        return hrp == INJECTIVE_HRP and words is not None and len(words) == 32
    if record in EVM_RECORDS:
        if not address.startswith("0x"):
            return False
        try:
            return len(bytes.fromhex(address[2:])) == 20
        except ValueError:
            return False
    if record == Record.A:
        try:
            ipaddress.IPv4Address(address)
        except ValueError:
            return False
        return True
    if record == Record.AAAA:
        try:
            ipaddress.IPv6Address(address)
        except ValueError:
            return False
        return True
    return False


def deserialize_record(data: Optional[bytes], record: Record, record_key: Pubkey, owner: Pubkey = None) -> DecodedRecord:
    """
    Decode the data of a v1 record account (the bytes after the registry header).

    SOL records hold a destination key followed by a signature of the domain
    owner. When `owner` does not match the signature the record is still
    decoded and flagged as stale so callers can choose whether to trust it.
    """
    if not data:
        raise NoAccountDataError()
    data = bytes(data)
    size = get_record_size(record)

    if size is None:
        return DecodedRecord(record, _utf8(data).rstrip("\x00"), data.rstrip(b"\x00"))

    idx = len(data.rstrip(b"\x00"))

    # Old records were stored UTF-8 encoded
    if idx != size:
        address = _utf8(data[:idx])
        if _is_legacy_valid(address, record):
            return DecodedRecord(record, address, data[:idx])
        raise InvalidRecordDataError(f"Invalid {record.value} record: {address!r}")

    content = data[:size]
    if record == Record.SOL:
        destination, signature = content[:32], content[32:]
        valid = owner is not None and check_sol_record(
            sol_record_message(destination, record_key), signature, owner
        )
        return DecodedRecord(
            record,
            base58.b58encode(destination).decode("ascii"),
            destination,
            stale=not valid,
            proof=signature,
        )
    if record in EVM_RECORDS:
        return DecodedRecord(record, encode_evm(content), content)
    if record == Record.Injective:
        return DecodedRecord(record, encode_injective(content), content)
    if record in (Record.A, Record.AAAA):
        return DecodedRecord(record, encode_ip(content), content)

    raise InvalidRecordDataError(f"Unsupported sized record {record.value}")
