from typing import Optional

from .errors import InvalidRecordDataError, NoAccountDataError
from .int_codec import Numberu32


def deserialize_reverse(data: Optional[bytes], trim_first_null_byte: bool = False) -> str:
    """
    Decode the name stored in a reverse lookup account: a u32 length followed
    by the UTF-8 name. Subdomain reverse names start with a null byte.
    """
    if not data:
        raise NoAccountDataError()
    data = bytes(data)
    if len(data) < 4:
        raise InvalidRecordDataError(f"Reverse data too short: {len(data)}")
    length = Numberu32.decode(data[:4])
    if len(data) < 4 + length:
        raise InvalidRecordDataError(f"Reverse name length {length} exceeds account data")
    try:
        name = data[4:4 + length].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidRecordDataError(f"Reverse name is not valid UTF-8: {exc}") from exc
    if trim_first_null_byte and name.startswith("\x00"):
        name = name[1:]
    return name
