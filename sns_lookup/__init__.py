"""Solana Name Service lookups: domain derivation, record decoding and resolution."""

from .constants import (
    CENTRAL_STATE_SNS_RECORDS,
    HASH_PREFIX,
    NAME_PROGRAM_ID,
    REVERSE_LOOKUP_CLASS,
    ROOT_DOMAIN_ACCOUNT,
)
from .derivation import (
    DomainKey,
    find_program_address,
    get_domain_key,
    get_name_account_key,
    get_record_key,
    get_record_v2_key,
    get_reverse_key,
)
from .errors import ErrorType, SNSError
from .hashing import get_hashed_name, hash_label, normalize_label
from .int_codec import Numberu32, Numberu64
from .records import DecodedRecord, Record, deserialize_record
from .records_v2 import deserialize_record_v2
from .resolver_logic import Resolution, ResolutionStatus, SnsResolver

__version__ = "0.1.0"
