import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple

from solders.pubkey import Pubkey
from solders.solders import PubkeyError

from .constants import (
    CENTRAL_STATE_SNS_RECORDS,
    NAME_PROGRAM_ID,
    REVERSE_LOOKUP_CLASS,
    ROOT_DOMAIN_ACCOUNT,
    ZERO_KEY,
)
from .errors import InvalidInputError, NoValidAddressError
from .hashing import get_hashed_name, hash_label

logger = logging.getLogger(__name__)

SUBDOMAIN_PREFIX = "\x00"
RECORD_V1_PREFIX = "\x01"
RECORD_V2_PREFIX = "\x02"


class DomainKey(NamedTuple):
    pubkey: Pubkey
    hashed: bytes
    is_sub: bool
    parent: Optional[Pubkey]


def find_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> Tuple[Pubkey, int]:
    # Same search order as the runtime: bump 255 down to 1
    seeds = list(seeds)
    for bump in range(255, 0, -1):
        try:
            return Pubkey.create_program_address(seeds + [bytes([bump])], program_id), bump
        except PubkeyError:
            # On curve, or seeds the runtime refuses
            continue
    raise NoValidAddressError(f"No off-curve address for program {program_id}")


def get_name_account_key_with_bump(
    name_hash: bytes, name_class: Pubkey = None, parent_name: Pubkey = None
) -> Tuple[Pubkey, int]:
    seeds = [
        name_hash,
        bytes(name_class) if name_class else ZERO_KEY,
        bytes(parent_name) if parent_name else ZERO_KEY,
    ]
    return find_program_address(seeds, NAME_PROGRAM_ID)


def get_name_account_key(name_hash: bytes, name_class: Pubkey = None, parent_name: Pubkey = None) -> Pubkey:
    key, _ = get_name_account_key_with_bump(name_hash, name_class, parent_name)
    return key


def _derive(label: str, parent: Pubkey = ROOT_DOMAIN_ACCOUNT, prefix: str = "", name_class: Pubkey = None):
    if prefix in (RECORD_V1_PREFIX, RECORD_V2_PREFIX):
        # Record names are case sensitive on chain ("BTC", "email")
        hashed = get_hashed_name(prefix + label)
    else:
        hashed = hash_label(label, prefix)
    return get_name_account_key(hashed, name_class, parent), hashed


def _split_domain(domain: str) -> List[str]:
    if not isinstance(domain, str) or not domain.strip():
        raise InvalidInputError("Domain is empty")
    domain = domain.strip()
    if domain.lower().endswith(".sol"):
        domain = domain[: -len(".sol")]
    return domain.split(".")


def get_domain_key(domain: str, record: Optional[int] = None) -> DomainKey:
    """
    Derive the name account of a .sol domain or subdomain.
    `record` is None for domains, 1 or 2 for the record version being derived
    (only then are three labels accepted, e.g. "BTC.sub.bonfida").
    """
    labels = _split_domain(domain)
    if record is None:
        prefix = SUBDOMAIN_PREFIX
    elif record == 1:
        prefix = RECORD_V1_PREFIX
    elif record == 2:
        prefix = RECORD_V2_PREFIX
    else:
        raise InvalidInputError(f"Unknown record version: {record}")
    record_class = CENTRAL_STATE_SNS_RECORDS if record == 2 else None

    if len(labels) == 1:
        if record is not None:
            raise InvalidInputError("A record key needs a parent domain")
        key, hashed = _derive(labels[0])
        logger.debug("Domain %s key: %s", labels[0], key)
        return DomainKey(key, hashed, False, None)

    if len(labels) == 2:
        parent_key, _ = _derive(labels[1])
        key, hashed = _derive(labels[0], parent_key, prefix, record_class)
        logger.debug("Subdomain %s key: %s (parent %s)", ".".join(labels), key, parent_key)
        return DomainKey(key, hashed, True, parent_key)

    if len(labels) == 3 and record is not None:
        # Record of a subdomain
        parent_key, _ = _derive(labels[2])
        sub_key, _ = _derive(labels[1], parent_key, SUBDOMAIN_PREFIX)
        key, hashed = _derive(labels[0], sub_key, prefix, record_class)
        return DomainKey(key, hashed, True, sub_key)

    raise InvalidInputError(f"Invalid domain: {domain!r}")


def _record_key(domain: str, record_name: str, prefix: str, name_class: Pubkey = None) -> Pubkey:
    if not record_name or "." in record_name:
        raise InvalidInputError(f"Invalid record name: {record_name!r}")
    domain_key = get_domain_key(domain)
    return get_name_account_key(get_hashed_name(prefix + record_name), name_class, domain_key.pubkey)


def get_record_key(domain: str, record) -> Pubkey:
    """Key of a v1 record account, `record` is a Record or its on-chain name."""
    return _record_key(domain, getattr(record, "value", record), RECORD_V1_PREFIX)


def get_record_v2_key(domain: str, record) -> Pubkey:
    return _record_key(domain, getattr(record, "value", record), RECORD_V2_PREFIX, CENTRAL_STATE_SNS_RECORDS)


def get_reverse_key_from_domain_key(domain_key: Pubkey, parent: Pubkey = None) -> Pubkey:
    # Reverse accounts hash the base58 text of the domain key, no normalization
    hashed = get_hashed_name(str(domain_key))
    return get_name_account_key(hashed, REVERSE_LOOKUP_CLASS, parent)


def get_reverse_key(domain: str, is_sub: bool = False) -> Pubkey:
    domain_key = get_domain_key(domain)
    parent = domain_key.parent if is_sub else None
    return get_reverse_key_from_domain_key(domain_key.pubkey, parent)
