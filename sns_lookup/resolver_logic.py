import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

import requests
from solana.rpc.api import Client
from solana.rpc.types import DataSliceOpts, MemcmpOpts
from solders.pubkey import Pubkey

from .config import SnsConfig, load_config
from .constants import NAME_PROGRAM_ID, ROOT_DOMAIN_ACCOUNT
from .derivation import (
    get_domain_key,
    get_record_key,
    get_record_v2_key,
    get_reverse_key_from_domain_key,
)
from .errors import ErrorType, SNSError, StaleRecordError
from .proxy import ProxyClient, ProxyError
from .records import DecodedRecord, Record, deserialize_record
from .records_v2 import deserialize_record_v2
from .reverse import deserialize_reverse
from .state import NameRegistry, fetch_account_data, retrieve, retrieve_batch
from .utils import is_pubkey

logger = logging.getLogger(__name__)


class ResolutionStatus(str, Enum):
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass
class Resolution:
    """Outcome of one resolution request."""

    status: ResolutionStatus
    value: Any = None
    error: Optional[ErrorType] = None
    record: Optional[DecodedRecord] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResolutionStatus.RESOLVED

    @property
    def trusted(self) -> bool:
        # Resolved values carrying StaleRecord are returned but not trusted
        return self.ok and self.error is None

    @classmethod
    def resolved(cls, value, record: DecodedRecord = None, error: ErrorType = None) -> "Resolution":
        return cls(ResolutionStatus.RESOLVED, value=value, record=record, error=error)

    @classmethod
    def not_found(cls, message: str = None) -> "Resolution":
        return cls(ResolutionStatus.NOT_FOUND, message=message)

    @classmethod
    def failed(cls, exc: SNSError) -> "Resolution":
        return cls(ResolutionStatus.ERROR, error=exc.type, message=exc.message)


class SnsResolver:
    """
    Resolves .sol domains against an RPC connection.
    Every call derives the account keys, fetches, then decodes; nothing is cached.
    """

    def __init__(self, client=None, config: SnsConfig = None, proxy: ProxyClient = None):
        self.config = config or load_config()
        self.client = client or Client(self.config.rpc_url)
        self.proxy = proxy

    def resolve_owner(self, domain: str) -> Resolution:
        """Owner key stored in the domain's name registry header."""
        try:
            key = get_domain_key(domain).pubkey
            registry = retrieve(self.client, key)
        except SNSError as exc:
            return Resolution.failed(exc)
        if registry is None:
            return Resolution.not_found(f"{domain} is not registered")
        return Resolution.resolved(registry.owner)

    def lookup(self, domain: str) -> Tuple[Pubkey, Optional[NameRegistry]]:
        """Domain key and full name registry (None when the account is absent)."""
        key = get_domain_key(domain).pubkey
        return key, retrieve(self.client, key)

    def get_record(self, domain: str, record: Record, strict: bool = False) -> Resolution:
        return self._get_record(domain, record, 1, strict)

    def get_record_v2(self, domain: str, record: Record, strict: bool = False) -> Resolution:
        return self._get_record(domain, record, 2, strict)

    def _get_record(self, domain: str, record: Record, version: int, strict: bool) -> Resolution:
        try:
            if isinstance(record, str) and not isinstance(record, Record):
                record = Record.from_str(record)
            domain_registry = retrieve(self.client, get_domain_key(domain).pubkey)
            if domain_registry is None:
                if version == 2:
                    return self._record_v2_with_proxy(domain, record)
                return Resolution.not_found(f"{domain} is not registered")
            decoded = self._fetch_record(domain, record, version, domain_registry.owner)
        except SNSError as exc:
            return Resolution.failed(exc)
        if decoded is None:
            return Resolution.not_found(f"No {record.value} record for {domain}")

        if decoded.stale:
            logger.info("%s record of %s is stale", record.value, domain)
            if strict:
                raise StaleRecordError(f"{record.value} record of {domain} is stale", record=decoded)
            return Resolution.resolved(decoded.value, decoded, ErrorType.StaleRecord)
        return Resolution.resolved(decoded.value, decoded)

    def _fetch_record(self, domain: str, record: Record, version: int, owner: Pubkey) -> Optional[DecodedRecord]:
        if version == 2:
            key = get_record_v2_key(domain, record)
            raw = fetch_account_data(self.client, key)
            if raw is None:
                return None
            return deserialize_record_v2(raw, record, owner)

        key = get_record_key(domain, record)
        raw = fetch_account_data(self.client, key)
        if raw is None:
            return None
        registry = NameRegistry.deserialize(raw)
        return deserialize_record(registry.data, record, key, owner)

    def resolve(self, domain: str) -> Resolution:
        """
        Wallet a domain points to: a verified SOL record (v2 first, then v1),
        otherwise the owner. Falls back to the proxy when configured and the
        domain is missing on chain.
        """
        try:
            registry = retrieve(self.client, get_domain_key(domain).pubkey)
        except SNSError as exc:
            return Resolution.failed(exc)
        if registry is None:
            return self._resolve_with_proxy(domain)

        for version in (2, 1):
            try:
                decoded = self._fetch_record(domain, Record.SOL, version, registry.owner)
            except SNSError as exc:
                logger.debug("Ignoring unreadable SOL v%d record of %s: %s", version, domain, exc)
                continue
            if decoded is not None and decoded.trusted:
                return Resolution.resolved(Pubkey.from_bytes(decoded.content), decoded)
        return Resolution.resolved(registry.owner)

    def _resolve_with_proxy(self, domain: str) -> Resolution:
        if self.proxy is None:
            return Resolution.not_found(f"{domain} is not registered")
        try:
            result = self.proxy.resolve(domain)
        except (ProxyError, requests.RequestException) as exc:
            logger.warning("Proxy lookup for %s failed: %s", domain, exc)
            return Resolution.not_found(f"{domain} is not registered")
        if not result:
            return Resolution.not_found(f"{domain} is not registered")
        if not isinstance(result, str) or not is_pubkey(result):
            logger.warning("Proxy returned an invalid key for %s: %r", domain, result)
            return Resolution.not_found(f"{domain} is not registered")
        return Resolution.resolved(Pubkey.from_string(result.strip()))

    def _record_v2_with_proxy(self, domain: str, record: Record) -> Resolution:
        if self.proxy is None:
            return Resolution.not_found(f"{domain} is not registered")
        try:
            result = self.proxy.get_record_v2(domain, record.value)
        except (ProxyError, requests.RequestException) as exc:
            logger.warning("Proxy record lookup for %s failed: %s", domain, exc)
            return Resolution.not_found(f"{domain} is not registered")
        # {"deserialized": ..., "verified": {"staleness": bool, "roa": bool}}
        if isinstance(result, dict):
            value = result.get("deserialized")
            stale = (result.get("verified") or {}).get("staleness") is False
        else:
            value, stale = result, False
        if not value:
            return Resolution.not_found(f"No {record.value} record for {domain}")
        return Resolution.resolved(str(value), error=ErrorType.StaleRecord if stale else None)

    def resolve_batch(self, domains: Sequence[str]) -> List[Resolution]:
        return [self.resolve_owner(domain) for domain in domains]

    def get_all_domains(self, owner: Pubkey) -> List[Pubkey]:
        """Keys of every .sol domain owned by `owner`."""
        filters = [
            # Header: parent(32), owner(32), class(32)
            MemcmpOpts(offset=32, bytes=str(owner)),
            MemcmpOpts(offset=0, bytes=str(ROOT_DOMAIN_ACCOUNT)),
        ]
        res = self.client.get_program_accounts(
            NAME_PROGRAM_ID,
            encoding="base64",
            data_slice=DataSliceOpts(offset=0, length=0),
            filters=filters,
        )
        return [account.pubkey for account in res.value]

    def reverse_lookup(self, domain_key: Pubkey, parent: Pubkey = None) -> Resolution:
        """Domain name of a name account key, `parent` is required for subdomains."""
        try:
            reverse_key = get_reverse_key_from_domain_key(domain_key, parent)
            registry = retrieve(self.client, reverse_key)
            if registry is None:
                return Resolution.not_found(f"No reverse record for {domain_key}")
            return Resolution.resolved(deserialize_reverse(registry.data, parent is not None))
        except SNSError as exc:
            return Resolution.failed(exc)

    def reverse_lookup_batch(self, domain_keys: Sequence[Pubkey]) -> List[Optional[str]]:
        reverse_keys = [get_reverse_key_from_domain_key(key) for key in domain_keys]
        names = []
        for key, registry in zip(domain_keys, retrieve_batch(self.client, reverse_keys)):
            if registry is None or not registry.data:
                names.append(None)
                continue
            try:
                names.append(deserialize_reverse(registry.data))
            except SNSError as exc:
                logger.debug("Unreadable reverse record for %s: %s", key, exc)
                names.append(None)
        return names

    def get_domains_with_names(self, owner: Pubkey) -> List[Tuple[Pubkey, Optional[str]]]:
        keys = self.get_all_domains(owner)
        return list(zip(keys, self.reverse_lookup_batch(keys)))

    def get_domain_names(self, owner: Pubkey) -> List[str]:
        """
        Names of the domains owned by `owner`. When nothing is found on chain
        and a proxy is configured, the proxy's index is asked instead.
        """
        names = [name for _, name in self.get_domains_with_names(owner) if name is not None]
        if names or self.proxy is None:
            return names
        try:
            entries = self.proxy.get_domains(str(owner))
        except (ProxyError, requests.RequestException) as exc:
            logger.warning("Proxy domains lookup for %s failed: %s", owner, exc)
            return []
        # Entries are {"key": ..., "domain": ...} objects or bare names
        for entry in entries:
            name = entry.get("domain") if isinstance(entry, dict) else entry
            if name:
                names.append(str(name))
        return names
