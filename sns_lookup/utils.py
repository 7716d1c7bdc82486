from typing import Optional

import base58

SOL_TLD_SUFFIX = ".sol"
EXPLORER_URL = "https://explorer.solana.com"


def format_domain(domain: str) -> str:
    if domain.endswith(SOL_TLD_SUFFIX):
        return domain
    return f"{domain}{SOL_TLD_SUFFIX}"


def format_address(addr: str) -> str:
    if len(addr) < 12:
        return addr
    return f"{addr[:4]}...{addr[-4:]}"


def is_pubkey(value: str) -> bool:
    value = value.strip()
    if not 32 <= len(value) <= 44:
        return False
    try:
        return len(base58.b58decode(value)) == 32
    except ValueError:
        return False


def detect_input_type(value: str) -> Optional[str]:
    """Tell a wallet / account key apart from a domain name."""
    value = value.strip()
    if not value:
        return None
    if is_pubkey(value):
        return "pubkey"
    return "domain"


def explorer_address_url(address) -> str:
    return f"{EXPLORER_URL}/address/{address}"
