from unittest.mock import MagicMock

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from sns_lookup.constants import ROOT_DOMAIN_ACCOUNT
from sns_lookup.records import sol_record_message


def registry_bytes(owner: Pubkey, parent: Pubkey = ROOT_DOMAIN_ACCOUNT, data: bytes = b"", class_: Pubkey = None) -> bytes:
    # Header: parent(32), owner(32), class(32)
    return bytes(parent) + bytes(owner) + (bytes(class_) if class_ else bytes(32)) + data


def make_client(accounts: dict) -> MagicMock:
    """RPC client double serving a fixed snapshot of accounts."""
    client = MagicMock()

    def account(key):
        if key not in accounts:
            return None
        return MagicMock(data=accounts[key])

    client.get_account_info.side_effect = lambda key: MagicMock(value=account(key))
    client.get_multiple_accounts.side_effect = lambda keys: MagicMock(value=[account(k) for k in keys])
    return client


def signed_sol_record(signer: Keypair, record_key: Pubkey):
    """Destination + signature, skipping signatures that end in a zero byte."""
    for seed in range(1, 64):
        destination = Keypair.from_seed(bytes([seed]) * 32).pubkey()
        signature = bytes(signer.sign_message(sol_record_message(bytes(destination), record_key)))
        if signature[-1] != 0:
            return destination, bytes(destination) + signature
    raise AssertionError("no usable signature")
