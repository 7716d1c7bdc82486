import os
import sys
from unittest.mock import MagicMock

import pytest
from solders.pubkey import Pubkey

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sns_lookup.constants import ROOT_DOMAIN_ACCOUNT
from sns_lookup.errors import InvalidRecordDataError, NoAccountDataError
from sns_lookup.reverse import deserialize_reverse
from sns_lookup.state import NameRegistry, retrieve, retrieve_batch
from tests.helpers import make_client, registry_bytes

OWNER = Pubkey.from_string("HKKp49qGWXd639QsuH7JiLijfVW5UtCVY4s1n2HANwEA")
KEY = Pubkey.from_string("Crf8hzfthWGbGbLTVCiqRqV5MVnbpHB1L9KQMd6gsinb")


def test_deserialize_header():
    registry = NameRegistry.deserialize(registry_bytes(OWNER, data=b"payload"))
    assert registry.parent_name == ROOT_DOMAIN_ACCOUNT
    assert registry.owner == OWNER
    assert registry.class_ == Pubkey.from_bytes(bytes(32))
    assert registry.data == b"payload"


def test_deserialize_errors():
    with pytest.raises(NoAccountDataError):
        NameRegistry.deserialize(b"")
    with pytest.raises(InvalidRecordDataError):
        NameRegistry.deserialize(bytes(50))


def test_retrieve():
    client = make_client({KEY: registry_bytes(OWNER)})
    assert retrieve(client, KEY).owner == OWNER
    assert retrieve(client, OWNER) is None


def test_retrieve_batch_chunks():
    keys = [KEY] * 150
    client = make_client({KEY: registry_bytes(OWNER)})
    registries = retrieve_batch(client, keys)
    assert len(registries) == 150
    assert all(r.owner == OWNER for r in registries)
    assert client.get_multiple_accounts.call_count == 2


def test_deserialize_reverse():
    assert deserialize_reverse(b"\x07\x00\x00\x00bonfida") == "bonfida"
    assert deserialize_reverse(b"\x04\x00\x00\x00\x00dex", trim_first_null_byte=True) == "dex"
    assert deserialize_reverse(b"\x04\x00\x00\x00\x00dex") == "\x00dex"
    with pytest.raises(NoAccountDataError):
        deserialize_reverse(b"")
    with pytest.raises(InvalidRecordDataError):
        deserialize_reverse(b"\x09\x00\x00\x00short")
    with pytest.raises(InvalidRecordDataError):
        deserialize_reverse(b"\x01\x00")
