import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sns_lookup.utils import detect_input_type, explorer_address_url, format_address, format_domain, is_pubkey


def test_format_domain():
    assert format_domain("bonfida") == "bonfida.sol"
    assert format_domain("bonfida.sol") == "bonfida.sol"


def test_format_address():
    addr = "HKKp49qGWXd639QsuH7JiLijfVW5UtCVY4s1n2HANwEA"
    assert format_address(addr) == "HKKp...NwEA"
    assert format_address("short") == "short"


def test_detect_input_type():
    assert is_pubkey("HKKp49qGWXd639QsuH7JiLijfVW5UtCVY4s1n2HANwEA")
    assert detect_input_type("HKKp49qGWXd639QsuH7JiLijfVW5UtCVY4s1n2HANwEA") == "pubkey"
    assert detect_input_type("bonfida.sol") == "domain"
    assert detect_input_type("0OIl0OIl0OIl0OIl0OIl0OIl0OIl0OIl0OIl") == "domain"
    assert detect_input_type("  ") is None


def test_explorer_url():
    assert explorer_address_url("abc") == "https://explorer.solana.com/address/abc"
