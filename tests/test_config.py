import os
import sys
from unittest.mock import patch

import pytest

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sns_lookup.config import DEFAULT_PROXY_URL, DEFAULT_RPC_URL, ConfigurationError, load_config


@patch("sns_lookup.config.load_dotenv")
def test_defaults(mock_dotenv):
    with patch.dict(os.environ, {}, clear=True):
        config = load_config()
    assert config.rpc_url == DEFAULT_RPC_URL
    assert config.proxy_url == DEFAULT_PROXY_URL
    assert config.http_timeout == 5.0
    mock_dotenv.assert_called_once()


@patch("sns_lookup.config.load_dotenv")
def test_environment(mock_dotenv):
    env = {"SNS_RPC_URL": "http://localhost:8899", "SNS_PROXY_URL": "http://proxy/", "SNS_HTTP_TIMEOUT": "2.5"}
    with patch.dict(os.environ, env, clear=True):
        config = load_config()
    assert config.rpc_url == "http://localhost:8899"
    assert config.proxy_url == "http://proxy"
    assert config.http_timeout == 2.5


@patch("sns_lookup.config.load_dotenv")
def test_overrides(mock_dotenv):
    with patch.dict(os.environ, {"SNS_RPC_URL": "http://localhost:8899"}, clear=True):
        config = load_config(rpc_url="http://other:8899", proxy_url=None)
    assert config.rpc_url == "http://other:8899"
    assert config.proxy_url == DEFAULT_PROXY_URL


@pytest.mark.parametrize("timeout", ["soon", "-1"])
@patch("sns_lookup.config.load_dotenv")
def test_invalid_timeout(mock_dotenv, timeout):
    with patch.dict(os.environ, {"SNS_HTTP_TIMEOUT": timeout}, clear=True):
        with pytest.raises(ConfigurationError):
            load_config()
