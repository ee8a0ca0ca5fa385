"""Tests for SDK configuration and environment resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
import responses

from agnopay import (
    ConfigError,
    SDKConfig,
    build_environment,
    configure,
    create_client,
    create_order,
    get_config,
    load_env_file,
    reset_config,
)
from agnopay.core.config import DEFAULT_API_URL, DEFAULT_WALLET_URL
from agnopay.core.environment import read_dotenv

from .conftest import TEST_API_KEY


class TestGlobalConfig:
    def test_defaults(self) -> None:
        config = get_config()
        assert config.api_url == DEFAULT_API_URL
        assert config.wallet_url == DEFAULT_WALLET_URL
        assert config.orders_url == f"{DEFAULT_API_URL}/v1/orders"

    def test_configure_overrides_independently(self) -> None:
        configure(wallet_url="https://wallet.example.com/")
        assert get_config().wallet_url == "https://wallet.example.com"
        assert get_config().api_url == DEFAULT_API_URL

    def test_configure_starts_from_defaults(self) -> None:
        configure(api_url="https://api.example.com")
        configure(wallet_url="https://wallet.example.com")
        assert get_config().api_url == DEFAULT_API_URL

    def test_reset(self) -> None:
        configure(api_url="https://api.example.com")
        reset_config()
        assert get_config() == SDKConfig()

    def test_empty_url_rejected(self) -> None:
        with pytest.raises(ConfigError):
            configure(api_url="   ")


class TestEnvironment:
    def test_env_file_fills_gaps_and_overrides_win(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "AGNOPAY_API_URL=https://file.example.com\n"
            "export AGNOPAY_WALLET_URL='https://wallet.file.example.com'\n"
            "NOT A PAIR\n",
            encoding="utf-8",
        )

        environment = build_environment(
            env_file=str(env_file),
            base={"AGNOPAY_API_URL": "https://base.example.com"},
            overrides={"AGNOPAY_SECRET_KEY": "sk_override"},
        )

        assert environment.get("AGNOPAY_API_URL") == "https://base.example.com"
        assert environment.get("AGNOPAY_WALLET_URL") == "https://wallet.file.example.com"
        assert environment.get("AGNOPAY_SECRET_KEY") == "sk_override"
        assert environment.get("NOT A PAIR") is None

    def test_missing_env_file_is_ignored(self, tmp_path: Path) -> None:
        environment = build_environment(env_file=str(tmp_path / "absent.env"), base={})
        assert dict(environment.variables) == {}

    def test_load_env_file_preserves_existing(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("A=file\nB=file\n", encoding="utf-8")
        target = {"A": "existing"}

        merged = load_env_file(str(env_file), environ=target)

        assert merged == {"A": "existing", "B": "file"}
        assert target["B"] == "file"

    def test_config_from_env(self, tmp_path: Path) -> None:
        config = SDKConfig.from_env(
            env_file=None,
            base={"AGNOPAY_API_URL": "https://api.example.com/"},
        )
        assert config.api_url == "https://api.example.com"
        assert config.wallet_url == DEFAULT_WALLET_URL


class TestCreateClient:
    def test_requires_a_key(self) -> None:
        with pytest.raises(ConfigError):
            create_client(env_file=None, base={})

    def test_secret_key_preferred(self) -> None:
        client = create_client(
            env_file=None,
            base={
                "AGNOPAY_SECRET_KEY": "sk_secret",
                "AGNOPAY_PUBLISHABLE_KEY": "ak_public",
            },
        )
        assert client.api_key == "sk_secret"

    def test_global_config_applies_without_url_variables(self) -> None:
        client = create_client(TEST_API_KEY, env_file=None, base={})
        configure(api_url="https://late.example.com")
        assert client.config.api_url == "https://late.example.com"

    def test_url_variables_pin_config(self) -> None:
        client = create_client(
            TEST_API_KEY,
            env_file=None,
            base={"AGNOPAY_API_URL": "https://pinned.example.com"},
        )
        configure(api_url="https://late.example.com")
        assert client.config.api_url == "https://pinned.example.com"

    def test_config_and_overrides_conflict(self) -> None:
        with pytest.raises(ValueError):
            create_client(config=SDKConfig(), overrides={"AGNOPAY_SECRET_KEY": "x"})

    @responses.activate
    def test_create_order_one_shot(self, order_request) -> None:
        responses.add(
            responses.POST,
            "https://api.example.com/v1/orders",
            json={"uuid": "o1", "status": "pending"},
        )

        order = create_order(
            order_request,
            env_file=None,
            base={
                "AGNOPAY_SECRET_KEY": TEST_API_KEY,
                "AGNOPAY_API_URL": "https://api.example.com",
            },
        )

        assert order.uuid == "o1"


class TestReadDotenv:
    def test_parses_exports_quotes_and_comments(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# settings\n"
            "\n"
            'export AGNOPAY_SECRET_KEY="sk_quoted"\n'
            "AGNOPAY_API_URL = https://api.example.com\n"
            "=orphan\n"
            "EQUALS_IN_VALUE=a=b\n",
            encoding="utf-8",
        )

        assert read_dotenv(str(env_file)) == {
            "AGNOPAY_SECRET_KEY": "sk_quoted",
            "AGNOPAY_API_URL": "https://api.example.com",
            "EQUALS_IN_VALUE": "a=b",
        }

    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_dotenv(str(tmp_path / "missing.env")) == {}
