"""
Configuration for the Fog of Secrets client
"""
from typing import Dict, Any, Optional
import os
from pathlib import Path


def _load_env_value(*keys: str, default: str = "") -> str:
    """
    Load a setting from environment variables or the root .env file.
    The first key found wins. Supports both `KEY=value` and `KEY: value` lines.
    """
    for key in keys:
        value = os.getenv(key)
        if value:
            return value.strip()

    env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        with env_path.open("r", encoding="utf-8") as env_file:
            for raw_line in env_file:
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue

                if "=" in line and (":" not in line or line.index("=") < line.index(":")):
                    key, val = line.split("=", 1)
                elif ":" in line:
                    key, val = line.split(":", 1)
                else:
                    continue

                key = key.strip()
                val = val.strip().strip('"').strip("'")
                if key in keys:
                    return val

    return default


def _load_int(*keys: str, default: int) -> int:
    raw = _load_env_value(*keys)
    return int(raw) if raw else default


def load_private_key() -> Optional[str]:
    """Wallet key for the active session, or None when no wallet is configured."""
    value = _load_env_value("FOG_PRIVATE_KEY", "FOG-PRIVATE-KEY")
    return value or None


# Chain Configuration
CHAIN_CONFIG: Dict[str, Any] = {
    # Sepolia by default, same network the contract was deployed to
    "rpc_url": _load_env_value("FOG_RPC_URL", default="https://1rpc.io/sepolia"),
    "chain_id": _load_int("FOG_CHAIN_ID", default=11155111),
    "contract_address": _load_env_value(
        "FOG_CONTRACT_ADDRESS",
        default="0xB7da498FF10137815Cd7aC237c26A586f3460B1B",
    ),
    "private_key": load_private_key(),
    "gas_limit_margin": 1.2,
}


# Network Configuration
NETWORK_CONFIG: Dict[str, Any] = {
    "relayer_url": _load_env_value("FOG_RELAYER_URL", default="http://localhost:9100"),
    "connection_timeout": 10,
    "receipt_poll_interval": 2.0,
    "receipt_timeout": 180,
}


# User decryption authorization (EIP-712)
DECRYPTION_CONFIG: Dict[str, Any] = {
    "domain_name": "Decryption",
    "domain_version": "1",
    "domain_chain_id": _load_int("FOG_DECRYPTION_CHAIN_ID", default=55815),
    "verifying_contract": _load_env_value(
        "FOG_DECRYPTION_VERIFIER",
        default="0x5D8BD78e2ea6bbE41f26dFe9fdaEAa349e077478",
    ),
    "duration_days": 7,
}


# Cryptography Configuration (one-time reseal keypair)
CRYPTO_CONFIG: Dict[str, Any] = {
    "plain_modulus": 65537,
    "batch_size": 8,
    "multiplicative_depth": 1,
}


# Game Configuration
GAME_CONFIG: Dict[str, Any] = {
    # Used until the first roster read returns the contract's bounds
    "default_total_cells": 100,
    "default_encrypted_cells": 50,

    # "weighted" (by cell-count ratio) or "uniform"
    "zone_strategy": _load_env_value("FOG_ZONE_STRATEGY", default="weighted"),

    # "chain" talks to the deployed contract, "sandbox" runs everything locally
    "mode": _load_env_value("FOG_MODE", default="chain"),
    "sandbox_http_port": _load_int("FOG_SANDBOX_PORT", default=9100),
    "sandbox_contract_address": "0x000000000000000000000000000000000000f0c5",
}


# UI Configuration
UI_CONFIG: Dict[str, Any] = {
    "grid_columns": 10,
    "max_occupant_labels": 2,
    "log_dir": "logs",
}
