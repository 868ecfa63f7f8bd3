import os
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator
from web3 import Web3

DEFAULT_RPC_URL = "https://rpc.cyber.co"

# Phi credential registry and Multicall3 on Cyber mainnet
PHI_REGISTRY_ADDRESS = "0x9babbbe884fe75244f277f90d4bb696434fa1920"
MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"

# Chain id the credentials were issued on (Cyber)
CRED_CHAIN_ID = 7560

# e.g. credential 8: https://cyber.terminal.phi.box/cred/8
CREDENTIAL_IDS: Tuple[int, ...] = (2, 3, 4, 5, 6, 7, 8, 9)

TIER_2_OF_8 = 2
TIER_4_OF_4 = 4
TIER_8_OF_8 = len(CREDENTIAL_IDS)


class CheckerConfig(BaseModel):
    model_config = ConfigDict(frozen=True, validate_default=True)

    rpc_url: str = DEFAULT_RPC_URL
    registry_address: str = PHI_REGISTRY_ADDRESS
    multicall_address: str = MULTICALL3_ADDRESS
    cred_chain_id: int = CRED_CHAIN_ID

    @field_validator("registry_address", "multicall_address")
    @classmethod
    def _checksum(cls, value: str) -> str:
        if not Web3.is_address(value):
            raise ValueError(f"Invalid contract address: {value}")
        return Web3.to_checksum_address(value)

    @field_validator("rpc_url")
    @classmethod
    def _non_empty_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("RPC URL must not be empty")
        return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> CheckerConfig:
    """Build the checker configuration from environment variables.

    ``CYBER_RPC`` overrides the RPC endpoint; an empty value falls back to
    the public default.
    """
    env = os.environ if environ is None else environ
    rpc_url = (env.get("CYBER_RPC") or "").strip()
    return CheckerConfig(rpc_url=rpc_url or DEFAULT_RPC_URL)
