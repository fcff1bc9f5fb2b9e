# config.py
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError

PAGE_DELAY = 1.0
REQUEST_TIMEOUT = 30.0

DATA_DIR = "data"
STATE_FILE = "state.json"
HOLDERS_FILE = "uniswap_v3_holders.txt"

# Uniswap V3 positions NFT on Optimism
DEFAULT_CONTRACT = "0xC36442b4a4522E871399CD717aBDD847Ab11FE88"
DEFAULT_NETWORK = "opt-mainnet"

BASE_URL = "https://{network}.g.alchemy.com/nft/v3/{api_key}/getOwnersForContract"

TRUTHY = {"1", "true", "yes", "on"}


# Load environment variables
def load_env():
    if os.path.exists(".env"):
        load_dotenv()


@dataclass
class ScanConfig:
    api_key: str
    contract_address: str = DEFAULT_CONTRACT
    network: str = DEFAULT_NETWORK
    data_dir: str = DATA_DIR
    state_file: str = STATE_FILE
    holders_file: str = HOLDERS_FILE
    page_delay: float = PAGE_DELAY
    request_timeout: float = REQUEST_TIMEOUT
    verbose: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScanConfig":
        env = os.environ if environ is None else environ
        config = cls(
            api_key=(env.get("ALCHEMY_API_KEY") or "").strip(),
            contract_address=(env.get("CONTRACT_ADDRESS") or DEFAULT_CONTRACT).strip(),
            network=(env.get("ALCHEMY_NETWORK") or DEFAULT_NETWORK).strip(),
            data_dir=env.get("HOLDERSCAN_DATA_DIR") or DATA_DIR,
            verbose=(env.get("HOLDERSCAN_VERBOSE") or "").strip().lower() in TRUTHY,
        )
        config.validate()
        return config

    def validate(self):
        if not self.api_key:
            raise ConfigError("ALCHEMY_API_KEY must be set")
        if not self.contract_address:
            raise ConfigError("contract address must not be empty")

    @property
    def endpoint(self) -> str:
        return BASE_URL.format(network=self.network, api_key=self.api_key)

    @property
    def state_path(self) -> str:
        return os.path.join(self.data_dir, self.state_file)

    @property
    def holders_path(self) -> str:
        return os.path.join(self.data_dir, self.holders_file)
