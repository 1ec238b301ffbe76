from enum import Enum


class NetworkType(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"


class ChainStatus(str, Enum):
    LIVE = "live"
    UPCOMING = "upcoming"
    KILLED = "killed"
