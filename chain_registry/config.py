import os

CHAIN_REGISTRY_REPO = os.getenv("CHAIN_REGISTRY_REPO", "cosmos/chain-registry")
CHAIN_REGISTRY_REF = os.getenv("CHAIN_REGISTRY_REF", "master")

# Base location of per-chain documents: <url>/<chain_slug>/chain.json
CHAIN_REGISTRY_URL = os.getenv(
    "CHAIN_REGISTRY_URL",
    f"https://raw.githubusercontent.com/{CHAIN_REGISTRY_REPO}/{CHAIN_REGISTRY_REF}",
)
# Directory listing used to discover chain slugs when none are given
CHAIN_REGISTRY_MANIFEST_URL = os.getenv(
    "CHAIN_REGISTRY_MANIFEST_URL",
    f"https://api.github.com/repos/{CHAIN_REGISTRY_REPO}/contents?ref={CHAIN_REGISTRY_REF}",
)
CHAIN_REGISTRY_TIMEOUT = float(os.getenv("CHAIN_REGISTRY_TIMEOUT", 15))

CHAIN_FILENAME = "chain.json"
TESTNETS_DIR = "testnets"
