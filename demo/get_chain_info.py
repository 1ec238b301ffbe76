import logging

from chain_registry import ChainRegistry, NetworkType


def print_chain(info):
    print(f"{info.pretty_name} ({info.chain_name}) [{info.chain_id}]")
    print(f"\tbech32 prefix: {info.bech32_prefix}, slip44: {info.slip44}")
    print(f"\tfees: {', '.join(info.fee_denoms)}")
    for endpoint in info.apis.rpc[:3]:
        print(f"\trpc: {endpoint.address} ({endpoint.provider})")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)

    registry = ChainRegistry.from_remote(slugs=["cosmoshub", "juno", "osmosis"])

    print_chain(registry.get_by_chain_id("juno-1"))
    """output:
    Juno (juno) [juno-1]
        bech32 prefix: juno, slip44: 118
        fees: ujuno
        rpc: https://rpc-juno.itastakers.com (itastakers)
    ...
    """

    for info in registry.filter(network_type=NetworkType.MAINNET):
        print(info.chain_id, info.codebase.recommended_version)
