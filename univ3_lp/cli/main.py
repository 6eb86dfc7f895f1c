"""Main CLI entry point"""

import sys
import json
import logging
import argparse
from decimal import Decimal
from pathlib import Path

from ..core.balances import BalanceQuery
from ..core.config import Config
from ..core.connection import Web3Manager
from ..contracts.erc20 import ERC20
from ..contracts.nfpm import NFPM
from ..contracts.pool import Pool
from ..operations.chain_state import ChainState
from ..operations.liquidity import LiquidityManager
from ..operations.request import DEFAULT_SLIPPAGE_BPS, DEFAULT_DEADLINE_SECONDS
from ..utils.gas import GasManager
from ..utils.math import compute_tick_range, tick_to_price


def get_results_dir():
    """Get results directory, create if needed"""
    results_dir = Path.cwd() / "results"
    results_dir.mkdir(exist_ok=True)
    return results_dir


def save_result(filename, data):
    """Save result to JSON file in results directory"""
    filepath = get_results_dir() / filename
    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)
    return filepath


def connect(args, require_signer=False):
    """Web3Manager honouring --impersonate / --node"""
    impersonate = getattr(args, "impersonate", None)
    return Web3Manager(
        require_signer=require_signer,
        impersonate=impersonate,
        node=getattr(args, "node", "anvil"),
    )


def print_balances(result, title):
    print(f"\n{title} for {result['address']}")
    print("-" * 60)
    for bal in result["balances"]:
        print(f"  {bal['symbol']}: {bal['balance']}")
    print("-" * 60)


def cmd_balances(args):
    """Query token balances for address"""
    manager = connect(args)
    try:
        tokens = args.tokens.split(",") if args.tokens else None
        result = BalanceQuery(manager).get_balances(tokens=tokens, address=args.address)
    finally:
        manager.close()

    print_balances(result, "Balances")
    filepath = save_result(f"balances_{result['address'][:10]}.json", result)
    print(f"\nSaved to {filepath}", file=sys.stderr)


def cmd_pool_state(args):
    """Show current pool state"""
    manager = connect(args)
    try:
        pool_address = Config().get_pool_address(args.pool)
        state = ChainState(manager).get_pool_state(pool_address)

        result = state.to_dict()
        pool = Pool(manager, pool_address)
        decimals0 = ERC20(manager, state.token0).decimals
        decimals1 = ERC20(manager, state.token1).decimals
        result["liquidity"] = pool.liquidity
        result["price"] = pool.get_price(decimals0, decimals1)
    finally:
        manager.close()

    print(json.dumps(result, indent=2, default=str))
    filepath = save_result(f"pool_{state.address[:10]}.json", result)
    print(f"\nSaved to {filepath}", file=sys.stderr)


def cmd_tick_range(args):
    """Compute a tick range without touching the chain"""
    spacing = args.spacing if args.spacing is not None else Config().get_tick_spacing(args.fee)
    tick_range = compute_tick_range(args.tick, spacing, args.width)

    print(f"Current tick: {args.tick} (spacing {spacing})")
    print(f"Tick range:   {tick_range.lower} to {tick_range.upper}")
    if args.decimals0 is not None and args.decimals1 is not None:
        price_lower = tick_to_price(tick_range.lower, args.decimals0, args.decimals1)
        price_upper = tick_to_price(tick_range.upper, args.decimals0, args.decimals1)
        print(f"Price range:  {price_lower:.6f} to {price_upper:.6f} (token1/token0)")


def cmd_add_liquidity(args):
    """Mint a position around the current tick"""
    manager = connect(args, require_signer=True)
    try:
        if args.fund_eth:
            manager.signer.set_balance(int(args.fund_eth * 10 ** 18))

        lm = LiquidityManager(
            manager=manager,
            maxFeePerGas=args.max_fee,
            maxPriorityFeePerGas=args.priority_fee,
        )

        state, request = lm.prepare(
            args.pool,
            args.amount0,
            args.amount1,
            slippage_bps=args.slippage_bps,
            width=args.width,
            deadline_offset=args.deadline,
        )
        tokens = [state.token0, state.token1]
        balances = BalanceQuery(manager)

        print_balances(balances.get_balances(tokens=tokens, include_eth=False), "Initial balances")
        print(f"\nCurrent pool tick: {state.current_tick}")
        print("\nAdding liquidity with:")
        print(f"  amount0: {request.amount0_desired} (min {request.amount0_min})")
        print(f"  amount1: {request.amount1_desired} (min {request.amount1_min})")
        print(f"  Tick range: {request.tick_lower} to {request.tick_upper}")

        if args.dry_run:
            gas = GasManager(manager, args.max_fee, args.priority_fee)
            fees = gas.fee_params()
            limit = gas.gas_limit("mint")
            print(f"\nMint gas limit: {limit:,}")
            print(f"Max fee:        {fees['maxFeePerGas'] / 10 ** 9:.2f} Gwei")
            print(f"Max cost:       {limit * fees['maxFeePerGas'] / 10 ** 18:.6f} ETH")
            print("\nDry run: nothing sent.")
            return

        lm.check_balances(request)
        lm.check_pool_state(request, state.address)
        result = lm.provision(request)

        if not result.success:
            print(f"\nTransaction failed: {result.error}")
            if result.error_data:
                print(f"Error data: {result.error_data}")
            sys.exit(1)

        print(f"\nLiquidity added. Token ID: {result.position_id}")
        print(f"Tx: {result.tx_hash}")
        print(f"Liquidity: {result.liquidity}, used amount0={result.amount0} amount1={result.amount1}")
        print_balances(balances.get_balances(tokens=tokens, include_eth=False), "Final balances")

        save_data = {"request": request.to_dict(), "result": result.to_dict()}
        filepath = save_result(f"add_liquidity_{result.position_id}.json", save_data)
        print(f"Saved to {filepath}", file=sys.stderr)
    finally:
        manager.close()


def cmd_position(args):
    """Query position information"""
    manager = connect(args)
    try:
        result = NFPM(manager).get_position(args.token_id)
    finally:
        manager.close()

    print(json.dumps(result, indent=2, default=str))
    filepath = save_result(f"univ3_position_{args.token_id}.json", result)
    print(f"\nSaved to {filepath}", file=sys.stderr)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="univ3-lp",
        description="Mint Uniswap V3 positions around the current pool price",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""examples:
  univ3-lp tick-range -61 --spacing 60                    # -> -180 to -60
  univ3-lp pool-state USDC_USDT_3000
  univ3-lp add-liquidity USDC_USDT_3000 100 100 --dry-run
  univ3-lp add-liquidity USDC_USDT_3000 100 100 --impersonate 0xe9172Daf64b05B26eb18f07aC8d6D723aCB48f99

configuration:
  RPC_URL      Set in .env file
  wallet       Set PUBLIC_KEY and PRIVATE_KEY in wallet.env
  tokens/pools config/tokens.json, config/pools.json (packaged defaults otherwise)
  gas          gas_config.json
""",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    balances_parser = subparsers.add_parser("balances", help="Show ETH and token balances")
    balances_parser.add_argument("--address", help="Address to query (default: wallet.env / impersonated)")
    balances_parser.add_argument("--tokens", help="Comma-separated symbols or addresses (default: all configured)")
    balances_parser.add_argument("--impersonate", help="Act as this address on a fork node")
    balances_parser.add_argument("--node", choices=["anvil", "hardhat"], default="anvil")
    balances_parser.set_defaults(func=cmd_balances)

    pool_parser = subparsers.add_parser("pool-state", help="Show tick, spacing and tokens of a pool")
    pool_parser.add_argument("pool", help="Pool name (e.g., USDC_USDT_3000) or address")
    pool_parser.set_defaults(func=cmd_pool_state)

    range_parser = subparsers.add_parser("tick-range", help="Compute a tick range (offline)")
    range_parser.add_argument("tick", type=int, help="Current tick")
    spacing_group = range_parser.add_mutually_exclusive_group(required=True)
    spacing_group.add_argument("--spacing", type=int, help="Tick spacing")
    spacing_group.add_argument("--fee", type=int, help="Fee tier (100, 500, 3000, 10000)")
    range_parser.add_argument("--width", type=int, default=1, help="Spacings on each side (default: 1)")
    range_parser.add_argument("--decimals0", type=int, help="Token0 decimals, to print prices")
    range_parser.add_argument("--decimals1", type=int, help="Token1 decimals, to print prices")
    range_parser.set_defaults(func=cmd_tick_range)

    add_parser = subparsers.add_parser("add-liquidity", help="Approve tokens and mint a position")
    add_parser.add_argument("pool", help="Pool name (e.g., USDC_USDT_3000) or address")
    add_parser.add_argument("amount0", type=Decimal, help="Amount of the pool's token0")
    add_parser.add_argument("amount1", type=Decimal, help="Amount of the pool's token1")
    add_parser.add_argument("--slippage-bps", type=int, default=DEFAULT_SLIPPAGE_BPS,
                            help="Slippage in basis points (default: 50 = 0.5%%)")
    add_parser.add_argument("--width", type=int, default=1, help="Spacings on each side (default: 1)")
    add_parser.add_argument("--deadline", type=int, default=DEFAULT_DEADLINE_SECONDS,
                            help="Deadline in seconds from now (default: 60)")
    add_parser.add_argument("--impersonate", help="Act as this address on a fork node")
    add_parser.add_argument("--node", choices=["anvil", "hardhat"], default="anvil")
    add_parser.add_argument("--fund-eth", type=float, help="Set impersonated account's ETH balance for gas")
    add_parser.add_argument("--max-fee", type=float, help="maxFeePerGas in Gwei")
    add_parser.add_argument("--priority-fee", type=float, help="maxPriorityFeePerGas in Gwei")
    add_parser.add_argument("--dry-run", action="store_true", help="Build the request without sending")
    add_parser.set_defaults(func=cmd_add_liquidity)

    position_parser = subparsers.add_parser("position", help="Query a position by NFT token ID")
    position_parser.add_argument("token_id", type=int, help="Position NFT token ID")
    position_parser.set_defaults(func=cmd_position)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if getattr(args, "fund_eth", None) and not args.impersonate:
        parser.error("--fund-eth requires --impersonate")

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
