"""
Single-process wiring of a pool against ``InMemoryCustody``.

Used by the offline demo and the test-suite: it opens every pool-side account,
registers the reward mint authority and seeds the two reserves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..core.oracle import OraclePolicy
from ..core.pool import PoolEngine
from ..state.balances import Amount, PartyId
from ..state.pool_config import ParticipantAccounts, PoolAccounts, PoolConfig
from .custody import InMemoryCustody
from .event_sink import ListEventSink
from .oracle_feed import StaticPriceFeed

ASSET_A = "asset-a"
ASSET_B = "asset-b"
LP_ASSET = "pool-share"
REWARD_ASSET = "reward"


@dataclass
class LocalPool:
    engine: PoolEngine
    custody: InMemoryCustody
    sink: ListEventSink
    feed: StaticPriceFeed
    accounts: PoolAccounts

    def open_participant(
        self,
        owner: PartyId,
        *,
        token_a: Amount = 0,
        token_b: Amount = 0,
        lp_token: Amount = 0,
    ) -> ParticipantAccounts:
        user = ParticipantAccounts(
            owner=owner,
            token_a=f"{owner}/{ASSET_A}",
            token_b=f"{owner}/{ASSET_B}",
            lp_token=f"{owner}/{LP_ASSET}",
            reward=f"{owner}/{REWARD_ASSET}",
        )
        self.custody.open_account(user.token_a, owner=owner, asset=ASSET_A, balance=token_a)
        self.custody.open_account(user.token_b, owner=owner, asset=ASSET_B, balance=token_b)
        self.custody.open_account(user.lp_token, owner=owner, asset=LP_ASSET, balance=lp_token)
        self.custody.open_account(user.reward, owner=owner, asset=REWARD_ASSET)
        return user


def build_local_pool(
    *,
    fee_authority: PartyId = "fee-authority",
    reserve_a: Amount = 1_000_000,
    reserve_b: Amount = 1_000_000,
    config: Optional[PoolConfig] = None,
    oracle_policy: OraclePolicy = OraclePolicy(),
    clock: Callable[[], int] = lambda: 0,
    pool_id: str = "pool",
) -> LocalPool:
    authority = f"{pool_id}-authority"
    mint_authority = f"{pool_id}-reward-mint"
    accounts = PoolAccounts(
        authority=authority,
        reward_mint_authority=mint_authority,
        reserve_a=f"{pool_id}/reserve/{ASSET_A}",
        reserve_b=f"{pool_id}/reserve/{ASSET_B}",
        pool_lp=f"{pool_id}/lp",
        staking_vault=f"{pool_id}/staking-vault",
        fee_vault_a=f"{pool_id}/fees/{ASSET_A}",
        fee_vault_b=f"{pool_id}/fees/{ASSET_B}",
    )

    custody = InMemoryCustody()
    custody.open_account(accounts.reserve_a, owner=authority, asset=ASSET_A, balance=reserve_a)
    custody.open_account(accounts.reserve_b, owner=authority, asset=ASSET_B, balance=reserve_b)
    custody.open_account(accounts.pool_lp, owner=authority, asset=LP_ASSET)
    custody.open_account(accounts.staking_vault, owner=authority, asset=LP_ASSET)
    custody.open_account(accounts.fee_vault_a, owner=authority, asset=ASSET_A)
    custody.open_account(accounts.fee_vault_b, owner=authority, asset=ASSET_B)
    custody.set_mint_authority(REWARD_ASSET, mint_authority)

    sink = ListEventSink()
    feed = StaticPriceFeed()
    engine = PoolEngine(
        config=config if config is not None else PoolConfig(fee_authority=fee_authority),
        accounts=accounts,
        custody=custody,
        sink=sink,
        price_feed=feed,
        oracle_policy=oracle_policy,
        clock=clock,
    )
    return LocalPool(engine=engine, custody=custody, sink=sink, feed=feed, accounts=accounts)
