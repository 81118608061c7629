"""
Pool accounting engine (imperative shell around the pure policies).

Every operation follows the same shape:
1. Validate inputs and read one ``PoolConfig`` snapshot plus live reserves.
2. Ask the fee / reward / pricing kernels for amounts.
3. Run every custody call inside one ``custody.atomic()`` batch.
4. Update local records, then emit exactly one event.

The engine lock is held across all four steps, so no operation can act on a
fee tier or reserve ratio that changed between its read and its write. A
failure at any step raises the typed ``PoolError`` unchanged; the custody
batch rolls back, local records are untouched and nothing is emitted.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import replace
from enum import Enum, unique
from typing import Callable, Optional, Tuple

from ..errors import InsufficientBalance, InvalidParameter, OracleUnavailable, SlippageExceeded, Unauthorized
from ..state.balances import AccountId, PartyId
from ..state.events import (
    FeeAdjusted,
    LiquidityAdded,
    LiquidityRemoved,
    PoolEvent,
    SwapExecuted,
    TokensStaked,
    TokensUnstaked,
)
from ..state.pool_config import ParticipantAccounts, PoolAccounts, PoolConfig
from ..state.stakes import StakeRecord, StakeTable
from .cpmm import SwapQuote, quote_swap_exact_in
from .fees import select_fee_tier
from .interfaces import Custody, EventSink, PriceFeed, TransferIntent, execute_transfer
from .math import checked_add, checked_sub, require_positive_u64, require_u64
from .oracle import OraclePolicy
from .rewards import compute_reward
from .risk import MitigationSignal, evaluate_mitigation

logger = logging.getLogger(__name__)


@unique
class SwapDirection(Enum):
    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"


def _wall_clock() -> int:
    return int(time.time())


def _require_direction(direction: object) -> SwapDirection:
    if not isinstance(direction, SwapDirection):
        raise InvalidParameter(f"direction must be a SwapDirection: {direction!r}")
    return direction


class PoolEngine:
    """Accounting for one two-asset pool, its LP shares and its staking vault."""

    def __init__(
        self,
        *,
        config: PoolConfig,
        accounts: PoolAccounts,
        custody: Custody,
        sink: Optional[EventSink] = None,
        price_feed: Optional[PriceFeed] = None,
        oracle_policy: OraclePolicy = OraclePolicy(),
        clock: Callable[[], int] = _wall_clock,
        stakes: Optional[StakeTable] = None,
    ) -> None:
        self._config = config
        self._accounts = accounts
        self._custody = custody
        self._sink = sink
        self._price_feed = price_feed
        self._oracle_policy = oracle_policy
        self._clock = clock
        self._stakes = stakes if stakes is not None else StakeTable()
        self._lock = threading.RLock()

    # -- reads ---------------------------------------------------------------

    @property
    def config(self) -> PoolConfig:
        with self._lock:
            return self._config

    @property
    def accounts(self) -> PoolAccounts:
        return self._accounts

    def stake_of(self, participant: PartyId) -> StakeRecord:
        with self._lock:
            return self._stakes.get(participant)

    def reserves(self) -> Tuple[int, int]:
        with self._lock:
            return (
                self._custody.balance_of(self._accounts.reserve_a),
                self._custody.balance_of(self._accounts.reserve_b),
            )

    def quote_swap(self, amount_in: int, direction: SwapDirection = SwapDirection.A_TO_B) -> SwapQuote:
        """Quote against the current reserves and fee tier without moving funds."""
        _require_direction(direction)
        with self._lock:
            reserve_in_acct, reserve_out_acct = self._reserve_pair(direction)
            return quote_swap_exact_in(
                reserve_in=self._custody.balance_of(reserve_in_acct),
                reserve_out=self._custody.balance_of(reserve_out_acct),
                amount_in=amount_in,
                fee_basis_points=self._config.fee_basis_points,
            )

    # -- operations ----------------------------------------------------------

    def provide_liquidity(self, user: ParticipantAccounts, amount_a: int, amount_b: int) -> LiquidityAdded:
        require_positive_u64("amount_a", amount_a)
        require_positive_u64("amount_b", amount_b)
        with self._lock:
            cfg = self._config
            reward = compute_reward(amount_a, amount_b, cfg.reward_multiplier)
            with self._custody.atomic():
                execute_transfer(
                    self._custody,
                    TransferIntent(user.token_a, self._accounts.reserve_a, user.owner, amount_a),
                )
                execute_transfer(
                    self._custody,
                    TransferIntent(user.token_b, self._accounts.reserve_b, user.owner, amount_b),
                )
                self._custody.mint(self._accounts.reward_mint_authority, user.reward, reward)
            event = LiquidityAdded(
                user=user.owner,
                token_a_amount=amount_a,
                token_b_amount=amount_b,
                reward_issued=reward,
            )
            self._emit(event)
            return event

    def remove_liquidity(self, user: ParticipantAccounts, liquidity_amount: int) -> LiquidityRemoved:
        require_positive_u64("liquidity_amount", liquidity_amount)
        with self._lock:
            held = self._custody.balance_of(user.lp_token)
            if held < liquidity_amount:
                raise InsufficientBalance(f"{user.owner} holds {held} pool shares, needs {liquidity_amount}")
            with self._custody.atomic():
                execute_transfer(
                    self._custody,
                    TransferIntent(user.lp_token, self._accounts.pool_lp, user.owner, liquidity_amount),
                )
            event = LiquidityRemoved(user=user.owner, lp_tokens_burned=liquidity_amount)
            self._emit(event)
            return event

    def swap_tokens(
        self,
        user: ParticipantAccounts,
        amount_in: int,
        min_amount_out: int,
        direction: SwapDirection = SwapDirection.A_TO_B,
    ) -> SwapExecuted:
        """
        Exact-in swap with a caller-supplied output floor.

        ``amount_out`` is derived from the live reserves; the trade is rejected
        with ``SlippageExceeded`` before any transfer if it falls short of
        ``min_amount_out``.
        """
        require_positive_u64("amount_in", amount_in)
        require_u64("min_amount_out", min_amount_out)
        _require_direction(direction)
        if direction is SwapDirection.A_TO_B:
            user_in, user_out = user.token_a, user.token_b
            fee_vault = self._accounts.fee_vault_a
        else:
            user_in, user_out = user.token_b, user.token_a
            fee_vault = self._accounts.fee_vault_b

        with self._lock:
            quote = self.quote_swap(amount_in, direction)
            if quote.amount_out < min_amount_out:
                raise SlippageExceeded(quote.amount_out, min_amount_out)

            reserve_in_acct, reserve_out_acct = self._reserve_pair(direction)
            with self._custody.atomic():
                if quote.fee > 0:
                    execute_transfer(self._custody, TransferIntent(user_in, fee_vault, user.owner, quote.fee))
                execute_transfer(
                    self._custody, TransferIntent(user_in, reserve_in_acct, user.owner, quote.net_in)
                )
                execute_transfer(
                    self._custody,
                    TransferIntent(reserve_out_acct, user_out, self._accounts.authority, quote.amount_out),
                )
            event = SwapExecuted(
                user=user.owner,
                token_in=user_in,
                token_out=user_out,
                amount_in=amount_in,
                amount_out=quote.amount_out,
                fee=quote.fee,
            )
            self._emit(event)
            return event

    def stake_tokens(self, user: ParticipantAccounts, amount: int) -> TokensStaked:
        require_positive_u64("amount", amount)
        with self._lock:
            record = self._stakes.get(user.owner)
            new_total = checked_add("staked_amount", record.staked_amount, amount)
            with self._custody.atomic():
                execute_transfer(
                    self._custody,
                    TransferIntent(user.lp_token, self._accounts.staking_vault, user.owner, amount),
                )
                self._stakes.set(user.owner, StakeRecord(staked_amount=new_total))
            event = TokensStaked(user=user.owner, staked_amount=amount, total_staked=new_total)
            self._emit(event)
            return event

    def unstake_tokens(self, user: ParticipantAccounts, amount: int) -> TokensUnstaked:
        require_positive_u64("amount", amount)
        with self._lock:
            record = self._stakes.get(user.owner)
            if amount > record.staked_amount:
                raise InsufficientBalance(
                    f"{user.owner} has {record.staked_amount} staked, cannot unstake {amount}"
                )
            new_total = checked_sub("staked_amount", record.staked_amount, amount)
            with self._custody.atomic():
                execute_transfer(
                    self._custody,
                    TransferIntent(self._accounts.staking_vault, user.lp_token, self._accounts.authority, amount),
                )
                self._stakes.set(user.owner, StakeRecord(staked_amount=new_total))
            event = TokensUnstaked(user=user.owner, unstaked_amount=amount, total_staked=new_total)
            self._emit(event)
            return event

    def adjust_fee(self, authority: PartyId, market_volatility: int) -> FeeAdjusted:
        """Select a fee tier from *market_volatility* and persist it.

        Only the configured fee authority may call this. The new tier applies
        to every later operation on this engine.
        """
        require_u64("market_volatility", market_volatility)
        with self._lock:
            cfg = self._config
            if authority != cfg.fee_authority:
                raise Unauthorized(f"{authority} is not the fee authority")
            new_bps = select_fee_tier(market_volatility, cfg.fee_tiers)
            self._config = replace(cfg, fee_basis_points=new_bps)
            logger.info(
                "fee tier adjusted: %d -> %d bps (volatility %d)",
                cfg.fee_basis_points,
                new_bps,
                market_volatility,
            )
            event = FeeAdjusted(
                previous_fee_basis_points=cfg.fee_basis_points,
                new_fee_basis_points=new_bps,
                market_volatility=market_volatility,
            )
            self._emit(event)
            return event

    def evaluate_mitigation(self, price_threshold: int) -> MitigationSignal:
        """Read the oracle and reserves and report whether to rebalance. Moves no funds."""
        if self._price_feed is None:
            raise OracleUnavailable("no price feed configured")
        with self._lock:
            sample = self._price_feed.read_price()
            signal = evaluate_mitigation(
                price_threshold,
                sample=sample,
                reserves=self.reserves(),
                current_timestamp=self._clock(),
                policy=self._oracle_policy,
            )
        if signal.rebalance_recommended:
            logger.warning(
                "rebalance recommended: price %d above threshold %d (reserves %d/%d)",
                signal.price,
                signal.price_threshold,
                signal.reserve_a,
                signal.reserve_b,
            )
        return signal

    # -- helpers -------------------------------------------------------------

    def _reserve_pair(self, direction: SwapDirection) -> Tuple[AccountId, AccountId]:
        if direction is SwapDirection.A_TO_B:
            return self._accounts.reserve_a, self._accounts.reserve_b
        return self._accounts.reserve_b, self._accounts.reserve_a

    def _emit(self, event: PoolEvent) -> None:
        if self._sink is None:
            return
        try:
            self._sink.record(event)
        except Exception:
            # Emission is best-effort; the operation has already committed.
            logger.exception("event sink failed for %s", event.kind.value)
