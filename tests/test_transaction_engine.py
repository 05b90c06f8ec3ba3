import random

import pytest

from core.transaction_engine import TransactionEngine


def _engine(config, client, sleep_recorder):
    return TransactionEngine(config, client, sleep=sleep_recorder)


@pytest.mark.asyncio
@pytest.mark.parametrize("wallet_count,swap_count", [(1, 1), (2, 3), (3, 2)])
async def test_claims_and_swaps_per_wallet(config, client_factory, wallet_factory, sleep_recorder,
                                           wallet_count, swap_count):
    client = client_factory(allowance=10 ** 18)
    wallets = [wallet_factory(i + 1) for i in range(wallet_count)]

    outcome = await _engine(config, client, sleep_recorder).run_selected_wallets(wallets, swap_count)

    assert len(client.calls_of("submit_faucet_claim")) == wallet_count
    assert len(client.calls_of("submit_swap")) == wallet_count * swap_count
    assert outcome.total_success == wallet_count * swap_count
    assert outcome.total_attempted == wallet_count * swap_count

    # после крана + между свапами + между кошельками
    expected_delays = wallet_count * (1 + swap_count - 1) + (wallet_count - 1)
    assert sleep_recorder.calls == [10] * expected_delays


@pytest.mark.asyncio
async def test_wallets_processed_strictly_in_order(config, client_factory, wallet_factory, sleep_recorder):
    client = client_factory(allowance=10 ** 18)
    first, second = wallet_factory(1), wallet_factory(2)

    await _engine(config, client, sleep_recorder).run_selected_wallets([first, second], 2)

    actions = [(call[0], call[1]) for call in client.calls
               if call[0] in ("submit_faucet_claim", "submit_swap")]
    assert actions == [
        ("submit_faucet_claim", first.address),
        ("submit_swap", first.address),
        ("submit_swap", first.address),
        ("submit_faucet_claim", second.address),
        ("submit_swap", second.address),
        ("submit_swap", second.address),
    ]


@pytest.mark.asyncio
async def test_failed_swap_does_not_stop_later_swaps(config, client_factory, wallet_factory, sleep_recorder):
    client = client_factory(allowance=10 ** 18, fail_swaps_on={1, 4})
    wallets = [wallet_factory(1), wallet_factory(2)]

    outcome = await _engine(config, client, sleep_recorder).run_selected_wallets(wallets, 3)

    assert len(client.calls_of("submit_swap")) == 6
    assert [(w.successful, w.attempted) for w in outcome.wallets] == [(2, 3), (2, 3)]
    assert outcome.total_success == 4
    assert outcome.total_attempted == 6


@pytest.mark.asyncio
async def test_failed_faucet_claim_still_runs_swaps(config, client_factory, wallet_factory, sleep_recorder):
    client = client_factory(allowance=10 ** 18, fail_faucet=True)

    outcome = await _engine(config, client, sleep_recorder).run_selected_wallets([wallet_factory()], 2)

    assert len(client.calls_of("submit_swap")) == 2
    assert outcome.total_success == 2


@pytest.mark.asyncio
async def test_balance_errors_do_not_affect_outcome(config, client_factory, wallet_factory, sleep_recorder):
    client = client_factory(allowance=10 ** 18, balance_error=True)

    outcome = await _engine(config, client, sleep_recorder).run_selected_wallets([wallet_factory()], 1)

    assert outcome.total_success == 1


@pytest.mark.asyncio
async def test_balances_reported_before_and_after_swaps(config, client_factory, wallet_factory, sleep_recorder):
    client = client_factory(allowance=10 ** 18)

    await _engine(config, client, sleep_recorder).run_wallet_swaps(wallet_factory(), 1)

    names = [call[0] for call in client.calls]
    first_swap = names.index("submit_swap")
    assert names[:first_swap].count("get_balance") == 1
    assert names[:first_swap].count("get_token_balance") == 3
    assert names[first_swap:].count("get_balance") == 1
    assert names[first_swap:].count("get_token_balance") == 3

    queried = {call[1] for call in client.calls_of("get_token_balance")}
    assert queried == set(config.token_addresses.values())


@pytest.mark.asyncio
async def test_each_swap_draws_fresh_directive(config, client_factory, wallet_factory, sleep_recorder, monkeypatch):
    client = client_factory(allowance=10 ** 18)
    tokens = iter(["USDT", "USDC", "USDT"])
    monkeypatch.setattr(random, "choice", lambda _seq: next(tokens))

    await _engine(config, client, sleep_recorder).run_wallet_swaps(wallet_factory(), 3)

    selectors = [call[2][:10] for call in client.calls_of("submit_swap")]
    assert selectors == ["0x03b530a3", "0xf3b68002", "0x03b530a3"]


@pytest.mark.asyncio
@pytest.mark.parametrize("swap_count", [0, -1, 1.5, "2", True])
async def test_invalid_swap_count_never_starts(config, client_factory, wallet_factory, sleep_recorder, swap_count):
    client = client_factory()

    with pytest.raises(ValueError):
        await _engine(config, client, sleep_recorder).run_selected_wallets([wallet_factory()], swap_count)

    assert client.calls == []
    assert sleep_recorder.calls == []


@pytest.mark.asyncio
async def test_unexpected_wallet_error_moves_to_next_wallet(config, client_factory, wallet_factory,
                                                            sleep_recorder, monkeypatch):
    client = client_factory(allowance=10 ** 18)
    engine = _engine(config, client, sleep_recorder)
    first, second = wallet_factory(1), wallet_factory(2)

    original = engine.run_wallet_swaps

    async def flaky_run(wallet, count):
        if wallet is first:
            raise RuntimeError("boom")
        return await original(wallet, count)

    monkeypatch.setattr(engine, "run_wallet_swaps", flaky_run)

    outcome = await engine.run_selected_wallets([first, second], 1)

    assert [(w.successful, w.attempted) for w in outcome.wallets] == [(0, 1), (1, 1)]
    assert len(client.calls_of("submit_faucet_claim")) == 2
