from erc20_conformance.assertions import assert_amount, assert_transfer_event
from erc20_conformance.scenarios import scenario


def _holders(config):
    # every account known to hold tokens, in a stable order
    ret = list(config.accounts)
    for account, _ in config.initial_balances:
        if account not in ret:
            ret.append(account)
    return ret


def _has_spendable_holder(config):
    return any(
        amount > 0 and account in config.accounts for account, amount in config.initial_balances
    )


@scenario(
    "supply",
    "should equal the sum of all balances",
    requires=lambda c: c.balances_cover_supply,
)
async def balances_sum_to_supply(ctx, r):
    alice, bob = ctx.account("alice"), ctx.account("bob")
    await ctx.credit(alice, ctx.units(2))
    await ctx.token.transfer.transact(bob, ctx.units(1), sender=alice)

    balances = await ctx.balances(_holders(ctx.config))
    assert_amount(sum(balances.values()), await ctx.token.totalSupply(), "sum of balances")


@scenario("supply", "should be conserved by transfers between participants")
async def transfers_conserve(ctx, r):
    token = ctx.token
    alice, bob, charles = ctx.account("alice"), ctx.account("bob"), ctx.account("charles")
    participants = [alice, bob, charles]
    await ctx.credit(alice, ctx.units(3))

    supply = await token.totalSupply()
    total = sum((await ctx.balances(participants)).values())

    await token.transfer.transact(bob, ctx.units(2), sender=alice)
    await token.approve.transact(charles, ctx.units(1), sender=bob)
    await token.transferFrom.transact(bob, alice, ctx.units(1), sender=charles)
    await token.transfer.transact(charles, ctx.units(1), sender=bob)

    assert_amount(sum((await ctx.balances(participants)).values()), total, "sum of balances")
    assert_amount(await token.totalSupply(), supply, "totalSupply()")


@scenario(
    "supply",
    "should let an initial holder transfer to a participant",
    requires=_has_spendable_holder,
)
async def initial_holder_transfers(ctx, r):
    token = ctx.token
    holder, amount = next(
        (account, amount)
        for account, amount in ctx.config.initial_balances
        if amount > 0 and account in ctx.config.accounts
    )
    recipient = next(
        ctx.account(role) for role in ("alice", "bob") if ctx.account(role) != holder
    )
    value = amount * 3 // 10

    before = await ctx.balances([holder, recipient])
    receipt = await token.transfer.transact(recipient, value, sender=holder)
    assert_transfer_event(receipt, holder, recipient, value)

    assert_amount(await token.balanceOf(holder), before[holder] - value, "balanceOf(holder)")
    assert_amount(await token.balanceOf(recipient), before[recipient] + value, "balanceOf(to)")
    assert_amount(await token.totalSupply(), ctx.config.initial_supply, "totalSupply()")
