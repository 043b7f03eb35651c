from erc20_conformance.assertions import (
    assert_amount,
    assert_equal,
    assert_transfer_event,
    assert_true,
)
from erc20_conformance.scenarios import TRANSFER_VARIANTS, scenario


def _transfer_scenario(title):
    return scenario("transfer", title, variants=TRANSFER_VARIANTS)


@_transfer_scenario("should return true when called with amount of 0")
async def returns_true_for_zero(ctx, r):
    assert_true(await ctx.token.transfer.call(r.to, 0, sender=r.sender), "transfer(0)")


@_transfer_scenario("should revert when trying to transfer something while having nothing")
async def reverts_with_nothing(ctx, r):
    # participants hold nothing unless the config says otherwise
    balance = await ctx.token.balanceOf(r.sender)
    await ctx.assert_reverts(ctx.token.transfer.transact(r.to, balance + 1, sender=r.sender))


@_transfer_scenario("should revert when trying to transfer more than balance")
async def reverts_above_balance(ctx, r):
    token = ctx.token
    charles = ctx.account("charles")
    await ctx.credit(r.sender, ctx.units(3))

    balance = await token.balanceOf(r.sender)
    await ctx.assert_reverts(token.transfer.transact(r.to, balance + 1, sender=r.sender))

    # spend part of the balance elsewhere, the old balance is now too much
    await token.transfer.transact(charles, ctx.units(1), sender=r.sender)
    await ctx.assert_reverts(token.transfer.transact(r.to, balance, sender=r.sender))


@_transfer_scenario("should leave balances unchanged when reverted")
async def revert_has_no_effect(ctx, r):
    token = ctx.token
    await ctx.credit(r.sender, ctx.units(3))
    before = await ctx.balances([r.sender, r.to])

    await ctx.assert_reverts(token.transfer.transact(r.to, before[r.sender] + 1, sender=r.sender))
    assert_equal(await ctx.balances([r.sender, r.to]), before, "balances")


@_transfer_scenario("should return true when transfer can be made")
async def returns_true_when_possible(ctx, r):
    transfer, u = ctx.token.transfer, ctx.units
    await ctx.credit(r.sender, u(3))
    for amount in (1, 2, 3):
        result = await transfer.call(r.to, u(amount), sender=r.sender)
        assert_true(result, f"transfer({amount})")

    await transfer.transact(r.to, u(1), sender=r.sender)
    for amount in (1, 2):
        result = await transfer.call(r.to, u(amount), sender=r.sender)
        assert_true(result, f"transfer({amount}) after transfer(1)")


@_transfer_scenario("should not affect totalSupply")
async def supply_unchanged(ctx, r):
    await ctx.credit(r.sender, ctx.units(3))
    supply = await ctx.token.totalSupply()
    await ctx.token.transfer.transact(r.to, ctx.units(3), sender=r.sender)
    assert_amount(await ctx.token.totalSupply(), supply, "totalSupply()")


@_transfer_scenario("should update balances accordingly")
async def updates_balances(ctx, r):
    await ctx.credit(r.sender, ctx.units(3))

    for amount in (ctx.units(1), ctx.units(2)):
        before = await ctx.balances([r.sender, r.to])
        await ctx.token.transfer.transact(r.to, amount, sender=r.sender)
        after = await ctx.balances([r.sender, r.to])

        if r.sender == r.to:
            assert_amount(after[r.sender], before[r.sender], "balanceOf(sender)")
        else:
            assert_amount(after[r.sender], before[r.sender] - amount, "balanceOf(sender)")
            assert_amount(after[r.to], before[r.to] + amount, "balanceOf(_to)")


@_transfer_scenario("should allow transferring the whole balance")
async def transfers_whole_balance(ctx, r):
    await ctx.credit(r.sender, ctx.units(3))
    before = await ctx.balances([r.sender, r.to])
    balance = before[r.sender]

    receipt = await ctx.token.transfer.transact(r.to, balance, sender=r.sender)
    assert_transfer_event(receipt, r.sender, r.to, balance)

    after = await ctx.balances([r.sender, r.to])
    if r.sender == r.to:
        assert_amount(after[r.sender], balance, "balanceOf(sender)")
    else:
        assert_amount(after[r.sender], 0, "balanceOf(sender)")
        assert_amount(after[r.to], before[r.to] + balance, "balanceOf(_to)")


async def _check_transfer_event(ctx, sender, to, amount):
    if amount > 0:
        await ctx.credit(sender, amount)

    receipt = await ctx.token.transfer.transact(to, amount, sender=sender)
    assert_transfer_event(receipt, sender, to, amount)


@_transfer_scenario("should fire Transfer event")
async def fires_transfer(ctx, r):
    await _check_transfer_event(ctx, r.sender, r.to, ctx.units(3))


@_transfer_scenario("should fire Transfer event when transferring amount of 0")
async def fires_transfer_for_zero(ctx, r):
    await _check_transfer_event(ctx, r.sender, r.to, 0)
