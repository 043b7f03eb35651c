"""
transferFrom() scenarios.

Every scenario starts with `owner` approving `spender` for 3 tokens. Roles
are run distinct, with the spender as recipient, with the owner as recipient,
and with the owner spending its own allowance. With the owner as recipient
the allowance is still consumed by the nominal amount while balances do not
change. An owner spending from itself needs an allowance like anyone else.
"""
from erc20_conformance.assertions import (
    assert_amount,
    assert_equal,
    assert_transfer_event,
    assert_true,
)
from erc20_conformance.scenarios import TRANSFER_FROM_VARIANTS, scenario


def _transfer_from_scenario(title):
    def decorator(fn):
        async def with_default_approval(ctx, r):
            # by default approve spender to withdraw from owner
            await ctx.token.approve.transact(r.spender, ctx.units(3), sender=r.owner)
            await fn(ctx, r)

        with_default_approval.__name__ = fn.__name__
        with_default_approval.__doc__ = fn.__doc__
        scenario("transferFrom", title, variants=TRANSFER_FROM_VARIANTS)(with_default_approval)
        return fn

    return decorator


@_transfer_from_scenario("should return true when called with amount of 0 and sender is approved")
async def zero_when_approved(ctx, r):
    result = await ctx.token.transferFrom.call(r.owner, r.to, 0, sender=r.spender)
    assert_true(result, "transferFrom(0)")


@_transfer_from_scenario(
    "should return true when called with amount of 0 and sender is not approved"
)
async def zero_when_not_approved(ctx, r):
    result = await ctx.token.transferFrom.call(r.spender, r.to, 0, sender=r.owner)
    assert_true(result, "transferFrom(0) without allowance")


@_transfer_from_scenario(
    "should revert when trying to transfer something while _from having nothing"
)
async def reverts_when_from_has_nothing(ctx, r):
    token = ctx.token
    balance = await token.balanceOf(r.owner)
    # make sure only the balance, not the allowance, is insufficient
    await token.approve.transact(r.spender, balance + 1, sender=r.owner)
    await ctx.assert_reverts(
        token.transferFrom.transact(r.owner, r.to, balance + 1, sender=r.spender)
    )


@_transfer_from_scenario("should revert when trying to transfer more than balance of _from")
async def reverts_above_balance(ctx, r):
    token = ctx.token
    await ctx.credit(r.owner, ctx.units(3))

    balance = await token.balanceOf(r.owner)
    await token.approve.transact(r.spender, balance + 1, sender=r.owner)
    await ctx.assert_reverts(
        token.transferFrom.transact(r.owner, r.to, balance + 1, sender=r.spender)
    )

    await token.transferFrom.transact(r.owner, r.to, ctx.units(1), sender=r.spender)

    balance = await token.balanceOf(r.owner)
    await token.approve.transact(r.spender, balance + 1, sender=r.owner)
    await ctx.assert_reverts(
        token.transferFrom.transact(r.owner, r.to, balance + 1, sender=r.spender)
    )


@_transfer_from_scenario("should revert when trying to transfer while not allowed at all")
async def reverts_without_allowance(ctx, r):
    token = ctx.token
    await ctx.credit(r.spender, ctx.units(3))
    await token.approve.transact(r.owner, 0, sender=r.spender)
    assert_amount(await token.allowance(r.spender, r.owner), 0, "allowance(spender, owner)")

    for amount in (1, 2, 3):
        await ctx.assert_reverts(
            token.transferFrom.transact(r.spender, r.to, ctx.units(amount), sender=r.owner)
        )


@_transfer_from_scenario("should revert when trying to transfer more than allowed")
async def reverts_above_allowance(ctx, r):
    token = ctx.token
    await ctx.credit(r.spender, ctx.units(3))
    await token.approve.transact(r.owner, ctx.units(2), sender=r.spender)
    await ctx.assert_reverts(
        token.transferFrom.transact(r.spender, r.to, ctx.units(3), sender=r.owner)
    )


@_transfer_from_scenario("should revert when allowance is exhausted")
async def reverts_when_allowance_exhausted(ctx, r):
    token = ctx.token
    await ctx.credit(r.owner, ctx.units(5))
    await token.transferFrom.transact(r.owner, r.to, ctx.units(3), sender=r.spender)
    await ctx.assert_reverts(
        token.transferFrom.transact(r.owner, r.to, ctx.units(1), sender=r.spender)
    )


@_transfer_from_scenario("should leave balances and allowance unchanged when reverted")
async def revert_has_no_effect(ctx, r):
    token = ctx.token
    await ctx.credit(r.owner, ctx.units(2))
    accounts = [r.owner, r.spender, r.to]
    balances = await ctx.balances(accounts)
    allowances = await ctx.allowances([(r.owner, r.spender)])

    await ctx.assert_reverts(
        token.transferFrom.transact(r.owner, r.to, ctx.units(3), sender=r.spender)
    )
    assert_equal(await ctx.balances(accounts), balances, "balances")
    assert_equal(await ctx.allowances([(r.owner, r.spender)]), allowances, "allowances")


@_transfer_from_scenario("should return true when transfer can be made")
async def returns_true_when_possible(ctx, r):
    transfer_from, u = ctx.token.transferFrom, ctx.units
    await ctx.credit(r.owner, u(3))
    for amount in (1, 2, 3):
        result = await transfer_from.call(r.owner, r.to, u(amount), sender=r.spender)
        assert_true(result, f"transferFrom({amount})")

    await transfer_from.transact(r.owner, r.to, u(1), sender=r.spender)
    for amount in (1, 2):
        result = await transfer_from.call(r.owner, r.to, u(amount), sender=r.spender)
        assert_true(result, f"transferFrom({amount}) after transferFrom(1)")


@_transfer_from_scenario("should update balances accordingly")
async def updates_balances(ctx, r):
    await ctx.credit(r.owner, ctx.units(3))
    before = await ctx.balances([r.owner, r.to])

    await ctx.token.transferFrom.transact(r.owner, r.to, ctx.units(3), sender=r.spender)
    after = await ctx.balances([r.owner, r.to])

    if r.owner == r.to:
        assert_amount(after[r.owner], before[r.owner], "balanceOf(_from)")
    else:
        assert_amount(after[r.owner], before[r.owner] - ctx.units(3), "balanceOf(_from)")
        assert_amount(after[r.to], before[r.to] + ctx.units(3), "balanceOf(_to)")


@_transfer_from_scenario("should not affect the spender's balance unless it is _from or _to")
async def spender_balance_unaffected(ctx, r):
    await ctx.credit(r.owner, ctx.units(3))
    before = await ctx.token.balanceOf(r.spender)
    await ctx.token.transferFrom.transact(r.owner, r.to, ctx.units(2), sender=r.spender)

    expected = before
    if r.spender == r.owner:
        expected -= ctx.units(2)
    if r.spender == r.to:
        expected += ctx.units(2)
    assert_amount(await ctx.token.balanceOf(r.spender), expected, "balanceOf(spender)")


@_transfer_from_scenario("should not affect totalSupply")
async def supply_unchanged(ctx, r):
    await ctx.credit(r.owner, ctx.units(3))
    supply = await ctx.token.totalSupply()
    await ctx.token.transferFrom.transact(r.owner, r.to, ctx.units(3), sender=r.spender)
    assert_amount(await ctx.token.totalSupply(), supply, "totalSupply()")


@_transfer_from_scenario("should decrease allowance by the transferred amount")
async def debits_allowance(ctx, r):
    token = ctx.token
    await ctx.credit(r.owner, ctx.units(3))

    await token.transferFrom.transact(r.owner, r.to, ctx.units(2), sender=r.spender)
    assert_amount(await token.allowance(r.owner, r.spender), ctx.units(1), "allowance")

    await token.transferFrom.transact(r.owner, r.to, ctx.units(1), sender=r.spender)
    assert_amount(await token.allowance(r.owner, r.spender), 0, "allowance")


@_transfer_from_scenario("should not affect other spenders' allowances")
async def other_allowances_unaffected(ctx, r):
    token = ctx.token
    # the participant that is neither owner nor spender in every variant
    other = ctx.account("charles")
    await token.approve.transact(other, ctx.units(5), sender=r.owner)
    await ctx.credit(r.owner, ctx.units(3))

    await token.transferFrom.transact(r.owner, r.to, ctx.units(3), sender=r.spender)
    assert_equal(
        await ctx.allowances([(r.owner, other), (r.owner, r.spender)]),
        {(r.owner, other): ctx.units(5), (r.owner, r.spender): 0},
        "allowances",
    )


@_transfer_from_scenario("should transfer given amount")
async def transfers_given_amount(ctx, r):
    token = ctx.token
    await ctx.credit(r.owner, ctx.units(3))

    for amount in (ctx.units(1), ctx.units(2)):
        before = await token.balanceOf(r.to)
        await token.transferFrom.transact(r.owner, r.to, amount, sender=r.spender)
        expected = before if r.owner == r.to else before + amount
        assert_amount(await token.balanceOf(r.to), expected, "balanceOf(_to)")


async def _check_transfer_event(ctx, _from, to, spender, amount):
    if amount > 0:
        await ctx.credit(_from, amount)

    receipt = await ctx.token.transferFrom.transact(_from, to, amount, sender=spender)
    assert_transfer_event(receipt, _from, to, amount)


@_transfer_from_scenario("should fire Transfer event")
async def fires_transfer(ctx, r):
    await _check_transfer_event(ctx, r.owner, r.to, r.spender, ctx.units(3))


@_transfer_from_scenario("should fire Transfer event when transferring amount of 0")
async def fires_transfer_for_zero(ctx, r):
    await _check_transfer_event(ctx, r.owner, r.to, r.spender, 0)


@_transfer_from_scenario(
    "should fire Transfer event when transferring amount of 0 and sender is not approved"
)
async def fires_transfer_for_zero_without_allowance(ctx, r):
    await _check_transfer_event(ctx, r.spender, r.to, r.owner, 0)
