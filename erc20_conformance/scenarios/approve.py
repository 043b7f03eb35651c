# approve() has no failure mode: every call is expected to succeed, return
# True, overwrite the allowance and emit Approval with the new value.
from erc20_conformance.assertions import (
    assert_amount,
    assert_approval_event,
    assert_equal,
    assert_true,
)
from erc20_conformance.scenarios import APPROVE_VARIANTS, scenario


def _approve_scenario(title):
    return scenario("approve", title, variants=APPROVE_VARIANTS)


@_approve_scenario("should return true when approving 0")
async def returns_true_approving_zero(ctx, r):
    assert_true(await ctx.token.approve.call(r.spender, 0, sender=r.owner), "approve(0)")


@_approve_scenario("should return true when approving")
async def returns_true_approving(ctx, r):
    result = await ctx.token.approve.call(r.spender, ctx.units(3), sender=r.owner)
    assert_true(result, "approve(3)")


@_approve_scenario("should return true when updating approval")
async def returns_true_updating(ctx, r):
    approve, u = ctx.token.approve, ctx.units
    assert_true(await approve.call(r.spender, u(2), sender=r.owner), "approve(2)")
    await approve.transact(r.spender, u(2), sender=r.owner)

    # decreasing
    assert_true(await approve.call(r.spender, u(1), sender=r.owner), "approve(2 -> 1)")
    # not updating
    assert_true(await approve.call(r.spender, u(2), sender=r.owner), "approve(2 -> 2)")
    # increasing
    assert_true(await approve.call(r.spender, u(3), sender=r.owner), "approve(2 -> 3)")


@_approve_scenario("should return true when revoking approval")
async def returns_true_revoking(ctx, r):
    await ctx.token.approve.transact(r.spender, ctx.units(3), sender=r.owner)
    assert_true(await ctx.token.approve.call(r.spender, 0, sender=r.owner), "approve(3 -> 0)")


@_approve_scenario("should not change state when simulated")
async def simulate_does_not_commit(ctx, r):
    before = await ctx.token.allowance(r.owner, r.spender)
    await ctx.token.approve.call(r.spender, before + ctx.units(7), sender=r.owner)
    assert_amount(await ctx.token.allowance(r.owner, r.spender), before, "allowance")


@_approve_scenario("should update allowance accordingly")
async def updates_allowance(ctx, r):
    token = ctx.token
    for amount in (ctx.units(1), ctx.units(3), 0):
        await token.approve.transact(r.spender, amount, sender=r.owner)
        assert_amount(await token.allowance(r.owner, r.spender), amount, "allowance")


@_approve_scenario("should overwrite rather than add to the allowance")
async def overwrites_allowance(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, ctx.units(5), sender=r.owner)
    await token.approve.transact(r.spender, ctx.units(2), sender=r.owner)
    assert_amount(await token.allowance(r.owner, r.spender), ctx.units(2), "allowance")


@_approve_scenario("should not affect balances or total supply")
async def does_not_move_tokens(ctx, r):
    token = ctx.token
    await ctx.credit(r.owner, ctx.units(3))
    balances = await ctx.balances([r.owner, r.spender])
    supply = await token.totalSupply()

    await token.approve.transact(r.spender, ctx.units(3), sender=r.owner)
    assert_equal(await ctx.balances([r.owner, r.spender]), balances, "balances")
    assert_amount(await token.totalSupply(), supply, "totalSupply()")


async def _check_approval_event(ctx, owner, spender, amount):
    receipt = await ctx.token.approve.transact(spender, amount, sender=owner)
    assert_approval_event(receipt, owner, spender, amount)


@_approve_scenario("should fire Approval event")
async def fires_approval(ctx, r):
    await _check_approval_event(ctx, r.owner, r.spender, ctx.units(1))
    if r.owner != r.spender:
        await _check_approval_event(ctx, r.spender, r.owner, ctx.units(2))


@_approve_scenario("should fire Approval when allowance was set to 0")
async def fires_approval_on_revoke(ctx, r):
    await ctx.token.approve.transact(r.spender, ctx.units(3), sender=r.owner)
    await _check_approval_event(ctx, r.owner, r.spender, 0)


@_approve_scenario("should fire Approval even when allowance did not change")
async def fires_approval_when_unchanged(ctx, r):
    # even 0 -> 0 fires Approval, every time
    await _check_approval_event(ctx, r.owner, r.spender, 0)
    await _check_approval_event(ctx, r.owner, r.spender, 0)

    await ctx.token.approve.transact(r.spender, ctx.units(3), sender=r.owner)
    await _check_approval_event(ctx, r.owner, r.spender, ctx.units(3))
