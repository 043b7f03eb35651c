"""
Scenarios for the non-standard increaseApproval / decreaseApproval pair.

Increasing past the largest representable amount must revert. Decreasing
below zero must clamp the allowance to zero instead.
"""
from erc20_conformance.assertions import assert_amount, assert_approval_event, assert_true
from erc20_conformance.contract import MAX_UINT256
from erc20_conformance.scenarios import APPROVE_VARIANTS, scenario


def _enabled(config):
    return config.increase_decrease_approval


def _increase_scenario(title):
    return scenario("increaseApproval", title, variants=APPROVE_VARIANTS, requires=_enabled)


def _decrease_scenario(title):
    return scenario("decreaseApproval", title, variants=APPROVE_VARIANTS, requires=_enabled)


@_increase_scenario("should return true when increasing approval")
async def increase_returns_true(ctx, r):
    result = await ctx.token.increaseApproval.call(r.spender, ctx.units(1), sender=r.owner)
    assert_true(result, "increaseApproval(1)")


@_increase_scenario("should add to the current allowance and fire Approval")
async def increase_adds(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, ctx.units(2), sender=r.owner)

    receipt = await token.increaseApproval.transact(r.spender, ctx.units(3), sender=r.owner)
    assert_approval_event(receipt, r.owner, r.spender, ctx.units(5))
    assert_amount(await token.allowance(r.owner, r.spender), ctx.units(5), "allowance")


@_increase_scenario("should increase from zero")
async def increase_from_zero(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, 0, sender=r.owner)

    receipt = await token.increaseApproval.transact(r.spender, ctx.units(4), sender=r.owner)
    assert_approval_event(receipt, r.owner, r.spender, ctx.units(4))
    assert_amount(await token.allowance(r.owner, r.spender), ctx.units(4), "allowance")


@_increase_scenario("should fire Approval when increasing by 0")
async def increase_by_zero(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, ctx.units(2), sender=r.owner)

    receipt = await token.increaseApproval.transact(r.spender, 0, sender=r.owner)
    assert_approval_event(receipt, r.owner, r.spender, ctx.units(2))


@_increase_scenario("should allow increasing up to the maximum amount")
async def increase_to_max(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, MAX_UINT256 - 1, sender=r.owner)

    receipt = await token.increaseApproval.transact(r.spender, 1, sender=r.owner)
    assert_approval_event(receipt, r.owner, r.spender, MAX_UINT256)
    assert_amount(await token.allowance(r.owner, r.spender), MAX_UINT256, "allowance")


@_increase_scenario("should revert when increasing past the maximum amount")
async def increase_overflow_reverts(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, MAX_UINT256, sender=r.owner)

    await ctx.assert_reverts(token.increaseApproval.transact(r.spender, 1, sender=r.owner))
    assert_amount(await token.allowance(r.owner, r.spender), MAX_UINT256, "allowance")


@_decrease_scenario("should return true when decreasing approval")
async def decrease_returns_true(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, ctx.units(3), sender=r.owner)
    result = await token.decreaseApproval.call(r.spender, ctx.units(1), sender=r.owner)
    assert_true(result, "decreaseApproval(1)")


@_decrease_scenario("should subtract from the current allowance and fire Approval")
async def decrease_subtracts(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, ctx.units(5), sender=r.owner)

    receipt = await token.decreaseApproval.transact(r.spender, ctx.units(2), sender=r.owner)
    assert_approval_event(receipt, r.owner, r.spender, ctx.units(3))
    assert_amount(await token.allowance(r.owner, r.spender), ctx.units(3), "allowance")


@_decrease_scenario("should decrease to exactly zero")
async def decrease_to_zero(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, ctx.units(3), sender=r.owner)

    receipt = await token.decreaseApproval.transact(r.spender, ctx.units(3), sender=r.owner)
    assert_approval_event(receipt, r.owner, r.spender, 0)
    assert_amount(await token.allowance(r.owner, r.spender), 0, "allowance")


@_decrease_scenario("should clamp to zero when decreasing by more than the allowance")
async def decrease_clamps(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, ctx.units(3), sender=r.owner)

    result = await token.decreaseApproval.call(r.spender, ctx.units(100), sender=r.owner)
    assert_true(result, "decreaseApproval(100) with allowance 3")

    receipt = await token.decreaseApproval.transact(r.spender, ctx.units(100), sender=r.owner)
    assert_approval_event(receipt, r.owner, r.spender, 0)
    assert_amount(await token.allowance(r.owner, r.spender), 0, "allowance")


@_decrease_scenario("should not revert when there is no allowance")
async def decrease_without_allowance(ctx, r):
    token = ctx.token
    await token.approve.transact(r.spender, 0, sender=r.owner)

    receipt = await token.decreaseApproval.transact(r.spender, MAX_UINT256, sender=r.owner)
    assert_approval_event(receipt, r.owner, r.spender, 0)
    assert_amount(await token.allowance(r.owner, r.spender), 0, "allowance")
