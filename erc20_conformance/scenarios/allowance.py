from erc20_conformance.assertions import assert_amount
from erc20_conformance.scenarios import APPROVE_VARIANTS, scenario


@scenario("allowance", "should have correct initial allowance")
async def initial_allowances(ctx, r):
    for owner, spender, amount in ctx.config.initial_allowances:
        actual = await ctx.token.allowance(owner, spender)
        assert_amount(actual, amount, f"allowance({owner}, {spender})")


@scenario("allowance", "should return the correct allowance", variants=APPROVE_VARIANTS)
async def allowance_after_approve(ctx, r):
    await ctx.token.approve.transact(r.spender, ctx.units(1), sender=r.owner)
    assert_amount(await ctx.token.allowance(r.owner, r.spender), ctx.units(1), "allowance")


@scenario(
    "allowance", "should reflect the most recent approval", variants=APPROVE_VARIANTS
)
async def most_recent_approval(ctx, r):
    approve = ctx.token.approve
    await approve.transact(r.spender, ctx.units(5), sender=r.owner)
    await approve.transact(r.spender, ctx.units(2), sender=r.owner)
    assert_amount(await ctx.token.allowance(r.owner, r.spender), ctx.units(2), "allowance")


@scenario(
    "allowance",
    "should not affect the reverse pair",
    variants=APPROVE_VARIANTS[:1],
)
async def reverse_pair_unaffected(ctx, r):
    before = await ctx.token.allowance(r.spender, r.owner)
    await ctx.token.approve.transact(r.spender, ctx.units(3), sender=r.owner)
    assert_amount(await ctx.token.allowance(r.owner, r.spender), ctx.units(3), "allowance")
    assert_amount(await ctx.token.allowance(r.spender, r.owner), before, "reverse allowance")


@scenario("allowance", "should track every (owner, spender) pair independently")
async def allowance_matrix(ctx, r):
    alice, bob, charles = ctx.account("alice"), ctx.account("bob"), ctx.account("charles")
    approvals = [
        (alice, bob, 1),
        (alice, charles, 2),
        (bob, charles, 3),
        (bob, alice, 4),
        (charles, alice, 5),
        (charles, bob, 6),
    ]
    for owner, spender, amount in approvals:
        await ctx.token.approve.transact(spender, ctx.units(amount), sender=owner)

    for owner, spender, amount in approvals:
        actual = await ctx.token.allowance(owner, spender)
        assert_amount(actual, ctx.units(amount), f"allowance({owner}, {spender})")
