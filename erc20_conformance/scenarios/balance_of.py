from erc20_conformance.assertions import assert_amount
from erc20_conformance.scenarios import scenario


@scenario("balanceOf", "should have correct initial balances")
async def initial_balances(ctx, r):
    for account, balance in ctx.config.initial_balances:
        assert_amount(await ctx.token.balanceOf(account), balance, f"balanceOf({account})")


@scenario("balanceOf", "should return the correct balances")
async def balances_after_credits(ctx, r):
    alice, bob = ctx.account("alice"), ctx.account("bob")
    balance_of = ctx.token.balanceOf
    before = await ctx.balances([alice, bob])

    await ctx.credit(alice, ctx.units(1))
    assert_amount(await balance_of(alice), before[alice] + ctx.units(1), "balanceOf(alice)")

    await ctx.credit(alice, ctx.units(2))
    assert_amount(await balance_of(alice), before[alice] + ctx.units(3), "balanceOf(alice)")

    await ctx.credit(bob, ctx.units(3))
    assert_amount(await balance_of(bob), before[bob] + ctx.units(3), "balanceOf(bob)")


@scenario("balanceOf", "should only change the credited account")
async def credit_is_per_account(ctx, r):
    alice, bob, charles = ctx.account("alice"), ctx.account("bob"), ctx.account("charles")
    before = await ctx.balances([alice, bob, charles])

    await ctx.credit(alice, ctx.units(5))
    after = await ctx.balances([alice, bob, charles])
    assert_amount(after[alice], before[alice] + ctx.units(5), "balanceOf(alice)")
    assert_amount(after[bob], before[bob], "balanceOf(bob)")
    assert_amount(after[charles], before[charles], "balanceOf(charles)")
