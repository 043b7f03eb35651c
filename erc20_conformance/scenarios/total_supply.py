from erc20_conformance.assertions import assert_amount
from erc20_conformance.scenarios import scenario


@scenario("totalSupply", "should have the configured initial supply")
async def initial_supply(ctx, r):
    assert_amount(await ctx.token.totalSupply(), ctx.config.initial_supply, "totalSupply()")


@scenario("totalSupply", "should return the correct supply")
async def supply_after_credits(ctx, r):
    alice, bob = ctx.account("alice"), ctx.account("bob")
    token = ctx.token
    # crediting by transfer moves existing tokens, so the supply stays put
    step = 1 if ctx.credit_increases_supply else 0
    supply = ctx.config.initial_supply

    await ctx.credit(alice, ctx.units(1))
    assert_amount(await token.totalSupply(), supply + step * ctx.units(1), "totalSupply()")

    await ctx.credit(alice, ctx.units(2))
    assert_amount(await token.totalSupply(), supply + step * ctx.units(3), "totalSupply()")

    await ctx.credit(bob, ctx.units(3))
    assert_amount(await token.totalSupply(), supply + step * ctx.units(6), "totalSupply()")
