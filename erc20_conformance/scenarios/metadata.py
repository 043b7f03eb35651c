# Optional metadata getters are only checked when the config names an
# expected value; otherwise the scenario is not collected at all.
from erc20_conformance.assertions import assert_equal
from erc20_conformance.scenarios import scenario


@scenario("name", "should return the expected name", requires=lambda c: c.name is not None)
async def has_name(ctx, r):
    assert_equal(await ctx.token.name(), ctx.config.name, "name()")


@scenario("symbol", "should return the expected symbol", requires=lambda c: c.symbol is not None)
async def has_symbol(ctx, r):
    assert_equal(await ctx.token.symbol(), ctx.config.symbol, "symbol()")


@scenario(
    "decimals", "should return the expected decimals", requires=lambda c: c.decimals is not None
)
async def has_decimals(ctx, r):
    assert_equal(await ctx.token.decimals(), ctx.config.decimals, "decimals()")
