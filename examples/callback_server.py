import secrets

from aiohttp import web

import discord_passport

GUILD_ID = "123456789012345678"  # Replace with your guild id

config = discord_passport.PassportConfig.from_env()
states = set()


async def login(request: web.Request) -> web.Response:
    state = secrets.token_urlsafe(16)
    states.add(state)
    url = discord_passport.oauth_url(
        config.client_id,
        redirect_uri=config.redirect_uri,
        scope=config.scope,
        state=state,
    )
    raise web.HTTPFound(url)


async def callback(request: web.Request) -> web.Response:
    code = request.query.get("code")
    state = request.query.get("state")
    if not code or state not in states:
        raise web.HTTPBadRequest(text="Invalid OAuth2 callback.")
    states.discard(state)

    async with discord_passport.Passport.from_env(code, state, config=config) as passport:
        await passport.open()
        if passport.has_scope(discord_passport.OAuth2Scope.GUILDS_JOIN):
            await passport.join_guild(GUILD_ID)

    return web.json_response({"user": passport.user, "guilds": passport.guilds})


app = web.Application()
app.router.add_get("/login", login)
app.router.add_get("/callback", callback)

web.run_app(app, port=8080)
