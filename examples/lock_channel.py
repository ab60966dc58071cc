import asyncio
import json

import pyguild


async def main() -> None:
    async with pyguild.Client(token='token') as client:
        with open('./guild.json', 'r') as fp:
            guild = client.parse_guild(json.load(fp))

        channel = guild.get_channel('13')
        if channel is None:
            return

        # deny sending messages to @everyone
        everyone = channel.get_overwrite(guild.id) or pyguild.PermissionOverwrite(guild.id, 'role')
        deny = everyone.deny | pyguild.Permissions(send_messages=True)

        await channel.edit_permission(everyone, deny=deny, reason='Lockdown')
        await channel.edit_position(0)


asyncio.run(main())
