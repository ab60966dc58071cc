import asyncio
import json

import pyguild


async def main() -> None:
    async with pyguild.Client(token='token') as client:
        with open('./guild.json', 'r') as fp:
            guild = client.parse_guild(json.load(fp))

        for channel in guild.text_channels:
            permissions = channel.permissions_for(guild.owner_id)
            print(f'#{channel.name}', 'nsfw' if channel.nsfw else '', permissions.value)

        channel = guild.text_channels[0]
        deleted = await channel.purge(200, check='free nitro', reason='Spam wave')
        print('Deleted', deleted, 'messages from', channel.mention)


asyncio.run(main())
