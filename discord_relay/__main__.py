from discord_relay.adapters.discord.launcher import main

main()
