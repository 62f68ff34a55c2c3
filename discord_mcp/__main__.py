"""python -m discord_mcp"""

from discord_mcp.server.mcp_server import main

if __name__ == "__main__":
    main()
