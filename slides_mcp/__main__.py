from slides_mcp.mcp_servers.google_slides_server import main

main()
