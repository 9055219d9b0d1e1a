"""
Result-record builders for gsd-tools commands.

Each function returns one flat dict, ready for JSON output. The click
wiring lives in gsdtools/cli_commands/.
"""
