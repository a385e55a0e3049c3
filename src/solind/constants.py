from __future__ import annotations

# Prefix of lines emitted by program code itself (`msg!`).
PROGRAM_LOG = "Program log: "
# Prefix of binary payload lines (`sol_log_data`).
PROGRAM_DATA = "Program data: "

# Stack marker for "some other program is executing"; never compared to a target.
CPI_PLACEHOLDER = "cpi"

DEFAULT_PAYLOAD_PREFIXES: tuple[str, ...] = (PROGRAM_LOG,)
