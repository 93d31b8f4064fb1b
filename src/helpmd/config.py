"""Shared configuration for template rendering and help loading."""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

# File extensions that mark a command name as a script path
SCRIPT_EXTENSIONS = tuple(
    ext.strip().lower() for ext in os.getenv("HELPMD_SCRIPT_EXTENSIONS", ".ps1,.psm1,.py,.sh").split(",") if ext.strip()
)

LOG_LEVEL = os.getenv("HELPMD_LOG_LEVEL", "INFO").upper()

# Generated fragments and output documents use CRLF throughout
LINE_ENDING = "\r\n"
OUTPUT_ENCODING = "utf-8"

# External type names of boolean-flag parameters, shown as "Switch"
SWITCH_TYPE_NAMES = ("SwitchParameter", "System.Management.Automation.SwitchParameter")
SWITCH_LABEL = "Switch"
