"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from helpmd.providers.records import HelpRecord, ParameterInfo

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


@pytest.fixture
def widget_record() -> HelpRecord:
    """Help for a simple command with one documented parameter."""
    return HelpRecord(
        name="Get-Widget",
        syntax="Get-Widget [-Name] <String>",
        synopsis="Gets a widget.",
        description="Gets a widget by name.",
        parameters=(ParameterInfo(name="Name", type_name="String", description="The widget name."),),
    )
