"""
Pytest configuration and fixtures.
"""

from pathlib import Path

import pytest


SAMPLE = """\
# Sample configuration
! alternative comment

bind = 0.0.0.0
  host:name   =   example.org   
quoted = "  spaced  "
single = 'x'
leading = \\ \\ indented
flag
empty =
multiline = a \\
            b \\
            c

server
{
    port = 8080
    log
    {
        level = debug
    }
}
removeme = soon
"""


@pytest.fixture
def sample_text() -> str:
    """A document using every line kind."""
    return SAMPLE


@pytest.fixture
def sample_path(tmp_path: Path) -> Path:
    """The sample document written to a temporary file."""
    path = tmp_path / "sample.properties"
    path.write_text(SAMPLE, encoding="utf-8")
    return path
