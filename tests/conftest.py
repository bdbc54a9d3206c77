import io

import pytest

from prae.reporting import PlainReporter, set_reporter, set_verbosity


@pytest.fixture(autouse=True)
def _quiet_reporter():
    """Each test starts with a fresh plain reporter writing to a buffer."""
    stream = io.StringIO()
    set_reporter(PlainReporter(stream=stream, use_color=False))
    set_verbosity(0)
    yield stream
