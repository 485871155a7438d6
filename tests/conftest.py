import pytest

from helpers import CapturingSender
from logbatch.agent import LoggingAgent


@pytest.fixture
def sender():
    return CapturingSender()


@pytest.fixture
def failing_sender():
    return CapturingSender(fail=True)


@pytest.fixture
def agent():
    return LoggingAgent()
