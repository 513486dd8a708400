import io

import pytest

import ante


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def interpreter(out: io.StringIO) -> ante.Interpreter:
    return ante.Interpreter(output=out)
