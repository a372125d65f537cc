import logging

import pytest

from valuegrad import Value


@pytest.fixture(autouse=True)
def _reset_package_logger():
    # setup_logger binds a handler to the sys.stdout of the test that called it
    yield
    logger = logging.getLogger("valuegrad")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def expr():
    """The small expression L = (a*b + c) * f with labelled nodes."""
    a = Value(2.0, label="a")
    b = Value(-3.0, label="b")
    c = Value(10.0, label="c")
    e = (a * b).with_label("e")
    d = (e + c).with_label("d")
    f = Value(-2.0, label="f")
    L = (d * f).with_label("L")
    return dict(a=a, b=b, c=c, e=e, d=d, f=f, L=L)
