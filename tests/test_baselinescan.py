import baselinescan
from baselinescan._version import __version__


def test_version_is_exported() -> None:
    assert baselinescan.__version__ == __version__
    assert isinstance(__version__, str)
    assert __version__
