"""unrealls - Unreal Engine C++ completion server."""

__version__ = "0.1.0"
