"""Code generation, pairing and log/error analysis actions."""

from unrealls.actions.provider import ActionProvider, EngineActions, uri_to_path

__all__ = ["ActionProvider", "EngineActions", "uri_to_path"]
