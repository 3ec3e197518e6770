"""Practice Storage - Persistencia das preferencias do usuario."""

from .preference_store import InMemoryKV, KVBackend, KVPreferenceStore, PreferenceStore

__all__ = ["KVBackend", "InMemoryKV", "PreferenceStore", "KVPreferenceStore"]
