"""Application state: domain store, auth gate, shell state and the global Store."""

from movemax.app.state.app_state import AppState, Toast
from movemax.app.state.auth_state import AuthState
from movemax.app.state.domain_store import DomainStore
from movemax.app.state.store import Store

__all__ = ["AppState", "AuthState", "DomainStore", "Store", "Toast"]
