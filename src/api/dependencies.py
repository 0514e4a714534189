from api import state
from api.backend import BackendAPI
from storage.memory_repository import InMemoryRepository
from storage.repository import GTDRepository

backend = BackendAPI()


def get_repository() -> GTDRepository:
    # Startup normally sets this; TestClient without a context manager skips startup.
    if state.repository is None:
        state.repository = InMemoryRepository()
    return state.repository


def get_backend() -> BackendAPI:
    return backend
