from typing import Optional

from storage.repository import GTDRepository

# Global repository, set at startup (in-memory or PostgreSQL).
# Left as None until then; api.dependencies falls back to an in-memory store.
repository: Optional[GTDRepository] = None
