from infrastructure.repositories.sqlite_material_repository import SqliteMaterialRepository

__all__ = [
    "SqliteMaterialRepository",
]
